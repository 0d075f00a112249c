"""Repository layer for issue CRUD operations."""

import logging
from collections.abc import Mapping
from typing import Any, Optional

from issuetracker.errors import IssueNotFoundError, ValidationError
from issuetracker.filters import filter_issues
from issuetracker.models import (
    REQUIRED_FIELDS,
    UPDATABLE_FIELDS,
    Issue,
    coerce_open,
    generate_id,
    is_blank,
    utcnow,
)
from issuetracker.store import IssueStore

logger = logging.getLogger(__name__)


def require_id(issue_id: Any) -> Any:
    """Ensure a request carried an issue id.

    Args:
        issue_id: The ``_id`` value from the request.

    Returns:
        The id, unchanged.

    Raises:
        ValidationError: If the id is missing or empty.
    """
    if is_blank(issue_id):
        raise ValidationError("missing _id")
    return issue_id


def _or_empty(value: Any) -> Any:
    return "" if value is None else value


def _find_index(issues: list[Issue], issue_id: Any) -> Optional[int]:
    wanted = str(issue_id)
    for index, issue in enumerate(issues):
        if str(issue._id) == wanted:
            return index
    return None


class IssueRepository:
    """Handles all issue operations for every project in a store."""

    def __init__(self, store: Optional[IssueStore] = None) -> None:
        """Initialize repository.

        Args:
            store: Store holding the issues. A fresh empty store is created
                if not provided.
        """
        self.store = store if store is not None else IssueStore()

    def list_issues(
        self, project: str, filters: Optional[Mapping[str, Any]] = None
    ) -> list[Issue]:
        """List a project's issues, optionally filtered.

        Args:
            project: Project name.
            filters: Field name to expected value. ``open`` is compared as a
                boolean, every other key by text equality. All must match.

        Returns:
            Matching issues in insertion order. Unknown projects yield an
            empty list.
        """
        with self.store.lock(project) as issues:
            return filter_issues(issues, filters or {})

    def create_issue(self, project: str, data: Mapping[str, Any]) -> Issue:
        """Create a new issue at the end of a project's list.

        Args:
            project: Project name.
            data: Submitted fields. ``issue_title``, ``issue_text`` and
                ``created_by`` are required; ``assigned_to`` and
                ``status_text`` default to an empty string.

        Returns:
            Issue: The created issue.

        Raises:
            ValidationError: If a required field is missing or blank.
        """
        if any(is_blank(data.get(name)) for name in REQUIRED_FIELDS):
            logger.debug("Rejected issue for project %r: required field missing", project)
            raise ValidationError("required field(s) missing")

        now = utcnow()
        with self.store.lock(project) as issues:
            issue_id = generate_id()
            while _find_index(issues, issue_id) is not None:
                logger.warning("Issue id collision on %s in project %r", issue_id, project)
                issue_id = generate_id()

            issue = Issue(
                _id=issue_id,
                issue_title=data["issue_title"],
                issue_text=data["issue_text"],
                created_by=data["created_by"],
                assigned_to=_or_empty(data.get("assigned_to")),
                status_text=_or_empty(data.get("status_text")),
                created_on=now,
                updated_on=now,
                open=True,
            )
            issues.append(issue)

        logger.info("Created issue %s in project %r", issue.id, project)
        return issue

    def update_issue(self, project: str, issue_id: Any, updates: Mapping[str, Any]) -> Issue:
        """Update an issue in place.

        Args:
            project: Project name.
            issue_id: ID of the issue to update.
            updates: Submitted fields. Absent fields are left untouched;
                present ones are applied, including None. At least one field
                must be present with a value other than an empty string.

        Returns:
            Issue: The updated issue.

        Raises:
            ValidationError: If the id is missing or no field carries a value.
            IssueNotFoundError: If no issue has that id in the project.
        """
        require_id(issue_id)

        sent = [name for name in UPDATABLE_FIELDS if name in updates]
        if all(isinstance(updates[name], str) and updates[name] == "" for name in sent):
            logger.debug("No update fields sent for issue %s in project %r", issue_id, project)
            raise ValidationError("no update field(s) sent", issue_id)

        with self.store.lock(project) as issues:
            index = _find_index(issues, issue_id)
            if index is None:
                logger.debug("Issue %s not found in project %r for update", issue_id, project)
                raise IssueNotFoundError("could not update", issue_id)

            issue = issues[index]
            for name in sent:
                if name == "open":
                    issue.open = coerce_open(updates[name])
                else:
                    setattr(issue, name, updates[name])
            issue.updated_on = utcnow()

        logger.info("Updated issue %s in project %r", issue.id, project)
        return issue

    def delete_issue(self, project: str, issue_id: Any) -> Issue:
        """Delete an issue, keeping the order of the remaining ones.

        Args:
            project: Project name.
            issue_id: ID of the issue to delete.

        Returns:
            Issue: The removed issue.

        Raises:
            ValidationError: If the id is missing.
            IssueNotFoundError: If no issue has that id in the project.
        """
        require_id(issue_id)

        with self.store.lock(project) as issues:
            index = _find_index(issues, issue_id)
            if index is None:
                logger.debug("Issue %s not found in project %r for delete", issue_id, project)
                raise IssueNotFoundError("could not delete", issue_id)
            issue = issues.pop(index)

        logger.info("Deleted issue %s from project %r", issue.id, project)
        return issue
