"""Exceptions raised by the issue repository."""

from typing import Any, Optional


class IssueTrackerError(Exception):
    """Base class for errors reported back to API clients.

    Args:
        message: Client-facing error message.
        issue_id: The ``_id`` the request referred to, echoed back as sent.
    """

    def __init__(self, message: str, issue_id: Optional[Any] = None) -> None:
        super().__init__(message)
        self.message = message
        self.issue_id = issue_id

    def to_dict(self) -> dict[str, Any]:
        """Convert error to the JSON response body."""
        result: dict[str, Any] = {"error": self.message}
        if self.issue_id is not None:
            result["_id"] = self.issue_id
        return result


class ValidationError(IssueTrackerError, ValueError):
    """Request is missing a required field or carries nothing to apply."""


class IssueNotFoundError(IssueTrackerError, LookupError):
    """No issue with the requested ``_id`` exists in the project."""
