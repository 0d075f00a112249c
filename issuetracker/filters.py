"""Query filters for listing issues."""

from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

from issuetracker.models import Issue, format_timestamp


def parse_open_filter(value: Any) -> bool:
    """Interpret an ``open`` query value; ``"true"`` in any case is true."""
    if isinstance(value, str):
        return value.lower() == "true"
    return bool(value)


def as_text(value: Any) -> str:
    """Coerce a field or filter value to the text used for comparison.

    Booleans become ``"true"``/``"false"`` and timestamps their serialized
    ISO form, matching what clients see in API responses.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, datetime):
        return format_timestamp(value)
    if value is None:
        return ""
    return str(value)


def matches(issue: Issue, key: str, value: Any) -> bool:
    """Check a single filter against an issue.

    Args:
        issue: Issue to test.
        key: Issue field name taken from the query string.
        value: Filter value.

    Returns:
        True if the issue satisfies the filter. A key that names no issue
        field never matches.
    """
    if key == "open":
        return issue.open is parse_open_filter(value)

    # Unknown keys reject every issue, whatever the value (including "undefined").
    if not issue.has_field(key):
        return False

    return as_text(getattr(issue, key)) == as_text(value)


def filter_issues(issues: Iterable[Issue], filters: Mapping[str, Any]) -> list[Issue]:
    """Return the issues matching every filter, in their original order.

    Args:
        issues: Issues to filter.
        filters: Field name to value; combined with logical AND.
    """
    if not filters:
        return list(issues)

    return [
        issue
        for issue in issues
        if all(matches(issue, key, value) for key, value in filters.items())
    ]
