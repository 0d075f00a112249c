"""Data models for the issue tracker."""

import secrets
import string
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

_BASE36 = string.digits + string.ascii_lowercase

# Fields a client may set on create and change on update
EDITABLE_FIELDS = (
    "issue_title",
    "issue_text",
    "created_by",
    "assigned_to",
    "status_text",
)
REQUIRED_FIELDS = ("issue_title", "issue_text", "created_by")
UPDATABLE_FIELDS = EDITABLE_FIELDS + ("open",)


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def format_timestamp(dt: datetime) -> str:
    """Serialize a datetime as ISO-8601 UTC with millisecond precision."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    text = dt.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return text.replace("+00:00", "Z")


def to_base36(number: int) -> str:
    """Render a non-negative integer in base 36 (lowercase digits)."""
    if number < 0:
        raise ValueError(f"Cannot encode negative number: {number}")
    if number == 0:
        return "0"
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(_BASE36[remainder])
    return "".join(reversed(digits))


def generate_id() -> str:
    """Generate a short issue id.

    The id is the current epoch time in milliseconds in base 36 followed by
    six random base-36 characters, uppercased.
    """
    stamp = to_base36(time.time_ns() // 1_000_000)
    suffix = "".join(secrets.choice(_BASE36) for _ in range(6))
    return (stamp + suffix).upper()


def is_blank(value: Any) -> bool:
    """Return True if a submitted value counts as not provided.

    ``None``, ``False``, empty strings and numeric zero (or NaN) are blank.
    Lists and dicts are values even when empty.
    """
    if value is None or isinstance(value, str):
        return not value
    if isinstance(value, (bool, int, float)):
        return not value or value != value
    return False


def coerce_open(value: Any) -> bool:
    """Interpret a submitted ``open`` value; only ``True`` and ``"true"`` are true."""
    return value is True or value == "true"


@dataclass
class Issue:
    """Represents an issue tracked under a project."""

    _id: str = field(default_factory=generate_id)
    issue_title: str = field(default="")
    issue_text: str = field(default="")
    created_by: str = field(default="")
    assigned_to: str = field(default="")
    status_text: str = field(default="")
    created_on: datetime = field(default_factory=utcnow)
    updated_on: Optional[datetime] = field(default=None)
    open: bool = field(default=True)

    def __post_init__(self) -> None:
        if self.updated_on is None:
            self.updated_on = self.created_on

    @property
    def id(self) -> str:
        return self._id

    def has_field(self, name: str) -> bool:
        """Return True if ``name`` is one of the serialized issue fields."""
        return name in self.__dataclass_fields__

    def to_dict(self) -> dict[str, Any]:
        """Convert issue to dictionary for JSON serialization."""
        return {
            "_id": self._id,
            "issue_title": self.issue_title,
            "issue_text": self.issue_text,
            "created_by": self.created_by,
            "assigned_to": self.assigned_to,
            "status_text": self.status_text,
            "created_on": format_timestamp(self.created_on),
            "updated_on": format_timestamp(self.updated_on or self.created_on),
            "open": self.open,
        }

