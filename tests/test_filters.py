"""Tests for list filters."""

from datetime import datetime, timezone

from issuetracker.filters import as_text, filter_issues, matches, parse_open_filter
from issuetracker.models import Issue


class TestParseOpenFilter:
    """Test interpretation of the open query value."""

    def test_true_any_case(self):
        """Test that "true" in any case selects open issues."""
        assert parse_open_filter("true") is True
        assert parse_open_filter("TRUE") is True
        assert parse_open_filter("True") is True

    def test_other_strings_are_false(self):
        """Test that any other string selects closed issues."""
        for value in ("false", "yes", "1", "", "undefined"):
            assert parse_open_filter(value) is False

    def test_non_string_values(self):
        """Test that non-string values use their truth value."""
        assert parse_open_filter(True) is True
        assert parse_open_filter(0) is False


class TestMatches:
    """Test single-filter matching."""

    def test_text_equality(self):
        """Test that fields are compared by their text form."""
        issue = Issue(created_by="Joe")
        assert matches(issue, "created_by", "Joe")
        assert not matches(issue, "created_by", "joe")

    def test_timestamp_text(self):
        """Test that timestamps compare by their serialized form."""
        created = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
        issue = Issue(created_on=created)
        assert matches(issue, "created_on", "2024-05-01T12:00:00.000Z")

    def test_unknown_key_never_matches(self):
        """Test that a key naming no field rejects the issue, even "undefined"."""
        issue = Issue()
        assert not matches(issue, "priority", "high")
        assert not matches(issue, "priority", "undefined")

    def test_as_text(self):
        """Test comparison text for booleans and None."""
        assert as_text(True) == "true"
        assert as_text(False) == "false"
        assert as_text(None) == ""
        assert as_text(3) == "3"


def test_filter_issues_keeps_order():
    """Test that filtering keeps insertion order and ANDs filters."""
    issues = [
        Issue(created_by="A", open=True),
        Issue(created_by="A", open=False),
        Issue(created_by="B", open=True),
        Issue(created_by="A", open=True),
    ]
    result = filter_issues(issues, {"created_by": "A", "open": "true"})
    assert result == [issues[0], issues[3]]
    assert filter_issues(issues, {}) == issues
