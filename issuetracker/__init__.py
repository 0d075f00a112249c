"""Per-project issue tracker with an in-memory store and a JSON API."""

__version__ = "1.0.0"
