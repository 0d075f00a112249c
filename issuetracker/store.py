"""In-memory storage for project issue collections."""

import contextlib
import threading
from typing import Generator

from issuetracker.models import Issue


class IssueStore:
    """Holds every project's issues in process memory.

    Each project maps to a list of issues kept in insertion order. Projects
    are created lazily on first reference and are never removed, so a project
    whose issues were all deleted remains as an empty list.

    The store is shared between request threads. A lock guards the project
    map and each project has its own re-entrant lock; callers hold the
    project lock (see ``lock``) across any read-check-mutate sequence.
    """

    def __init__(self) -> None:
        self._projects: dict[str, list[Issue]] = {}
        self._locks: dict[str, threading.RLock] = {}
        self._guard = threading.Lock()

    def _ensure(self, name: str) -> tuple[list[Issue], threading.RLock]:
        with self._guard:
            if name not in self._projects:
                self._projects[name] = []
                self._locks[name] = threading.RLock()
            return self._projects[name], self._locks[name]

    @contextlib.contextmanager
    def lock(self, name: str) -> Generator[list[Issue], None, None]:
        """Hold a project's lock and yield its issue list.

        Args:
            name: Project name.

        Yields:
            The live list of issues for the project.
        """
        issues, project_lock = self._ensure(name)
        with project_lock:
            yield issues
