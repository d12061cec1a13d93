"""Time-entry client contract.

The workday splitter needs exactly two capabilities from the network layer,
so it can be exercised with an in-memory fake.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol, runtime_checkable

from core.domain.models import TimeEntry


@runtime_checkable
class TimeEntryClient(Protocol):
    """Minimal contract consumed by `core.services.workday`."""

    def lookup_project(self, workspace_id: int, name: str) -> int:
        """Return the id of the first project named exactly `name`.

        Raises `ProjectNotFound` when no project matches.
        """

        ...

    def create_time_entry(
        self,
        description: str,
        workspace_id: int,
        tags: list[str] | None,
        duration: int,
        start: datetime,
        project_id: int,
    ) -> TimeEntry:
        """Create a finished entry of `duration` seconds; raises `ApiError` on non-2xx."""

        ...
