"""Workday recording with a statutory break.

A workday of `hours` is stored as one time entry, or, when a break is owed,
as two equal halves separated by the unpaid break:

    [start, start + half) break [start + half + break, ... + half)

The start is resolved once per request; the second half is derived from it
by addition, never from a second reading of the clock.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime, timedelta, timezone
from typing import Callable, Sequence

from core.domain.breaks import break_for
from core.domain.errors import PartialWorkdayError
from core.domain.models import TimeEntry, TimeEntrySpec, WorkdayRequest
from core.domain.start import Clock
from core.interfaces.time_entries import TimeEntryClient

logger = logging.getLogger(__name__)

ProjectLookup = Callable[[str], int]


def _seconds(hours: float) -> int:
    return math.ceil(hours * 3600)


class WorkdaySplitter:
    """Turns a `WorkdayRequest` into time entries and submits them in order."""

    def __init__(
        self,
        client: TimeEntryClient,
        workspace_id: int,
        clock: Clock | None = None,
    ) -> None:
        self._client = client
        self._workspace_id = workspace_id
        self._clock = clock or (lambda: datetime.now().astimezone())

    def split(
        self,
        request: WorkdayRequest,
        resolve_project: ProjectLookup,
    ) -> list[TimeEntrySpec]:
        pause = break_for(request.hours)
        project_id = resolve_project(request.project)
        start = request.start.resolve(self._clock)

        def spec(duration: int, at: datetime) -> TimeEntrySpec:
            return TimeEntrySpec(
                description=request.description,
                workspace_id=self._workspace_id,
                tags=None,
                duration=duration,
                start=at,
                project_id=project_id,
            )

        if not pause:
            logger.debug("%.2fh: no break owed, single entry", request.hours)
            return [spec(_seconds(request.hours), start)]

        # Each half is rounded up on its own; the pair may exceed the full
        # duration by one second.
        half = _seconds(request.hours / 2)
        # Elapsed time, not wall-clock time.
        elapsed = start.astimezone(timezone.utc) + timedelta(seconds=half) + pause
        second_start = elapsed.astimezone(start.tzinfo)
        logger.debug(
            "%.2fh: %s break, two entries of %ss at %s and %s",
            request.hours,
            pause,
            half,
            start.isoformat(),
            second_start.isoformat(),
        )
        return [spec(half, start), spec(half, second_start)]

    def submit(self, specs: Sequence[TimeEntrySpec]) -> list[TimeEntry]:
        """Create each spec in order. Nothing is rolled back on failure."""

        created: list[TimeEntry] = []
        for spec in specs:
            try:
                entry = self._client.create_time_entry(
                    spec.description,
                    spec.workspace_id,
                    spec.tags,
                    spec.duration,
                    spec.start,
                    spec.project_id,
                )
            except Exception as exc:
                if created:
                    raise PartialWorkdayError(created, exc) from exc
                raise
            logger.info("Created time entry %s (%ss)", entry.id, spec.duration)
            created.append(entry)
        return created

    def create_workday(self, request: WorkdayRequest) -> list[TimeEntry]:
        specs = self.split(
            request,
            lambda name: self._client.lookup_project(self._workspace_id, name),
        )
        return self.submit(specs)
