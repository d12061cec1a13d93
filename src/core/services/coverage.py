"""Days in a range that have no time entries (`time-entries list --missing`)."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterable

from core.domain.models import TimeEntry


def missing_days(
    entries: Iterable[TimeEntry],
    start: datetime,
    end: datetime,
    workdays_only: bool = True,
) -> list[date]:
    """Local dates in `[start, end)` on which no entry starts.

    Entry starts are converted to the zone of `start` before bucketing.
    """

    tz = start.tzinfo
    covered = {entry.start.astimezone(tz).date() for entry in entries}

    days: list[date] = []
    day = start.date()
    last = (end - timedelta(microseconds=1)).date()
    while day <= last:
        if day not in covered and not (workdays_only and day.weekday() >= 5):
            days.append(day)
        day += timedelta(days=1)
    return days
