"""Statutory break rules for a workday."""

from __future__ import annotations

from datetime import timedelta

from core.domain.errors import InvalidInput

# (lower bound in hours, inclusive; break), highest band first.
BREAK_BANDS: tuple[tuple[float, timedelta], ...] = (
    (9.0, timedelta(minutes=45)),
    (6.0, timedelta(minutes=30)),
)


def break_for(hours: float) -> timedelta:
    """Return the unpaid break owed for `hours` of work.

    Under 6 hours no break, from 6 hours 30 minutes, from 9 hours 45 minutes.
    """

    if hours < 0:
        raise InvalidInput(f"hours must not be negative, got {hours}")

    for lower_bound, pause in BREAK_BANDS:
        if hours >= lower_bound:
            return pause
    return timedelta(0)
