"""Symbolic date ranges used by list and report commands.

A `Range` is parsed once from a CLI token and resolved against an explicit
`now` into a half-open `[start, end)` interval in `now`'s timezone.

Rules:
- Day arithmetic is wall-clock arithmetic in the zone of `now`, so a day
  interval always starts and ends at local midnight.
- Weeks start on `week_start` (0=Monday, the default, ... 6=Sunday).
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, tzinfo
from enum import Enum

from pydantic import BaseModel, ConfigDict, model_validator

from core.domain.errors import ParseError

DATE_FORMAT = "%Y-%m-%d"


class RangeKind(str, Enum):
    TODAY = "today"
    YESTERDAY = "yesterday"
    THIS_WEEK = "this-week"
    LAST_WEEK = "last-week"
    THIS_MONTH = "this-month"
    LAST_MONTH = "last-month"
    FROM_TO = "from-to"
    DATE = "date"


# Kinds accepted verbatim (case-insensitive) by `Range.parse`.
SYMBOLIC_KINDS = {
    kind.value: kind
    for kind in RangeKind
    if kind not in (RangeKind.FROM_TO, RangeKind.DATE)
}


def parse_date(value: str) -> date:
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError as exc:
        raise ParseError(f"Invalid date '{value}', expected YYYY-MM-DD") from exc


class Range(BaseModel):
    """Immutable range expression: a kind plus the explicit dates it needs."""

    model_config = ConfigDict(frozen=True)

    kind: RangeKind
    start_date: date | None = None
    end_date: date | None = None

    @model_validator(mode="after")
    def _check_dates(self) -> "Range":
        if self.kind is RangeKind.FROM_TO:
            if self.start_date is None or self.end_date is None:
                raise ValueError("from-to ranges need both dates")
            if self.end_date < self.start_date:
                raise ValueError("from-to end date precedes its start date")
        elif self.kind is RangeKind.DATE:
            if self.start_date is None:
                raise ValueError("date ranges need a date")
        return self

    @classmethod
    def from_to(cls, start: date, end: date) -> "Range":
        if end < start:
            raise ParseError(f"Range end {end} precedes start {start}")
        return cls(kind=RangeKind.FROM_TO, start_date=start, end_date=end)

    @classmethod
    def on(cls, day: date) -> "Range":
        return cls(kind=RangeKind.DATE, start_date=day)

    @classmethod
    def parse(cls, token: str) -> "Range":
        """Parse `today`, `last-week`, `2021-01-01|2021-01-05`, `2021-01-01`..."""

        lowered = token.lower()
        if lowered in SYMBOLIC_KINDS:
            return cls(kind=SYMBOLIC_KINDS[lowered])

        if "|" in lowered:
            first, second = lowered.split("|", 1)
            return cls.from_to(parse_date(first), parse_date(second))

        return cls.on(parse_date(lowered))

    def __str__(self) -> str:
        if self.kind is RangeKind.FROM_TO:
            return f"{self.start_date:{DATE_FORMAT}}|{self.end_date:{DATE_FORMAT}}"
        if self.kind is RangeKind.DATE:
            return f"{self.start_date:{DATE_FORMAT}}"
        return self.kind.value


def _midnight(day: date, tz: tzinfo | None) -> datetime:
    return datetime.combine(day, time.min, tzinfo=tz)


def _day_bounds(day: date, tz: tzinfo | None) -> tuple[datetime, datetime]:
    start = _midnight(day, tz)
    return start, start + timedelta(days=1)


def _week_bounds(day: date, tz: tzinfo | None, week_start: int) -> tuple[datetime, datetime]:
    offset = (day.weekday() - week_start) % 7
    start = _midnight(day - timedelta(days=offset), tz)
    return start, start + timedelta(days=7)


def _month_bounds(year: int, month: int, tz: tzinfo | None) -> tuple[datetime, datetime]:
    start = _midnight(date(year, month, 1), tz)
    if month == 12:
        end = _midnight(date(year + 1, 1, 1), tz)
    else:
        end = _midnight(date(year, month + 1, 1), tz)
    return start, end


def resolve(
    range_: Range,
    now: datetime,
    week_start: int = 0,
) -> tuple[datetime, datetime]:
    """Resolve `range_` into `(start, end)` local datetimes, `end` exclusive."""

    tz = now.tzinfo
    today = now.date()
    kind = range_.kind

    if kind is RangeKind.TODAY:
        return _day_bounds(today, tz)
    if kind is RangeKind.YESTERDAY:
        return _day_bounds(today - timedelta(days=1), tz)
    if kind is RangeKind.THIS_WEEK:
        return _week_bounds(today, tz, week_start)
    if kind is RangeKind.LAST_WEEK:
        return _week_bounds(today - timedelta(days=7), tz, week_start)
    if kind is RangeKind.THIS_MONTH:
        return _month_bounds(today.year, today.month, tz)
    if kind is RangeKind.LAST_MONTH:
        # Only the month matters, so the day is effectively clamped to the 1st.
        if today.month == 1:
            return _month_bounds(today.year - 1, 12, tz)
        return _month_bounds(today.year, today.month - 1, tz)

    start_date, end_date = range_.start_date, range_.end_date
    if kind is RangeKind.FROM_TO:
        if start_date is None or end_date is None:
            raise ParseError("from-to ranges need both dates")
        return _midnight(start_date, tz), _midnight(end_date, tz) + timedelta(days=1)

    if start_date is None:
        raise ParseError("date ranges need a date")
    return _day_bounds(start_date, tz)
