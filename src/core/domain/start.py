"""Start instant of a new time entry: `now` or an explicit timestamp."""

from __future__ import annotations

from datetime import datetime, tzinfo
from typing import Callable

from pydantic import BaseModel, ConfigDict

from core.domain.errors import ParseError

Clock = Callable[[], datetime]


class Start(BaseModel):
    """`Start(at=None)` means "now"; otherwise `at` is an aware timestamp."""

    model_config = ConfigDict(frozen=True)

    at: datetime | None = None

    @classmethod
    def now(cls) -> "Start":
        return cls()

    @classmethod
    def parse(cls, value: str, zone: tzinfo | None = None) -> "Start":
        """Parse `now` or an ISO-8601 timestamp.

        Naive timestamps are placed in `zone` (system local time when omitted).
        """

        if value == "now":
            return cls()
        try:
            at = datetime.fromisoformat(value)
        except ValueError as exc:
            raise ParseError(f"Invalid start '{value}', expected 'now' or ISO-8601") from exc
        if at.tzinfo is None:
            at = at.replace(tzinfo=zone) if zone is not None else at.astimezone()
        return cls(at=at)

    @property
    def is_now(self) -> bool:
        return self.at is None

    def resolve(self, clock: Clock) -> datetime:
        """Concrete instant; `clock` is consulted on every call for `now`."""

        if self.at is None:
            return clock()
        return self.at

    def __str__(self) -> str:
        return "now" if self.at is None else self.at.isoformat()
