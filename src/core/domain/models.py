"""Domain models (Pydantic v2).

- API resources are parsed leniently (`extra="ignore"`): the service adds
  fields over time and the CLI only needs a stable subset.
- `WorkdayRequest` and `TimeEntrySpec` are the input and output of the
  workday splitter; they never touch HTTP.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from core.domain.start import Start

T = TypeVar("T")


class Resource(BaseModel):
    model_config = ConfigDict(extra="ignore")


class Workspace(Resource):
    id: int
    name: str
    premium: bool = False
    admin: bool = False
    default_hourly_rate: float | None = None
    default_currency: str | None = None
    only_admins_may_create_projects: bool = False
    only_admins_see_billable_rates: bool = False
    rounding: int | None = None
    rounding_minutes: int | None = None
    at: datetime | None = None
    logo_url: str | None = None


class Project(Resource):
    id: int
    name: str
    wid: int = Field(..., description="Workspace id.")
    cid: int | None = Field(default=None, description="Client id.")
    active: bool = True
    is_private: bool = False
    template: bool = False
    template_id: int | None = None
    billable: bool = False
    auto_estimates: bool = False
    estimated_hours: int | None = None
    at: datetime | None = None
    color: str | None = None
    rate: float | None = None
    created_at: datetime | None = None


class UserData(Resource):
    id: int
    api_token: str | None = Field(default=None, repr=False)
    default_wid: int
    email: str
    fullname: str
    beginning_of_week: int = Field(
        default=1,
        ge=0,
        le=6,
        description="Toggl convention: 0=Sunday, 1=Monday.",
    )
    language: str | None = None
    timezone: str | None = None
    at: datetime | None = None


class Client(Resource):
    id: int
    name: str
    wid: int
    notes: str | None = None
    at: datetime | None = None


class TimeEntry(Resource):
    id: int
    wid: int
    pid: int | None = None
    billable: bool = False
    start: datetime
    stop: datetime | None = None
    duration: int = Field(
        ...,
        description="Seconds; negative while the entry is running.",
    )
    description: str | None = None
    tags: list[str] = Field(default_factory=list)
    duronly: bool = False
    at: datetime | None = None

    @property
    def is_running(self) -> bool:
        return self.duration < 0


class DataWith(BaseModel, Generic[T]):
    data: T


class SinceWith(BaseModel, Generic[T]):
    since: int
    data: T


class DetailedReportItem(Resource):
    id: int
    pid: int | None = None
    project: str | None = None
    client: str | None = None
    description: str | None = None
    start: datetime
    end: datetime | None = None
    dur: int = Field(..., description="Milliseconds.")
    tags: list[str] = Field(default_factory=list)
    user: str | None = None


class DetailedReport(Resource):
    total_grand: int | None = Field(default=None, description="Milliseconds.")
    total_count: int = 0
    per_page: int = 50
    data: list[DetailedReportItem] = Field(default_factory=list)


class SummaryReportItem(Resource):
    id: int | None = None
    title: dict[str, Any] = Field(default_factory=dict)
    time: int = Field(default=0, description="Milliseconds.")
    items: list[dict[str, Any]] = Field(default_factory=list)

    @property
    def project(self) -> str:
        return self.title.get("project") or "(no project)"

    @property
    def client(self) -> str | None:
        return self.title.get("client")


class SummaryReport(Resource):
    total_grand: int | None = Field(default=None, description="Milliseconds.")
    data: list[SummaryReportItem] = Field(default_factory=list)


class WorkdayRequest(BaseModel):
    """A whole workday to be recorded, optionally split around a break."""

    description: str = Field(..., min_length=1)
    project: str = Field(..., min_length=1, description="Exact project name.")
    hours: float = Field(
        ...,
        allow_inf_nan=False,
        description="Hours worked, excluding the break. Negative values fail with `InvalidInput` when split.",
    )
    start: Start = Field(default_factory=Start.now)


class TimeEntrySpec(BaseModel):
    """A time entry ready for creation."""

    model_config = ConfigDict(frozen=True)

    description: str
    workspace_id: int
    tags: list[str] | None = None
    duration: int = Field(..., ge=0, description="Whole seconds.")
    start: datetime
    project_id: int
