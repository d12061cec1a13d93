"""Shared fixtures for tests."""

from __future__ import annotations

import json
import os
from datetime import datetime
from typing import Any, Callable
from zoneinfo import ZoneInfo

import httpx
import pytest

from core.config import AppSettings
from core.domain.errors import ApiError, ProjectNotFound
from core.domain.models import TimeEntry

BERLIN = ZoneInfo("Europe/Berlin")

# base64("cb7bf7efa6d652046abd2f7d84ee18c1:api_token")
AUTH_HEADER = "Basic Y2I3YmY3ZWZhNmQ2NTIwNDZhYmQyZjdkODRlZTE4YzE6YXBpX3Rva2Vu"
API_TOKEN = "cb7bf7efa6d652046abd2f7d84ee18c1"
WORKSPACE_ID = 1234567


def me_payload() -> dict[str, Any]:
    return {
        "since": 1234567890,
        "data": {
            "id": 1234567,
            "api_token": API_TOKEN,
            "default_wid": WORKSPACE_ID,
            "email": "ralph.bower@fkbr.org",
            "fullname": "Ralph Bower",
            "beginning_of_week": 1,
            "language": "en_US",
            "timezone": "Europe/Berlin",
            "at": "2021-11-16T08:45:25+00:00",
        },
    }


def projects_payload() -> list[dict[str, Any]]:
    return [
        {
            "id": 123456789,
            "wid": WORKSPACE_ID,
            "cid": 87654321,
            "name": "betamale gmbh",
            "billable": True,
            "is_private": True,
            "active": True,
            "template": False,
            "at": "2021-11-16T09:30:22+00:00",
            "created_at": "2021-11-16T09:30:22+00:00",
            "color": "5",
            "auto_estimates": False,
            "actual_hours": 4,
            "hex_color": "#2da608",
        },
        {
            "id": 987654321,
            "wid": WORKSPACE_ID,
            "cid": 12345678,
            "name": "fkbr.org",
            "billable": True,
            "is_private": False,
            "active": True,
            "template": False,
            "at": "2021-11-16T08:51:21+00:00",
            "created_at": "2021-11-16T08:42:34+00:00",
            "color": "14",
            "auto_estimates": False,
            "actual_hours": 23,
            "rate": 100,
            "currency": "EUR",
            "hex_color": "#525266",
        },
    ]


def time_entry_payload(**overrides: Any) -> dict[str, Any]:
    data = {
        "id": 1234567890,
        "wid": WORKSPACE_ID,
        "pid": 123456789,
        "billable": False,
        "start": "2021-11-21T22:58:09+01:00",
        "duration": 7200,
        "description": "fkbr",
        "duronly": False,
        "at": "2021-11-21T22:58:09Z",
        "uid": 123456789,
    }
    data.update(overrides)
    return data


class FakeTimeEntryClient:
    """In-memory `TimeEntryClient` recording every creation."""

    def __init__(self, projects: dict[str, int] | None = None, fail_on_call: int | None = None) -> None:
        self.projects = projects if projects is not None else {"betamale gmbh": 123456789}
        self.fail_on_call = fail_on_call
        self.created: list[dict[str, Any]] = []
        self.lookups: list[tuple[int, str]] = []

    def lookup_project(self, workspace_id: int, name: str) -> int:
        self.lookups.append((workspace_id, name))
        if name not in self.projects:
            raise ProjectNotFound(name)
        return self.projects[name]

    def create_time_entry(
        self,
        description: str,
        workspace_id: int,
        tags: list[str] | None,
        duration: int,
        start: datetime,
        project_id: int,
    ) -> TimeEntry:
        call = len(self.created) + 1
        if self.fail_on_call == call:
            raise ApiError(500, "boom")
        self.created.append(
            {
                "description": description,
                "workspace_id": workspace_id,
                "tags": tags,
                "duration": duration,
                "start": start,
                "project_id": project_id,
            }
        )
        return TimeEntry(
            id=1000 + call,
            wid=workspace_id,
            pid=project_id,
            start=start,
            duration=duration,
            description=description,
        )


Handler = Callable[[httpx.Request], httpx.Response]


class Router:
    """Route table for `httpx.MockTransport`; records every request."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], list[Handler | httpx.Response]] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, path: str, response: Handler | httpx.Response) -> None:
        self.routes.setdefault((method, path), []).append(response)

    def json(self, method: str, path: str, payload: Any, status_code: int = 200) -> None:
        self.add(method, path, httpx.Response(status_code, json=payload))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        queue = self.routes.get((request.method, request.url.path))
        if not queue:
            return httpx.Response(404, text=f"no route for {request.method} {request.url.path}")
        handler = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(handler, httpx.Response):
            return handler
        return handler(request)

    def bodies(self, method: str, path: str) -> list[Any]:
        return [
            json.loads(r.content)
            for r in self.requests
            if r.method == method and r.url.path == path
        ]


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(
        _env_file=None,
        api_token=API_TOKEN,
        api_base_url="https://toggl.test/api/v8",
        reports_base_url="https://toggl.test/reports/api/v2",
        timezone="Europe/Berlin",
    )


@pytest.fixture
def router() -> Router:
    return Router()


@pytest.fixture
def fake_client() -> FakeTimeEntryClient:
    return FakeTimeEntryClient()


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Keep the user's real config and TOGGL_* variables out of the tests."""

    for key in list(os.environ):
        if key.startswith("TOGGL_"):
            monkeypatch.delenv(key)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.chdir(tmp_path)
