"""Toggl Track REST API (v8) client.

Implements `core.interfaces.time_entries.TimeEntryClient` plus the listing
endpoints used by the CLI. Write requests wrap their payload
(`{"time_entry": {...}}`, `{"client": {...}}`) and carry `created_with`.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

import httpx
from pydantic import TypeAdapter

from adapters.http_client import build_client, raise_for_api_error
from core.config import AppSettings
from core.domain.errors import ProjectNotFound
from core.domain.models import (
    Client,
    DataWith,
    Project,
    SinceWith,
    TimeEntry,
    UserData,
    Workspace,
)

logger = logging.getLogger(__name__)

CREATED_WITH = "toggl-cli"

_workspaces = TypeAdapter(list[Workspace])
_projects = TypeAdapter(list[Project])
_clients = TypeAdapter(list[Client])
_time_entries = TypeAdapter(list[TimeEntry])


class TogglClient:
    """Synchronous client; one instance per CLI invocation."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        http: httpx.Client | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._http = http or build_client(self._settings)

    def __enter__(self) -> "TogglClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    def _get(self, path: str, **params: Any) -> Any:
        response = self._http.get(path, params=params or None)
        return raise_for_api_error(response).json()

    def _send(self, method: str, path: str, payload: dict[str, Any] | None = None) -> Any:
        response = self._http.request(method, path, json=payload)
        raise_for_api_error(response)
        return response.json() if response.content else None

    def get_me(self) -> SinceWith[UserData]:
        return SinceWith[UserData].model_validate(self._get("/me"))

    def workspace_id(self) -> int:
        """Configured workspace, otherwise the account's default workspace."""

        if self._settings.workspace_id is not None:
            return self._settings.workspace_id
        return self.get_me().data.default_wid

    def get_workspaces(self) -> list[Workspace]:
        return _workspaces.validate_python(self._get("/workspaces"))

    def get_workspace_projects(self, workspace_id: int) -> list[Project]:
        # The API answers `null` for a workspace without projects.
        return _projects.validate_python(self._get(f"/workspaces/{workspace_id}/projects") or [])

    def get_workspace_clients(self, workspace_id: int) -> list[Client]:
        return _clients.validate_python(self._get(f"/workspaces/{workspace_id}/clients") or [])

    def lookup_project(self, workspace_id: int, name: str) -> int:
        for project in self.get_workspace_projects(workspace_id):
            if project.name == name:
                return project.id
        raise ProjectNotFound(name)

    def create_client(self, name: str, workspace_id: int, notes: str | None = None) -> Client:
        payload: dict[str, Any] = {"name": name, "wid": workspace_id}
        if notes is not None:
            payload["notes"] = notes
        body = self._send("POST", "/clients", {"client": payload})
        return DataWith[Client].model_validate(body).data

    def get_time_entries(
        self,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[TimeEntry]:
        params: dict[str, str] = {}
        if start is not None:
            params["start_date"] = start.isoformat()
        if end is not None:
            params["end_date"] = end.isoformat()
        return _time_entries.validate_python(self._get("/time_entries", **params) or [])

    def create_time_entry(
        self,
        description: str,
        workspace_id: int,
        tags: list[str] | None,
        duration: int,
        start: datetime,
        project_id: int,
    ) -> TimeEntry:
        body = self._send(
            "POST",
            "/time_entries",
            {
                "time_entry": {
                    "description": description,
                    "wid": workspace_id,
                    "duration": duration,
                    "start": start.isoformat(),
                    "tags": tags,
                    "pid": project_id,
                    "created_with": CREATED_WITH,
                }
            },
        )
        return DataWith[TimeEntry].model_validate(body).data

    def start_time_entry(
        self,
        description: str,
        tags: list[str] | None,
        project_id: int | None,
    ) -> TimeEntry:
        body = self._send(
            "POST",
            "/time_entries/start",
            {
                "time_entry": {
                    "description": description,
                    "tags": tags,
                    "pid": project_id,
                    "created_with": CREATED_WITH,
                }
            },
        )
        return DataWith[TimeEntry].model_validate(body).data

    def stop_time_entry(self, time_entry_id: int) -> TimeEntry:
        body = self._send("PUT", f"/time_entries/{time_entry_id}/stop")
        return DataWith[TimeEntry].model_validate(body).data

    def delete_time_entry(self, time_entry_id: int) -> None:
        self._send("DELETE", f"/time_entries/{time_entry_id}")
        logger.info("Deleted time entry %s", time_entry_id)
