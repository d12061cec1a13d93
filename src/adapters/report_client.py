"""Toggl Reports API (v2) client: detailed and summary reports, first page only."""

from __future__ import annotations

from datetime import date
from typing import Any

import httpx

from adapters.http_client import build_client, raise_for_api_error
from core.config import AppSettings
from core.domain.models import DetailedReport, SummaryReport


class TogglReportClient:
    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        http: httpx.Client | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._http = http or build_client(self._settings, base_url=self._settings.reports_base_url)

    def __enter__(self) -> "TogglReportClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    def _report(self, path: str, workspace_id: int, since: date, until: date) -> Any:
        params = {
            "workspace_id": workspace_id,
            "since": since.isoformat(),
            "until": until.isoformat(),
            "user_agent": self._settings.user_agent,
        }
        response = self._http.get(path, params=params)
        return raise_for_api_error(response).json()

    def detailed(self, workspace_id: int, since: date, until: date) -> DetailedReport:
        return DetailedReport.model_validate(self._report("/details", workspace_id, since, until))

    def summary(self, workspace_id: int, since: date, until: date) -> SummaryReport:
        return SummaryReport.model_validate(self._report("/summary", workspace_id, since, until))
