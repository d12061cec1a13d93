"""Helpers around the Reports API windows and totals."""

from __future__ import annotations

from collections import defaultdict
from datetime import date, datetime, timedelta

from core.domain.models import DetailedReport, SummaryReport


def report_window(start: datetime, end: datetime) -> tuple[date, date]:
    """`(since, until)` dates for the Reports API; `until` is inclusive there."""

    return start.date(), (end - timedelta(days=1)).date()


def hours(milliseconds: int | None) -> float:
    return round((milliseconds or 0) / 3_600_000, 2)


def summarize_detailed(report: DetailedReport) -> dict[str, float]:
    """Total hours per project, ordered by project name."""

    totals: dict[str, int] = defaultdict(int)
    for item in report.data:
        totals[item.project or "(no project)"] += item.dur
    return {name: hours(ms) for name, ms in sorted(totals.items())}


def summary_rows(report: SummaryReport) -> list[tuple[str, str, float]]:
    """`(project, client, hours)` rows of a summary report."""

    return [(item.project, item.client or "", hours(item.time)) for item in report.data]
