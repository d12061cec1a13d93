"""CLI UI components (Rich).

Tables for each resource kind, plus the `table`/`json` output switch.
"""

from __future__ import annotations

from datetime import date, datetime, tzinfo
from enum import Enum
from typing import Any, Callable, Sequence

import typer
from rich.console import Console
from rich.table import Table
from rich.text import Text

from adapters.json_exporter import to_json
from core.domain.models import (
    Client,
    DetailedReport,
    Project,
    SummaryReport,
    TimeEntry,
    Workspace,
)
from core.services.reports import hours, summarize_detailed, summary_rows


class OutputFormat(str, Enum):
    TABLE = "table"
    JSON = "json"


def _when(value: datetime | None, zone: tzinfo | None = None) -> str:
    if value is None:
        return ""
    return value.astimezone(zone).strftime("%Y-%m-%d %H:%M")


def _duration(seconds: int) -> str:
    if seconds < 0:
        return "running"
    minutes, _ = divmod(seconds, 60)
    h, m = divmod(minutes, 60)
    return f"{h}:{m:02d}"


def build_workspaces_table(workspaces: Sequence[Workspace]) -> Table:
    table = Table(title="Workspaces")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Admin", style="green")
    for ws in workspaces:
        table.add_row(str(ws.id), ws.name, "yes" if ws.admin else "no")
    return table


def build_projects_table(projects: Sequence[Project]) -> Table:
    table = Table(title="Projects")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Client ID", style="magenta")
    table.add_column("Active", style="green")
    for project in projects:
        table.add_row(
            str(project.id),
            project.name,
            "" if project.cid is None else str(project.cid),
            "yes" if project.active else "no",
        )
    return table


def build_clients_table(clients: Sequence[Client]) -> Table:
    table = Table(title="Clients")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Notes", style="dim")
    for client in clients:
        table.add_row(str(client.id), client.name, client.notes or "")
    return table


def build_time_entries_table(
    entries: Sequence[TimeEntry],
    title: str = "Time entries",
    zone: tzinfo | None = None,
) -> Table:
    table = Table(title=title)
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Start", style="white", no_wrap=True)
    table.add_column("Duration", style="green", no_wrap=True)
    table.add_column("Description", style="white")
    table.add_column("Project ID", style="magenta")
    for entry in entries:
        table.add_row(
            str(entry.id),
            _when(entry.start, zone),
            _duration(entry.duration),
            entry.description or "",
            "" if entry.pid is None else str(entry.pid),
        )
    return table


def build_missing_days_table(days: Sequence[date]) -> Table:
    table = Table(title="Days without time entries")
    table.add_column("Date", style="yellow", no_wrap=True)
    table.add_column("Weekday", style="dim")
    for day in days:
        table.add_row(day.isoformat(), day.strftime("%A"))
    return table


def build_detailed_report_table(report: DetailedReport, zone: tzinfo | None = None) -> Table:
    table = Table(title="Detailed report")
    table.add_column("Start", style="white", no_wrap=True)
    table.add_column("Hours", style="green", justify="right")
    table.add_column("Project", style="magenta")
    table.add_column("Description", style="white")
    for item in report.data:
        table.add_row(_when(item.start, zone), f"{hours(item.dur):.2f}", item.project or "", item.description or "")
    for project, total in summarize_detailed(report).items():
        table.add_row("", f"{total:.2f}", project, "[bold]total[/bold]")
    return table


def build_summary_report_table(report: SummaryReport) -> Table:
    table = Table(title="Summary report")
    table.add_column("Project", style="magenta")
    table.add_column("Client", style="white")
    table.add_column("Hours", style="green", justify="right")
    for project, client, total in summary_rows(report):
        table.add_row(project, client, f"{total:.2f}")
    table.add_row("[bold]Total[/bold]", "", f"{hours(report.total_grand):.2f}")
    return table


def render(
    console: Console,
    fmt: OutputFormat,
    payload: Any,
    build_table: Callable[[Any], Table],
) -> None:
    """Print `payload` as JSON (plain stdout) or as a Rich table."""

    if fmt is OutputFormat.JSON:
        typer.echo(to_json(payload))
    else:
        console.print(build_table(payload))


def print_error(console: Console, message: str) -> None:
    console.print(Text.assemble(("Error: ", "bold red"), message), highlight=False)
