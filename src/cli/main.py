"""toggl command-line interface.

Commands delegate to the adapters (HTTP) and core services (ranges, workday
splitting); this module only parses options, renders output and maps
`TogglError` to a non-zero exit status.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import tzinfo
from functools import partial
from typing import Iterator, List, Optional

import typer
from rich.console import Console

from adapters.report_client import TogglReportClient
from adapters.toggl_client import TogglClient
from cli import doctor
from cli.ui_components import (
    OutputFormat,
    build_clients_table,
    build_detailed_report_table,
    build_missing_days_table,
    build_projects_table,
    build_summary_report_table,
    build_time_entries_table,
    build_workspaces_table,
    print_error,
    render,
)
from core.config import AppSettings, load_settings, local_now, local_zone
from core.domain.errors import ParseError, PartialWorkdayError, TogglError
from core.domain.models import WorkdayRequest
from core.domain.ranges import Range, resolve
from core.domain.start import Start
from core.services.coverage import missing_days
from core.services.reports import report_window
from core.services.workday import WorkdaySplitter

logger = logging.getLogger(__name__)

app = typer.Typer(no_args_is_help=True, help="Toggl Track from the command line.")
time_entries_app = typer.Typer(no_args_is_help=True, help="List, create, start, stop and delete time entries.")
clients_app = typer.Typer(no_args_is_help=True, help="List and create clients.")
reports_app = typer.Typer(no_args_is_help=True, help="Detailed and summary reports.")

app.add_typer(doctor.app, name="doctor")
app.add_typer(time_entries_app, name="time-entries")
app.add_typer(clients_app, name="clients")
app.add_typer(reports_app, name="reports")

_console = Console()
_err_console = Console(stderr=True)

RANGE_HELP = "today, yesterday, this-week, last-week, this-month, last-month, YYYY-MM-DD or YYYY-MM-DD|YYYY-MM-DD"


@dataclass
class CliState:
    format: OutputFormat = OutputFormat.TABLE
    debug: bool = False


def _state(ctx: typer.Context) -> CliState:
    return ctx.obj if isinstance(ctx.obj, CliState) else CliState()


@contextmanager
def _errors() -> Iterator[None]:
    """Render `TogglError` and exit with status 1."""

    try:
        yield
    except PartialWorkdayError as exc:
        print_error(_err_console, str(exc))
        for entry in exc.created:
            _err_console.print(f"  created: id={entry.id} start={entry.start.isoformat()} duration={entry.duration}s")
        raise typer.Exit(code=1) from exc
    except TogglError as exc:
        print_error(_err_console, str(exc))
        raise typer.Exit(code=1) from exc


def _parse_range(value: str) -> Range:
    try:
        return Range.parse(value)
    except ParseError as exc:
        raise typer.BadParameter(str(exc), param_hint="--range") from exc


def _parse_start(value: str, zone: tzinfo) -> Start:
    try:
        return Start.parse(value, zone)
    except ParseError as exc:
        raise typer.BadParameter(str(exc), param_hint="--start") from exc


def _bounds(range_: Range, settings: AppSettings):
    start, end = resolve(range_, local_now(settings), settings.week_start)
    logger.debug("Range %s resolved to [%s, %s)", range_, start.isoformat(), end.isoformat())
    return start, end


@app.callback()
def main(
    ctx: typer.Context,
    output_format: OutputFormat = typer.Option(OutputFormat.TABLE, "--format", "-f", help="Output format."),
    debug: bool = typer.Option(False, "--debug", help="Log HTTP traffic and computations to stderr."),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = CliState(format=output_format, debug=debug)


@app.command()
def init() -> None:
    """Store the API token (and optional workspace/timezone) in the user config."""

    doctor.init_settings()


@app.command()
def workspaces(ctx: typer.Context) -> None:
    """List workspaces."""

    with _errors(), TogglClient(load_settings()) as client:
        render(_console, _state(ctx).format, client.get_workspaces(), build_workspaces_table)


@app.command()
def projects(ctx: typer.Context) -> None:
    """List projects of the active workspace."""

    with _errors(), TogglClient(load_settings()) as client:
        items = client.get_workspace_projects(client.workspace_id())
        render(_console, _state(ctx).format, items, build_projects_table)


@clients_app.command("list")
def list_clients(ctx: typer.Context) -> None:
    """List clients of the active workspace."""

    with _errors(), TogglClient(load_settings()) as client:
        items = client.get_workspace_clients(client.workspace_id())
        render(_console, _state(ctx).format, items, build_clients_table)


@clients_app.command("create")
def create_client(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Client name."),
    notes: Optional[str] = typer.Option(None, "--notes", help="Free-form notes."),
) -> None:
    """Create a client in the active workspace."""

    with _errors(), TogglClient(load_settings()) as client:
        created = client.create_client(name, client.workspace_id(), notes)
        render(_console, _state(ctx).format, [created], build_clients_table)


@time_entries_app.command("list")
def list_time_entries(
    ctx: typer.Context,
    range_token: str = typer.Option("today", "--range", "-r", help=RANGE_HELP),
    missing: bool = typer.Option(False, "--missing", help="Show weekdays without any entry instead."),
) -> None:
    """List time entries started within a range."""

    range_ = _parse_range(range_token)
    with _errors():
        settings = load_settings()
        zone = local_zone(settings)
        with TogglClient(settings) as client:
            start, end = _bounds(range_, settings)
            entries = client.get_time_entries(start, end)
            if missing:
                days = missing_days(entries, start, end)
                render(_console, _state(ctx).format, days, build_missing_days_table)
            else:
                render(_console, _state(ctx).format, entries, partial(build_time_entries_table, zone=zone))


@time_entries_app.command("create")
def create_time_entry(
    ctx: typer.Context,
    description: str = typer.Option(..., "--description", "-d"),
    project: str = typer.Option(..., "--project", "-p", help="Exact project name."),
    duration: int = typer.Option(..., "--duration", min=1, help="Duration in seconds."),
    start: str = typer.Option("now", "--start", "-s", help="'now' or an ISO-8601 timestamp."),
    tags: Optional[List[str]] = typer.Option(None, "--tag", "-t", help="Tag (repeatable)."),
) -> None:
    """Create a finished time entry."""

    with _errors():
        settings = load_settings()
        zone = local_zone(settings)
        start_at = _parse_start(start, zone).resolve(lambda: local_now(settings))
        with TogglClient(settings) as client:
            workspace_id = client.workspace_id()
            project_id = client.lookup_project(workspace_id, project)
            created = client.create_time_entry(description, workspace_id, tags or None, duration, start_at, project_id)
            render(_console, _state(ctx).format, [created], partial(build_time_entries_table, zone=zone))


@time_entries_app.command("create-workday-with-pause")
def create_workday_with_pause(
    ctx: typer.Context,
    description: str = typer.Option(..., "--description", "-d"),
    project: str = typer.Option(..., "--project", "-p", help="Exact project name."),
    hours: float = typer.Option(..., "--hours", min=0.0, help="Hours worked, e.g. 7.5."),
    start: str = typer.Option("now", "--start", "-s", help="'now' or an ISO-8601 timestamp."),
) -> None:
    """Record a workday, split around the statutory break when one is owed."""

    with _errors():
        settings = load_settings()
        zone = local_zone(settings)
        request = WorkdayRequest(
            description=description,
            project=project,
            hours=hours,
            start=_parse_start(start, zone),
        )
        with TogglClient(settings) as client:
            splitter = WorkdaySplitter(client, client.workspace_id(), clock=lambda: local_now(settings))
            created = splitter.create_workday(request)
            render(_console, _state(ctx).format, created, partial(build_time_entries_table, zone=zone))


@time_entries_app.command("start")
def start_time_entry(
    ctx: typer.Context,
    description: str = typer.Option(..., "--description", "-d"),
    project: Optional[str] = typer.Option(None, "--project", "-p", help="Exact project name."),
    tags: Optional[List[str]] = typer.Option(None, "--tag", "-t", help="Tag (repeatable)."),
) -> None:
    """Start a running time entry."""

    with _errors():
        settings = load_settings()
        zone = local_zone(settings)
        with TogglClient(settings) as client:
            project_id = None
            if project is not None:
                project_id = client.lookup_project(client.workspace_id(), project)
            started = client.start_time_entry(description, tags or None, project_id)
            render(_console, _state(ctx).format, [started], partial(build_time_entries_table, zone=zone))


@time_entries_app.command("stop")
def stop_time_entry(
    ctx: typer.Context,
    time_entry_id: int = typer.Argument(..., help="Id of the running entry."),
) -> None:
    """Stop a running time entry."""

    with _errors():
        settings = load_settings()
        zone = local_zone(settings)
        with TogglClient(settings) as client:
            stopped = client.stop_time_entry(time_entry_id)
            render(_console, _state(ctx).format, [stopped], partial(build_time_entries_table, zone=zone))


@time_entries_app.command("delete")
def delete_time_entry(
    time_entry_id: int = typer.Argument(..., help="Id of the entry to delete."),
) -> None:
    """Delete a time entry."""

    with _errors(), TogglClient(load_settings()) as client:
        client.delete_time_entry(time_entry_id)
    _console.print(f"Deleted time entry {time_entry_id}")


@reports_app.command("detailed")
def detailed_report(
    ctx: typer.Context,
    range_token: str = typer.Option("this-week", "--range", "-r", help=RANGE_HELP),
) -> None:
    """Detailed report (first page) for a range."""

    range_ = _parse_range(range_token)
    with _errors():
        settings = load_settings()
        zone = local_zone(settings)
        with TogglClient(settings) as client, TogglReportClient(settings) as reports:
            since, until = report_window(*_bounds(range_, settings))
            report = reports.detailed(client.workspace_id(), since, until)
            render(_console, _state(ctx).format, report, partial(build_detailed_report_table, zone=zone))


@reports_app.command("summary")
def summary_report(
    ctx: typer.Context,
    range_token: str = typer.Option("this-week", "--range", "-r", help=RANGE_HELP),
) -> None:
    """Per-project summary report for a range."""

    range_ = _parse_range(range_token)
    with _errors():
        settings = load_settings()
        with TogglClient(settings) as client, TogglReportClient(settings) as reports:
            since, until = report_window(*_bounds(range_, settings))
            report = reports.summary(client.workspace_id(), since, until)
            render(_console, _state(ctx).format, report, build_summary_report_table)


def run() -> None:
    app()
