"""Doctor command for environment diagnostics, and the `init` setup prompt."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from adapters.toggl_client import TogglClient
from core.config import AppSettings, get_user_env_file, load_settings, local_zone, write_user_env_vars
from core.domain.errors import ConfigError, TogglError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_api(settings: AppSettings) -> tuple[bool, str]:
    try:
        with TogglClient(settings) as client:
            me = client.get_me().data
        return True, f"{me.fullname} <{me.email}>, default workspace {me.default_wid}"
    except TogglError as exc:
        return False, str(exc)


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    try:
        settings = load_settings()
    except ConfigError as exc:
        _console.print(f"[red]Configuration:[/red] {exc}", highlight=False)
        raise typer.Exit(code=1) from exc

    table = Table(title="toggl-cli doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("Config file", "OK" if get_user_env_file().exists() else "MISSING", str(get_user_env_file()))
    table.add_row("API token", "OK" if settings.api_token else "FAIL", "set" if settings.api_token else "run `toggl init`")
    table.add_row("API base_url", "OK", settings.api_base_url)
    table.add_row("Reports base_url", "OK", settings.reports_base_url)
    ok_zone = True
    try:
        zone_detail = str(local_zone(settings))
    except ConfigError as exc:
        ok_zone, zone_detail = False, str(exc)
    table.add_row("Timezone", "OK" if ok_zone else "FAIL", zone_detail)
    table.add_row(
        "Workspace",
        "OK",
        str(settings.workspace_id) if settings.workspace_id is not None else "account default",
    )

    ok_api = False
    if settings.api_token:
        ok_api, detail_api = _check_api(settings)
        table.add_row("API access", "OK" if ok_api else "FAIL", detail_api)

    _console.print(table)

    if not (ok_api and ok_zone):
        raise typer.Exit(code=1)


def init_settings() -> None:
    """Interactive setup; stores the API token in the user config .env."""

    api_token = typer.prompt("Toggl API token", hide_input=True, confirmation_prompt=False).strip()
    if not api_token:
        raise typer.BadParameter("the API token is required")

    workspace_id = typer.prompt("Workspace id (empty for account default)", default="", show_default=False).strip()
    if workspace_id and not workspace_id.isdigit():
        raise typer.BadParameter("the workspace id must be numeric")
    timezone = typer.prompt("Timezone (empty for system zone)", default="", show_default=False).strip()

    env_path = write_user_env_vars(
        {
            "TOGGL_API_TOKEN": api_token,
            "TOGGL_WORKSPACE_ID": workspace_id or None,
            "TOGGL_TIMEZONE": timezone or None,
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")
