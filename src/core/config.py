"""Core configuration.

- Centralizes environment variables (pydantic-settings) away from the CLI.
- Adapters (Toggl API, Reports API) read credentials and endpoints from here.
"""

from __future__ import annotations

import os
import sys
from datetime import datetime, tzinfo
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict
from tzlocal import get_localzone

from core.domain.errors import ConfigError


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no extra dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "toggl-cli"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "toggl-cli"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "toggl-cli"
    return Path.home() / ".config" / "toggl-cli"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str | None]) -> Path:
    """Write or update variables in the user's global .env file."""

    env_path = get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# toggl-cli user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Application settings.

    Sources, in order: environment (`TOGGL_*`), the project `.env`, then the
    user config `.env` written by `toggl init`.
    """

    model_config = SettingsConfigDict(
        env_prefix="TOGGL_",
        extra="ignore",
        case_sensitive=False,
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    api_token: str | None = Field(
        default=None,
        description="Toggl API token (profile page). Sent as basic auth `<token>:api_token`.",
    )
    api_base_url: str = Field(
        default="https://api.track.toggl.com/api/v8",
        min_length=8,
        description="Base URL of the Toggl REST API.",
    )
    reports_base_url: str = Field(
        default="https://api.track.toggl.com/reports/api/v2",
        min_length=8,
        description="Base URL of the Toggl Reports API.",
    )
    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Per-request timeout (seconds).",
    )
    user_agent: str = Field(
        default="toggl-cli/0.1",
        min_length=1,
        description="User-Agent header; also sent as `user_agent` to the Reports API.",
    )
    workspace_id: int | None = Field(
        default=None,
        description="Workspace to operate on. Defaults to the account's default workspace.",
    )
    timezone: str | None = Field(
        default=None,
        description="IANA zone used for ranges and start times. Defaults to the system zone.",
    )
    week_start: int = Field(
        default=0,
        ge=0,
        le=6,
        description="First day of the week for this-week/last-week (0=Monday ... 6=Sunday).",
    )

    def require_api_token(self) -> str:
        if not self.api_token:
            raise ConfigError(
                "No API token configured. Run `toggl init` or set TOGGL_API_TOKEN."
            )
        return self.api_token


def load_settings() -> AppSettings:
    """`AppSettings()` with validation failures reported as `ConfigError`."""

    try:
        return AppSettings()
    except ValidationError as exc:
        problems = "; ".join(
            f"TOGGL_{'_'.join(str(part) for part in err['loc']).upper()}: {err['msg']}"
            for err in exc.errors()
        )
        raise ConfigError(f"Invalid configuration: {problems}") from exc


def local_zone(settings: AppSettings | None = None) -> tzinfo:
    """Zone in which ranges and naive timestamps are interpreted."""

    settings = settings or load_settings()
    if settings.timezone:
        try:
            return ZoneInfo(settings.timezone)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ConfigError(f"Unknown timezone '{settings.timezone}' (TOGGL_TIMEZONE)") from exc
    return get_localzone()


def local_now(settings: AppSettings | None = None) -> datetime:
    return datetime.now(local_zone(settings))
