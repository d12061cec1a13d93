"""Tests for core.config - settings sources and the user .env file."""

from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from core.config import (
    AppSettings,
    get_user_env_file,
    load_settings,
    local_now,
    local_zone,
    write_user_env_vars,
)
from core.domain.errors import ConfigError


def test_env_prefix(monkeypatch):
    monkeypatch.setenv("TOGGL_API_TOKEN", "abc")
    monkeypatch.setenv("TOGGL_WORKSPACE_ID", "42")
    monkeypatch.setenv("TOGGL_WEEK_START", "6")

    settings = AppSettings(_env_file=None)

    assert settings.api_token == "abc"
    assert settings.workspace_id == 42
    assert settings.week_start == 6


def test_require_api_token():
    with pytest.raises(ConfigError):
        AppSettings(_env_file=None).require_api_token()


def test_user_config_dir_follows_xdg(tmp_path):
    assert get_user_env_file() == tmp_path / "config" / "toggl-cli" / ".env"


def test_write_user_env_vars_merges(tmp_path):
    write_user_env_vars({"TOGGL_API_TOKEN": "first", "TOGGL_TIMEZONE": "Europe/Berlin"})
    path = write_user_env_vars({"TOGGL_API_TOKEN": "second", "TOGGL_WORKSPACE_ID": None})

    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[0].startswith("#")
    assert lines[1:] == ["TOGGL_API_TOKEN=second", "TOGGL_TIMEZONE=Europe/Berlin"]


def test_user_env_file_is_read(tmp_path):
    path = write_user_env_vars({"TOGGL_API_TOKEN": "from-file"})

    settings = AppSettings(_env_file=str(path))

    assert settings.api_token == "from-file"


def test_configured_timezone():
    settings = AppSettings(_env_file=None, timezone="Europe/Berlin")

    assert local_zone(settings) == ZoneInfo("Europe/Berlin")
    now = local_now(settings)
    assert isinstance(now, datetime)
    assert now.tzinfo == ZoneInfo("Europe/Berlin")


def test_unknown_timezone_is_a_config_error():
    settings = AppSettings(_env_file=None, timezone="Mars/Olympus")

    with pytest.raises(ConfigError, match="Mars/Olympus"):
        local_zone(settings)


def test_invalid_setting_is_a_config_error(monkeypatch):
    monkeypatch.setenv("TOGGL_WEEK_START", "9")

    with pytest.raises(ConfigError, match="TOGGL_WEEK_START"):
        load_settings()
