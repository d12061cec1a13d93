"""Error taxonomy shared by the core, the adapters and the CLI."""

from __future__ import annotations

from typing import Any


class TogglError(Exception):
    """Base class for every error surfaced to the user."""


class ConfigError(TogglError):
    pass


class ParseError(TogglError, ValueError):
    """Malformed range token, date or timestamp."""


class InvalidInput(TogglError, ValueError):
    """Caller contract violation (negative hours and the like)."""


class ProjectNotFound(TogglError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Cannot find project='{name}'")
        self.name = name


class ApiError(TogglError):
    """Non-2xx response from the Toggl or Reports API."""

    def __init__(self, status: int, body: str) -> None:
        super().__init__(f"API request failed with HTTP {status}: {body}")
        self.status = status
        self.body = body


class PartialWorkdayError(TogglError):
    """A workday pair was only partly created.

    `created` holds the entries that exist on the server; nothing is rolled back.
    """

    def __init__(self, created: list[Any], cause: Exception) -> None:
        super().__init__(
            f"Created {len(created)} of 2 workday entries before failing: {cause}"
        )
        self.created = created
        self.cause = cause
