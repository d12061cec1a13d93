"""httpx wrapper.

- Standardizes timeouts, headers, basic auth and error mapping for both the
  Toggl API and the Reports API.
- Tests pass their own `httpx.MockTransport` through `transport`.
"""

from __future__ import annotations

import logging

import httpx

from core.config import AppSettings
from core.domain.errors import ApiError

logger = logging.getLogger(__name__)


def _log_request(request: httpx.Request) -> None:
    logger.debug("%s %s", request.method, request.url)


def _log_response(response: httpx.Response) -> None:
    request = response.request
    logger.debug("%s %s -> HTTP %s", request.method, request.url, response.status_code)


def build_client(
    settings: AppSettings | None = None,
    *,
    base_url: str | None = None,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Create an authenticated `httpx.Client` for the Toggl APIs.

    The API token is sent as basic auth `<token>:api_token`.
    """

    settings = settings or AppSettings()
    token = settings.require_api_token()

    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.Client(
        base_url=base_url or settings.api_base_url,
        auth=httpx.BasicAuth(token, "api_token"),
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
        event_hooks={"request": [_log_request], "response": [_log_response]},
    )


def raise_for_api_error(response: httpx.Response) -> httpx.Response:
    """Map a non-2xx response to `ApiError(status, body)`."""

    if not response.is_success:
        raise ApiError(response.status_code, response.text)
    return response
