"""httpx wrapper.

- Standardizes timeouts, headers and the optional relay for every adapter.
- Tests swap the network out by passing an `httpx.MockTransport`.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from last_gig_finder.core.config import AppSettings

logger = logging.getLogger(__name__)


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an `httpx.AsyncClient` with the project defaults."""

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )


def build_url(base_url: str, path: str, params: dict[str, Any] | None = None) -> str:
    """Join `base_url` and `path` and encode the query string."""

    url = httpx.URL(base_url.rstrip("/") + "/" + path.lstrip("/"), params=params)
    return str(url)


def through_relay(url: str, relay_url: str | None) -> str:
    """Route `url` through a pass-through relay when one is configured.

    The relay receives the whole target URL percent-encoded, e.g.
    `https://corsproxy.io/?https%3A%2F%2Fapi.setlist.fm%2F...`.
    """

    if not relay_url:
        return url
    return relay_url + quote(url, safe="")


def log_request(method: str, url: str) -> None:
    logger.debug("%s %s", method.upper(), url)
