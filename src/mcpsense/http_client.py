"""Shared async HTTP client utilities for source resolution.

Provides a thin wrapper around ``httpx.AsyncClient`` with standardised
timeouts, user-agent headers, and error handling. Every fetch made by the
source resolver goes through this module so that HTTP behaviour is
consistent and testable.

The helpers never raise for network or HTTP problems. They return a
``FetchOutcome`` instead, so fallback chains (branch ``main`` then
``master``, manifest then synthesized default) can be written as ordered
checks rather than nested ``try`` blocks.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

import httpx

from mcpsense.config import get_settings

logger = logging.getLogger(__name__)


class FetchStatus(str, Enum):
    """Outcome category of a single fetch attempt."""

    OK = "ok"
    MISSING = "missing"
    FAILED = "failed"


@dataclass(frozen=True)
class FetchOutcome:
    """Explicit result of one fetch step.

    ``MISSING`` means the resource definitively does not exist (HTTP 404,
    absent file); ``FAILED`` covers everything else that went wrong. Both
    let a fallback chain move on to its next candidate.

    Attributes:
        status: Outcome category.
        content: Response body (only meaningful when ``status`` is OK).
        error: Human-readable failure reason.
        source: URL or path that was fetched.
    """

    status: FetchStatus
    content: str = ""
    error: str = ""
    source: str = ""

    @property
    def is_ok(self) -> bool:
        return self.status is FetchStatus.OK

    @classmethod
    def ok(cls, content: str, *, source: str = "") -> FetchOutcome:
        return cls(FetchStatus.OK, content=content, source=source)

    @classmethod
    def missing(cls, error: str, *, source: str = "") -> FetchOutcome:
        return cls(FetchStatus.MISSING, error=error, source=source)

    @classmethod
    def failed(cls, error: str, *, source: str = "") -> FetchOutcome:
        return cls(FetchStatus.FAILED, error=error, source=source)


def _client(timeout: float | None) -> httpx.AsyncClient:
    settings = get_settings()
    return httpx.AsyncClient(
        timeout=timeout if timeout is not None else settings.http_timeout,
        headers={"User-Agent": settings.user_agent},
        follow_redirects=True,
    )


async def fetch_text(url: str, *, timeout: float | None = None) -> FetchOutcome:
    """Fetch a URL and return the response body as text.

    Args:
        url: The URL to fetch.
        timeout: Request timeout in seconds. Defaults to the configured value.

    Returns:
        ``FetchOutcome.ok`` with the body on a 2xx response,
        ``FetchOutcome.missing`` on 404, ``FetchOutcome.failed`` otherwise.
    """
    try:
        async with _client(timeout) as client:
            resp = await client.get(url)
            resp.raise_for_status()
            return FetchOutcome.ok(resp.text, source=url)
    except httpx.TimeoutException:
        logger.warning("Timeout fetching %s", url)
        return FetchOutcome.failed(f"timeout fetching {url}", source=url)
    except httpx.HTTPStatusError as exc:
        status = exc.response.status_code
        logger.debug("HTTP %d from %s", status, url)
        if status == 404:
            return FetchOutcome.missing(f"HTTP 404 from {url}", source=url)
        return FetchOutcome.failed(f"HTTP {status} from {url}", source=url)
    except httpx.RequestError as exc:
        logger.warning("Request error for %s: %s", url, exc)
        return FetchOutcome.failed(f"request error for {url}: {exc}", source=url)


async def fetch_json(url: str, *, timeout: float | None = None) -> tuple[FetchOutcome, Any]:
    """Fetch a URL and parse the response as JSON.

    Args:
        url: The URL to fetch.
        timeout: Request timeout in seconds.

    Returns:
        Tuple of (outcome, parsed document). The document is None unless the
        outcome is ok. A body that is not valid JSON is reported as failed.
    """
    outcome = await fetch_text(url, timeout=timeout)
    if not outcome.is_ok:
        return outcome, None
    try:
        return outcome, json.loads(outcome.content)
    except ValueError as exc:
        logger.warning("Invalid JSON from %s: %s", url, exc)
        return FetchOutcome.failed(f"invalid JSON from {url}", source=url), None
