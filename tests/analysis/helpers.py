"""Shared test helpers for analysis tests: HTTP fakes keyed by URL."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any
from unittest.mock import AsyncMock, patch

from mcpsense.http_client import FetchOutcome

RAW = "https://raw.githubusercontent.com"


def raw_url(owner: str, repo: str, branch: str, filename: str) -> str:
    return f"{RAW}/{owner}/{repo}/{branch}/{filename}"


def fake_fetch_text(pages: dict[str, str]) -> Callable[..., Any]:
    """Return an async fetch_text stand-in serving ``pages``; 404 otherwise."""

    async def _fetch(url: str, **_: Any) -> FetchOutcome:
        if url in pages:
            return FetchOutcome.ok(pages[url], source=url)
        return FetchOutcome.missing(f"HTTP 404 from {url}", source=url)

    return _fetch


def patch_fetch_text(pages: dict[str, str]) -> Any:
    """Patch the resolver's fetch_text with a URL-keyed fake."""
    return patch(
        "mcpsense.analysis.resolver.fetch_text",
        new_callable=AsyncMock,
        side_effect=fake_fetch_text(pages),
    )


def patch_fetch_json(outcome: FetchOutcome, document: Any = None) -> Any:
    """Patch the resolver's fetch_json to return a fixed result."""
    return patch(
        "mcpsense.analysis.resolver.fetch_json",
        new_callable=AsyncMock,
        return_value=(outcome, document),
    )


def npm_entry(
    manifest: dict[str, Any], readme: str | None = None, latest: str = "1.2.0"
) -> dict[str, Any]:
    """Build an npm registry entry wrapping ``manifest`` as the latest version."""
    entry: dict[str, Any] = {
        "name": manifest.get("name"),
        "dist-tags": {"latest": latest},
        "versions": {latest: manifest},
    }
    if readme is not None:
        entry["readme"] = readme
    return entry


def ok_json(document: Any) -> FetchOutcome:
    return FetchOutcome.ok(json.dumps(document))
