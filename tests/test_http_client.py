"""Tests for the async fetch helpers, using httpx.MockTransport."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any
from unittest.mock import patch

import httpx
import pytest

from mcpsense.config import get_settings
from mcpsense.http_client import FetchStatus, _client, fetch_json, fetch_text


def _patched_client(handler: Callable[[httpx.Request], httpx.Response]) -> Any:
    def factory(timeout: float | None) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return patch("mcpsense.http_client._client", side_effect=factory)


class TestFetchText:
    def test_ok(self) -> None:
        with _patched_client(lambda request: httpx.Response(200, text="hello")):
            outcome = asyncio.run(fetch_text("https://example.test/a"))
        assert outcome.is_ok
        assert outcome.content == "hello"
        assert outcome.source == "https://example.test/a"

    def test_not_found_is_missing(self) -> None:
        with _patched_client(lambda request: httpx.Response(404)):
            outcome = asyncio.run(fetch_text("https://example.test/a"))
        assert outcome.status is FetchStatus.MISSING

    def test_server_error_is_failed(self) -> None:
        with _patched_client(lambda request: httpx.Response(500)):
            outcome = asyncio.run(fetch_text("https://example.test/a"))
        assert outcome.status is FetchStatus.FAILED
        assert "HTTP 500" in outcome.error

    def test_timeout_is_failed(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        with _patched_client(handler):
            outcome = asyncio.run(fetch_text("https://example.test/a"))
        assert outcome.status is FetchStatus.FAILED
        assert "timeout" in outcome.error

    def test_connection_error_is_failed(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with _patched_client(handler):
            outcome = asyncio.run(fetch_text("https://example.test/a"))
        assert outcome.status is FetchStatus.FAILED


class TestFetchJson:
    def test_parsed(self) -> None:
        with _patched_client(lambda request: httpx.Response(200, json={"a": 1})):
            outcome, document = asyncio.run(fetch_json("https://example.test/a"))
        assert outcome.is_ok
        assert document == {"a": 1}

    def test_invalid_json_is_failed(self) -> None:
        with _patched_client(lambda request: httpx.Response(200, text="<html>")):
            outcome, document = asyncio.run(fetch_json("https://example.test/a"))
        assert outcome.status is FetchStatus.FAILED
        assert document is None


class TestClient:
    def test_identity_and_timeout(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MCPSENSE_USER_AGENT", "custom-agent/9")
        monkeypatch.setenv("MCPSENSE_HTTP_TIMEOUT", "5")
        get_settings.cache_clear()
        client = _client(None)
        try:
            assert client.headers["User-Agent"] == "custom-agent/9"
            assert client.timeout.read == 5.0
        finally:
            asyncio.run(client.aclose())
