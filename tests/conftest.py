"""Shared fixtures for mcpsense tests."""

from __future__ import annotations

import json
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest

from mcpsense.config import get_settings


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Point every settings lookup at a throwaway config directory.

    Keeps a registry file in the real user config dir, or an exported
    ``MCPSENSE_*`` variable, from leaking into a test.
    """
    monkeypatch.setenv("MCPSENSE_CONFIG_DIR", str(tmp_path / "user-config"))
    for name in ("MCPSENSE_REGISTRY_FILE", "MCPSENSE_HTTP_TIMEOUT", "MCPSENSE_USER_AGENT"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def weather_manifest() -> dict[str, Any]:
    """A realistic MCP server package.json."""
    return {
        "name": "@acme/weather-server",
        "version": "1.2.0",
        "description": "Weather forecasts over MCP",
        "bin": {"weather-server": "dist/index.js"},
        "main": "dist/index.js",
        "author": {"name": "Acme Labs", "email": "dev@acme.test"},
        "repository": {"type": "git", "url": "git+https://github.com/acme/weather-server.git"},
        "keywords": ["mcp", "weather_api_key"],
        "mcp": {
            "env": {
                "WEATHER_API_KEY": {
                    "description": "API key for the forecast provider",
                    "required": True,
                },
                "UNITS": "metric",
            }
        },
    }


@pytest.fixture
def weather_readme() -> str:
    """A README with a configuration section, a launch example and an install line."""
    return (
        "# Weather Server\n"
        "\n"
        "[![npm](https://img.shields.io/npm/v/weather-server)](https://npmjs.com)\n"
        "Weather forecasts for your assistant.\n"
        "\n"
        "## Installation\n"
        "\n"
        "```bash\n"
        "npm install -g @acme/weather-server\n"
        "```\n"
        "\n"
        "## Configuration\n"
        "\n"
        "- `WEATHER_API_KEY`: Your provider key (required)\n"
        "- `CACHE_TTL`: Seconds to cache forecasts\n"
        "\n"
        "## Usage\n"
        "\n"
        "```bash\n"
        "npx -y @acme/weather-server --stdio\n"
        "```\n"
    )


@pytest.fixture
def local_package(tmp_path: Path, weather_manifest: dict[str, Any], weather_readme: str) -> Path:
    """A local package directory with package.json and README.md."""
    package_dir = tmp_path / "weather-server"
    package_dir.mkdir()
    (package_dir / "package.json").write_text(json.dumps(weather_manifest), encoding="utf-8")
    (package_dir / "README.md").write_text(weather_readme, encoding="utf-8")
    return package_dir
