"""End-to-end tests for ServerAnalyzer. All HTTP calls mocked.

Exercises the full resolve -> extract -> merge -> score pipeline for each
source kind, plus the failure paths that must come back as results rather
than exceptions.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any

import pytest

from mcpsense.analysis import DetectedConfig, ReadmeExtractor, ServerAnalyzer, TransportType
from mcpsense.exceptions import InvalidManifest, ManifestMissing
from mcpsense.http_client import FetchOutcome
from tests.analysis.helpers import npm_entry, ok_json, patch_fetch_json, patch_fetch_text


class ExplodingReadmeExtractor(ReadmeExtractor):
    """README extractor that always fails, to exercise recovery."""

    def extract(self, content: str) -> DetectedConfig:
        raise RuntimeError("boom")


@pytest.fixture
def analyzer() -> ServerAnalyzer:
    return ServerAnalyzer()


# ---------------------------------------------------------------------------
# Successful runs
# ---------------------------------------------------------------------------


class TestAnalyzeNpm:
    def test_manifest_and_readme_merged(
        self,
        analyzer: ServerAnalyzer,
        weather_manifest: dict[str, Any],
        weather_readme: str,
    ) -> None:
        entry = npm_entry(weather_manifest, readme=weather_readme)
        with patch_fetch_json(ok_json(entry), entry):
            result = asyncio.run(analyzer.analyze("@acme/weather-server"))

        assert result.success is True
        config = result.config
        assert config.command == "npx"
        assert config.args == ["-y", "@acme/weather-server"]
        # Manifest values win over the README's.
        assert config.description == "Weather forecasts over MCP"
        assert config.env["WEATHER_API_KEY"].description == "API key for the forecast provider"
        # README fills the gaps.
        assert "CACHE_TTL" in config.env
        assert result.confidence == pytest.approx(1.0)
        assert result.messages[0] == "Analyzing package: @acme/weather-server"
        assert any(m.startswith("Parsed package.json from npm registry") for m in result.messages)
        assert "Parsed README from npm registry for additional configuration" in result.messages

    def test_package_not_found(self, analyzer: ServerAnalyzer) -> None:
        with patch_fetch_json(FetchOutcome.missing("HTTP 404")):
            result = asyncio.run(analyzer.analyze("@acme/missing"))
        assert result.success is False
        assert result.confidence == 0.0
        assert result.config == DetectedConfig()
        assert result.messages[-1].startswith("Error: npm package not found")


class TestAnalyzeLocal:
    def test_package_directory(self, analyzer: ServerAnalyzer, local_package: Path) -> None:
        result = asyncio.run(analyzer.analyze(str(local_package)))
        assert result.success is True
        assert result.config.name == "@acme/weather-server"
        assert "Parsed package.json from local package.json" in result.messages
        assert "Parsed README.md for additional configuration" in result.messages

    def test_directory_without_manifest(self, analyzer: ServerAnalyzer, tmp_path: Path) -> None:
        """A bare directory runs as ``node index.js`` named after the directory."""
        package_dir = tmp_path / "my-server"
        package_dir.mkdir()
        result = asyncio.run(analyzer.analyze(str(package_dir)))
        assert result.success is True
        assert result.config.name == "my-server"
        assert result.config.command == "node"
        assert result.config.args == ["index.js"]
        assert not any("Parsed" in m for m in result.messages)

    def test_readme_only_requirement(self, analyzer: ServerAnalyzer, tmp_path: Path) -> None:
        (tmp_path / "README.md").write_text(
            "# Server\n\n## Configuration\n\n- `API_KEY`: Your API key (required)\n",
            encoding="utf-8",
        )
        result = asyncio.run(analyzer.analyze(str(tmp_path)))
        assert result.config.env["API_KEY"].required is True
        assert result.config.command == "node"

    def test_malformed_manifest_fails_run(
        self, analyzer: ServerAnalyzer, tmp_path: Path
    ) -> None:
        (tmp_path / "package.json").write_text("[1, 2]", encoding="utf-8")
        result = asyncio.run(analyzer.analyze(str(tmp_path)))
        assert result.success is False
        assert "not a JSON object" in result.messages[-1]

    def test_readme_parse_failure_is_recovered(self, local_package: Path) -> None:
        analyzer = ServerAnalyzer(readme_extractor=ExplodingReadmeExtractor())
        result = asyncio.run(analyzer.analyze(str(local_package)))
        assert result.success is True
        assert "Skipped README.md: could not be parsed" in result.messages
        assert "CACHE_TTL" not in result.config.env


class TestAnalyzeGithub:
    def test_repository_without_manifest(self, analyzer: ServerAnalyzer) -> None:
        with patch_fetch_text({}):
            result = asyncio.run(analyzer.analyze("https://github.com/acme/tool"))
        assert result.success is True
        config = result.config
        assert config.command == "npx"
        assert config.args == ["-y", "github:acme/tool"]
        assert config.install_command == "npm install github:acme/tool"
        assert config.docs_url == "https://github.com/acme/tool"
        # command + args + docs_url + author, no parse marker
        assert result.confidence == pytest.approx(0.45)

    def test_non_github_host(self, analyzer: ServerAnalyzer) -> None:
        result = asyncio.run(analyzer.analyze("https://gitlab.com/acme/tool"))
        assert result.success is False
        assert "non-GitHub host" in result.messages[-1]


class TestAnalyzeBlankSource:
    def test_does_not_analyze_working_directory(
        self,
        analyzer: ServerAnalyzer,
        local_package: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.chdir(local_package)
        result = asyncio.run(analyzer.analyze(""))
        assert result.success is False
        assert result.confidence == 0.0
        assert result.config.name != "@acme/weather-server"
        assert "empty" in result.messages[-1]


# ---------------------------------------------------------------------------
# analyze_raw
# ---------------------------------------------------------------------------


class TestAnalyzeRaw:
    def test_bin_manifest(self, analyzer: ServerAnalyzer) -> None:
        result = analyzer.analyze_raw('{"name":"foo","bin":"foo-cli"}')
        assert result.config.command == "npx"
        assert result.config.args == ["-y", "foo"]
        assert result.config.transport is TransportType.STDIO
        assert result.success is True

    def test_manifest_plus_readme(
        self,
        analyzer: ServerAnalyzer,
        weather_manifest: dict[str, Any],
        weather_readme: str,
    ) -> None:
        result = analyzer.analyze_raw(json.dumps(weather_manifest), weather_readme)
        assert set(result.config.env) == {"WEATHER_API_KEY", "UNITS", "CACHE_TTL"}
        assert "Parsed README for additional configuration" in result.messages

    def test_readme_only(self, analyzer: ServerAnalyzer, weather_readme: str) -> None:
        result = analyzer.analyze_raw(readme_text=weather_readme)
        assert result.config.args == ["-y", "@acme/weather-server", "--stdio"]

    def test_nothing_given(self, analyzer: ServerAnalyzer) -> None:
        with pytest.raises(ManifestMissing):
            analyzer.analyze_raw()

    def test_invalid_manifest_raises(self, analyzer: ServerAnalyzer) -> None:
        with pytest.raises(InvalidManifest):
            analyzer.analyze_raw("not json")


class TestConcurrentRuns:
    def test_runs_do_not_share_state(self, analyzer: ServerAnalyzer, tmp_path: Path) -> None:
        dirs = []
        for name in ("alpha", "beta", "gamma"):
            package_dir = tmp_path / name
            package_dir.mkdir()
            dirs.append(package_dir)

        async def run_all() -> list:
            return await asyncio.gather(*(analyzer.analyze(str(d)) for d in dirs))

        results = asyncio.run(run_all())
        assert [r.config.name for r in results] == ["alpha", "beta", "gamma"]
