"""Tests for runtime settings and registry candidate paths."""

from __future__ import annotations

from pathlib import Path

import pytest

from mcpsense import __version__
from mcpsense.config import (
    DEFAULT_TIMEOUT,
    DEV_REGISTRY_PATHS,
    Settings,
    get_settings,
    platform_config_dir,
)


class TestGetSettings:
    def test_defaults(self) -> None:
        settings = get_settings()
        assert settings.http_timeout == DEFAULT_TIMEOUT
        assert settings.user_agent == f"mcpsense/{__version__}"
        assert settings.registry_file is None

    def test_overrides(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("MCPSENSE_HTTP_TIMEOUT", "2.5")
        monkeypatch.setenv("MCPSENSE_REGISTRY_FILE", str(tmp_path / "apps.json"))
        get_settings.cache_clear()
        settings = get_settings()
        assert settings.http_timeout == 2.5
        assert settings.registry_file == tmp_path / "apps.json"

    @pytest.mark.parametrize("raw", ["fast", "-1", "0"])
    def test_invalid_timeout_falls_back(
        self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture, raw: str
    ) -> None:
        monkeypatch.setenv("MCPSENSE_HTTP_TIMEOUT", raw)
        get_settings.cache_clear()
        assert get_settings().http_timeout == DEFAULT_TIMEOUT
        assert "MCPSENSE_HTTP_TIMEOUT" in caplog.text

    def test_cached(self) -> None:
        assert get_settings() is get_settings()

    def test_empty_values_ignored(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MCPSENSE_USER_AGENT", "")
        monkeypatch.setenv("MCPSENSE_HTTP_TIMEOUT", "")
        get_settings.cache_clear()
        settings = get_settings()
        assert settings.user_agent == f"mcpsense/{__version__}"
        assert settings.http_timeout == DEFAULT_TIMEOUT

    def test_config_dir_from_environment(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        monkeypatch.setenv("MCPSENSE_CONFIG_DIR", str(tmp_path / "cfg"))
        get_settings.cache_clear()
        settings = get_settings()
        assert settings.config_dir == tmp_path / "cfg"
        assert settings.user_registry_path == tmp_path / "cfg" / "mcpsense" / "applications.json"

    def test_home_expanded(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("HOME", str(tmp_path))
        monkeypatch.setenv("MCPSENSE_REGISTRY_FILE", "~/apps.json")
        get_settings.cache_clear()
        assert get_settings().registry_file == tmp_path / "apps.json"

    def test_constructor_wins_over_environment(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("MCPSENSE_HTTP_TIMEOUT", "2.5")
        assert Settings(http_timeout=7).http_timeout == 7.0


class TestRegistryCandidates:
    def test_order(self, tmp_path: Path) -> None:
        settings = Settings(registry_file=tmp_path / "explicit.json", config_dir=tmp_path)
        candidates = settings.registry_candidates()
        assert candidates[0] == tmp_path / "explicit.json"
        assert candidates[1:3] == [Path(p) for p in DEV_REGISTRY_PATHS]
        assert candidates[-1] == tmp_path / "mcpsense" / "applications.json"

    def test_without_config_dir(self) -> None:
        settings = Settings(config_dir=None)
        assert settings.registry_candidates() == [Path(p) for p in DEV_REGISTRY_PATHS]


class TestPlatformConfigDir:
    def test_xdg(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setattr("mcpsense.config.platform.system", lambda: "Linux")
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert platform_config_dir() == tmp_path

    def test_macos(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setattr("mcpsense.config.platform.system", lambda: "Darwin")
        monkeypatch.setenv("HOME", str(tmp_path))
        assert platform_config_dir() == tmp_path / "Library" / "Application Support"
