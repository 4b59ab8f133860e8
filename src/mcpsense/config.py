"""Runtime settings for mcpsense.

Uses Pydantic BaseSettings for environment variable integration and
validation. Settings are read once and cached; tests that need a different
value call ``get_settings.cache_clear()`` after patching the environment.

Environment variables (prefix ``MCPSENSE_``):
    MCPSENSE_HTTP_TIMEOUT: Timeout in seconds for every outbound request.
    MCPSENSE_USER_AGENT: Client identity string sent with every request.
    MCPSENSE_REGISTRY_FILE: Explicit application registry data file, tried
        before the built-in candidate chain.
    MCPSENSE_CONFIG_DIR: Override for the platform config directory.

Empty variables are ignored. A timeout that is not a positive number is
logged and replaced by the default.

Platform config directory:
    macOS uses ``~/Library/Application Support``. Windows uses
    ``%APPDATA%``. Everything else uses ``$XDG_CONFIG_HOME`` or
    ``~/.config``. The registry file lives under ``mcpsense/`` there.
"""

from __future__ import annotations

import logging
import os
import platform
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from mcpsense import __version__

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT: float = 30.0
DEFAULT_USER_AGENT: str = f"mcpsense/{__version__}"

APP_DIR_NAME: str = "mcpsense"
REGISTRY_FILENAME: str = "applications.json"

# Development-relative registry files, tried in order before the config dir.
DEV_REGISTRY_PATHS: tuple[str, ...] = (
    "./resources/applications.json",
    "./src/mcpsense/resources/applications.json",
)


def platform_config_dir() -> Path | None:
    """Return the platform's per-user configuration directory."""
    system = platform.system().lower()
    try:
        home = Path.home()
    except RuntimeError:
        return None
    if system == "darwin":
        return home / "Library" / "Application Support"
    if system == "windows":
        appdata = os.environ.get("APPDATA")
        return Path(appdata) if appdata else home / "AppData" / "Roaming"
    xdg = os.environ.get("XDG_CONFIG_HOME")
    return Path(xdg) if xdg else home / ".config"


class Settings(BaseSettings):
    """Resolved runtime settings.

    All settings can be overridden via environment variables prefixed with
    ``MCPSENSE_``; constructor arguments win over the environment.

    Example:
        export MCPSENSE_HTTP_TIMEOUT=10
        export MCPSENSE_REGISTRY_FILE=~/mcp/applications.json
    """

    model_config = SettingsConfigDict(
        env_prefix="MCPSENSE_",
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
    )

    http_timeout: float = Field(
        default=DEFAULT_TIMEOUT,
        description="Request timeout in seconds",
    )
    user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        description="Fixed client identity header value",
    )
    registry_file: Path | None = Field(
        default=None,
        description="Explicit registry file, tried before the candidate chain",
    )
    config_dir: Path | None = Field(
        default_factory=platform_config_dir,
        description="Platform config directory (not including mcpsense/)",
    )

    @field_validator("http_timeout", mode="before")
    @classmethod
    def positive_timeout(cls, value: Any) -> float:
        """Fall back to the default for unparseable or non-positive values."""
        try:
            timeout = float(value)
        except (TypeError, ValueError):
            logger.warning(
                "Ignoring invalid MCPSENSE_HTTP_TIMEOUT=%r, using %s", value, DEFAULT_TIMEOUT
            )
            return DEFAULT_TIMEOUT
        if timeout <= 0:
            logger.warning(
                "Ignoring non-positive MCPSENSE_HTTP_TIMEOUT=%r, using %s",
                value, DEFAULT_TIMEOUT,
            )
            return DEFAULT_TIMEOUT
        return timeout

    @field_validator("registry_file", "config_dir")
    @classmethod
    def expand_path(cls, value: Path | None) -> Path | None:
        """Expand ``~`` in paths."""
        return value.expanduser() if value is not None else None

    @property
    def user_registry_path(self) -> Path | None:
        """Registry file under the user's config directory."""
        if self.config_dir is None:
            return None
        return self.config_dir / APP_DIR_NAME / REGISTRY_FILENAME

    def registry_candidates(self) -> list[Path]:
        """Return registry data files in the order the auto-loader tries them."""
        candidates: list[Path] = []
        if self.registry_file is not None:
            candidates.append(self.registry_file)
        candidates.extend(Path(p) for p in DEV_REGISTRY_PATHS)
        user_path = self.user_registry_path
        if user_path is not None:
            candidates.append(user_path)
        return candidates


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Read settings from the environment (cached)."""
    return Settings()
