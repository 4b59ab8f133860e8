"""Application profile registry: load, look up, mutate, serialize.

The registry maps application ids to ``ApplicationProfile`` values and keeps
a ``RegistryMetadata`` record (version, last-updated timestamp, application
count) alongside.

Loading
-------
``with_auto_load()`` tries each candidate data file in order and keeps the
first one that exists and parses:

1. ``$MCPSENSE_REGISTRY_FILE``, when set.
2. ``./resources/applications.json`` (development).
3. ``./src/mcpsense/resources/applications.json`` (development).
4. ``<user config dir>/mcpsense/applications.json``.

A candidate that fails to parse is logged and skipped. When none loads, the
compiled-in defaults are used. One malformed entry fails its whole file;
there is no partial registry.

Concurrency
-----------
The profile map and its metadata are published together as one immutable
snapshot. Mutations build a new snapshot under a writer lock and swap it in
with a single assignment, so readers never take the lock and never see a
count that disagrees with the map.

Usage::

    registry = ApplicationRegistry.with_auto_load()
    cursor = registry.get_application("cursor")
    registry.write(Path("applications.json"))
"""

from __future__ import annotations

import json
import logging
import threading
from collections.abc import Iterable
from dataclasses import replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from mcpsense.config import Settings, get_settings
from mcpsense.exceptions import ConfigDocumentError, InvalidProfileData, McpSenseError
from mcpsense.profiles.defaults import DEFAULT_PROFILES, DEFAULT_REGISTRY_VERSION
from mcpsense.profiles.models import (
    ApplicationCategory,
    ApplicationProfile,
    RegistryMetadata,
)

logger = logging.getLogger(__name__)

_Snapshot = tuple[dict[str, ApplicationProfile], RegistryMetadata]


def _now() -> datetime:
    return datetime.now(timezone.utc)


class ApplicationRegistry:
    """Registry of known MCP-enabled host applications.

    Example::

        registry = ApplicationRegistry.default()
        editors = registry.get_applications_by_category(
            ApplicationCategory.parse("CodeEditor")
        )
    """

    def __init__(
        self,
        profiles: Iterable[ApplicationProfile] = (),
        version: str = DEFAULT_REGISTRY_VERSION,
    ) -> None:
        applications = {profile.id: profile for profile in profiles}
        self._lock = threading.Lock()
        self._snapshot: _Snapshot = (
            applications,
            RegistryMetadata(version=version, application_count=len(applications)),
        )

    # -- Construction -------------------------------------------------------

    @classmethod
    def default(cls) -> ApplicationRegistry:
        """Create a registry holding the compiled-in default profiles."""
        return cls(ApplicationProfile.from_dict(entry) for entry in DEFAULT_PROFILES)

    @classmethod
    def from_dict(cls, data: Any) -> ApplicationRegistry:
        """Build a registry from a parsed registry data document.

        Raises:
            InvalidProfileData: If the document or any entry is malformed.
        """
        if not isinstance(data, dict):
            raise InvalidProfileData("registry document: expected a JSON object")
        entries = data.get("applications", [])
        if not isinstance(entries, list):
            raise InvalidProfileData("registry document: 'applications' must be a list")
        version = data.get("version")
        if not isinstance(version, str):
            version = DEFAULT_REGISTRY_VERSION
        return cls((ApplicationProfile.from_dict(e) for e in entries), version=version)

    @classmethod
    def from_json_file(cls, path: Path) -> ApplicationRegistry:
        """Load a registry data file.

        Raises:
            ConfigDocumentError: If the file cannot be read or is not JSON.
            InvalidProfileData: If any entry fails to deserialize.
        """
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ConfigDocumentError(f"Cannot read registry file {path}: {exc}") from exc
        try:
            data = json.loads(content)
        except ValueError as exc:
            raise ConfigDocumentError(f"Registry file {path} is not valid JSON: {exc}") from exc
        return cls.from_dict(data)

    @classmethod
    def with_auto_load(cls, settings: Settings | None = None) -> ApplicationRegistry:
        """Load the first usable registry file, falling back to the defaults."""
        settings = settings or get_settings()
        for path in settings.registry_candidates():
            if not path.is_file():
                continue
            try:
                registry = cls.from_json_file(path)
            except McpSenseError as exc:
                logger.warning("Skipping registry file %s: %s", path, exc)
                continue
            logger.info("Loaded application registry from %s", path)
            return registry
        logger.info("Using built-in application profiles")
        return cls.default()

    # -- Lookup -------------------------------------------------------------

    @property
    def metadata(self) -> RegistryMetadata:
        return self._snapshot[1]

    def get_application(self, app_id: str) -> ApplicationProfile | None:
        """Return the profile with exactly this id, or None."""
        return self._snapshot[0].get(app_id)

    def get_all_applications(self) -> list[ApplicationProfile]:
        """Return every profile, sorted by id."""
        applications = self._snapshot[0]
        return [applications[key] for key in sorted(applications)]

    def get_applications_by_category(
        self, category: ApplicationCategory
    ) -> list[ApplicationProfile]:
        """Return the profiles in ``category``, sorted by id."""
        return [
            app for app in self.get_all_applications()
            if app.metadata.category == category
        ]

    def application_ids(self) -> list[str]:
        return sorted(self._snapshot[0])

    def __len__(self) -> int:
        return len(self._snapshot[0])

    def __contains__(self, app_id: object) -> bool:
        return app_id in self._snapshot[0]

    # -- Mutation -----------------------------------------------------------

    def add_application(self, profile: ApplicationProfile) -> None:
        """Add a profile, replacing any existing profile with the same id."""
        with self._lock:
            applications, metadata = self._snapshot
            updated = dict(applications)
            updated[profile.id] = profile
            self._publish(updated, metadata)

    def remove_application(self, app_id: str) -> ApplicationProfile | None:
        """Remove and return a profile. Metadata changes only if one was removed."""
        with self._lock:
            applications, metadata = self._snapshot
            if app_id not in applications:
                return None
            updated = dict(applications)
            removed = updated.pop(app_id)
            self._publish(updated, metadata)
            return removed

    def update_metadata(self) -> None:
        """Recompute the application count and refresh the timestamp."""
        with self._lock:
            applications, metadata = self._snapshot
            self._publish(applications, metadata)

    def _publish(
        self, applications: dict[str, ApplicationProfile], metadata: RegistryMetadata
    ) -> None:
        # Caller holds self._lock.
        self._snapshot = (
            applications,
            replace(metadata, application_count=len(applications), last_updated=_now()),
        )

    # -- Serialization ------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the registry data-file format, profiles sorted by id."""
        applications, metadata = self._snapshot
        return {
            "version": metadata.version,
            "last_updated": metadata.last_updated.isoformat(),
            "applications": [applications[key].to_dict() for key in sorted(applications)],
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    def write(self, path: Path) -> None:
        """Write the registry data file, creating parent directories."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.to_json() + "\n", encoding="utf-8")
