"""Data models for MCP host application profiles.

An ``ApplicationProfile`` describes one MCP-enabled host application: where
its config file lives, which format the file is in, and under which key the
host expects server entries. Profiles are frozen value objects so a registry
snapshot can be shared between threads without copying.

External Encoding
-----------------
Profiles are read from and written to the registry data file as plain JSON.
Tagged variants use the external-tag convention:

- Unit variants are bare strings: ``"DirectMcpServers"``, ``"Json"``,
  ``"IDE"``, ``"BundleLookup"``.
- Payload variants are single-key objects: ``{"Custom": "name"}``,
  ``{"Other": "name"}``.

Variant names are matched case-insensitively on load. Optional metadata
fields default when missing; required fields raise ``InvalidProfileData``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any

from mcpsense.exceptions import InvalidProfileData

DEFAULT_MCP_VERSION: str = "1.0"


# ---------------------------------------------------------------------------
# Tagged-variant helpers
# ---------------------------------------------------------------------------


def _lookup_member(enum_cls: type[Enum], name: str, context: str) -> Any:
    lowered = name.strip().lower()
    for member in enum_cls:
        if member.value.lower() == lowered:
            return member
    raise InvalidProfileData(f"{context}: unknown variant {name!r}")


def _decode_variant(
    value: Any,
    enum_cls: type[Enum],
    payload_member: Enum,
    context: str,
) -> tuple[Any, str | None]:
    """Decode a bare-string or single-key-object variant.

    Returns:
        ``(member, payload)``. ``payload`` is set only for ``payload_member``.
    """
    if isinstance(value, str):
        member = _lookup_member(enum_cls, value, context)
        if member is payload_member:
            raise InvalidProfileData(f"{context}: {value!r} requires a name")
        return member, None
    if isinstance(value, dict) and len(value) == 1:
        (tag, payload), = value.items()
        member = _lookup_member(enum_cls, str(tag), context)
        if member is not payload_member:
            raise InvalidProfileData(f"{context}: {tag!r} takes no payload")
        if not isinstance(payload, str):
            raise InvalidProfileData(f"{context}: {tag!r} payload must be a string")
        return member, payload
    raise InvalidProfileData(f"{context}: expected a string or single-key object")


def _encode_variant(member: Enum, payload: str | None) -> Any:
    if payload is None:
        return member.value
    return {member.value: payload}


# ---------------------------------------------------------------------------
# ConfigStructure: where server entries live in a host config file
# ---------------------------------------------------------------------------


class StructureKind(str, Enum):
    """Kind tag of a ``ConfigStructure``."""

    DIRECT = "DirectMcpServers"
    NESTED = "NestedMcpServers"
    CUSTOM = "Custom"


@dataclass(frozen=True)
class ConfigStructure:
    """Which JSON path a host expects server entries under.

    ``DIRECT`` means a root ``mcpServers`` object, ``NESTED`` means
    ``mcp.servers``. ``CUSTOM`` carries a free-form name describing a shape
    that is recorded but not mechanically checked.
    """

    kind: StructureKind
    name: str | None = None

    @classmethod
    def direct(cls) -> ConfigStructure:
        return cls(StructureKind.DIRECT)

    @classmethod
    def nested(cls) -> ConfigStructure:
        return cls(StructureKind.NESTED)

    @classmethod
    def custom(cls, name: str) -> ConfigStructure:
        return cls(StructureKind.CUSTOM, name)

    @classmethod
    def from_data(cls, value: Any) -> ConfigStructure:
        kind, name = _decode_variant(
            value, StructureKind, StructureKind.CUSTOM, "config_structure"
        )
        return cls(kind, name)

    def to_data(self) -> Any:
        return _encode_variant(self.kind, self.name)

    def __str__(self) -> str:
        if self.kind is StructureKind.CUSTOM:
            return f"Custom({self.name})"
        return self.kind.value


# ---------------------------------------------------------------------------
# ConfigFormat
# ---------------------------------------------------------------------------


class FormatKind(str, Enum):
    """Kind tag of a ``ConfigFormat``."""

    JSON = "Json"
    YAML = "Yaml"
    TOML = "Toml"
    PLIST = "Plist"
    CUSTOM = "Custom"


@dataclass(frozen=True)
class ConfigFormat:
    """Serialization format of a host config file."""

    kind: FormatKind
    name: str | None = None

    @classmethod
    def custom(cls, name: str) -> ConfigFormat:
        return cls(FormatKind.CUSTOM, name)

    @classmethod
    def from_data(cls, value: Any) -> ConfigFormat:
        kind, name = _decode_variant(value, FormatKind, FormatKind.CUSTOM, "config_format")
        return cls(kind, name)

    def to_data(self) -> Any:
        return _encode_variant(self.kind, self.name)

    def __str__(self) -> str:
        if self.kind is FormatKind.CUSTOM:
            return f"Custom({self.name})"
        return self.kind.value


# ---------------------------------------------------------------------------
# ApplicationCategory
# ---------------------------------------------------------------------------


class CategoryKind(str, Enum):
    """Kind tag of an ``ApplicationCategory``."""

    IDE = "IDE"
    AI_ASSISTANT = "AIAssistant"
    DEVELOPER_TOOL = "DeveloperTool"
    TERMINAL = "Terminal"
    CODE_EDITOR = "CodeEditor"
    CHAT_CLIENT = "ChatClient"
    PRODUCTIVITY_TOOL = "ProductivityTool"
    OTHER = "Other"


@dataclass(frozen=True)
class ApplicationCategory:
    """Category of a host application. ``OTHER`` carries a free-form name."""

    kind: CategoryKind
    name: str | None = None

    @classmethod
    def other(cls, name: str) -> ApplicationCategory:
        return cls(CategoryKind.OTHER, name)

    @classmethod
    def from_data(cls, value: Any) -> ApplicationCategory:
        kind, name = _decode_variant(
            value, CategoryKind, CategoryKind.OTHER, "metadata.category"
        )
        return cls(kind, name)

    @classmethod
    def parse(cls, text: str) -> ApplicationCategory:
        """Parse a category name as typed on a command line.

        Unknown names become ``Other(text)``.
        """
        lowered = text.strip().lower()
        for member in CategoryKind:
            if member is not CategoryKind.OTHER and member.value.lower() == lowered:
                return cls(member)
        return cls.other(text.strip())

    def to_data(self) -> Any:
        return _encode_variant(self.kind, self.name)

    def __str__(self) -> str:
        if self.kind is CategoryKind.OTHER:
            return f"Other({self.name})"
        return self.kind.value


# ---------------------------------------------------------------------------
# Detection strategy
# ---------------------------------------------------------------------------


class DetectionMethod(str, Enum):
    """A way of detecting that a host application is installed."""

    BUNDLE_LOOKUP = "BundleLookup"
    EXECUTABLE_CHECK = "ExecutableCheck"
    CONFIG_CHECK = "ConfigCheck"
    SPOTLIGHT_SEARCH = "SpotlightSearch"


@dataclass(frozen=True)
class DetectionStrategy:
    """Which detection methods to use, and in which order.

    Attributes:
        use_bundle_lookup: Look the bundle identifier up with OS services.
        use_executable_check: Probe the executable paths.
        use_config_check: Probe the config file paths.
        use_spotlight: Allow a Spotlight (``mdfind``) search.
        priority_order: Methods in the order they should be tried.
    """

    use_bundle_lookup: bool = False
    use_executable_check: bool = False
    use_config_check: bool = False
    use_spotlight: bool = False
    priority_order: tuple[DetectionMethod, ...] = ()

    def is_enabled(self, method: DetectionMethod) -> bool:
        flags = {
            DetectionMethod.BUNDLE_LOOKUP: self.use_bundle_lookup,
            DetectionMethod.EXECUTABLE_CHECK: self.use_executable_check,
            DetectionMethod.CONFIG_CHECK: self.use_config_check,
            DetectionMethod.SPOTLIGHT_SEARCH: self.use_spotlight,
        }
        return flags[method]

    def enabled_methods(self) -> list[DetectionMethod]:
        """Return ``priority_order`` filtered to the enabled methods."""
        return [m for m in self.priority_order if self.is_enabled(m)]

    def to_dict(self) -> dict[str, Any]:
        return {
            "use_bundle_lookup": self.use_bundle_lookup,
            "use_executable_check": self.use_executable_check,
            "use_config_check": self.use_config_check,
            "use_spotlight": self.use_spotlight,
            "priority_order": [m.value for m in self.priority_order],
        }

    @classmethod
    def from_dict(cls, data: Any) -> DetectionStrategy:
        if not isinstance(data, dict):
            raise InvalidProfileData("detection_strategy: expected an object")
        order = data.get("priority_order") or []
        if not isinstance(order, list):
            raise InvalidProfileData("detection_strategy.priority_order: expected a list")
        methods = []
        for item in order:
            if not isinstance(item, str):
                raise InvalidProfileData(
                    "detection_strategy.priority_order: expected method names"
                )
            methods.append(
                _lookup_member(DetectionMethod, item, "detection_strategy.priority_order")
            )
        return cls(
            use_bundle_lookup=_bool(data, "use_bundle_lookup", "detection_strategy"),
            use_executable_check=_bool(data, "use_executable_check", "detection_strategy"),
            use_config_check=_bool(data, "use_config_check", "detection_strategy"),
            use_spotlight=_bool(data, "use_spotlight", "detection_strategy"),
            priority_order=tuple(methods),
        )


# ---------------------------------------------------------------------------
# Field readers
# ---------------------------------------------------------------------------


def _required_str(data: dict[str, Any], key: str, context: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise InvalidProfileData(f"{context}: missing or non-string field {key!r}")
    return value


def _optional_str(data: dict[str, Any], key: str, context: str) -> str | None:
    value = data.get(key)
    if value is None or isinstance(value, str):
        return value
    raise InvalidProfileData(f"{context}: field {key!r} must be a string")


def _str_tuple(data: dict[str, Any], key: str, context: str) -> tuple[str, ...]:
    value = data.get(key)
    if value is None:
        return ()
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise InvalidProfileData(f"{context}: field {key!r} must be a list of strings")
    return tuple(value)


def _bool(data: dict[str, Any], key: str, context: str) -> bool:
    value = data.get(key, False)
    if not isinstance(value, bool):
        raise InvalidProfileData(f"{context}: field {key!r} must be a boolean")
    return value


def _required(data: dict[str, Any], key: str, context: str) -> Any:
    if data.get(key) is None:
        raise InvalidProfileData(f"{context}: missing field {key!r}")
    return data[key]


# ---------------------------------------------------------------------------
# ApplicationMetadata
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ApplicationMetadata:
    """Descriptive metadata for a host application.

    Only ``developer`` and ``category`` are required in the data file.
    """

    developer: str
    category: ApplicationCategory
    version: str | None = None
    mcp_version: str = DEFAULT_MCP_VERSION
    notes: str | None = None
    requires_permissions: bool = False
    release_year: int | None = None
    official_docs_url: str | None = None
    config_docs_url: str | None = None
    support_url: str | None = None
    license: str | None = None
    platforms: tuple[str, ...] = ()
    min_version: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "developer": self.developer,
            "category": self.category.to_data(),
            "mcp_version": self.mcp_version,
            "notes": self.notes,
            "requires_permissions": self.requires_permissions,
            "release_year": self.release_year,
            "official_docs_url": self.official_docs_url,
            "config_docs_url": self.config_docs_url,
            "support_url": self.support_url,
            "license": self.license,
            "platforms": list(self.platforms),
            "min_version": self.min_version,
        }

    @classmethod
    def from_dict(cls, data: Any) -> ApplicationMetadata:
        ctx = "metadata"
        if not isinstance(data, dict):
            raise InvalidProfileData(f"{ctx}: expected an object")
        release_year = data.get("release_year")
        if release_year is not None and (
            isinstance(release_year, bool) or not isinstance(release_year, int)
        ):
            raise InvalidProfileData(f"{ctx}: field 'release_year' must be an integer")
        return cls(
            developer=_required_str(data, "developer", ctx),
            category=ApplicationCategory.from_data(_required(data, "category", ctx)),
            version=_optional_str(data, "version", ctx),
            mcp_version=_optional_str(data, "mcp_version", ctx) or DEFAULT_MCP_VERSION,
            notes=_optional_str(data, "notes", ctx),
            requires_permissions=_bool(data, "requires_permissions", ctx),
            release_year=release_year,
            official_docs_url=_optional_str(data, "official_docs_url", ctx),
            config_docs_url=_optional_str(data, "config_docs_url", ctx),
            support_url=_optional_str(data, "support_url", ctx),
            license=_optional_str(data, "license", ctx),
            platforms=_str_tuple(data, "platforms", ctx),
            min_version=_optional_str(data, "min_version", ctx),
        )


# ---------------------------------------------------------------------------
# ApplicationProfile
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ApplicationProfile:
    """A known MCP-enabled host application.

    Attributes:
        id: Unique identifier (e.g. ``"claude-desktop"``).
        name: Human-readable name.
        bundle_id: macOS bundle identifier.
        config_path: Primary config file path; ``~`` is expanded on use.
        alt_config_paths: Alternative config file paths, in lookup order.
        config_format: Format of the config file.
        config_structure: Where server entries live in the config file.
        executable_paths: Standard installation paths.
        alt_executable_paths: Alternative installation paths.
        detection_strategy: Detection preferences.
        metadata: Descriptive metadata.
    """

    id: str
    name: str
    bundle_id: str
    config_path: str
    config_format: ConfigFormat
    config_structure: ConfigStructure
    detection_strategy: DetectionStrategy
    metadata: ApplicationMetadata
    alt_config_paths: tuple[str, ...] = ()
    executable_paths: tuple[str, ...] = ()
    alt_executable_paths: tuple[str, ...] = ()

    def uses_nested_config(self) -> bool:
        """Whether server entries live under ``mcp.servers``."""
        return self.config_structure.kind is StructureKind.NESTED

    def expanded_config_paths(self) -> list[Path]:
        """Primary and alternate config paths with ``~`` expanded, in order."""
        return [Path(p).expanduser() for p in (self.config_path, *self.alt_config_paths)]

    def find_config_file(self) -> Path | None:
        """Return the first config path that exists, or None."""
        for path in self.expanded_config_paths():
            if path.exists():
                return path
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "bundle_id": self.bundle_id,
            "config_path": self.config_path,
            "alt_config_paths": list(self.alt_config_paths),
            "config_format": self.config_format.to_data(),
            "config_structure": self.config_structure.to_data(),
            "executable_paths": list(self.executable_paths),
            "alt_executable_paths": list(self.alt_executable_paths),
            "detection_strategy": self.detection_strategy.to_dict(),
            "metadata": self.metadata.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Any) -> ApplicationProfile:
        """Deserialize one profile from the external data format.

        Raises:
            InvalidProfileData: If a required field is missing or any field
                has the wrong shape.
        """
        if not isinstance(data, dict):
            raise InvalidProfileData("application entry: expected an object")
        profile_id = _required_str(data, "id", "application entry")
        ctx = f"application {profile_id!r}"
        try:
            return cls(
                id=profile_id,
                name=_required_str(data, "name", ctx),
                bundle_id=_required_str(data, "bundle_id", ctx),
                config_path=_required_str(data, "config_path", ctx),
                alt_config_paths=_str_tuple(data, "alt_config_paths", ctx),
                config_format=ConfigFormat.from_data(_required(data, "config_format", ctx)),
                config_structure=ConfigStructure.from_data(
                    _required(data, "config_structure", ctx)
                ),
                executable_paths=_str_tuple(data, "executable_paths", ctx),
                alt_executable_paths=_str_tuple(data, "alt_executable_paths", ctx),
                detection_strategy=DetectionStrategy.from_dict(
                    _required(data, "detection_strategy", ctx)
                ),
                metadata=ApplicationMetadata.from_dict(_required(data, "metadata", ctx)),
            )
        except InvalidProfileData as exc:
            if str(exc).startswith(ctx):
                raise
            raise InvalidProfileData(f"{ctx}: {exc}") from exc


# ---------------------------------------------------------------------------
# RegistryMetadata
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RegistryMetadata:
    """Bookkeeping for an ``ApplicationRegistry`` snapshot."""

    version: str
    application_count: int
    last_updated: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
