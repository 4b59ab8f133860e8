"""Data models for configuration inference.

These are the value types produced by the extractors, merged by the
reconciler, and returned to callers. They are intentionally decoupled from
the extraction logic so that CLI formatters and callers can import them
without pulling in the regex catalogs or HTTP helpers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

UNKNOWN_NAME: str = "unknown"


# ---------------------------------------------------------------------------
# TransportType: how a resolved server talks to its host
# ---------------------------------------------------------------------------


class TransportType(str, Enum):
    """Transport mechanism of an MCP server. Defaults to STDIO."""

    STDIO = "stdio"
    SSE = "sse"
    HTTP = "http"

    @classmethod
    def parse(cls, value: Any) -> TransportType:
        """Map a loose string to a transport type, falling back to STDIO."""
        if isinstance(value, str):
            lowered = value.strip().lower()
            for member in cls:
                if member.value == lowered:
                    return member
        return cls.STDIO


# ---------------------------------------------------------------------------
# Source kind
# ---------------------------------------------------------------------------


class SourceKind(str, Enum):
    """Classification of a source identifier."""

    NPM = "npm"
    LOCAL = "local"
    URL = "url"


# ---------------------------------------------------------------------------
# EnvVarSpec / ArgSpec
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class EnvVarSpec:
    """An environment variable the server expects.

    Attributes:
        name: Canonical variable name, uppercase by convention.
        description: Free-text explanation, if one was found.
        required: Whether the server needs the variable to start.
        default: Default value declared by the package.
        example: Example value seen in documentation.
    """

    name: str
    description: str | None = None
    required: bool = False
    default: str | None = None
    example: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "required": self.required,
            "default": self.default,
            "example": self.example,
        }


@dataclass(frozen=True)
class ArgSpec:
    """An optional command-line argument the server accepts."""

    name: str
    description: str | None = None
    default: str | None = None
    example: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "default": self.default,
            "example": self.example,
        }


# ---------------------------------------------------------------------------
# DetectedConfig: one candidate configuration
# ---------------------------------------------------------------------------


@dataclass
class DetectedConfig:
    """A (possibly partial) runnable configuration for one server.

    Every extractor produces one of these; the reconciler merges a base
    candidate with overlays into the final configuration.

    Attributes:
        name: Server name. ``"unknown"`` when no signal was found.
        description: Short human-readable summary.
        command: Executable to invoke (``npx``, ``node``, ``npm``, ...).
        args: Positional arguments, in order.
        env: Environment variables keyed by name.
        optional_args: Optional arguments, in discovery order.
        transport: Transport type, STDIO unless a signal says otherwise.
        install_command: Shell command that installs the package.
        docs_url: Documentation or repository URL.
        author: Author or publisher name.
        version: Package version.
    """

    name: str = UNKNOWN_NAME
    description: str | None = None
    command: str = ""
    args: list[str] = field(default_factory=list)
    env: dict[str, EnvVarSpec] = field(default_factory=dict)
    optional_args: list[ArgSpec] = field(default_factory=list)
    transport: TransportType = TransportType.STDIO
    install_command: str | None = None
    docs_url: str | None = None
    author: str | None = None
    version: str | None = None

    @property
    def required_env(self) -> list[str]:
        """Names of required environment variables, sorted."""
        return sorted(name for name, spec in self.env.items() if spec.required)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        return {
            "name": self.name,
            "description": self.description,
            "command": self.command,
            "args": list(self.args),
            "env": {name: spec.to_dict() for name, spec in sorted(self.env.items())},
            "optional_args": [arg.to_dict() for arg in self.optional_args],
            "transport": self.transport.value,
            "install_command": self.install_command,
            "docs_url": self.docs_url,
            "author": self.author,
            "version": self.version,
        }

    def to_server_entry(self) -> dict[str, Any]:
        """Render the entry a host application stores under its servers key.

        Environment values come from the declared default, then the example,
        then an empty placeholder the user is expected to fill in.
        """
        entry: dict[str, Any] = {"command": self.command, "args": list(self.args)}
        if self.env:
            entry["env"] = {
                name: spec.default or spec.example or ""
                for name, spec in sorted(self.env.items())
            }
        if self.transport is not TransportType.STDIO:
            entry["type"] = self.transport.value
        return entry


# ---------------------------------------------------------------------------
# AnalysisResult: terminal artifact of one inference run
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AnalysisResult:
    """The outcome of analyzing one source.

    Attributes:
        config: The reconciled configuration.
        confidence: Heuristic trust estimate in [0.0, 1.0].
        messages: Ordered progress and diagnostic messages.
        success: False when the run failed; ``config`` is then a placeholder.
    """

    config: DetectedConfig
    confidence: float
    messages: tuple[str, ...] = ()
    success: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "config": self.config.to_dict(),
            "confidence": self.confidence,
            "messages": list(self.messages),
            "success": self.success,
        }
