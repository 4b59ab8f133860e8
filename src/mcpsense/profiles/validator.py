"""Structural validator for host application config documents.

Checks that a parsed config document puts its server entries where the
application's profile says it should:

- ``DirectMcpServers``: a root ``mcpServers`` key.
- ``NestedMcpServers``: an ``mcp.servers`` key.
- ``Custom(name)``: recorded only; always accepted.

A document with neither key is an empty configuration, not a mismatch. So is
a document that is not an object at all (an empty YAML file loads as None).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from mcpsense.profiles.models import ApplicationProfile, StructureKind

logger = logging.getLogger(__name__)

DIRECT_SERVERS_PATH: tuple[str, ...] = ("mcpServers",)
NESTED_SERVERS_PATH: tuple[str, ...] = ("mcp", "servers")


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of ``validate_config_structure``. Truthy when valid."""

    valid: bool
    reason: str | None = None

    def __bool__(self) -> bool:
        return self.valid


def get_mcp_servers_path(profile: ApplicationProfile) -> list[str]:
    """Return the key path under which the profile's server entries live.

    Custom structures default to the direct form.
    """
    if profile.config_structure.kind is StructureKind.NESTED:
        return list(NESTED_SERVERS_PATH)
    return list(DIRECT_SERVERS_PATH)


def _has_direct(document: dict[str, Any]) -> bool:
    return "mcpServers" in document


def _has_nested(document: dict[str, Any]) -> bool:
    mcp = document.get("mcp")
    return isinstance(mcp, dict) and "servers" in mcp


def validate_config_structure(
    profile: ApplicationProfile, document: Any
) -> ValidationResult:
    """Check a config document against the profile's declared structure.

    Args:
        profile: The host application profile.
        document: The parsed config file (top-level object).

    Returns:
        A valid result, or an invalid one whose ``reason`` names the
        mismatch.
    """
    structure = profile.config_structure
    if structure.kind is StructureKind.CUSTOM:
        logger.debug("Application '%s' uses custom structure: %s", profile.name, structure.name)
        return ValidationResult(True)

    if not isinstance(document, dict):
        logger.debug(
            "Config for %s is not an object; treating it as empty", profile.name
        )
        return ValidationResult(True)

    has_direct = _has_direct(document)
    has_nested = _has_nested(document)

    if structure.kind is StructureKind.DIRECT and has_nested and not has_direct:
        return ValidationResult(
            False,
            f"Application '{profile.name}' is configured as DirectMcpServers "
            "but config uses nested mcp.servers structure",
        )
    if structure.kind is StructureKind.NESTED and has_direct and not has_nested:
        return ValidationResult(
            False,
            f"Application '{profile.name}' is configured as NestedMcpServers "
            "but config uses direct mcpServers structure",
        )
    if not has_direct and not has_nested:
        logger.debug("No MCP servers configuration found in %s config", profile.name)
    return ValidationResult(True)


def servers_in(document: Any, profile: ApplicationProfile) -> dict[str, Any]:
    """Return the server map at the profile's servers path, or ``{}``."""
    node: Any = document
    for key in get_mcp_servers_path(profile):
        if not isinstance(node, dict):
            return {}
        node = node.get(key)
    return node if isinstance(node, dict) else {}
