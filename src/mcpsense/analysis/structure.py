"""Structure detector for individual MCP server entries.

Works on one server entry as it appears in a host config file (the value
under ``mcpServers.<name>`` or ``mcp.servers.<name>``), or on server
metadata documents that advertise capabilities.
"""

from __future__ import annotations

from typing import Any

from mcpsense.analysis.models import TransportType

_CAPABILITY_KEYS: tuple[str, ...] = ("tools", "prompts", "resources")


def detect_transport(entry: dict[str, Any]) -> TransportType:
    """Classify the transport of a server entry.

    An explicit ``type`` wins. Otherwise the presence of ``stdio``, then
    ``sse``/``url``, then ``http``/``port`` decides. Defaults to stdio.
    """
    explicit = entry.get("type")
    if isinstance(explicit, str):
        return TransportType.parse(explicit)
    if "stdio" in entry:
        return TransportType.STDIO
    if "sse" in entry or "url" in entry:
        return TransportType.SSE
    if "http" in entry or "port" in entry:
        return TransportType.HTTP
    return TransportType.STDIO


def validate_server_entry(entry: Any) -> bool:
    """Check the shape invariants of a server entry.

    The entry needs a ``command`` or a ``url``. With a command, ``args``
    must be a list when present. ``env`` must be an object when present.
    """
    if not isinstance(entry, dict):
        return False
    if "command" not in entry and "url" not in entry:
        return False
    if "command" in entry and "args" in entry and not isinstance(entry["args"], list):
        return False
    if "env" in entry and not isinstance(entry["env"], dict):
        return False
    return True


def extract_capabilities(metadata: dict[str, Any]) -> list[str]:
    """Collect declared and implied capabilities from server metadata."""
    capabilities: list[str] = []
    declared = metadata.get("capabilities")
    if isinstance(declared, list):
        capabilities.extend(c for c in declared if isinstance(c, str))
    capabilities.extend(key for key in _CAPABILITY_KEYS if key in metadata)
    return capabilities
