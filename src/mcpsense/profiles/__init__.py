"""MCP host application profiles.

Submodules
----------
- ``models``: ApplicationProfile and its tagged value types.
- ``defaults``: Compiled-in default profile table.
- ``registry``: ApplicationRegistry (load, look up, mutate, serialize).
- ``validator``: Structural validator for host config documents.
- ``documents``: Reading host config files by declared format.
"""

from mcpsense.profiles.models import (
    ApplicationCategory,
    ApplicationMetadata,
    ApplicationProfile,
    CategoryKind,
    ConfigFormat,
    ConfigStructure,
    DetectionMethod,
    DetectionStrategy,
    FormatKind,
    RegistryMetadata,
    StructureKind,
)
from mcpsense.profiles.registry import ApplicationRegistry
from mcpsense.profiles.validator import (
    ValidationResult,
    get_mcp_servers_path,
    servers_in,
    validate_config_structure,
)

__all__ = [
    "ApplicationCategory",
    "ApplicationMetadata",
    "ApplicationProfile",
    "ApplicationRegistry",
    "CategoryKind",
    "ConfigFormat",
    "ConfigStructure",
    "DetectionMethod",
    "DetectionStrategy",
    "FormatKind",
    "RegistryMetadata",
    "StructureKind",
    "ValidationResult",
    "get_mcp_servers_path",
    "servers_in",
    "validate_config_structure",
]
