"""Read host application config files in their declared format.

JSON uses the standard library, YAML uses PyYAML's ``safe_load``, TOML uses
``tomllib`` (``tomli`` before Python 3.11), and property lists use
``plistlib``. Custom formats cannot be read generically.
"""

from __future__ import annotations

import json
import logging
import plistlib
import sys
from pathlib import Path
from typing import Any

import yaml

from mcpsense.exceptions import ConfigDocumentError
from mcpsense.profiles.models import ConfigFormat, FormatKind

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

logger = logging.getLogger(__name__)


def parse_config_document(content: bytes, fmt: ConfigFormat, origin: str = "<config>") -> Any:
    """Parse raw config bytes in ``fmt``.

    Raises:
        ConfigDocumentError: If the content does not parse, or ``fmt`` is a
            custom format.
    """
    try:
        if fmt.kind is FormatKind.JSON:
            return json.loads(content.decode("utf-8"))
        if fmt.kind is FormatKind.YAML:
            return yaml.safe_load(content.decode("utf-8"))
        if fmt.kind is FormatKind.TOML:
            return tomllib.loads(content.decode("utf-8"))
        if fmt.kind is FormatKind.PLIST:
            return plistlib.loads(content)
    except (ValueError, yaml.YAMLError, plistlib.InvalidFileException) as exc:
        raise ConfigDocumentError(f"Failed to parse {origin} as {fmt}: {exc}") from exc
    raise ConfigDocumentError(f"Cannot read {origin}: unsupported format {fmt}")


def read_config_document(path: Path, fmt: ConfigFormat) -> Any:
    """Read and parse a host config file.

    Raises:
        ConfigDocumentError: If the file cannot be read or parsed.
    """
    try:
        content = path.read_bytes()
    except OSError as exc:
        raise ConfigDocumentError(f"Cannot read {path}: {exc}") from exc
    logger.debug("Parsing %s as %s", path, fmt)
    return parse_config_document(content, fmt, origin=str(path))
