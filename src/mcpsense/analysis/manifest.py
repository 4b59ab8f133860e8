"""Manifest extractor: ``package.json`` to a candidate configuration.

The manifest is the most reliable signal available, so its result is always
the *base* of a reconciliation and README findings only fill gaps.

Command Resolution
------------------
Tried in priority order, first match wins:

1. ``bin`` (string, or an object with at least one entry)
   -> ``npx -y <name>``
2. ``main`` ending in ``.js`` / ``.mjs`` -> ``node <main>``
3. ``scripts.mcp`` -> ``npm run mcp``; else ``scripts.start`` -> ``npm start``
4. Fallback -> ``npx -y <name>``

Environment Variables
---------------------
- ``mcp.env``: each entry is either an object with ``description``,
  ``required``, ``default`` and ``example`` sub-fields, or a bare default.
- ``keywords``: any keyword whose uppercased form ends in ``_KEY`` or
  ``_TOKEN`` becomes an optional variable, unless ``mcp.env`` already
  declared it.

Manifest-derived configurations are always stdio servers.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from mcpsense.analysis.models import (
    UNKNOWN_NAME,
    DetectedConfig,
    EnvVarSpec,
    TransportType,
)
from mcpsense.exceptions import InvalidManifest

logger = logging.getLogger(__name__)

_MAIN_EXTENSIONS: tuple[str, ...] = (".js", ".mjs")
_KEYWORD_ENV_SUFFIXES: tuple[str, ...] = ("_KEY", "_TOKEN")


def _as_str(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _npx_command(package_name: str) -> tuple[str, list[str]]:
    return "npx", ["-y", package_name]


class ManifestExtractor:
    """Extracts a candidate configuration from a package manifest.

    Usage::

        extractor = ManifestExtractor()
        config = extractor.extract_text(Path("package.json").read_text())
    """

    def extract_text(self, content: str) -> DetectedConfig:
        """Parse manifest JSON text and extract a configuration.

        Args:
            content: Raw ``package.json`` text.

        Returns:
            The candidate configuration.

        Raises:
            InvalidManifest: If the text is not a JSON object.
        """
        try:
            document = json.loads(content)
        except ValueError as exc:
            raise InvalidManifest(f"manifest is not valid JSON: {exc}") from exc
        return self.extract(document)

    def extract(self, document: Any) -> DetectedConfig:
        """Extract a configuration from an already-parsed manifest.

        Args:
            document: Parsed manifest. Must be a JSON object.

        Returns:
            The candidate configuration.

        Raises:
            InvalidManifest: If the document is not a mapping.
        """
        if not isinstance(document, dict):
            raise InvalidManifest(
                f"manifest must be a JSON object, got {type(document).__name__}"
            )

        name = _as_str(document.get("name")) or UNKNOWN_NAME
        command, args = determine_command(document, name)
        return DetectedConfig(
            name=name,
            description=_as_str(document.get("description")),
            command=command,
            args=args,
            env=extract_env_vars(document),
            optional_args=[],
            transport=TransportType.STDIO,
            install_command=f"npm install {name}",
            docs_url=extract_docs_url(document),
            author=extract_author(document),
            version=_as_str(document.get("version")),
        )


def determine_command(document: dict[str, Any], package_name: str) -> tuple[str, list[str]]:
    """Resolve the command and positional args for a manifest."""
    bin_field = document.get("bin")
    if isinstance(bin_field, str) or (isinstance(bin_field, dict) and bin_field):
        return _npx_command(package_name)

    main = _as_str(document.get("main"))
    if main and main.endswith(_MAIN_EXTENSIONS):
        return "node", [main]

    scripts = document.get("scripts")
    if isinstance(scripts, dict):
        if "mcp" in scripts:
            return "npm", ["run", "mcp"]
        if "start" in scripts:
            return "npm", ["start"]

    return _npx_command(package_name)


def extract_env_vars(document: dict[str, Any]) -> dict[str, EnvVarSpec]:
    """Harvest environment variables from ``mcp.env`` and ``keywords``."""
    env_vars: dict[str, EnvVarSpec] = {}

    mcp_section = document.get("mcp")
    env_section = mcp_section.get("env") if isinstance(mcp_section, dict) else None
    if isinstance(env_section, dict):
        for key, value in env_section.items():
            if isinstance(value, dict):
                required = value.get("required")
                env_vars[key] = EnvVarSpec(
                    name=key,
                    description=_as_str(value.get("description")),
                    required=required if isinstance(required, bool) else False,
                    default=_as_str(value.get("default")),
                    example=_as_str(value.get("example")),
                )
            else:
                env_vars[key] = EnvVarSpec(name=key, default=_as_str(value))

    keywords = document.get("keywords")
    if isinstance(keywords, list):
        for keyword in keywords:
            if not isinstance(keyword, str):
                continue
            upper = keyword.upper()
            if upper.endswith(_KEYWORD_ENV_SUFFIXES) and upper not in env_vars:
                env_vars[upper] = EnvVarSpec(
                    name=upper,
                    description=f"{keyword} (detected from keywords)",
                    required=False,
                )

    return env_vars


def extract_author(document: dict[str, Any]) -> str | None:
    """Return the author as a string, from either the string or object form."""
    author = document.get("author")
    if isinstance(author, str):
        return author
    if isinstance(author, dict):
        return _as_str(author.get("name"))
    return None


def extract_docs_url(document: dict[str, Any]) -> str | None:
    """Return ``homepage``, else a cleaned-up ``repository`` URL."""
    homepage = _as_str(document.get("homepage"))
    if homepage:
        return homepage

    repository = document.get("repository")
    if isinstance(repository, str):
        return repository
    if isinstance(repository, dict):
        url = _as_str(repository.get("url"))
        if url:
            return url.removeprefix("git+").removesuffix(".git")
    return None
