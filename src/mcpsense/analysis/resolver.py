"""Source resolver: turn a source identifier into raw documents.

Three kinds of source are supported:

- **npm package** (``foo``, ``@scope/foo``): one ``GET`` of the registry
  entry at ``https://registry.npmjs.org/<name>``. The manifest is
  ``versions[dist-tags.latest]``; the README is the entry's ``readme`` field.
- **local path**: ``<path>/package.json`` plus the first of ``README.md``,
  ``README.txt``, ``README`` found directly under the path.
- **GitHub URL**: raw files from ``raw.githubusercontent.com`` on branch
  ``main``, then ``master``.

Fallback chains are ordered lists of candidates evaluated lazily; each step
yields a ``FetchOutcome`` and the chain stops at the first ok one. Only when
every candidate is exhausted, and no synthesized default applies, does the
resolver raise.

Usage::

    resolved = await SourceResolver().resolve("@modelcontextprotocol/server-github")
    resolved.manifest, resolved.readme
"""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
from urllib.parse import quote, urlparse

from mcpsense.analysis.models import (
    UNKNOWN_NAME,
    DetectedConfig,
    SourceKind,
    TransportType,
)
from mcpsense.exceptions import (
    InvalidManifest,
    ManifestMissing,
    SourceUnreachable,
    UnsupportedSource,
)
from mcpsense.http_client import FetchOutcome, FetchStatus, fetch_json, fetch_text

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

NPM_PACKAGE_URL: str = "https://registry.npmjs.org/{package}"
GITHUB_RAW_URL: str = "https://raw.githubusercontent.com/{owner}/{repo}/{branch}/{file}"

GITHUB_HOSTS: frozenset[str] = frozenset({"github.com", "www.github.com"})
GITHUB_BRANCHES: tuple[str, ...] = ("main", "master")
GITHUB_README_NAMES: tuple[str, ...] = ("README.md", "README.MD", "readme.md")

MANIFEST_FILENAME: str = "package.json"
LOCAL_README_NAMES: tuple[str, ...] = ("README.md", "README.txt", "README")


# ---------------------------------------------------------------------------
# Result type
# ---------------------------------------------------------------------------


@dataclass
class ResolvedSource:
    """Raw documents gathered for one source.

    Exactly one of ``manifest`` and ``fallback`` is set: either a manifest
    document was found, or a synthesized default configuration stands in
    for it.

    Attributes:
        kind: How the identifier was classified.
        identifier: The original source identifier.
        manifest: Parsed manifest document, if one was found.
        manifest_origin: Where the manifest came from (for messages).
        fallback: Synthesized configuration used when no manifest exists.
        readme: README text, if one was found.
        readme_origin: Where the README came from (for messages).
        messages: Progress messages recorded while resolving.
    """

    kind: SourceKind
    identifier: str
    manifest: dict[str, Any] | None = None
    manifest_origin: str = ""
    fallback: DetectedConfig | None = None
    readme: str | None = None
    readme_origin: str = ""
    messages: list[str] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def classify_source(identifier: str) -> SourceKind:
    """Classify a source identifier.

    ``http(s)://`` URLs are URL sources and scoped names (``@scope/pkg``)
    are npm packages. An identifier naming an existing path is local. Any
    other identifier containing ``/``, and every bare name, is an npm
    package.

    Raises:
        UnsupportedSource: If the identifier is blank.
    """
    if not identifier.strip():
        raise UnsupportedSource("Source identifier is empty")
    if identifier.startswith(("http://", "https://")):
        return SourceKind.URL
    if identifier.startswith("@"):
        return SourceKind.NPM
    if Path(identifier).expanduser().exists():
        return SourceKind.LOCAL
    return SourceKind.NPM


def parse_github_url(url: str) -> tuple[str, str]:
    """Return ``(owner, repo)`` from the last two path segments of a URL.

    Raises:
        UnsupportedSource: If the host is not GitHub or the path is too short.
    """
    parsed = urlparse(url)
    host = (parsed.hostname or "").lower()
    if host not in GITHUB_HOSTS:
        raise UnsupportedSource(
            f"URL analysis not implemented for non-GitHub host: {host or url}"
        )
    segments = [s for s in parsed.path.split("/") if s]
    if len(segments) < 2:
        raise UnsupportedSource(f"Invalid GitHub URL format: {url}")
    owner, repo = segments[-2], segments[-1].removesuffix(".git")
    return owner, repo


def _load_manifest(content: str, origin: str) -> dict[str, Any]:
    try:
        document = json.loads(content)
    except ValueError as exc:
        raise InvalidManifest(f"{origin} is not valid JSON: {exc}") from exc
    if not isinstance(document, dict):
        raise InvalidManifest(f"{origin} is not a JSON object")
    return document


async def _read_file(path: Path) -> FetchOutcome:
    """Read a local file on a worker thread."""
    if not path.is_file():
        return FetchOutcome.missing(f"{path} not found", source=str(path))
    try:
        content = await asyncio.to_thread(path.read_text, encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Failed to read %s: %s", path, exc)
        return FetchOutcome.failed(f"failed to read {path}: {exc}", source=str(path))
    return FetchOutcome.ok(content, source=str(path))


# ---------------------------------------------------------------------------
# Resolver
# ---------------------------------------------------------------------------


class SourceResolver:
    """Fetches the manifest and README for a source identifier.

    Holds no per-run state, so one instance can serve concurrent runs.
    """

    async def resolve(self, identifier: str) -> ResolvedSource:
        """Classify ``identifier`` and gather its documents.

        Raises:
            UnsupportedSource: For non-GitHub URLs.
            SourceUnreachable: When a required fetch failed.
            ManifestMissing: When an npm package does not exist.
            InvalidManifest: When a manifest is present but malformed.
        """
        kind = classify_source(identifier)
        logger.debug("Classified %r as %s source", identifier, kind.value)
        if kind is SourceKind.URL:
            return await self.resolve_url(identifier)
        if kind is SourceKind.LOCAL:
            return await self.resolve_local(identifier)
        return await self.resolve_npm(identifier)

    # -- npm ----------------------------------------------------------------

    async def resolve_npm(self, package: str) -> ResolvedSource:
        """Resolve an npm package through the public registry."""
        resolved = ResolvedSource(kind=SourceKind.NPM, identifier=package)
        resolved.messages.append(f"Fetching npm package info for: {package}")

        url = NPM_PACKAGE_URL.format(package=quote(package, safe="@"))
        outcome, entry = await fetch_json(url)
        if outcome.status is FetchStatus.MISSING:
            raise ManifestMissing(f"npm package not found: {package}")
        if not outcome.is_ok:
            raise SourceUnreachable(f"Failed to fetch package from npm: {outcome.error}")
        if not isinstance(entry, dict):
            raise InvalidManifest(f"npm registry entry for {package} is not a JSON object")

        dist_tags = entry.get("dist-tags")
        latest = dist_tags.get("latest") if isinstance(dist_tags, dict) else None
        if not isinstance(latest, str):
            raise InvalidManifest(f"No latest version found for {package}")
        versions = entry.get("versions")
        manifest = versions.get(latest) if isinstance(versions, dict) else None
        if not isinstance(manifest, dict):
            raise InvalidManifest(f"Version {latest} not found for {package}")

        resolved.manifest = manifest
        resolved.manifest_origin = f"npm registry ({package}@{latest})"

        readme = entry.get("readme")
        if isinstance(readme, str) and readme.strip():
            resolved.readme = readme
            resolved.readme_origin = "README from npm registry"
        else:
            resolved.messages.append("No README found in npm package")
        return resolved

    # -- local path ---------------------------------------------------------

    async def resolve_local(self, path_str: str) -> ResolvedSource:
        """Resolve a local package directory."""
        path = Path(path_str).expanduser()
        resolved = ResolvedSource(kind=SourceKind.LOCAL, identifier=path_str)
        resolved.messages.append(f"Analyzing local path: {path_str}")

        outcome = await _read_file(path / MANIFEST_FILENAME)
        if outcome.is_ok:
            resolved.manifest = _load_manifest(outcome.content, str(path / MANIFEST_FILENAME))
            resolved.manifest_origin = f"local {MANIFEST_FILENAME}"
        elif outcome.status is FetchStatus.FAILED:
            raise SourceUnreachable(outcome.error)
        else:
            name = path.name or path.resolve().name or UNKNOWN_NAME
            resolved.messages.append(f"No {MANIFEST_FILENAME} found; assuming node entry point")
            resolved.fallback = DetectedConfig(
                name=name,
                command="node",
                args=["index.js"],
                transport=TransportType.STDIO,
            )

        for readme_name in LOCAL_README_NAMES:
            readme_path = path / readme_name
            if not readme_path.is_file():
                continue
            readme_outcome = await _read_file(readme_path)
            if readme_outcome.is_ok:
                resolved.readme = readme_outcome.content
                resolved.readme_origin = readme_name
            else:
                resolved.messages.append(f"Could not read {readme_name}: {readme_outcome.error}")
            break
        return resolved

    # -- URL ----------------------------------------------------------------

    async def resolve_url(self, url: str) -> ResolvedSource:
        """Resolve a repository URL. Only GitHub is supported."""
        owner, repo = parse_github_url(url)
        resolved = ResolvedSource(kind=SourceKind.URL, identifier=url)
        resolved.messages.append(f"Fetching from GitHub: {owner}/{repo}")

        for branch in GITHUB_BRANCHES:
            raw_url = GITHUB_RAW_URL.format(
                owner=owner, repo=repo, branch=branch, file=MANIFEST_FILENAME
            )
            outcome = await fetch_text(raw_url)
            if outcome.is_ok:
                resolved.manifest = _load_manifest(outcome.content, raw_url)
                resolved.manifest_origin = f"{MANIFEST_FILENAME} on {branch} branch"
                break
            logger.debug("No manifest on %s: %s", branch, outcome.error)
        else:
            spec = f"github:{owner}/{repo}"
            resolved.messages.append(
                f"No {MANIFEST_FILENAME} on {', '.join(GITHUB_BRANCHES)}; using {spec}"
            )
            resolved.fallback = DetectedConfig(
                name=repo,
                command="npx",
                args=["-y", spec],
                transport=TransportType.STDIO,
                install_command=f"npm install {spec}",
                docs_url=url,
                author=owner,
            )

        resolved.readme, resolved.readme_origin = await self._fetch_github_readme(owner, repo)
        return resolved

    async def _fetch_github_readme(self, owner: str, repo: str) -> tuple[str | None, str]:
        for branch in GITHUB_BRANCHES:
            for readme_name in GITHUB_README_NAMES:
                raw_url = GITHUB_RAW_URL.format(
                    owner=owner, repo=repo, branch=branch, file=readme_name
                )
                outcome = await fetch_text(raw_url)
                if outcome.is_ok:
                    return outcome.content, f"README from {branch} branch"
        logger.debug("No README found for %s/%s", owner, repo)
        return None, ""
