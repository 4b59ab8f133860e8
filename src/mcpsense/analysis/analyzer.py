"""Server analyzer: the end-to-end inference pipeline.

``analyze(source)`` runs one inference:

1. Resolve the source into a manifest (or synthesized default) and an
   optional README.
2. Extract a base candidate from the manifest.
3. Extract an overlay candidate from the README, if any.
4. Merge (base wins) and score.

Expected failures never escape ``analyze``: they come back as an
``AnalysisResult`` with ``success=False`` and the messages explaining what
was tried. Runs share no mutable state and may execute concurrently.
"""

from __future__ import annotations

import logging

from mcpsense.analysis.manifest import ManifestExtractor
from mcpsense.analysis.models import AnalysisResult, DetectedConfig
from mcpsense.analysis.readme import ReadmeExtractor
from mcpsense.analysis.reconcile import calculate_confidence, merge_configs
from mcpsense.analysis.resolver import ResolvedSource, SourceResolver
from mcpsense.exceptions import ManifestMissing, McpSenseError

logger = logging.getLogger(__name__)


class ServerAnalyzer:
    """Infers a runnable configuration for an MCP server package.

    Usage::

        analyzer = ServerAnalyzer()
        result = await analyzer.analyze("@modelcontextprotocol/server-github")
        if result.success:
            print(result.config.command, result.config.args)
    """

    def __init__(
        self,
        resolver: SourceResolver | None = None,
        manifest_extractor: ManifestExtractor | None = None,
        readme_extractor: ReadmeExtractor | None = None,
    ) -> None:
        self.resolver = resolver or SourceResolver()
        self.manifest_extractor = manifest_extractor or ManifestExtractor()
        self.readme_extractor = readme_extractor or ReadmeExtractor()

    async def analyze(self, source: str) -> AnalysisResult:
        """Analyze a package name, local path, or repository URL.

        Args:
            source: The source identifier.

        Returns:
            The analysis result. ``success`` is False if the source could
            not be resolved or its manifest was malformed.
        """
        messages: list[str] = [f"Analyzing package: {source}"]
        try:
            resolved = await self.resolver.resolve(source)
            messages.extend(resolved.messages)
            config = self._reconcile(resolved, messages)
        except McpSenseError as exc:
            logger.warning("Analysis of %s failed: %s", source, exc)
            messages.append(f"Error: {exc}")
            return AnalysisResult(
                config=DetectedConfig(),
                confidence=0.0,
                messages=tuple(messages),
                success=False,
            )
        return self._finish(config, messages)

    def analyze_raw(
        self,
        manifest_text: str | None = None,
        readme_text: str | None = None,
    ) -> AnalysisResult:
        """Run extraction and reconciliation on documents already in hand.

        Raises:
            InvalidManifest: If ``manifest_text`` is not a JSON object.
        """
        messages: list[str] = []
        if manifest_text is None:
            if readme_text is None:
                raise ManifestMissing("neither a manifest nor a README was given")
            config = self.readme_extractor.extract(readme_text)
            messages.append("Parsed README (no manifest given)")
            return self._finish(config, messages)

        config = self.manifest_extractor.extract_text(manifest_text)
        messages.append("Parsed package.json successfully")
        if readme_text is not None:
            config = self._merge_readme(config, readme_text, "README", messages)
        return self._finish(config, messages)

    def _reconcile(self, resolved: ResolvedSource, messages: list[str]) -> DetectedConfig:
        if resolved.manifest is not None:
            config = self.manifest_extractor.extract(resolved.manifest)
            messages.append(f"Parsed package.json from {resolved.manifest_origin}")
        elif resolved.fallback is not None:
            config = resolved.fallback
        else:
            raise ManifestMissing(f"no manifest or default for {resolved.identifier}")

        if resolved.readme is not None:
            config = self._merge_readme(config, resolved.readme, resolved.readme_origin, messages)
        return config

    def _merge_readme(
        self,
        base: DetectedConfig,
        readme: str,
        origin: str,
        messages: list[str],
    ) -> DetectedConfig:
        try:
            overlay = self.readme_extractor.extract(readme)
        except Exception:
            logger.warning("Failed to parse %s", origin, exc_info=True)
            messages.append(f"Skipped {origin}: could not be parsed")
            return base
        messages.append(f"Parsed {origin} for additional configuration")
        return merge_configs(base, overlay)

    @staticmethod
    def _finish(config: DetectedConfig, messages: list[str]) -> AnalysisResult:
        confidence = calculate_confidence(config, messages)
        return AnalysisResult(
            config=config,
            confidence=confidence,
            messages=tuple(messages),
            success=bool(config.command),
        )
