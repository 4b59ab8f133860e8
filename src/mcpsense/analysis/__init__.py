"""Configuration inference for MCP server packages.

Given a package name, local path, or GitHub URL, the ``ServerAnalyzer``
resolves the source to raw documents, extracts candidate configurations
from the manifest and the README, reconciles them, and scores the result.

Submodules
----------
- ``models``: Data types (DetectedConfig, EnvVarSpec, ArgSpec, AnalysisResult).
- ``manifest``: package.json extractor.
- ``readme``: README extractor; ``readme_patterns`` holds its regexes.
- ``structure``: Server-entry transport detection and shape checks.
- ``reconcile``: Merge rule and confidence score.
- ``resolver``: Source classification and fetching.
- ``analyzer``: The ServerAnalyzer pipeline.

Public names are re-exported here::

    from mcpsense.analysis import ServerAnalyzer, AnalysisResult
"""

from mcpsense.analysis.analyzer import ServerAnalyzer
from mcpsense.analysis.manifest import ManifestExtractor
from mcpsense.analysis.models import (
    AnalysisResult,
    ArgSpec,
    DetectedConfig,
    EnvVarSpec,
    SourceKind,
    TransportType,
)
from mcpsense.analysis.readme import ReadmeExtractor
from mcpsense.analysis.reconcile import calculate_confidence, merge_configs
from mcpsense.analysis.resolver import ResolvedSource, SourceResolver, classify_source

__all__ = [
    "AnalysisResult",
    "ArgSpec",
    "DetectedConfig",
    "EnvVarSpec",
    "ManifestExtractor",
    "ReadmeExtractor",
    "ResolvedSource",
    "ServerAnalyzer",
    "SourceKind",
    "SourceResolver",
    "TransportType",
    "calculate_confidence",
    "classify_source",
    "merge_configs",
]
