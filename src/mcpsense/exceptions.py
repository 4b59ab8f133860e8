"""mcpsense exception hierarchy.

All public exceptions inherit from McpSenseError, giving callers a single
base class to catch when they want to handle any mcpsense-specific failure
without swallowing unrelated errors.
"""


class McpSenseError(Exception):
    """Base exception for all mcpsense errors."""


class SourceUnreachable(McpSenseError):
    """Raised when a network or filesystem fetch failed with no fallback left.

    Covers registry lookups that return a non-2xx status, timeouts, and
    local files that exist but cannot be read.
    """


class ManifestMissing(McpSenseError):
    """Raised when no manifest was found and no synthesized fallback applies."""


class UnsupportedSource(McpSenseError):
    """Raised for source identifiers the resolver cannot handle.

    Currently any ``http(s)://`` URL whose host is not github.com, and
    GitHub URLs without an owner/repo pair.
    """


class InvalidManifest(McpSenseError):
    """Raised when a manifest is present but not the expected structure.

    Covers malformed JSON, a top-level value that is not an object, and
    registry entries with no resolvable ``dist-tags.latest`` version.
    """


class InvalidProfileData(McpSenseError):
    """Raised when an application profile entry fails to deserialize.

    A single bad entry in an external registry file fails the whole load;
    the auto-loader then falls through to the next candidate path.
    """


class ConfigDocumentError(McpSenseError):
    """Raised when a host application config file cannot be read or parsed."""
