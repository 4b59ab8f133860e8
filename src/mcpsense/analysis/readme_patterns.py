"""Compiled regex catalogs and constants for README extraction.

The catalogs are kept apart from the extractor so they can be tested
independently and tuned without touching the extraction passes.
"""

from __future__ import annotations

import re

# ---------------------------------------------------------------------------
# Section detection
# ---------------------------------------------------------------------------

# Heading substrings (lowercase) that mark the configuration section.
CONFIG_SECTION_NAMES: tuple[str, ...] = (
    "environment variables",
    "environment",
    "configuration",
    "setup",
)

# Lines starting with these are badges or images, never description text.
BADGE_PREFIXES: tuple[str, ...] = ("[![", "![")

DESCRIPTION_MAX_CHARS: int = 200


# ---------------------------------------------------------------------------
# Environment variable patterns
# ---------------------------------------------------------------------------

# ``- `API_KEY`: description`` / ``* API_KEY - description``
ENV_LIST_ITEM = re.compile(
    r"^[-*][ \t]*`?([A-Z][A-Z0-9_]+)`?[ \t]*[:–-][ \t]*(.*)$",
    re.MULTILINE,
)

# ``export API_KEY=value`` / ``API_KEY="value"``
ENV_ASSIGNMENT = re.compile(
    r"^(?:export[ \t]+)?([A-Z][A-Z0-9_]+)=(.*)$",
    re.MULTILINE,
)

# ``$API_KEY`` / ``${API_KEY}``
ENV_REFERENCE = re.compile(r"\$\{?([A-Z][A-Z0-9_]+)\}?")

# Shell variables that are never server configuration.
IGNORED_ENV_REFERENCES: frozenset[str] = frozenset({"PATH", "HOME"})

REFERENCE_DESCRIPTION: str = "Required environment variable (detected from README)"


# ---------------------------------------------------------------------------
# Command patterns
# ---------------------------------------------------------------------------

# Opening/closing code fence; group 1 is the info-string language tag.
CODE_FENCE = re.compile(r"^[ \t]*```[ \t]*([\w+-]*)")

# Fence tags whose contents are treated as shell.
SHELL_FENCE_TAGS: frozenset[str] = frozenset({"", "bash", "sh", "shell"})

# First tokens that identify a server launch command.
LAUNCH_COMMANDS: frozenset[str] = frozenset({"npx", "node", "npm", "python", "python3"})

# Tokens that mark a line as an installation step rather than a launch.
INSTALL_TOKENS: frozenset[str] = frozenset({"install", "i"})

# ``npm install <pkg>`` / ``npm i -g <pkg>``; flags before the package skipped.
NPM_INSTALL = re.compile(r"npm\s+(?:i|install)\s+(?:-{1,2}[\w-]+\s+)*([^\s-]\S*)")
