"""Free-text extractor: README to a candidate configuration.

READMEs are loosely structured, so each signal is pulled out by an
independent strategy and the results are layered. A README candidate is
only ever an *overlay*: the reconciler lets it fill gaps in the manifest
result but never override it.

Environment Variable Passes
---------------------------
1. **Section** -- the first heading mentioning "environment variables",
   "environment", "configuration" or "setup"; its body is parsed as a
   markdown table and as a bulleted list.
2. **Assignment** -- ``export NAME=value`` / ``NAME=value`` lines. The value
   becomes the example.
3. **Reference** -- ``$NAME`` / ``${NAME}`` anywhere in the text, recorded
   as required.

A later pass never overwrites a key found by an earlier one.

Example::

    config = ReadmeExtractor().extract(readme_text)
    config.env["API_KEY"].required
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from mcpsense.analysis.models import DetectedConfig, EnvVarSpec, TransportType
from mcpsense.analysis.readme_patterns import (
    BADGE_PREFIXES,
    CODE_FENCE,
    CONFIG_SECTION_NAMES,
    DESCRIPTION_MAX_CHARS,
    ENV_ASSIGNMENT,
    ENV_LIST_ITEM,
    ENV_REFERENCE,
    IGNORED_ENV_REFERENCES,
    INSTALL_TOKENS,
    LAUNCH_COMMANDS,
    NPM_INSTALL,
    REFERENCE_DESCRIPTION,
    SHELL_FENCE_TAGS,
)

logger = logging.getLogger(__name__)


class ReadmeExtractor:
    """Extracts a candidate configuration from README text."""

    def extract(self, content: str) -> DetectedConfig:
        """Parse README content for configuration signals.

        Args:
            content: Raw README text (markdown or plain text).

        Returns:
            A candidate configuration. ``command`` is ``npx`` with no args
            unless a launch command was found in a shell code block.
        """
        config = DetectedConfig(command="npx", transport=TransportType.STDIO)
        config.description = extract_description(content)
        config.env = extract_env_vars(content)

        example = extract_command_example(content)
        if example is not None:
            config.command, config.args = example

        config.install_command = extract_install_command(content)
        logger.debug(
            "README yielded %d env vars, command=%s", len(config.env), config.command
        )
        return config


# ---------------------------------------------------------------------------
# Description
# ---------------------------------------------------------------------------


def extract_description(content: str) -> str | None:
    """Return the first text paragraph after the first heading."""
    found_title = False
    parts: list[str] = []
    length = 0

    for line in content.splitlines():
        trimmed = line.strip()
        if not trimmed:
            if found_title and parts:
                break
            continue
        if trimmed.startswith("#"):
            found_title = True
            continue
        if trimmed.startswith(BADGE_PREFIXES):
            continue
        if found_title:
            parts.append(trimmed)
            length += len(trimmed) + (1 if len(parts) > 1 else 0)
            if length > DESCRIPTION_MAX_CHARS:
                break

    return " ".join(parts) if parts else None


# ---------------------------------------------------------------------------
# Environment variables
# ---------------------------------------------------------------------------


def extract_env_vars(content: str) -> dict[str, EnvVarSpec]:
    """Run the three environment-variable passes in order."""
    env_vars: dict[str, EnvVarSpec] = {}

    section = extract_section(content, CONFIG_SECTION_NAMES)
    if section is not None:
        env_vars.update(parse_env_section(section))

    for match in ENV_ASSIGNMENT.finditer(content):
        name = match.group(1)
        value = match.group(2).strip().strip("\"'")
        env_vars.setdefault(name, EnvVarSpec(name=name, example=value))

    for match in ENV_REFERENCE.finditer(content):
        name = match.group(1)
        if name in IGNORED_ENV_REFERENCES:
            continue
        env_vars.setdefault(
            name,
            EnvVarSpec(name=name, description=REFERENCE_DESCRIPTION, required=True),
        )

    return env_vars


def _heading(line: str) -> tuple[int, str] | None:
    trimmed = line.strip()
    if not trimmed.startswith("#"):
        return None
    level = len(trimmed) - len(trimmed.lstrip("#"))
    return level, trimmed.lstrip("#").strip().lower()


def extract_section(content: str, section_names: tuple[str, ...]) -> str | None:
    """Return the body of the first heading whose text mentions a section name.

    The body runs until the next heading of the same or a shallower level.
    Deeper headings are part of the body.
    """
    section_level: int | None = None
    lines: list[str] = []

    for line in content.splitlines():
        heading = _heading(line)
        if section_level is None:
            if heading is not None and any(name in heading[1] for name in section_names):
                section_level = heading[0]
            continue
        if heading is not None and heading[0] <= section_level:
            break
        lines.append(line)

    if not lines:
        return None
    return "\n".join(lines) + "\n"


def parse_env_section(section: str) -> dict[str, EnvVarSpec]:
    """Parse a configuration section as a table and as a bulleted list."""
    env_vars: dict[str, EnvVarSpec] = {}
    if "|" in section:
        env_vars.update(parse_table(section))
    env_vars.update(parse_list(section))
    return env_vars


def _cell_default(cells: list[str]) -> str | None:
    for cell in cells:
        if "default" in cell.lower():
            _, sep, remainder = cell.partition(":")
            return remainder.strip() if sep else None
    return None


def parse_table(section: str) -> dict[str, EnvVarSpec]:
    """Parse a markdown table of variables (name in the first column)."""
    env_vars: dict[str, EnvVarSpec] = {}
    lines = section.splitlines()

    header_idx = next(
        (
            i for i, line in enumerate(lines)
            if "|" in line and ("name" in line.lower() or "variable" in line.lower())
        ),
        None,
    )
    if header_idx is None:
        return env_vars

    # header_idx + 1 is the |---|---| separator row.
    for line in lines[header_idx + 2:]:
        if "|" not in line:
            break
        cells = [cell.strip() for cell in line.split("|")]
        if len(cells) < 2:
            continue
        name = cells[1].strip("`")
        if not name or not name[0].isupper():
            continue
        description = cells[2] if len(cells) > 2 and cells[2] else None
        required = any(
            "required" in cell.lower() or "yes" in cell.lower() for cell in cells
        )
        env_vars[name] = EnvVarSpec(
            name=name,
            description=description,
            required=required,
            default=_cell_default(cells),
        )
    return env_vars


def parse_list(section: str) -> dict[str, EnvVarSpec]:
    """Parse ``- `NAME`: description`` style bullet items."""
    env_vars: dict[str, EnvVarSpec] = {}
    for match in ENV_LIST_ITEM.finditer(section):
        name = match.group(1)
        description = match.group(2).strip()
        env_vars[name] = EnvVarSpec(
            name=name,
            description=description,
            required="required" in description.lower(),
        )
    return env_vars


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def iter_code_blocks(content: str) -> Iterator[tuple[str, str]]:
    """Yield ``(tag, body)`` for each fenced code block, in document order.

    An unterminated trailing fence is ignored.
    """
    tag: str | None = None
    body: list[str] = []
    for line in content.splitlines():
        fence = CODE_FENCE.match(line)
        if tag is None:
            if fence is not None:
                tag = fence.group(1).lower()
                body = []
            continue
        if fence is not None and not fence.group(1):
            yield tag, "\n".join(body)
            tag = None
            continue
        body.append(line)


def parse_command_line(line: str) -> tuple[str, list[str]] | None:
    """Split a shell line into (command, args) if it launches a server."""
    tokens = line.split()
    if not tokens or tokens[0] not in LAUNCH_COMMANDS:
        return None
    return tokens[0], tokens[1:]


def extract_command_example(content: str) -> tuple[str, list[str]] | None:
    """Return the first launch command found in a shell code block."""
    for tag, body in iter_code_blocks(content):
        if tag not in SHELL_FENCE_TAGS:
            continue
        for line in body.splitlines():
            trimmed = line.strip()
            if not trimmed or trimmed.startswith("#"):
                continue
            parsed = parse_command_line(trimmed)
            if parsed is None:
                continue
            command, args = parsed
            if any(arg in INSTALL_TOKENS for arg in args):
                continue
            return command, args
    return None


def extract_install_command(content: str) -> str | None:
    """Return the first ``npm install <pkg>`` found, normalised."""
    match = NPM_INSTALL.search(content)
    if match is None:
        return None
    return f"npm install {match.group(1)}"
