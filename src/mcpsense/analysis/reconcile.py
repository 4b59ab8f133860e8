"""Config reconciler: merge candidate configurations and score the result.

Merge Rule
----------
The base candidate wins. An overlay only fills fields the base left empty:

- ``description``, ``docs_url``, ``author``: copied when the base has none.
- ``env``: union; on a key collision the base entry is kept.
- ``optional_args``: base then overlay, not deduplicated.
- Everything else (name, command, args, transport, install command,
  version) is the base's value, unconditionally.

At every call site the manifest result is the base and the README result
is the overlay.

Confidence
----------
A weighted sum of seven independent checks, divided by the total weight.
Each check only ever adds weight, so the score is monotonic in the fields
present and always in [0, 1].
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import replace

from mcpsense.analysis.models import DetectedConfig

# Marker that extractor progress messages carry on successful parses.
PARSED_MARKER: str = "Parsed"

ConfidenceCheck = Callable[[DetectedConfig, Sequence[str]], bool]

CONFIDENCE_WEIGHTS: tuple[tuple[str, float, ConfidenceCheck], ...] = (
    ("description", 0.10, lambda c, m: c.description is not None),
    ("command", 0.20, lambda c, m: bool(c.command)),
    ("args", 0.10, lambda c, m: bool(c.args)),
    ("env", 0.15, lambda c, m: bool(c.env)),
    ("docs_url", 0.10, lambda c, m: c.docs_url is not None),
    ("author", 0.05, lambda c, m: c.author is not None),
    ("parsed", 0.30, lambda c, m: any(PARSED_MARKER in msg for msg in m)),
)


def merge_configs(base: DetectedConfig, overlay: DetectedConfig) -> DetectedConfig:
    """Merge ``overlay`` into ``base`` without overriding anything base set.

    Neither input is mutated.

    Args:
        base: The authoritative candidate (manifest result).
        overlay: The gap-filling candidate (README result).

    Returns:
        A new merged configuration.
    """
    env = dict(base.env)
    for key, spec in overlay.env.items():
        env.setdefault(key, spec)

    return replace(
        base,
        description=base.description if base.description is not None else overlay.description,
        args=list(base.args),
        env=env,
        optional_args=[*base.optional_args, *overlay.optional_args],
        docs_url=base.docs_url if base.docs_url is not None else overlay.docs_url,
        author=base.author if base.author is not None else overlay.author,
    )


def calculate_confidence(config: DetectedConfig, messages: Sequence[str]) -> float:
    """Score how trustworthy an inferred configuration is.

    Args:
        config: The reconciled configuration.
        messages: Progress messages accumulated during the run.

    Returns:
        Achieved weight over total weight, in [0.0, 1.0].
    """
    score = 0.0
    total = 0.0
    for _name, weight, check in CONFIDENCE_WEIGHTS:
        total += weight
        if check(config, messages):
            score += weight
    if total <= 0.0:
        return 0.0
    return min(1.0, max(0.0, score / total))
