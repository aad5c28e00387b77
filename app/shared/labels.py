"""Display label helpers shared by the dashboard views and the exporters."""

import re
from typing import NamedTuple

UNKNOWN_LEVEL = "UNKNOWN"
UNSPECIFIED_LABEL = "Unspecified"
ELLIPSIS = "..."

_WORD_START = re.compile(r"\b\w")


class TruncatedLabel(NamedTuple):
    """Axis label shortened for display, with the original kept for tooltips."""

    display: str
    full: str

    @property
    def truncated(self) -> bool:
        return self.display != self.full


def parse_level(raw: str | None) -> str | None:
    """Map the ``UNKNOWN`` sentinel (or an empty tag) to ``None``."""
    if raw is None:
        return None
    tag = raw.strip()
    if not tag or tag == UNKNOWN_LEVEL:
        return None
    return tag


def level_key(level: str | None) -> str:
    """Grouping key for a level; unspecified levels keep the raw tag."""
    return UNKNOWN_LEVEL if level is None else level


def display_level(level: str | None) -> str:
    """Human label for a level tag: ``Unspecified`` or the upper-cased tag.

    Accepts either an already-parsed level or the raw sentinel.
    """
    parsed = parse_level(level)
    return UNSPECIFIED_LABEL if parsed is None else parsed.upper()


def source_label(source_name: str) -> str:
    """``SOCIAL_MEDIA`` -> ``SOCIAL MEDIA`` (export and table form)."""
    return source_name.replace("_", " ")


def humanize_source(source_name: str) -> str:
    """``SOCIAL_MEDIA`` -> ``Social Media`` (chart form)."""
    return _WORD_START.sub(lambda m: m.group().upper(), source_label(source_name).lower())


def truncate_label(label: str, limit: int) -> TruncatedLabel:
    """Shorten ``label`` to ``limit`` characters plus an ellipsis.

    Args:
        label: Original label.
        limit: Maximum number of characters kept before the ellipsis.

    Returns:
        TruncatedLabel whose ``full`` is always the untouched original.

    Raises:
        ValueError: If limit is not positive.
    """
    if limit < 1:
        raise ValueError(f"Label limit must be positive, got {limit}")
    if len(label) <= limit:
        return TruncatedLabel(display=label, full=label)
    return TruncatedLabel(display=label[:limit] + ELLIPSIS, full=label)
