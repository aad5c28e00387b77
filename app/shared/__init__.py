"""Shared utilities used across features."""

from app.shared.labels import (
    UNKNOWN_LEVEL,
    UNSPECIFIED_LABEL,
    TruncatedLabel,
    display_level,
    humanize_source,
    level_key,
    parse_level,
    source_label,
    truncate_label,
)

__all__ = [
    "UNKNOWN_LEVEL",
    "UNSPECIFIED_LABEL",
    "TruncatedLabel",
    "display_level",
    "humanize_source",
    "level_key",
    "parse_level",
    "source_label",
    "truncate_label",
]
