"""Flattening of nested records into single-level spreadsheet rows."""

import json
from collections.abc import Mapping
from typing import Any


def flatten_record(obj: Mapping[str, Any], prefix: str = "") -> dict[str, Any]:
    """Collapse nested mappings into ``parent_child`` keys.

    Sequences are not expanded: each one becomes a single compact JSON
    string cell. Strings and bytes count as scalars.

    Example:
        >>> flatten_record({"a": {"b": 1}, "tags": [1, 2]})
        {'a_b': 1, 'tags': '[1,2]'}
    """
    flattened: dict[str, Any] = {}
    for key, value in obj.items():
        new_key = f"{prefix}_{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            flattened.update(flatten_record(value, new_key))
        elif isinstance(value, list | tuple):
            flattened[new_key] = json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=str)
        else:
            flattened[new_key] = value
    return flattened
