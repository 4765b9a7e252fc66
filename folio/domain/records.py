"""
Record accessors for loosely-typed CMS payloads.

Portable Text nodes arrive as decoded JSON whose shape is not guaranteed by
the authoring schema. Every read goes through these helpers, which return
None instead of raising when a field is missing or has the wrong type.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any


def is_record(value: Any) -> bool:
    """True for mapping values (decoded JSON objects)."""
    return isinstance(value, Mapping)


def get_record_value(source: Any, key: str) -> Any | None:
    """Read a property from an unknown record-like value."""
    if not is_record(source):
        return None
    return source.get(key)


def get_record(source: Any, key: str) -> Mapping[str, Any] | None:
    """Read a nested record, or None when the property is not a record."""
    value = get_record_value(source, key)
    return value if is_record(value) else None


def get_string(source: Any, key: str) -> str | None:
    """Read and trim a string property; blank strings count as missing."""
    value = get_record_value(source, key)
    if not isinstance(value, str):
        return None

    normalized = value.strip()
    return normalized or None


def first_string(source: Any, keys: Iterable[str]) -> str | None:
    """Return the first non-empty string found under any of ``keys``."""
    for key in keys:
        value = get_string(source, key)
        if value:
            return value
    return None


def get_node_type(value: Any) -> str | None:
    """Read the node type tag (``_type``, falling back to ``type``)."""
    return get_string(value, "_type") or get_string(value, "type")


def get_node_key(value: Any) -> str | None:
    """Read the node key (``_key``, falling back to ``key``)."""
    return get_string(value, "_key") or get_string(value, "key")


def is_image_node(value: Any) -> bool:
    """Narrow an unknown node to an image block."""
    return is_record(value) and get_node_type(value) == "image"
