"""
Portable Text body normalization.

Turns a raw CMS body payload into a list of block records with predictable
container fields, without judging renderer-specific fields. Renderers still
read every field defensively; this layer only guarantees that:

- the body is a list of records, each with a string ``_type``
- ``children`` holds span records with string ``text`` and string ``marks``,
  plus typed inline objects
- ``markDefs`` holds records
- image blocks carry a trimmed ``asset.url``, positive integer dimensions and
  a trimmed ``alt``

Input payloads are never mutated; new containers are built for the output.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from folio.domain.records import get_node_type, get_record, get_string, is_record


@dataclass
class NormalizationError:
    """A node dropped or repaired while normalizing a body."""

    code: str
    message: str
    path: str | None = None


def to_positive_dimension(value: Any) -> int | None:
    """Positive finite numbers rounded half-up; everything else is None."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except OverflowError:
        # Integers beyond float range
        return None
    if not math.isfinite(number) or number <= 0:
        return None
    return math.floor(number + 0.5)


def _normalize_image(source: dict[str, Any]) -> dict[str, Any]:
    asset = get_record(source, "asset")
    url = get_string(asset, "url")
    width = to_positive_dimension(asset.get("width")) if asset else None
    height = to_positive_dimension(asset.get("height")) if asset else None

    result = dict(source)
    result["_type"] = "image"
    result["alt"] = get_string(source, "alt")

    if url or width or height:
        result["asset"] = {**(asset or {}), "url": url, "width": width, "height": height}
    else:
        result.pop("asset", None)

    return result


def _normalize_children(children: Any) -> list[dict[str, Any]] | None:
    if not isinstance(children, list):
        return None

    normalized: list[dict[str, Any]] = []
    for child in children:
        if not is_record(child):
            continue

        child_type = get_node_type(child)
        if child_type not in (None, "span"):
            # Inline object
            normalized.append({**child, "_type": child_type})
            continue
        if not isinstance(child.get("text"), str):
            continue

        span = dict(child)
        span["_type"] = "span"
        marks = child.get("marks")
        span["marks"] = [m for m in marks if isinstance(m, str)] if isinstance(marks, list) else []
        normalized.append(span)

    return normalized


def _normalize_mark_defs(mark_defs: Any) -> list[dict[str, Any]] | None:
    if not isinstance(mark_defs, list):
        return None
    return [dict(definition) for definition in mark_defs if is_record(definition)]


def normalize_block(raw_block: Any) -> dict[str, Any] | None:
    """Normalize a single node; returns None if it has no usable type tag."""
    if not is_record(raw_block):
        return None

    block_type = get_node_type(raw_block)
    if not block_type:
        return None

    source = dict(raw_block)

    if block_type == "image":
        return _normalize_image(source)

    result = dict(source)
    result["_type"] = block_type

    children = _normalize_children(source.get("children"))
    if children is not None:
        result["children"] = children

    mark_defs = _normalize_mark_defs(source.get("markDefs"))
    if mark_defs is not None:
        result["markDefs"] = mark_defs

    return result


def normalize_portable_text_body(
    raw_body: Any,
) -> tuple[list[dict[str, Any]], list[NormalizationError]]:
    """
    Normalize a Portable Text body.

    Returns:
        Tuple of (blocks, errors). Unusable nodes are dropped and reported;
        a non-list body yields an empty block list and a single error.
    """
    errors: list[NormalizationError] = []

    if raw_body is None:
        return [], errors

    if not isinstance(raw_body, list):
        errors.append(
            NormalizationError(
                code="invalid_body",
                message=f"Body must be a list, got {type(raw_body).__name__}",
                path="body",
            )
        )
        return [], errors

    blocks: list[dict[str, Any]] = []
    for i, raw_block in enumerate(raw_body):
        path = f"body[{i}]"

        if not is_record(raw_block):
            errors.append(
                NormalizationError(
                    code="invalid_node",
                    message=f"Node must be an object, got {type(raw_block).__name__}",
                    path=path,
                )
            )
            continue

        block = normalize_block(raw_block)
        if block is None:
            errors.append(
                NormalizationError(
                    code="missing_type",
                    message="Node has no type tag",
                    path=path,
                )
            )
            continue

        blocks.append(block)

    return blocks, errors
