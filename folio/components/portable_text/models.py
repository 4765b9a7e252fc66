"""
Portable Text component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# --- Validation Error ---


@dataclass(frozen=True)
class PortableTextValidationError:
    """Portable Text validation error."""

    code: str
    message: str
    path: str | None = None


# --- Value Objects ---


@dataclass(frozen=True)
class ImageDimensions:
    """Render-safe image dimensions."""

    width: int
    height: int


@dataclass(frozen=True)
class CodeBlockFields:
    """Fields read from code-like blocks."""

    code: str | None = None
    language: str | None = None
    filename: str | None = None


@dataclass(frozen=True)
class CalloutFields:
    """Fields read from callout/note/alert/admonition blocks."""

    title: str | None = None
    body: str | None = None
    tone: str | None = None


@dataclass(frozen=True)
class RendererOptions:
    """Caller-supplied renderer options."""

    fallback_image_alt: str | None = None


class Disposition(str, Enum):
    """What happened to a node during rendering."""

    RENDERED = "rendered"
    SUPPRESSED = "suppressed"
    PASSTHROUGH = "passthrough"


@dataclass(frozen=True)
class RenderedBlock:
    """Rendering outcome for one top-level node."""

    key: str | None
    type: str | None
    disposition: Disposition
    html: str | None = None
    list_kind: str | None = None


# --- Input Models ---


@dataclass(frozen=True)
class RenderPortableTextInput:
    """Input for rendering a Portable Text body to HTML."""

    body: Any
    fallback_image_alt: str | None = None
    normalize: bool = True


@dataclass(frozen=True)
class ExtractPlainTextInput:
    """Input for extracting plain text from a Portable Text body."""

    body: Any


# --- Output Models ---


@dataclass(frozen=True)
class RenderPortableTextOutput:
    """Output containing rendered HTML and per-node outcomes."""

    html: str
    blocks: tuple[RenderedBlock, ...] = ()
    errors: list[PortableTextValidationError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class PlainTextOutput:
    """Output containing extracted plain text."""

    text: str
    errors: list[PortableTextValidationError] = field(default_factory=list)
    success: bool = True
