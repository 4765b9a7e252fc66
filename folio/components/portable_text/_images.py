"""
Image presentation resolution for Portable Text image blocks.

Width and height fall back independently to fixed defaults; there is no
aspect-ratio coupling between them.
"""

from __future__ import annotations

from typing import Any

from folio.domain.portable_text import to_positive_dimension
from folio.domain.records import get_record, get_record_value, get_string

from ._config import DEFAULT_CONFIG, PortableTextConfig
from .models import ImageDimensions


def get_positive_dimension(value: Any) -> int | None:
    """Normalize an image dimension into a positive rounded integer."""
    return to_positive_dimension(value)


def get_image_url(image: Any) -> str | None:
    """Trimmed ``asset.url`` of an image block."""
    return get_string(get_record(image, "asset"), "url")


def resolve_image_dimensions(
    image: Any,
    config: PortableTextConfig = DEFAULT_CONFIG,
) -> ImageDimensions:
    """Resolve render-safe dimensions for an image block."""
    asset = get_record(image, "asset")
    width = get_positive_dimension(get_record_value(asset, "width"))
    height = get_positive_dimension(get_record_value(asset, "height"))

    return ImageDimensions(
        width=width if width is not None else config.default_image_width,
        height=height if height is not None else config.default_image_height,
    )


def resolve_image_alt(
    image: Any,
    fallback_alt: str | None = None,
    config: PortableTextConfig = DEFAULT_CONFIG,
) -> str:
    """Own alt text, then the caller's fallback, then the configured default."""
    own_alt = get_string(image, "alt")
    if own_alt:
        return own_alt

    if isinstance(fallback_alt, str) and fallback_alt.strip():
        return fallback_alt.strip()

    return config.default_image_alt


def resolve_image_caption(image: Any) -> str | None:
    """
    Visible caption for an image.

    Only the image's own alt text is echoed; the fallback alt describes the
    image for assistive technology but is never shown as a caption.
    """
    return get_string(image, "alt")
