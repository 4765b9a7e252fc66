"""
Internal reference resolution.

The CMS represents "a link to another document" in several shapes depending
on how the authoring schema denormalizes it:

- ``{"documentType": "article", "slug": {"current": "x"}}``
- ``{"reference": {"_type": "article", "slug": {"current": "x"}}}``
- ``{"document": {"_type": "page", "slug": {"current": "x"}}}``
- ``{"_type": "article", "slug": "x"}``
- ``{"href": "/already/resolved"}``

All of them resolve to an application path; none of them raise.
"""

from __future__ import annotations

from typing import Any

from folio.domain.records import get_record, get_string
from folio.domain.urls import encode_uri_component

from ._config import DEFAULT_CONFIG, PortableTextConfig
from ._hrefs import is_internal_href


def get_reference_document_type(value: Any) -> str | None:
    """Extract the referenced document type from mixed mark/block shapes."""
    return (
        get_string(value, "documentType")
        or get_string(get_record(value, "reference"), "_type")
        or get_string(get_record(value, "document"), "_type")
        or get_string(value, "_type")
    )


def get_reference_slug(value: Any) -> str | None:
    """Extract the referenced slug from mixed mark/block shapes."""
    return (
        get_string(get_record(value, "slug"), "current")
        or get_string(get_record(get_record(value, "reference"), "slug"), "current")
        or get_string(get_record(get_record(value, "document"), "slug"), "current")
        or get_string(value, "slug")
    )


def get_reference_title(value: Any) -> str | None:
    """Label for a reference: own title, then the document's, then the reference's."""
    return (
        get_string(value, "title")
        or get_string(get_record(value, "document"), "title")
        or get_string(get_record(value, "reference"), "title")
    )


def resolve_internal_href(
    value: Any,
    config: PortableTextConfig = DEFAULT_CONFIG,
) -> str | None:
    """
    Build an internal application href from a reference mark or block.

    A pre-resolved internal ``href`` wins. Otherwise the slug is encoded under
    the path prefix registered for the document type, or at the site root.
    """
    direct_href = get_string(value, "href")
    if direct_href and is_internal_href(direct_href):
        return direct_href

    slug = get_reference_slug(value)
    if not slug:
        return None

    document_type = get_reference_document_type(value)
    encoded_slug = encode_uri_component(slug)

    prefix = config.reference_path_prefixes.get(document_type or "")
    if prefix:
        return f"{prefix.rstrip('/')}/{encoded_slug}"

    return f"/{encoded_slug}"
