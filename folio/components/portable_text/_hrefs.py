"""
Link safety checks for Portable Text links, embeds and image sources.

Key behaviors:
- ``/`` and ``#`` prefixed hrefs are internal and skip URL parsing
- Absolute URLs are allowed only for http, https, mailto and tel
- Unparseable URLs are unsafe and never external
- External http(s) anchors get hardened ``rel`` and ``target`` attributes
- Image sources additionally accept relative paths and ``data:image/`` URLs

Safety and externality are independent predicates: callers check safety
before rendering a link at all, and externality only to decide hardening.
"""

from __future__ import annotations

from folio.domain.urls import clean_url, get_raw_scheme, get_scheme

from ._config import DEFAULT_CONFIG, PortableTextConfig

INTERNAL_HREF_PREFIXES = ("/", "#")


def is_internal_href(href: str) -> bool:
    """Internal absolute paths and in-page anchors."""
    return isinstance(href, str) and href.startswith(INTERNAL_HREF_PREFIXES)


def is_safe_href(href: str, config: PortableTextConfig = DEFAULT_CONFIG) -> bool:
    """Validate allowed ``href`` protocols for links and embeds."""
    if is_internal_href(href):
        return True

    scheme = get_scheme(href)
    return scheme is not None and scheme in config.safe_href_schemes


def is_external_href(href: str, config: PortableTextConfig = DEFAULT_CONFIG) -> bool:
    """Detect external http(s) links that need hardened anchor attributes."""
    if is_internal_href(href):
        return False

    scheme = get_scheme(href)
    return scheme is not None and scheme in config.external_href_schemes


def is_safe_image_src(src: str, config: PortableTextConfig = DEFAULT_CONFIG) -> bool:
    """
    Validate an image ``src``.

    Relative references, allowed-scheme URLs and inline ``data:image/``
    payloads pass; script-capable schemes and other data payloads do not.
    """
    if is_internal_href(src):
        return True

    scheme = get_raw_scheme(src)
    if scheme is None:
        return isinstance(src, str)
    if scheme == "data":
        return clean_url(src).lower().startswith("data:image/")

    return scheme in config.safe_href_schemes and get_scheme(src) is not None


def build_link_rel(config: PortableTextConfig = DEFAULT_CONFIG) -> str:
    """Build rel attribute value for external links."""
    parts = []
    if config.add_noopener:
        parts.append("noopener")
    if config.add_noreferrer:
        parts.append("noreferrer")
    return " ".join(parts)
