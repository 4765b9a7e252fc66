"""
Absolute URL parsing helpers.

Mirrors the parts of browser URL parsing that matter for link and embed
safety:

- leading/trailing control characters are ignored and tabs and newlines
  inside the URL are dropped
- the scheme is case-insensitive
- special schemes (http, https, ws, wss, ftp) treat backslashes as slashes,
  accept any number of slashes after the colon (``http:example.com`` is
  ``http://example.com``) and must carry a host
- hosts containing spaces or other forbidden code points are rejected
"""

from __future__ import annotations

import re
from urllib.parse import SplitResult, quote, urlsplit

_SCHEME_PREFIX = re.compile(r"^([A-Za-z][A-Za-z0-9+.\-]*):")

# Schemes that cannot be parsed without an authority component
HOST_REQUIRED_SCHEMES = frozenset(["http", "https", "ws", "wss", "ftp"])

# Code points a browser refuses in a host
_FORBIDDEN_HOST_CHARS = frozenset(' <>^|"`{}')

# C0 controls and space
_STRIP_CHARS = "".join(chr(code) for code in range(0x21))
_REMOVE_CHARS = str.maketrans("", "", "\t\n\r")

# encodeURIComponent leaves these unescaped in addition to ASCII alphanumerics
_URI_COMPONENT_SAFE = "-_.!~*'()"


def clean_url(raw_url: str) -> str:
    """Drop surrounding controls/spaces and embedded tabs and newlines."""
    return raw_url.strip(_STRIP_CHARS).translate(_REMOVE_CHARS)


def get_raw_scheme(raw_url: str) -> str | None:
    """
    Lower-cased scheme prefix of a URL, without validating the rest.

    Relative references have no scheme and yield None.
    """
    if not isinstance(raw_url, str):
        return None
    match = _SCHEME_PREFIX.match(clean_url(raw_url))
    return match.group(1).lower() if match else None


def _normalize_special(cleaned: str, scheme: str) -> str:
    rest = cleaned[len(scheme) + 1 :].replace("\\", "/")
    return f"{scheme}://{rest.lstrip('/')}"


def parse_absolute_url(raw_url: str) -> SplitResult | None:
    """
    Parse an absolute URL.

    Returns None for relative references, invalid schemes, special-scheme
    URLs without a valid host, and anything urllib refuses to split.
    """
    scheme = get_raw_scheme(raw_url)
    if scheme is None:
        return None

    cleaned = clean_url(raw_url)
    if scheme in HOST_REQUIRED_SCHEMES:
        cleaned = _normalize_special(cleaned, scheme)

    try:
        parts = urlsplit(cleaned)
        if parts.scheme.lower() != scheme:
            return None
        if scheme in HOST_REQUIRED_SCHEMES and not parts.hostname:
            return None
        if parts.hostname and _FORBIDDEN_HOST_CHARS.intersection(parts.hostname):
            return None
        # Accessing port validates the authority section
        parts.port
    except ValueError:
        return None

    return parts


def get_scheme(raw_url: str) -> str | None:
    """Lower-cased scheme of an absolute URL, or None when unparseable."""
    parts = parse_absolute_url(raw_url)
    return parts.scheme.lower() if parts else None


def encode_uri_component(value: str) -> str:
    """Percent-encode a path segment the way ``encodeURIComponent`` does."""
    return quote(value, safe=_URI_COMPONENT_SAFE)
