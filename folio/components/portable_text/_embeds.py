"""
Video embed resolution.

Rewrites public video page URLs into embeddable player URLs. Pure string
transform: no network access and no check that the player URL resolves.

Key behaviors:
- Only http/https page URLs are considered
- Host match is exact after lower-casing and stripping a leading ``www.``
- Video ids are percent-encoded into the player URL
- Anything unrecognized or malformed yields None
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal
from urllib.parse import parse_qs

from folio.domain.urls import encode_uri_component, parse_absolute_url

VideoIdSource = Literal["query", "path"]


@dataclass(frozen=True)
class VideoProvider:
    """A video host whose page URLs can be rewritten to a player URL."""

    name: str
    hosts: frozenset[str]
    id_source: VideoIdSource
    embed_template: str
    query_param: str = "v"

    def extract_video_id(self, path: str, query: str) -> str | None:
        """Read the video id from the page URL's path or query string."""
        if self.id_source == "query":
            values = parse_qs(query).get(self.query_param)
            return values[0] if values and values[0] else None

        video_id = path.lstrip("/")
        return video_id or None

    def build_embed_url(self, video_id: str) -> str:
        return self.embed_template.replace("{id}", encode_uri_component(video_id))


YOUTUBE_EMBED_TEMPLATE = "https://www.youtube.com/embed/{id}"

DEFAULT_VIDEO_PROVIDERS: tuple[VideoProvider, ...] = (
    VideoProvider(
        name="youtube",
        hosts=frozenset(["youtube.com", "m.youtube.com"]),
        id_source="query",
        query_param="v",
        embed_template=YOUTUBE_EMBED_TEMPLATE,
    ),
    VideoProvider(
        name="youtu.be",
        hosts=frozenset(["youtu.be"]),
        id_source="path",
        embed_template=YOUTUBE_EMBED_TEMPLATE,
    ),
    VideoProvider(
        name="vimeo",
        hosts=frozenset(["vimeo.com"]),
        id_source="path",
        embed_template="https://player.vimeo.com/video/{id}",
    ),
)


def normalize_video_host(hostname: str) -> str:
    """Lower-case a host and strip one leading ``www.``."""
    host = hostname.lower()
    return host[4:] if host.startswith("www.") else host


def find_video_provider(
    host: str,
    providers: tuple[VideoProvider, ...] = DEFAULT_VIDEO_PROVIDERS,
) -> VideoProvider | None:
    """Find the provider registered for a normalized host."""
    return next((p for p in providers if host in p.hosts), None)


def to_embeddable_url(
    raw_url: str,
    providers: tuple[VideoProvider, ...] = DEFAULT_VIDEO_PROVIDERS,
) -> str | None:
    """
    Convert a supported public video URL into an embeddable iframe URL.

    Returns:
        The player URL, or None when the URL is not http(s), the host is not
        a known provider, or no video id is present.
    """
    parts = parse_absolute_url(raw_url)
    if parts is None or parts.scheme.lower() not in ("http", "https"):
        return None

    provider = find_video_provider(normalize_video_host(parts.hostname or ""), providers)
    if provider is None:
        return None

    video_id = provider.extract_video_id(parts.path, parts.query)
    if not video_id:
        return None

    return provider.build_embed_url(video_id)
