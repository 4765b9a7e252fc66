"""
Portable Text rendering configuration.

Defaults reflect the content shapes observed from the CMS. Host lists and
field synonyms are meant to be extended from rules, not treated as a closed
contract.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ._embeds import DEFAULT_VIDEO_PROVIDERS, VideoProvider

# Field synonyms probed in order when reading custom blocks
DEFAULT_FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "code_text": ("code",),
    "code_language": ("language",),
    "code_filename": ("filename", "title"),
    "callout_title": ("title", "heading", "label"),
    "callout_body": ("body", "text", "message", "description", "content"),
    "callout_tone": ("tone", "variant", "kind"),
    "embed_url": ("url", "href", "src"),
    "embed_title": ("title", "caption"),
}


@dataclass(frozen=True)
class PortableTextConfig:
    """Portable Text rendering configuration from rules."""

    # Images
    default_image_width: int = 1600
    default_image_height: int = 900
    default_image_alt: str = "Article image"
    image_sizes: str = "(max-width: 1024px) 100vw, 896px"
    image_loading: str = "lazy"

    # Links
    safe_href_schemes: frozenset[str] = field(
        default_factory=lambda: frozenset(["http", "https", "mailto", "tel"])
    )
    external_href_schemes: frozenset[str] = field(
        default_factory=lambda: frozenset(["http", "https"])
    )
    add_noopener: bool = True
    add_noreferrer: bool = True

    # Embeds
    video_providers: tuple[VideoProvider, ...] = DEFAULT_VIDEO_PROVIDERS
    default_embed_title: str = "Embedded content"
    iframe_allow: str = (
        "accelerometer; autoplay; clipboard-write; encrypted-media; "
        "gyroscope; picture-in-picture; web-share"
    )

    # Internal references: document type -> path prefix
    reference_path_prefixes: dict[str, str] = field(
        default_factory=lambda: {"article": "/articles"}
    )

    field_aliases: dict[str, tuple[str, ...]] = field(
        default_factory=lambda: dict(DEFAULT_FIELD_ALIASES)
    )

    def aliases(self, name: str) -> tuple[str, ...]:
        """Field names probed for ``name``, falling back to the defaults."""
        return self.field_aliases.get(name) or DEFAULT_FIELD_ALIASES.get(name, ())


# Default configuration
DEFAULT_CONFIG = PortableTextConfig()
