"""
Portable Text component port definitions.
"""

from __future__ import annotations

from typing import Any, Protocol


class RulesPort(Protocol):
    """Port for accessing Portable Text rules configuration."""

    def get_image_defaults(self) -> dict[str, Any]:
        """Get default image width/height/alt/sizes/loading."""
        ...

    def get_allowed_href_schemes(self) -> frozenset[str]:
        """Get URL schemes allowed in links and embeds."""
        ...

    def get_external_href_schemes(self) -> frozenset[str]:
        """Get URL schemes treated as external links."""
        ...

    def get_link_rel_config(self) -> dict[str, Any]:
        """Get link rel attribute configuration."""
        ...

    def get_video_providers(self) -> list[dict[str, Any]]:
        """Get embeddable video provider definitions."""
        ...

    def get_default_embed_title(self) -> str:
        """Get the fallback title for embeds."""
        ...

    def get_reference_path_prefixes(self) -> dict[str, str]:
        """Get document type to path prefix mapping."""
        ...

    def get_field_aliases(self) -> dict[str, list[str]]:
        """Get field synonym overrides for custom blocks."""
        ...
