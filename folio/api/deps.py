import os
from functools import lru_cache
from pathlib import Path
from typing import Any

from fastapi import Request

from folio.rules.models import PortableTextRules, Rules


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.base_dir = Path(os.getcwd())
        self.rules_path = Path(os.environ.get("FOLIO_RULES_PATH", self.base_dir / "rules.yaml"))


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Rules ---
class PortableTextRulesAdapter:
    """Adapter to map generic Rules to the Portable Text component RulesPort."""

    def __init__(self, rules: Rules):
        self._rules: PortableTextRules = rules.portable_text

    def get_image_defaults(self) -> dict[str, Any]:
        return self._rules.images.model_dump()

    def get_allowed_href_schemes(self) -> frozenset[str]:
        return frozenset(self._rules.links.allowed_protocols)

    def get_external_href_schemes(self) -> frozenset[str]:
        return frozenset(self._rules.links.external_protocols)

    def get_link_rel_config(self) -> dict[str, Any]:
        return self._rules.links.rel.model_dump()

    def get_video_providers(self) -> list[dict[str, Any]]:
        return [provider.model_dump() for provider in self._rules.embeds.video_providers]

    def get_default_embed_title(self) -> str:
        return self._rules.embeds.default_title

    def get_reference_path_prefixes(self) -> dict[str, str]:
        return dict(self._rules.references.path_prefixes)

    def get_field_aliases(self) -> dict[str, list[str]]:
        return {name: list(aliases) for name, aliases in self._rules.field_aliases.items()}


def get_rules(request: Request) -> Rules | None:
    """Rules loaded at startup, if any."""
    return getattr(request.app.state, "rules", None)


def get_portable_text_rules(request: Request) -> PortableTextRulesAdapter | None:
    rules = get_rules(request)
    return PortableTextRulesAdapter(rules) if rules is not None else None
