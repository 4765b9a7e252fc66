"""
Portable Text component - Render CMS rich text to HTML.

Handles conversion of Portable Text bodies to safe, semantic HTML for SSR.

Invariants:
- Output is escaped HTML; unsafe link and embed URLs are never emitted
- Malformed nodes are suppressed, never raised
- Node order in the output matches document order
- Rendering the same body twice yields identical output
"""

from __future__ import annotations

from typing import Any

from folio.domain.portable_text import NormalizationError, normalize_portable_text_body

from ._config import DEFAULT_CONFIG, DEFAULT_FIELD_ALIASES, PortableTextConfig
from ._embeds import VideoProvider
from ._impl import PortableTextRenderer, extract_plain_text, join_rendered_blocks
from .models import (
    ExtractPlainTextInput,
    PlainTextOutput,
    PortableTextValidationError,
    RendererOptions,
    RenderPortableTextInput,
    RenderPortableTextOutput,
)
from .ports import RulesPort


def _convert_errors(
    legacy_errors: list[NormalizationError],
) -> list[PortableTextValidationError]:
    """Convert normalization errors to component errors."""
    return [
        PortableTextValidationError(
            code=e.code,
            message=e.message,
            path=e.path,
        )
        for e in legacy_errors
    ]


def _build_video_providers(definitions: list[dict[str, Any]]) -> tuple[VideoProvider, ...]:
    return tuple(
        VideoProvider(
            name=d["name"],
            hosts=frozenset(host.lower() for host in d["hosts"]),
            id_source=d["id_source"],
            embed_template=d["embed_template"],
            query_param=d.get("query_param", "v"),
        )
        for d in definitions
    )


def _build_config(rules: RulesPort | None) -> PortableTextConfig:
    """Build Portable Text config from rules port."""
    if rules is None:
        return DEFAULT_CONFIG

    images = rules.get_image_defaults()
    link_rel = rules.get_link_rel_config()

    field_aliases = dict(DEFAULT_FIELD_ALIASES)
    for name, aliases in rules.get_field_aliases().items():
        field_aliases[name] = tuple(aliases)

    providers = rules.get_video_providers()

    return PortableTextConfig(
        default_image_width=images.get("default_width", DEFAULT_CONFIG.default_image_width),
        default_image_height=images.get("default_height", DEFAULT_CONFIG.default_image_height),
        default_image_alt=images.get("default_alt", DEFAULT_CONFIG.default_image_alt),
        image_sizes=images.get("sizes", DEFAULT_CONFIG.image_sizes),
        image_loading=images.get("loading", DEFAULT_CONFIG.image_loading),
        safe_href_schemes=rules.get_allowed_href_schemes(),
        external_href_schemes=rules.get_external_href_schemes(),
        add_noopener=link_rel.get("noopener", True),
        add_noreferrer=link_rel.get("noreferrer", True),
        video_providers=(
            _build_video_providers(providers) if providers else DEFAULT_CONFIG.video_providers
        ),
        default_embed_title=rules.get_default_embed_title(),
        reference_path_prefixes=dict(rules.get_reference_path_prefixes()),
        field_aliases=field_aliases,
    )


def _prepare_body(
    body: Any,
    normalize: bool,
) -> tuple[list[Any], list[PortableTextValidationError]]:
    if not normalize:
        return (body if isinstance(body, list) else []), []

    blocks, legacy_errors = normalize_portable_text_body(body)
    return blocks, _convert_errors(legacy_errors)


# --- Component Entry Points ---


def run_render(
    inp: RenderPortableTextInput,
    *,
    rules: RulesPort | None = None,
) -> RenderPortableTextOutput:
    """
    Render a Portable Text body to HTML.

    Args:
        inp: Input containing the body and the fallback image alt text.
        rules: Optional rules port for configuration.

    Returns:
        RenderPortableTextOutput with HTML, per-node outcomes and any
        normalization errors. Dropped nodes do not fail the render.
    """
    config = _build_config(rules)
    renderer = PortableTextRenderer(
        config=config,
        options=RendererOptions(fallback_image_alt=inp.fallback_image_alt),
    )

    blocks, errors = _prepare_body(inp.body, inp.normalize)
    rendered = renderer.render_blocks(blocks)

    return RenderPortableTextOutput(
        html=join_rendered_blocks(rendered),
        blocks=tuple(rendered),
        errors=errors,
        success=True,
    )


def run_extract_text(
    inp: ExtractPlainTextInput,
    *,
    rules: RulesPort | None = None,
) -> PlainTextOutput:
    """
    Extract plain text from a Portable Text body.

    Args:
        inp: Input containing the body.
        rules: Optional rules port for configuration.

    Returns:
        PlainTextOutput with extracted text.
    """
    blocks, errors = _prepare_body(inp.body, normalize=True)

    return PlainTextOutput(
        text=extract_plain_text(blocks),
        errors=errors,
        success=True,
    )


def run(
    inp: RenderPortableTextInput | ExtractPlainTextInput,
    *,
    rules: RulesPort | None = None,
) -> RenderPortableTextOutput | PlainTextOutput:
    """
    Main entry point for the Portable Text component.

    Dispatches to appropriate handler based on input type.

    Args:
        inp: Input object determining the operation.
        rules: Optional rules port for configuration.

    Returns:
        Appropriate output object based on input type.
    """
    if isinstance(inp, RenderPortableTextInput):
        return run_render(inp, rules=rules)
    elif isinstance(inp, ExtractPlainTextInput):
        return run_extract_text(inp, rules=rules)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
