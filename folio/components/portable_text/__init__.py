"""
Portable Text component - Render CMS rich text to safe HTML.
"""

from ._config import DEFAULT_CONFIG, DEFAULT_FIELD_ALIASES, PortableTextConfig
from ._embeds import (
    DEFAULT_VIDEO_PROVIDERS,
    VideoProvider,
    find_video_provider,
    normalize_video_host,
    to_embeddable_url,
)
from ._hrefs import (
    build_link_rel,
    is_external_href,
    is_internal_href,
    is_safe_href,
    is_safe_image_src,
)
from ._images import (
    get_image_url,
    get_positive_dimension,
    resolve_image_alt,
    resolve_image_caption,
    resolve_image_dimensions,
)
from ._impl import (
    CALLOUT_BLOCK_TYPES,
    EMBED_BLOCK_TYPES,
    INTERNAL_LINK_MARK_TYPES,
    REFERENCE_BLOCK_TYPES,
    BlockRenderer,
    MarkRenderer,
    PortableTextComponents,
    PortableTextRenderer,
    create_portable_text_components,
    create_portable_text_renderer,
    extract_plain_text,
    get_callout_fields,
    get_callout_tone,
    get_code_block_fields,
    get_embed_title,
    get_embed_url,
    join_rendered_blocks,
    render_anchor,
    render_callout,
    render_code_block,
    render_code_mark,
    render_embed,
    render_image,
    render_internal_link_mark,
    render_link_mark,
    render_portable_text,
    render_reference_block,
)
from ._references import (
    get_reference_document_type,
    get_reference_slug,
    get_reference_title,
    resolve_internal_href,
)
from .component import (
    run,
    run_extract_text,
    run_render,
)
from .models import (
    CalloutFields,
    CodeBlockFields,
    Disposition,
    ExtractPlainTextInput,
    ImageDimensions,
    PlainTextOutput,
    PortableTextValidationError,
    RenderedBlock,
    RendererOptions,
    RenderPortableTextInput,
    RenderPortableTextOutput,
)
from .ports import RulesPort

__all__ = [
    # Entry points
    "run",
    "run_extract_text",
    "run_render",
    # Input models
    "ExtractPlainTextInput",
    "RenderPortableTextInput",
    "RendererOptions",
    # Output models
    "Disposition",
    "PlainTextOutput",
    "PortableTextValidationError",
    "RenderPortableTextOutput",
    "RenderedBlock",
    # Value objects
    "CalloutFields",
    "CodeBlockFields",
    "ImageDimensions",
    # Ports
    "RulesPort",
    # Configuration
    "DEFAULT_CONFIG",
    "DEFAULT_FIELD_ALIASES",
    "DEFAULT_VIDEO_PROVIDERS",
    "PortableTextConfig",
    "VideoProvider",
    # Link safety
    "build_link_rel",
    "is_external_href",
    "is_internal_href",
    "is_safe_href",
    "is_safe_image_src",
    # Video embeds
    "find_video_provider",
    "normalize_video_host",
    "to_embeddable_url",
    # References
    "get_reference_document_type",
    "get_reference_slug",
    "get_reference_title",
    "resolve_internal_href",
    # Images
    "get_image_url",
    "get_positive_dimension",
    "resolve_image_alt",
    "resolve_image_caption",
    "resolve_image_dimensions",
    # Registry
    "BlockRenderer",
    "MarkRenderer",
    "CALLOUT_BLOCK_TYPES",
    "EMBED_BLOCK_TYPES",
    "INTERNAL_LINK_MARK_TYPES",
    "REFERENCE_BLOCK_TYPES",
    "PortableTextComponents",
    "create_portable_text_components",
    "get_callout_fields",
    "get_callout_tone",
    "get_code_block_fields",
    "get_embed_title",
    "get_embed_url",
    "render_anchor",
    "render_callout",
    "render_code_block",
    "render_code_mark",
    "render_embed",
    "render_image",
    "render_internal_link_mark",
    "render_link_mark",
    "render_reference_block",
    # Driver
    "PortableTextRenderer",
    "create_portable_text_renderer",
    "extract_plain_text",
    "join_rendered_blocks",
    "render_portable_text",
]
