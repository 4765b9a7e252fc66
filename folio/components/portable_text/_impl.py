"""
Portable Text renderer registry and driver.

Turns an ordered sequence of Portable Text nodes from the CMS into safe HTML.

Key behaviors:
- Block renderers are looked up by node ``_type``, mark renderers by mark
  definition ``_type`` (or decorator name)
- Aliased block types share one renderer registered under every name
- A renderer returning None suppresses the node; it is not an error
- Unregistered block types render nothing; unregistered marks leave their
  children untouched
- All text and attribute values are HTML-escaped
- Input nodes are never mutated and no state is kept between calls

Invariants:
- Rendering a node depends only on that node (and, for marks, on the
  already-rendered children)
- A node that cannot be rendered never affects its neighbours
- Output preserves document order
"""

from __future__ import annotations

import html
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

from folio.domain.records import (
    first_string,
    get_node_key,
    get_node_type,
    get_record_value,
    get_string,
    is_image_node,
    is_record,
)

from ._config import DEFAULT_CONFIG, PortableTextConfig
from ._embeds import to_embeddable_url
from ._hrefs import build_link_rel, is_external_href, is_safe_href, is_safe_image_src
from ._images import (
    get_image_url,
    resolve_image_alt,
    resolve_image_caption,
    resolve_image_dimensions,
)
from ._references import get_reference_title, resolve_internal_href
from .models import (
    CalloutFields,
    CodeBlockFields,
    Disposition,
    RenderedBlock,
    RendererOptions,
)

logger = logging.getLogger(__name__)

BlockRenderer = Callable[[Any], str | None]
MarkRenderer = Callable[[str | None, Any], str | None]

TEXT_BLOCK_TYPE = "block"
SPAN_TYPE = "span"

CALLOUT_BLOCK_TYPES = ("callout", "note", "alert", "admonition")
EMBED_BLOCK_TYPES = ("embed", "videoEmbed", "youtube")
REFERENCE_BLOCK_TYPES = ("reference", "internalReference")
INTERNAL_LINK_MARK_TYPES = ("internalLink", "internalReference")

# Text block style -> HTML tag
STYLE_TAGS: dict[str, str] = {
    "normal": "p",
    "h1": "h1",
    "h2": "h2",
    "h3": "h3",
    "h4": "h4",
    "h5": "h5",
    "h6": "h6",
    "blockquote": "blockquote",
}

# Text block listItem -> list container tag
LIST_TAGS: dict[str, str] = {
    "bullet": "ul",
    "number": "ol",
}

# Decorator marks -> HTML tag
DECORATOR_TAGS: dict[str, str] = {
    "strong": "strong",
    "em": "em",
    "underline": "u",
    "strike-through": "s",
}


def _escape(text: str) -> str:
    """Escape HTML special characters."""
    return html.escape(text)


# --- Field Extraction ---


def get_code_block_fields(
    value: Any,
    config: PortableTextConfig = DEFAULT_CONFIG,
) -> CodeBlockFields:
    """Extract code block fields from flexible code-like block shapes."""
    return CodeBlockFields(
        code=first_string(value, config.aliases("code_text")),
        language=first_string(value, config.aliases("code_language")),
        filename=first_string(value, config.aliases("code_filename")),
    )


def get_callout_fields(
    value: Any,
    config: PortableTextConfig = DEFAULT_CONFIG,
) -> CalloutFields:
    """Extract callout fields from note/admonition block variants."""
    return CalloutFields(
        title=first_string(value, config.aliases("callout_title")),
        body=first_string(value, config.aliases("callout_body")),
        tone=first_string(value, config.aliases("callout_tone")),
    )


def get_callout_tone(tone: str | None) -> str:
    """Map a free-form tone onto one of the four callout presentations."""
    normalized = (tone or "").lower()
    if normalized == "success":
        return "success"
    if normalized == "warning":
        return "warning"
    if normalized in ("error", "danger"):
        return "error"
    return "info"


def get_embed_url(value: Any, config: PortableTextConfig = DEFAULT_CONFIG) -> str | None:
    """Extract an embed URL from common embed block field names."""
    return first_string(value, config.aliases("embed_url"))


def get_embed_title(value: Any, config: PortableTextConfig = DEFAULT_CONFIG) -> str:
    """Stable title for embed iframes and link fallbacks."""
    return first_string(value, config.aliases("embed_title")) or config.default_embed_title


# --- Shared Markup ---


def render_anchor(
    href: str,
    children: str | None,
    *,
    external: bool | None = None,
    config: PortableTextConfig = DEFAULT_CONFIG,
) -> str:
    """
    Render an anchor around already-rendered children.

    External anchors open in a new context with the opener/referrer chain cut.
    When ``external`` is None it is detected from the href.
    """
    is_external = is_external_href(href, config) if external is None else external

    attrs = [f'href="{_escape(href)}"']
    if is_external:
        attrs.append('target="_blank"')
        rel = build_link_rel(config)
        if rel:
            attrs.append(f'rel="{rel}"')
    attrs.append('class="pt-link"')

    return f"<a {' '.join(attrs)}>{children or ''}</a>"


# --- Block Renderers ---


def render_image(
    value: Any,
    fallback_alt: str | None = None,
    config: PortableTextConfig = DEFAULT_CONFIG,
) -> str | None:
    """Render an image block with safe dimension and alt fallbacks."""
    if not is_image_node(value):
        return None

    image_url = get_image_url(value)
    if not image_url or not is_safe_image_src(image_url, config):
        return None

    alt = resolve_image_alt(value, fallback_alt, config)
    dimensions = resolve_image_dimensions(value, config)
    caption = resolve_image_caption(value)

    attrs = [
        f'src="{_escape(image_url)}"',
        f'alt="{_escape(alt)}"',
        f'width="{dimensions.width}"',
        f'height="{dimensions.height}"',
        f'sizes="{_escape(config.image_sizes)}"',
        f'loading="{_escape(config.image_loading)}"',
    ]
    figcaption = (
        f'<figcaption class="pt-image__caption">{_escape(caption)}</figcaption>' if caption else ""
    )

    return f'<figure class="pt-image"><img {" ".join(attrs)} />{figcaption}</figure>'


def render_code_block(
    value: Any,
    config: PortableTextConfig = DEFAULT_CONFIG,
) -> str | None:
    """Render a code block with optional filename and language caption."""
    fields = get_code_block_fields(value, config)
    if not fields.code:
        return None

    figcaption = ""
    if fields.filename:
        label = fields.filename
        if fields.language:
            label = f"{label} • {fields.language}"
        figcaption = f'<figcaption class="pt-code__caption">{_escape(label)}</figcaption>'

    language_attr = f' data-language="{_escape(fields.language)}"' if fields.language else ""

    return (
        f'<figure class="pt-code">{figcaption}'
        f"<pre><code{language_attr}>{_escape(fields.code)}</code></pre>"
        f"</figure>"
    )


def render_callout(
    value: Any,
    config: PortableTextConfig = DEFAULT_CONFIG,
) -> str | None:
    """Render a callout/note/alert/admonition block."""
    fields = get_callout_fields(value, config)
    if not fields.title and not fields.body:
        return None

    tone = get_callout_tone(fields.tone)
    label = fields.title or "Callout"

    parts: list[str] = []
    if fields.title:
        parts.append(f'<p class="pt-callout__title">{_escape(fields.title)}</p>')
    if fields.body:
        parts.append(f'<p class="pt-callout__body">{_escape(fields.body)}</p>')

    return (
        f'<aside role="note" aria-label="{_escape(label)}" '
        f'class="pt-callout pt-callout--{tone}">{"".join(parts)}</aside>'
    )


def render_embed(
    value: Any,
    config: PortableTextConfig = DEFAULT_CONFIG,
) -> str | None:
    """Render an embed block as an iframe, or a hardened link when not embeddable."""
    embed_url = get_embed_url(value, config)
    if not embed_url or not is_safe_href(embed_url, config):
        return None

    title = get_embed_title(value, config)
    iframe_url = to_embeddable_url(embed_url, config.video_providers)

    if not iframe_url:
        anchor = render_anchor(embed_url, _escape(title), external=True, config=config)
        return f'<div class="pt-embed pt-embed--link">{anchor}</div>'

    return (
        '<figure class="pt-embed">'
        '<div class="pt-embed__frame">'
        f'<iframe src="{_escape(iframe_url)}" title="{_escape(title)}" loading="lazy" '
        f'allow="{_escape(config.iframe_allow)}" allowfullscreen></iframe>'
        "</div>"
        f'<figcaption class="pt-embed__caption">{_escape(title)}</figcaption>'
        "</figure>"
    )


def render_reference_block(
    value: Any,
    config: PortableTextConfig = DEFAULT_CONFIG,
) -> str | None:
    """Render an internal reference block as a card link."""
    href = resolve_internal_href(value, config)
    if not href:
        return None

    label = get_reference_title(value) or href
    anchor = render_anchor(href, _escape(label), external=False, config=config)
    return f'<div class="pt-reference">{anchor}</div>'


# --- Mark Renderers ---


def render_link_mark(
    children: str | None,
    value: Any,
    config: PortableTextConfig = DEFAULT_CONFIG,
) -> str | None:
    """Wrap children in a link when the href is safe; otherwise leave them unlinked."""
    href = get_string(value, "href")
    if not href or not is_safe_href(href, config):
        return children

    return render_anchor(href, children, config=config)


def render_internal_link_mark(
    children: str | None,
    value: Any,
    config: PortableTextConfig = DEFAULT_CONFIG,
) -> str | None:
    """Wrap children in an internal link when the reference resolves."""
    href = resolve_internal_href(value, config)
    if not href:
        return children

    return render_anchor(href, children, external=False, config=config)


def render_code_mark(children: str | None, value: Any = None) -> str:
    """Inline code."""
    return f'<code class="pt-inline-code">{children or ""}</code>'


def _decorator_renderer(tag: str) -> MarkRenderer:
    def render(children: str | None, value: Any = None) -> str:
        return f"<{tag}>{children or ''}</{tag}>"

    return render


# --- Registry ---


@dataclass
class PortableTextComponents:
    """
    Block and mark renderer lookup tables.

    Adding a block or mark type is purely additive: register a renderer under
    one or more names.
    """

    types: dict[str, BlockRenderer] = field(default_factory=dict)
    marks: dict[str, MarkRenderer] = field(default_factory=dict)

    def register_block_renderer(self, renderer: BlockRenderer, *type_names: str) -> None:
        """Register one renderer under every given block type name."""
        for type_name in type_names:
            self.types[type_name] = renderer

    def register_mark_renderer(self, renderer: MarkRenderer, *mark_names: str) -> None:
        """Register one renderer under every given mark type name."""
        for mark_name in mark_names:
            self.marks[mark_name] = renderer


def create_portable_text_components(
    options: RendererOptions | None = None,
    config: PortableTextConfig = DEFAULT_CONFIG,
) -> PortableTextComponents:
    """
    Create the default renderer tables for article content.

    Args:
        options: Caller options; ``fallback_image_alt`` fills missing image alt text.
        config: Rendering configuration.

    Returns:
        PortableTextComponents with ``types`` and ``marks`` tables.
    """
    fallback_image_alt = (options or RendererOptions()).fallback_image_alt

    def image(value: Any) -> str | None:
        return render_image(value, fallback_image_alt, config)

    def code(value: Any) -> str | None:
        return render_code_block(value, config)

    def callout(value: Any) -> str | None:
        return render_callout(value, config)

    def embed(value: Any) -> str | None:
        return render_embed(value, config)

    def reference(value: Any) -> str | None:
        return render_reference_block(value, config)

    def link(children: str | None, value: Any) -> str | None:
        return render_link_mark(children, value, config)

    def internal_link(children: str | None, value: Any) -> str | None:
        return render_internal_link_mark(children, value, config)

    components = PortableTextComponents()

    components.register_block_renderer(image, "image")
    components.register_block_renderer(code, "code")
    components.register_block_renderer(callout, *CALLOUT_BLOCK_TYPES)
    components.register_block_renderer(embed, *EMBED_BLOCK_TYPES)
    components.register_block_renderer(reference, *REFERENCE_BLOCK_TYPES)

    components.register_mark_renderer(link, "link")
    components.register_mark_renderer(internal_link, *INTERNAL_LINK_MARK_TYPES)
    components.register_mark_renderer(render_code_mark, "code")
    for name, tag in DECORATOR_TAGS.items():
        components.register_mark_renderer(_decorator_renderer(tag), name)

    return components


# --- Driver ---


def _index_mark_defs(node: Any) -> dict[str, Any]:
    mark_defs = get_record_value(node, "markDefs")
    if not isinstance(mark_defs, list):
        return {}

    indexed: dict[str, Any] = {}
    for definition in mark_defs:
        key = get_node_key(definition)
        if key and key not in indexed:
            indexed[key] = definition
    return indexed


def _get_list(node: Any, key: str) -> list[Any]:
    value = get_record_value(node, key)
    return value if isinstance(value, list) else []


class PortableTextRenderer:
    """
    Walks Portable Text nodes in document order and dispatches to the registry.
    """

    def __init__(
        self,
        components: PortableTextComponents | None = None,
        config: PortableTextConfig = DEFAULT_CONFIG,
        options: RendererOptions | None = None,
    ) -> None:
        """Initialize renderer."""
        self._config = config
        self._components = components or create_portable_text_components(options, config)

    @property
    def components(self) -> PortableTextComponents:
        return self._components

    def render(self, blocks: Any) -> str:
        """Render a body to HTML, grouping consecutive list items."""
        return join_rendered_blocks(self.render_blocks(blocks))

    def render_blocks(self, blocks: Any) -> list[RenderedBlock]:
        """Render every top-level node, recording its disposition."""
        if not isinstance(blocks, list):
            return []
        return [self.render_block(node) for node in blocks]

    def render_block(self, node: Any) -> RenderedBlock:
        """Render a single top-level node."""
        key = get_node_key(node)
        node_type = get_node_type(node)

        if not is_record(node) or not node_type:
            logger.debug("Skipping untyped node (key=%r)", key)
            return RenderedBlock(key=key, type=node_type, disposition=Disposition.PASSTHROUGH)

        renderer = self._components.types.get(node_type)
        if renderer is not None:
            output = self._call_block_renderer(renderer, node, node_type, key)
            if output is None:
                logger.debug("Suppressed %r block (key=%r)", node_type, key)
                return RenderedBlock(key=key, type=node_type, disposition=Disposition.SUPPRESSED)
            return RenderedBlock(
                key=key, type=node_type, disposition=Disposition.RENDERED, html=output
            )

        if node_type == TEXT_BLOCK_TYPE:
            return self._render_text_block(node, key)

        logger.debug("No renderer registered for block type %r (key=%r)", node_type, key)
        return RenderedBlock(key=key, type=node_type, disposition=Disposition.PASSTHROUGH)

    def render_span(self, span: Any, mark_defs: dict[str, Any]) -> str:
        """Render span text and compose its marks around it; the first mark is outermost."""
        text = get_record_value(span, "text")
        if not isinstance(text, str):
            return ""

        content: str | None = _escape(text)

        for mark_name in reversed(_get_list(span, "marks")):
            if not isinstance(mark_name, str):
                continue

            definition = mark_defs.get(mark_name)
            if definition is not None:
                mark_type = get_node_type(definition)
                value = definition
            else:
                mark_type = mark_name
                value = None

            renderer = self._components.marks.get(mark_type or "")
            if renderer is None:
                logger.debug("No renderer registered for mark %r", mark_type)
                continue

            output = self._call_mark_renderer(renderer, content, value, mark_type)
            if output is not None:
                content = output

        return content or ""

    def _render_text_block(self, node: Any, key: str | None) -> RenderedBlock:
        mark_defs = _index_mark_defs(node)
        parts: list[str] = []

        for child in _get_list(node, "children"):
            child_type = get_node_type(child)
            if child_type in (None, SPAN_TYPE):
                parts.append(self.render_span(child, mark_defs))
                continue

            # Inline objects reuse the block renderers
            renderer = self._components.types.get(child_type)
            if renderer is not None:
                output = self._call_block_renderer(renderer, child, child_type, get_node_key(child))
                if output is not None:
                    parts.append(output)

        content = "".join(parts)

        list_item = get_string(node, "listItem")
        if list_item:
            return RenderedBlock(
                key=key,
                type=TEXT_BLOCK_TYPE,
                disposition=Disposition.RENDERED,
                html=f"<li>{content}</li>",
                list_kind=LIST_TAGS.get(list_item, "ul"),
            )

        tag = STYLE_TAGS.get(get_string(node, "style") or "normal", "p")
        return RenderedBlock(
            key=key,
            type=TEXT_BLOCK_TYPE,
            disposition=Disposition.RENDERED,
            html=f"<{tag}>{content}</{tag}>",
        )

    def _call_block_renderer(
        self,
        renderer: BlockRenderer,
        node: Any,
        node_type: str,
        key: str | None,
    ) -> str | None:
        try:
            return renderer(node)
        except Exception:
            logger.warning(
                "Renderer for %r block failed (key=%r); node suppressed",
                node_type,
                key,
                exc_info=True,
            )
            return None

    def _call_mark_renderer(
        self,
        renderer: MarkRenderer,
        children: str | None,
        value: Any,
        mark_type: str | None,
    ) -> str | None:
        try:
            return renderer(children, value)
        except Exception:
            logger.warning(
                "Renderer for %r mark failed; children left unmarked",
                mark_type,
                exc_info=True,
            )
            return None


def join_rendered_blocks(rendered: Iterable[RenderedBlock]) -> str:
    """Concatenate rendered blocks, wrapping runs of list items in their container."""
    parts: list[str] = []
    open_list: str | None = None

    for block in rendered:
        if block.html is None:
            continue

        if block.list_kind != open_list:
            if open_list:
                parts.append(f"</{open_list}>")
            if block.list_kind:
                parts.append(f"<{block.list_kind}>")
            open_list = block.list_kind

        parts.append(block.html)

    if open_list:
        parts.append(f"</{open_list}>")

    return "".join(parts)


# --- Plain Text ---


def extract_plain_text(blocks: Any) -> str:
    """Extract plain text from text blocks; custom blocks contribute nothing."""
    if not isinstance(blocks, list):
        return ""

    paragraphs: list[str] = []
    for node in blocks:
        if get_node_type(node) != TEXT_BLOCK_TYPE:
            continue
        text = "".join(
            child["text"]
            for child in _get_list(node, "children")
            if is_record(child) and isinstance(child.get("text"), str)
        )
        if text:
            paragraphs.append(text)

    return "\n\n".join(paragraphs)


# --- Convenience ---


def render_portable_text(
    blocks: Any,
    components: PortableTextComponents | None = None,
    config: PortableTextConfig = DEFAULT_CONFIG,
    options: RendererOptions | None = None,
) -> str:
    """Render a Portable Text body to HTML."""
    return PortableTextRenderer(components=components, config=config, options=options).render(
        blocks
    )


def create_portable_text_renderer(
    config: PortableTextConfig | None = None,
    options: RendererOptions | None = None,
) -> PortableTextRenderer:
    """Create a PortableTextRenderer."""
    return PortableTextRenderer(config=config or DEFAULT_CONFIG, options=options)
