"""
Tests for the Portable Text block and mark renderer registry.

Covers:
- Image, code, callout, embed and reference block renderers
- Link, internal link, inline code and decorator marks
- Alias registration and registry extension
- Suppression of unusable nodes
"""

from __future__ import annotations

import copy

import pytest

from folio.components.portable_text import (
    CALLOUT_BLOCK_TYPES,
    EMBED_BLOCK_TYPES,
    INTERNAL_LINK_MARK_TYPES,
    PortableTextComponents,
    RendererOptions,
    create_portable_text_components,
    get_callout_tone,
    get_code_block_fields,
    render_anchor,
)

IMAGE_URL = "https://cdn.sanity.io/images/demo/production/example.jpg"


@pytest.fixture
def components() -> PortableTextComponents:
    return create_portable_text_components(
        RendererOptions(fallback_image_alt="Fallback article title")
    )


class TestImageRenderer:
    def test_renders_with_own_alt_and_dimensions(self, components) -> None:
        html = components.types["image"](
            {
                "_key": "image-1",
                "_type": "image",
                "alt": "Inline image caption",
                "asset": {"url": IMAGE_URL, "width": 1200, "height": 800},
            }
        )

        assert html is not None
        assert f'src="{IMAGE_URL}"' in html
        assert 'alt="Inline image caption"' in html
        assert 'width="1200"' in html
        assert 'height="800"' in html
        assert 'loading="lazy"' in html
        assert '<figcaption class="pt-image__caption">Inline image caption</figcaption>' in html

    def test_fallback_alt_and_default_dimensions(self, components) -> None:
        html = components.types["image"]({"_type": "image", "asset": {"url": IMAGE_URL}})

        assert html is not None
        assert 'alt="Fallback article title"' in html
        assert 'width="1600"' in html
        assert 'height="900"' in html
        assert "<figcaption" not in html

    def test_default_alt_without_options(self) -> None:
        components = create_portable_text_components()
        html = components.types["image"]({"_type": "image", "asset": {"url": IMAGE_URL}})

        assert 'alt="Article image"' in html

    def test_alt_is_escaped(self, components) -> None:
        html = components.types["image"](
            {"_type": "image", "alt": 'Say "hi" <b>', "asset": {"url": IMAGE_URL}}
        )

        assert 'alt="Say &quot;hi&quot; &lt;b&gt;"' in html

    @pytest.mark.parametrize(
        "url", ["images/photo.jpg", "/media/photo.jpg", "data:image/png;base64,iVBORw0KGgo="]
    )
    def test_relative_and_inline_sources_render(self, components, url) -> None:
        html = components.types["image"]({"_type": "image", "asset": {"url": url}})

        assert html is not None
        assert f'src="{url}"' in html

    @pytest.mark.parametrize(
        "value",
        [
            {"_type": "image"},
            {"_type": "image", "asset": {}},
            {"_type": "image", "asset": {"url": "   "}},
            {"_type": "image", "asset": {"url": "javascript:alert(1)"}},
            {"_type": "image", "asset": {"url": "vbscript:msgbox(1)"}},
            {"_type": "image", "asset": {"url": "data:text/html,<b>hi</b>"}},
            {"_type": "picture", "asset": {"url": IMAGE_URL}},
            "image",
        ],
    )
    def test_suppressed(self, components, value) -> None:
        assert components.types["image"](value) is None


class TestCodeRenderer:
    def test_caption_with_language(self, components) -> None:
        html = components.types["code"](
            {
                "_type": "code",
                "code": "console.log('hello')",
                "language": "ts",
                "filename": "example.ts",
            }
        )

        assert '<figcaption class="pt-code__caption">example.ts • ts</figcaption>' in html
        assert 'data-language="ts"' in html
        assert "console.log(&#x27;hello&#x27;)" in html

    def test_title_used_as_filename(self, components) -> None:
        html = components.types["code"]({"_type": "code", "code": "x = 1", "title": "snippet.py"})

        assert '<figcaption class="pt-code__caption">snippet.py</figcaption>' in html
        assert "data-language" not in html

    def test_no_caption_without_filename(self, components) -> None:
        html = components.types["code"]({"_type": "code", "code": "x", "language": "py"})

        assert html == (
            '<figure class="pt-code"><pre><code data-language="py">x</code></pre></figure>'
        )

    def test_code_is_escaped(self, components) -> None:
        html = components.types["code"]({"_type": "code", "code": "<script>alert(1)</script>"})

        assert "&lt;script&gt;" in html
        assert "<script>" not in html

    @pytest.mark.parametrize("code", [None, "", "   ", 42])
    def test_suppressed_without_code(self, components, code) -> None:
        assert components.types["code"]({"_type": "code", "code": code}) is None

    def test_field_extraction(self) -> None:
        fields = get_code_block_fields({"code": " x ", "language": " py "})
        assert fields.code == "x"
        assert fields.language == "py"
        assert fields.filename is None


class TestCalloutRenderer:
    def test_aliases_share_renderer(self, components) -> None:
        renderers = {components.types[name] for name in CALLOUT_BLOCK_TYPES}
        assert len(renderers) == 1

    def test_title_body_and_tone(self, components) -> None:
        html = components.types["callout"](
            {"_type": "callout", "title": "Heads up", "body": "Mind the gap", "tone": "warning"}
        )

        assert html == (
            '<aside role="note" aria-label="Heads up" class="pt-callout pt-callout--warning">'
            '<p class="pt-callout__title">Heads up</p>'
            '<p class="pt-callout__body">Mind the gap</p>'
            "</aside>"
        )

    def test_field_synonyms(self, components) -> None:
        html = components.types["note"](
            {"_type": "note", "heading": "Done", "message": "It worked", "variant": "success"}
        )

        assert "pt-callout--success" in html
        assert '<p class="pt-callout__title">Done</p>' in html
        assert '<p class="pt-callout__body">It worked</p>' in html

    def test_body_only_uses_generic_label(self, components) -> None:
        html = components.types["admonition"]({"_type": "admonition", "content": "Just text"})

        assert 'aria-label="Callout"' in html
        assert "pt-callout__title" not in html
        assert "pt-callout--info" in html

    @pytest.mark.parametrize(
        "value",
        [
            {"_type": "callout", "tone": "warning"},
            {"_type": "alert", "title": "  ", "body": ""},
        ],
    )
    def test_suppressed_without_text(self, components, value) -> None:
        assert components.types[value["_type"]](value) is None

    @pytest.mark.parametrize(
        ("tone", "expected"),
        [
            ("success", "success"),
            ("SUCCESS", "success"),
            ("warning", "warning"),
            ("error", "error"),
            ("Danger", "error"),
            ("info", "info"),
            ("mystery", "info"),
            (None, "info"),
        ],
    )
    def test_tone_mapping(self, tone, expected) -> None:
        assert get_callout_tone(tone) == expected


class TestEmbedRenderer:
    def test_aliases_share_renderer(self, components) -> None:
        renderers = {components.types[name] for name in EMBED_BLOCK_TYPES}
        assert len(renderers) == 1

    def test_youtube_iframe(self, components) -> None:
        html = components.types["embed"](
            {"_type": "embed", "url": "https://youtu.be/dQw4w9WgXcQ", "title": "Demo video"}
        )

        assert '<iframe src="https://www.youtube.com/embed/dQw4w9WgXcQ"' in html
        assert 'title="Demo video"' in html
        assert "allowfullscreen" in html
        assert '<figcaption class="pt-embed__caption">Demo video</figcaption>' in html

    def test_src_synonym(self, components) -> None:
        html = components.types["videoEmbed"](
            {"_type": "videoEmbed", "src": "https://vimeo.com/76979871"}
        )

        assert 'src="https://player.vimeo.com/video/76979871"' in html
        assert 'title="Embedded content"' in html

    def test_non_embeddable_falls_back_to_link(self, components) -> None:
        html = components.types["embed"]({"_type": "embed", "url": "https://example.com/talk"})

        assert html == (
            '<div class="pt-embed pt-embed--link">'
            '<a href="https://example.com/talk" target="_blank" rel="noopener noreferrer" '
            'class="pt-link">Embedded content</a>'
            "</div>"
        )
        assert "<iframe" not in html

    @pytest.mark.parametrize(
        "value",
        [
            {"_type": "embed"},
            {"_type": "embed", "url": "   "},
            {"_type": "embed", "url": "javascript:alert(1)"},
            {"_type": "youtube", "href": "data:text/html,hi"},
        ],
    )
    def test_suppressed(self, components, value) -> None:
        assert components.types[value["_type"]](value) is None


class TestReferenceRenderer:
    def test_document_reference(self, components) -> None:
        html = components.types["reference"](
            {
                "_type": "reference",
                "document": {
                    "_type": "article",
                    "title": "Referenced article",
                    "slug": {"current": "referenced-article"},
                },
            }
        )

        assert html == (
            '<div class="pt-reference">'
            '<a href="/articles/referenced-article" class="pt-link">Referenced article</a>'
            "</div>"
        )

    def test_label_falls_back_to_href(self, components) -> None:
        html = components.types["internalReference"](
            {"_type": "internalReference", "slug": {"current": "about"}}
        )

        assert '<a href="/about" class="pt-link">/about</a>' in html

    def test_unresolvable_is_suppressed(self, components) -> None:
        assert components.types["reference"]({"_type": "reference", "title": "Lost"}) is None


class TestMarkRenderers:
    def test_external_link(self, components) -> None:
        html = components.marks["link"](
            "External link", {"_type": "link", "href": "https://example.com/docs"}
        )

        assert html == (
            '<a href="https://example.com/docs" target="_blank" rel="noopener noreferrer" '
            'class="pt-link">External link</a>'
        )

    def test_internal_link(self, components) -> None:
        html = components.marks["link"]("About", {"_type": "link", "href": "/about"})

        assert html == '<a href="/about" class="pt-link">About</a>'

    def test_mailto_is_not_hardened(self, components) -> None:
        html = components.marks["link"]("Mail", {"_type": "link", "href": "mailto:a@example.com"})

        assert html == '<a href="mailto:a@example.com" class="pt-link">Mail</a>'

    def test_unsafe_link_keeps_text(self, components) -> None:
        html = components.marks["link"](
            "Unsafe link", {"_type": "link", "href": "javascript:alert(1)"}
        )

        assert html == "Unsafe link"

    def test_missing_href_keeps_text(self, components) -> None:
        assert components.marks["link"]("Text", {"_type": "link"}) == "Text"
        assert components.marks["link"]("Text", None) == "Text"

    def test_href_is_escaped(self, components) -> None:
        html = components.marks["link"]("q", {"href": 'https://example.com/?q="x"&y=1'})

        assert 'href="https://example.com/?q=&quot;x&quot;&amp;y=1"' in html

    def test_internal_link_mark(self, components) -> None:
        renderers = {components.marks[name] for name in INTERNAL_LINK_MARK_TYPES}
        assert len(renderers) == 1

        html = components.marks["internalLink"](
            "Related article",
            {"_type": "internalLink", "documentType": "article", "slug": {"current": "deep-dive"}},
        )

        assert html == '<a href="/articles/deep-dive" class="pt-link">Related article</a>'

    def test_unresolvable_internal_link_keeps_text(self, components) -> None:
        assert components.marks["internalLink"]("Text", {"_type": "internalLink"}) == "Text"

    def test_inline_code(self, components) -> None:
        assert components.marks["code"]("x", None) == '<code class="pt-inline-code">x</code>'
        assert components.marks["code"](None, None) == '<code class="pt-inline-code"></code>'

    @pytest.mark.parametrize(
        ("mark", "tag"),
        [("strong", "strong"), ("em", "em"), ("underline", "u"), ("strike-through", "s")],
    )
    def test_decorators(self, components, mark, tag) -> None:
        assert components.marks[mark]("hi", None) == f"<{tag}>hi</{tag}>"

    def test_anchor_external_override(self) -> None:
        assert render_anchor("https://example.com", "x", external=False) == (
            '<a href="https://example.com" class="pt-link">x</a>'
        )


class TestRegistry:
    def test_register_block_renderer_under_many_names(self, components) -> None:
        def divider(value):
            return "<hr />"

        components.register_block_renderer(divider, "divider", "break")

        assert components.types["divider"] is divider
        assert components.types["break"] is divider

    def test_register_mark_renderer(self, components) -> None:
        def highlight(children, value):
            return f"<mark>{children}</mark>"

        components.register_mark_renderer(highlight, "highlight")

        assert components.marks["highlight"]("x", None) == "<mark>x</mark>"

    def test_rendering_is_idempotent_and_pure(self, components) -> None:
        value = {
            "_type": "callout",
            "title": "Heads up",
            "body": "Twice",
            "tone": "warning",
        }
        snapshot = copy.deepcopy(value)

        first = components.types["callout"](value)
        second = components.types["callout"](value)

        assert first == second
        assert value == snapshot
