"""Tests for portfoliocms.render.document and render.blocks."""

from __future__ import annotations

import json

import pytest

from portfoliocms.render.blocks import (
    BlockType,
    MalformedDocument,
    decode_document,
    extract_blocks,
    is_safe_url,
)
from portfoliocms.render.content import _BODY_RENDERERS
from portfoliocms.render.document import _RENDERERS, PLACEHOLDER, render_block, render_document
from portfoliocms.storage.models import ContentType


def _one(block_type: str, **data) -> str:
    return render_document([{"type": block_type, "data": data}])


class TestDecodeDocument:
    def test_accepts_list_and_wrapper(self):
        blocks = [{"type": "delimiter", "data": {}}]
        assert extract_blocks(blocks) == blocks
        assert extract_blocks({"time": 1, "blocks": blocks}) == blocks

    def test_decodes_json_text_and_bytes(self):
        text = json.dumps({"blocks": [{"type": "paragraph", "data": {"text": "x"}}]})
        assert decode_document(text)[0]["type"] == "paragraph"
        assert decode_document(text.encode())[0]["type"] == "paragraph"

    def test_wrong_shape_raises(self):
        with pytest.raises(MalformedDocument):
            decode_document('{"time": 1}')
        with pytest.raises(MalformedDocument):
            decode_document("42")
        with pytest.raises(MalformedDocument):
            decode_document("   ")

    def test_non_json_raises_decode_error(self):
        with pytest.raises(json.JSONDecodeError):
            decode_document("just some words")


class TestIsSafeUrl:
    @pytest.mark.parametrize("url", [
        "https://example.com/a.jpg",
        "http://example.com",
        "//cdn.example.com/a.jpg",
    ])
    def test_allowed(self, url):
        assert is_safe_url(url)

    @pytest.mark.parametrize("url", [
        "javascript:alert(1)",
        "data:text/html;base64,xx",
        "/relative.jpg",
        "",
        None,
        "///x",
        "https://",
    ])
    def test_rejected(self, url):
        assert not is_safe_url(url)


class TestRenderDocument:
    def test_header_and_blank_paragraph(self):
        doc = {"blocks": [
            {"type": "header", "data": {"text": "Hi", "level": 1}},
            {"type": "paragraph", "data": {"text": ""}},
        ]}
        assert render_document(doc) == "<h1>Hi</h1>"

    def test_blocks_concatenated_in_order(self):
        doc = json.dumps([
            {"type": "paragraph", "data": {"text": "One"}},
            {"type": "delimiter", "data": {}},
            {"type": "paragraph", "data": {"text": "Two"}},
        ])
        assert render_document(doc) == (
            '<p>One</p><div class="editor-delimiter">* * *</div><p>Two</p>'
        )

    def test_inline_markup_preserved(self):
        assert _one("paragraph", text="A <b>bold</b> <a href=\"https://x.com\">link</a>") == (
            '<p>A <b>bold</b> <a href="https://x.com">link</a></p>'
        )

    def test_none_gives_placeholder(self):
        assert render_document(None) == PLACEHOLDER

    def test_wrong_shape_gives_placeholder(self):
        assert render_document('{"time": 1}') == PLACEHOLDER
        assert render_document("") == PLACEHOLDER

    def test_plain_text_fallback_escaped(self):
        assert render_document("Line <one>\n\n  Line two  ") == (
            "<p>Line &lt;one&gt;</p><p>Line two</p>"
        )

    def test_empty_list_renders_nothing(self):
        assert render_document("[]") == ""

    def test_unknown_and_malformed_blocks_skipped(self):
        doc = [
            {"type": "table", "data": {"content": [["a"]]}},
            "not a block",
            {"data": {"text": "no type"}},
            {"type": "paragraph", "data": {"text": "kept"}},
        ]
        assert render_document(doc) == "<p>kept</p>"

    def test_missing_data_is_empty(self):
        assert render_block({"type": "paragraph"}) == ""
        assert render_block({"type": "header", "data": "nope"}) == "<h2></h2>"

    def test_deeply_nested_json_gives_placeholder(self):
        assert render_document("[" * 100000) == PLACEHOLDER
        assert render_document('{"blocks": ' + "[" * 100000) == PLACEHOLDER

    def test_deeply_nested_list_items_give_placeholder(self):
        item = {"content": "leaf", "items": []}
        for _ in range(5000):
            item = {"content": "x", "items": [item]}
        doc = [{"type": "list", "data": {"style": "unordered", "items": [item]}}]
        assert render_document(doc) == PLACEHOLDER


class TestHeader:
    @pytest.mark.parametrize("level,tag", [
        (1, "h1"), (6, "h6"), ("3", "h3"), (0, "h2"), (7, "h2"), ("big", "h2"), (None, "h2"),
    ])
    def test_levels(self, level, tag):
        assert _one("header", text="T", level=level) == f"<{tag}>T</{tag}>"

    def test_default_level(self):
        assert _one("header", text="T") == "<h2>T</h2>"


class TestList:
    def test_unordered_strings(self):
        assert _one("list", style="unordered", items=["a", "b"]) == "<ul><li>a</li><li>b</li></ul>"

    def test_ordered(self):
        assert _one("list", style="ordered", items=["a"]) == "<ol><li>a</li></ol>"

    def test_nested_items(self):
        items = [
            {"content": "parent", "items": [{"content": "child", "items": []}]},
            {"content": "sibling", "items": []},
        ]
        assert _one("list", style="unordered", items=items) == (
            "<ul><li>parent<ul><li>child</li></ul></li><li>sibling</li></ul>"
        )

    def test_empty_list(self):
        assert _one("list", style="ordered", items=[]) == ""
        assert _one("list", style="ordered") == ""

    def test_empty_items_skipped(self):
        items = [
            "",
            "a",
            {"content": "", "items": [{"content": "orphan", "items": []}]},
            {"content": None, "items": []},
            {"content": "b", "items": []},
        ]
        assert _one("list", style="unordered", items=items) == "<ul><li>a</li><li>b</li></ul>"


class TestQuote:
    def test_with_caption(self):
        assert _one("quote", text="Be brief.", caption="A <Writer>", alignment="center") == (
            '<blockquote class="editor-quote editor-quote-center">'
            "<p>Be brief.</p><cite>A &lt;Writer&gt;</cite></blockquote>"
        )

    def test_without_caption_and_bad_alignment(self):
        assert _one("quote", text="Q", alignment="right") == (
            '<blockquote class="editor-quote editor-quote-left"><p>Q</p></blockquote>'
        )


class TestCode:
    def test_escaped(self):
        assert _one("code", code="if a < b:\n    print('<x>')") == (
            "<pre><code>if a &lt; b:\n    print(&#x27;&lt;x&gt;&#x27;)</code></pre>"
        )


class TestEmbed:
    def test_iframe_with_caption(self):
        html = _one(
            "embed",
            service="youtube",
            embed="https://www.youtube.com/embed/abc",
            caption="Talk & Q",
        )
        assert html == (
            '<div class="editor-embed">'
            '<iframe src="https://www.youtube.com/embed/abc" title="youtube" '
            'frameborder="0" allowfullscreen></iframe>'
            '<p class="embed-caption">Talk &amp; Q</p></div>'
        )

    def test_unsafe_url_dropped(self):
        assert _one("embed", service="x", embed="javascript:alert(1)") == ""


class TestImage:
    def test_flags_and_caption(self):
        html = _one(
            "image",
            file={"url": "https://images.example.com/a.jpg"},
            caption='Harbour "at" dawn',
            withBorder=True,
            stretched=True,
            withBackground=False,
        )
        assert html == (
            '<figure class="editor-image editor-image-border editor-image-stretched">'
            '<img src="https://images.example.com/a.jpg" alt="Harbour &quot;at&quot; dawn" loading="lazy">'
            "<figcaption>Harbour &quot;at&quot; dawn</figcaption></figure>"
        )

    def test_plain_url_field_and_no_caption(self):
        assert _one("image", url="https://e.com/b.png") == (
            '<figure class="editor-image">'
            '<img src="https://e.com/b.png" alt="" loading="lazy"></figure>'
        )

    def test_unsafe_url_dropped(self):
        assert _one("image", file={"url": "data:image/png;base64,AAAA"}) == ""
        assert _one("image", file={}) == ""


class TestDispatchTables:
    def test_every_block_type_has_a_renderer(self):
        assert set(_RENDERERS) == set(BlockType)

    def test_every_content_type_has_a_body(self):
        assert set(_BODY_RENDERERS) == set(ContentType)


MIXED_DOCUMENT = [
    {"type": "header", "data": {"text": "Notes", "level": 3}},
    {"type": "paragraph", "data": {"text": "Some <i>text</i>."}},
    {"type": "list", "data": {"style": "ordered", "items": ["one", {"content": "two", "items": []}]}},
    {"type": "quote", "data": {"text": "Q", "caption": "C", "alignment": "center"}},
    {"type": "delimiter", "data": {}},
    {"type": "code", "data": {"code": "x < 1"}},
    {"type": "embed", "data": {"service": "vimeo", "embed": "https://player.vimeo.com/video/1"}},
    {"type": "image", "data": {"file": {"url": "https://e.com/a.jpg"}, "caption": "A", "withBorder": True}},
    {"type": "table", "data": {"content": [["a"]]}},
]


class TestRepeatableOutput:
    def test_same_input_same_html(self):
        as_text = json.dumps({"blocks": MIXED_DOCUMENT})
        first = render_document(as_text)
        assert render_document(as_text) == first
        assert render_document(MIXED_DOCUMENT) == first
        assert render_document(MIXED_DOCUMENT) == first

    def test_every_block_type_present(self):
        html = render_document(MIXED_DOCUMENT)
        for fragment in ("<h3>", "<p>Some", "<ol>", "<blockquote", "editor-delimiter",
                         "<pre><code>", "<iframe", "<figure"):
            assert fragment in html
        assert "table" not in html
