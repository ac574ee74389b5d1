"""Render block-list documents to HTML.

Inline rich text produced by the editor (paragraph, header, list and quote
text) is inserted as-is. Captions, alt text, code and embed service names
are escaped, and URLs must be http(s) or protocol-relative.
"""

from __future__ import annotations

import html as html_mod
import json
import logging
from collections.abc import Mapping

from portfoliocms.render.blocks import (
    BlockType,
    MalformedDocument,
    block_data,
    decode_document,
    is_safe_url,
)

log = logging.getLogger(__name__)

PLACEHOLDER = "<p>Content could not be loaded.</p>"

QUOTE_ALIGNMENTS = ("left", "center")


def render_document(value) -> str:
    """Render a stored document to HTML. Never raises."""
    if value is None:
        return PLACEHOLDER
    try:
        blocks = decode_document(value)
    except json.JSONDecodeError:
        # Legacy content saved before the editor: plain text
        return render_plain_text(value)
    except MalformedDocument as e:
        log.warning("Cannot render document: %s", e)
        return PLACEHOLDER
    except RecursionError:
        log.warning("Cannot render document: nested too deeply")
        return PLACEHOLDER

    try:
        return "".join(render_block(block) for block in blocks)
    except RecursionError:
        log.warning("Cannot render document: list nested too deeply")
        return PLACEHOLDER


def render_plain_text(text: str) -> str:
    """One escaped paragraph per non-blank line."""
    if isinstance(text, (bytes, bytearray)):
        text = text.decode("utf-8", errors="replace")
    return "".join(
        f"<p>{html_mod.escape(line.strip())}</p>"
        for line in text.splitlines()
        if line.strip()
    )


def render_block(block) -> str:
    if not isinstance(block, Mapping):
        log.warning("Skipping block that is not an object: %r", block)
        return ""

    tag = block.get("type")
    try:
        block_type = BlockType(tag)
    except ValueError:
        log.warning("Unknown block type: %s", tag)
        return ""

    try:
        return _RENDERERS[block_type](block_data(block))
    except Exception:
        log.warning("Failed to render %s block", block_type.value, exc_info=True)
        return ""


def _text(data: Mapping, key: str = "text") -> str:
    value = data.get(key)
    if value is None:
        return ""
    return str(value)


# ── Block renderers ────────────────────────────────────────────────


def _render_paragraph(data: Mapping) -> str:
    text = _text(data)
    if not text.strip():
        return ""
    return f"<p>{text}</p>"


def _render_header(data: Mapping) -> str:
    try:
        level = int(data.get("level", 2))
    except (TypeError, ValueError):
        level = 2
    if not 1 <= level <= 6:
        level = 2
    return f"<h{level}>{_text(data)}</h{level}>"


def _render_list_items(items: list, tag: str) -> str:
    parts = []
    for item in items:
        if isinstance(item, str):
            if item:
                parts.append(f"<li>{item}</li>")
        elif isinstance(item, Mapping) and item.get("content"):
            nested = item.get("items")
            inner = ""
            if isinstance(nested, list) and nested:
                inner = f"<{tag}>{_render_list_items(nested, tag)}</{tag}>"
            parts.append(f"<li>{item['content']}{inner}</li>")
    return "".join(parts)


def _render_list(data: Mapping) -> str:
    items = data.get("items")
    if not isinstance(items, list) or not items:
        return ""
    tag = "ol" if data.get("style") == "ordered" else "ul"
    return f"<{tag}>{_render_list_items(items, tag)}</{tag}>"


def _render_quote(data: Mapping) -> str:
    alignment = data.get("alignment")
    if alignment not in QUOTE_ALIGNMENTS:
        alignment = "left"
    caption = _text(data, "caption")
    cite = f"<cite>{html_mod.escape(caption)}</cite>" if caption else ""
    return (
        f'<blockquote class="editor-quote editor-quote-{alignment}">'
        f"<p>{_text(data)}</p>{cite}</blockquote>"
    )


def _render_delimiter(data: Mapping) -> str:
    return '<div class="editor-delimiter">* * *</div>'


def _render_code(data: Mapping) -> str:
    return f"<pre><code>{html_mod.escape(_text(data, 'code'))}</code></pre>"


def _render_embed(data: Mapping) -> str:
    url = data.get("embed")
    if not is_safe_url(url):
        if url:
            log.warning("Dropping embed with unsupported URL: %s", url)
        return ""

    service = _text(data, "service")
    title = f' title="{html_mod.escape(service)}"' if service else ""
    caption = _text(data, "caption")
    caption_html = (
        f'<p class="embed-caption">{html_mod.escape(caption)}</p>' if caption else ""
    )
    return (
        f'<div class="editor-embed">'
        f'<iframe src="{html_mod.escape(url.strip())}"{title} frameborder="0" allowfullscreen></iframe>'
        f"{caption_html}</div>"
    )


def _render_image(data: Mapping) -> str:
    file_info = data.get("file")
    url = file_info.get("url") if isinstance(file_info, Mapping) else None
    url = url or data.get("url")
    if not is_safe_url(url):
        if url:
            log.warning("Dropping image with unsupported URL: %s", url)
        return ""

    classes = ["editor-image"]
    if data.get("withBorder"):
        classes.append("editor-image-border")
    if data.get("stretched"):
        classes.append("editor-image-stretched")
    if data.get("withBackground"):
        classes.append("editor-image-background")

    caption = html_mod.escape(_text(data, "caption"))
    figcaption = f"<figcaption>{caption}</figcaption>" if caption else ""
    return (
        f'<figure class="{" ".join(classes)}">'
        f'<img src="{html_mod.escape(url.strip())}" alt="{caption}" loading="lazy">'
        f"{figcaption}</figure>"
    )


_RENDERERS = {
    BlockType.PARAGRAPH: _render_paragraph,
    BlockType.HEADER: _render_header,
    BlockType.LIST: _render_list,
    BlockType.QUOTE: _render_quote,
    BlockType.DELIMITER: _render_delimiter,
    BlockType.CODE: _render_code,
    BlockType.EMBED: _render_embed,
    BlockType.IMAGE: _render_image,
}
