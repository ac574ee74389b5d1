"""Content pane rendering: one content item as a full article."""

from __future__ import annotations

import html as html_mod
import re
from datetime import datetime

from portfoliocms.render.blocks import is_safe_url
from portfoliocms.render.document import render_document
from portfoliocms.storage.models import ContentItem, ContentType

CLOUDINARY_VIDEO_RE = re.compile(
    r"^(?:https?:)?//res\.cloudinary\.com/[^/]+/video/upload/", re.IGNORECASE
)
YOUTUBE_RE = re.compile(
    r"(?:youtube\.com/(?:watch\?(?:[^#]*&)?v=|embed/|shorts/)|youtu\.be/)([\w-]{11})",
    re.IGNORECASE,
)
VIMEO_RE = re.compile(r"vimeo\.com/(?:video/)?(\d+)", re.IGNORECASE)


def format_date(value: str | None) -> str:
    """Format an ISO date/timestamp as e.g. "Mar 15, 2024"."""
    if not value:
        return ""
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return value
    return f"{parsed:%b} {parsed.day}, {parsed.year}"


def is_cloudinary_video(url: str) -> bool:
    return bool(CLOUDINARY_VIDEO_RE.match(url.strip()))


def video_embed_url(url: str) -> str:
    """Rewrite YouTube/Vimeo page URLs to their player URLs."""
    m = YOUTUBE_RE.search(url)
    if m:
        return f"https://www.youtube.com/embed/{m.group(1)}"
    m = VIMEO_RE.search(url)
    if m:
        return f"https://player.vimeo.com/video/{m.group(1)}"
    return url


# ── Media by type ──────────────────────────────────────────────────


def _article_body(item: ContentItem) -> str:
    return f'<div class="content-body">{render_document(item.content)}</div>'


def _image_body(item: ContentItem) -> str:
    url = item.content
    if not is_safe_url(url):
        return ""
    return (
        f'<div class="content-media">'
        f'<img src="{html_mod.escape(url.strip())}" alt="{html_mod.escape(item.title)}">'
        f"</div>"
    )


def _video_body(item: ContentItem) -> str:
    url = item.content
    if not is_safe_url(url):
        return ""
    url = url.strip()
    if is_cloudinary_video(url):
        return (
            f'<div class="content-media content-video">'
            f'<video src="{html_mod.escape(url)}" controls preload="metadata"></video>'
            f"</div>"
        )
    return (
        f'<div class="content-media content-video">'
        f'<iframe src="{html_mod.escape(video_embed_url(url))}" '
        f'title="{html_mod.escape(item.title)}" frameborder="0" allowfullscreen></iframe>'
        f"</div>"
    )


def _audio_body(item: ContentItem) -> str:
    url = item.audio_url
    if not is_safe_url(url):
        return ""
    return (
        f'<div class="content-media content-audio">'
        f'<audio src="{html_mod.escape(url.strip())}" controls preload="metadata"></audio>'
        f"</div>"
    )


_BODY_RENDERERS = {
    ContentType.ARTICLE: _article_body,
    ContentType.IMAGE: _image_body,
    ContentType.VIDEO: _video_body,
    ContentType.AUDIO: _audio_body,
}


# ── Pane ───────────────────────────────────────────────────────────


def _attribution(item: ContentItem) -> str:
    parts = []
    if item.author_name:
        parts.append(f'<span class="content-author">By {html_mod.escape(item.author_name)}</span>')
    if item.publication_name:
        parts.append(
            f'<span class="content-publication">{html_mod.escape(item.publication_name)}</span>'
        )
    if item.publication_date:
        parts.append(
            f'<span class="content-published">{html_mod.escape(format_date(item.publication_date))}</span>'
        )
    if is_safe_url(item.source_link):
        parts.append(
            f'<a class="content-source" href="{html_mod.escape(item.source_link.strip())}" '
            f'target="_blank" rel="noopener">View original</a>'
        )
    if item.copyright_notice:
        parts.append(
            f'<span class="content-copyright">{html_mod.escape(item.copyright_notice)}</span>'
        )
    if not parts:
        return ""
    return f'<footer class="content-attribution">{" &middot; ".join(parts)}</footer>'


def download_url(item: ContentItem) -> str | None:
    """Where the download button points, if downloads are enabled."""
    if not item.download_enabled:
        return None
    for url in (item.external_download_url, item.media_url):
        if is_safe_url(url):
            return url.strip()
    return None


def render_content_item(item: ContentItem) -> str:
    """Render the full content pane for one item."""
    subtitle = (
        f'<p class="content-subtitle">{html_mod.escape(item.subtitle)}</p>'
        if item.subtitle else ""
    )
    header = (
        f'<header class="content-item-header">'
        f"<h3>{html_mod.escape(item.title)}</h3>{subtitle}"
        f'<div class="content-meta">'
        f'<span class="content-type">{item.type.label}</span>'
        f'<span class="content-date">{html_mod.escape(format_date(item.created_at))}</span>'
        f"</div></header>"
    )

    download = ""
    href = download_url(item)
    if href:
        download = (
            f'<a class="content-download" href="{html_mod.escape(href)}" '
            f'target="_blank" rel="noopener" download>Download</a>'
        )

    body = _BODY_RENDERERS[item.type](item)
    return (
        f'<article class="content-item-full" data-content-id="{html_mod.escape(item.id)}">'
        f"{header}{body}{_attribution(item)}{download}</article>"
    )


def render_empty_pane(message: str) -> str:
    return f'<div class="content-empty"><p>{html_mod.escape(message)}</p></div>'
