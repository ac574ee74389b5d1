"""Tests for portfoliocms.render.content."""

from __future__ import annotations

import json

import pytest

from portfoliocms.render.content import (
    download_url,
    format_date,
    is_cloudinary_video,
    render_content_item,
    render_empty_pane,
    video_embed_url,
)
from portfoliocms.storage.models import ContentItem, ContentType


def _item(type_: ContentType, **kwargs) -> ContentItem:
    kwargs.setdefault("title", "Item")
    return ContentItem(id="c1", subcategory_id="s1", type=type_, **kwargs)


class TestFormatDate:
    def test_timestamp(self):
        assert format_date("2024-03-15T09:00:00+00:00") == "Mar 15, 2024"

    def test_zulu_and_plain_date(self):
        assert format_date("2023-11-02T10:00:00Z") == "Nov 2, 2023"
        assert format_date("2023-11-02") == "Nov 2, 2023"

    def test_unparseable_returned_as_is(self):
        assert format_date("Spring 2020") == "Spring 2020"
        assert format_date(None) == ""


class TestVideoUrls:
    def test_cloudinary_detected(self):
        assert is_cloudinary_video("https://res.cloudinary.com/demo/video/upload/v1/clip.mp4")
        assert not is_cloudinary_video("https://res.cloudinary.com/demo/image/upload/a.jpg")

    @pytest.mark.parametrize("url", [
        "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
        "https://youtu.be/dQw4w9WgXcQ",
        "https://www.youtube.com/watch?feature=share&v=dQw4w9WgXcQ",
    ])
    def test_youtube(self, url):
        assert video_embed_url(url) == "https://www.youtube.com/embed/dQw4w9WgXcQ"

    def test_vimeo(self):
        assert video_embed_url("https://vimeo.com/76979871") == "https://player.vimeo.com/video/76979871"

    def test_other_url_unchanged(self):
        assert video_embed_url("https://example.com/v.mp4") == "https://example.com/v.mp4"


class TestRenderContentItem:
    def test_article(self):
        item = _item(
            ContentType.ARTICLE,
            title="On <Cities>",
            subtitle="Notes",
            content=json.dumps([{"type": "paragraph", "data": {"text": "Loud."}}]),
            created_at="2024-03-15T09:00:00+00:00",
        )
        html = render_content_item(item)
        assert html.startswith('<article class="content-item-full" data-content-id="c1">')
        assert "<h3>On &lt;Cities&gt;</h3>" in html
        assert '<p class="content-subtitle">Notes</p>' in html
        assert '<span class="content-type">ARTICLE</span>' in html
        assert '<span class="content-date">Mar 15, 2024</span>' in html
        assert '<div class="content-body"><p>Loud.</p></div>' in html
        assert "content-download" not in html

    def test_image(self):
        html = render_content_item(_item(ContentType.IMAGE, title="Harbour", content="https://e.com/h.jpg"))
        assert '<img src="https://e.com/h.jpg" alt="Harbour">' in html

    def test_cloudinary_video_uses_native_player(self):
        url = "https://res.cloudinary.com/demo/video/upload/clip.mp4"
        html = render_content_item(_item(ContentType.VIDEO, content=url))
        assert f'<video src="{url}" controls preload="metadata"></video>' in html
        assert "<iframe" not in html

    def test_youtube_video_embedded(self):
        html = render_content_item(
            _item(ContentType.VIDEO, content="https://youtu.be/dQw4w9WgXcQ")
        )
        assert '<iframe src="https://www.youtube.com/embed/dQw4w9WgXcQ"' in html

    def test_audio(self):
        html = render_content_item(_item(ContentType.AUDIO, audio_url="https://cdn.e.com/p.mp3"))
        assert '<audio src="https://cdn.e.com/p.mp3" controls preload="metadata"></audio>' in html

    def test_unsafe_media_dropped(self):
        html = render_content_item(_item(ContentType.IMAGE, content="javascript:alert(1)"))
        assert "content-media" not in html
        assert "javascript" not in html

    def test_attribution(self):
        item = _item(
            ContentType.IMAGE,
            content="https://e.com/h.jpg",
            author_name="Jane",
            publication_name="The Daily",
            publication_date="2022-05-04",
            source_link="https://daily.example.com/story",
            copyright_notice="© Jane",
        )
        html = render_content_item(item)
        assert '<footer class="content-attribution">' in html
        assert '<span class="content-author">By Jane</span>' in html
        assert '<span class="content-published">May 4, 2022</span>' in html
        assert 'href="https://daily.example.com/story"' in html
        assert "© Jane" in html

    def test_download_link(self):
        item = _item(
            ContentType.IMAGE,
            content="https://e.com/h.jpg",
            download_enabled=True,
        )
        html = render_content_item(item)
        assert '<a class="content-download" href="https://e.com/h.jpg"' in html


class TestDownloadUrl:
    def test_disabled(self):
        item = _item(ContentType.IMAGE, content="https://e.com/h.jpg")
        assert download_url(item) is None

    def test_external_preferred(self):
        item = _item(
            ContentType.IMAGE,
            content="https://e.com/h.jpg",
            download_enabled=True,
            external_download_url="https://files.e.com/h.tiff",
        )
        assert download_url(item) == "https://files.e.com/h.tiff"

    def test_article_without_external_url(self):
        item = _item(ContentType.ARTICLE, content="[]", download_enabled=True)
        assert download_url(item) is None


class TestEmptyPane:
    def test_escaped(self):
        assert render_empty_pane("No <content>") == (
            '<div class="content-empty"><p>No &lt;content&gt;</p></div>'
        )
