"""Tests for the block editor payload helpers and image upload hook."""

from __future__ import annotations

import asyncio
import json

from portfoliocms.editor.payload import EDITOR_VERSION, editor_data, has_content, serialize_blocks
from portfoliocms.editor.uploads import upload_image

BLOCKS = [
    {"type": "header", "data": {"text": "Title", "level": 2}},
    {"type": "paragraph", "data": {"text": "Body café"}},
]


class TestHasContent:
    def test_blank_paragraphs(self):
        assert not has_content([])
        assert not has_content([
            {"type": "paragraph", "data": {"text": "  "}},
            {"type": "paragraph", "data": {}},
        ])

    def test_any_other_block_counts(self):
        assert has_content([{"type": "delimiter", "data": {}}])
        assert has_content([{"type": "paragraph", "data": {"text": "x"}}])


class TestSerializeBlocks:
    def test_stores_blocks_only(self):
        saved = {"time": 1700000000000, "blocks": BLOCKS, "version": EDITOR_VERSION}
        stored = serialize_blocks(saved)
        assert json.loads(stored) == BLOCKS
        assert "café" in stored

    def test_bare_list(self):
        assert json.loads(serialize_blocks(BLOCKS)) == BLOCKS

    def test_nothing_to_save(self):
        assert serialize_blocks({"blocks": []}) is None
        assert serialize_blocks({"blocks": [{"type": "paragraph", "data": {"text": ""}}]}) is None
        assert serialize_blocks({"time": 1}) is None
        assert serialize_blocks("nope") is None


class TestEditorData:
    def test_round_trip(self):
        data = editor_data(json.dumps(BLOCKS))
        assert data["blocks"] == BLOCKS
        assert data["version"] == EDITOR_VERSION
        assert isinstance(data["time"], int)

    def test_empty(self):
        assert editor_data(None)["blocks"] == []
        assert editor_data("")["blocks"] == []

    def test_legacy_plain_text(self):
        data = editor_data("First line\n\nSecond <line>")
        assert data["blocks"] == [
            {"type": "paragraph", "data": {"text": "First line"}},
            {"type": "paragraph", "data": {"text": "Second &lt;line&gt;"}},
        ]

    def test_wrong_shape(self):
        assert editor_data('{"time": 5}')["blocks"] == []

    def test_deeply_nested_opens_empty(self):
        data = editor_data("[" * 100000)
        assert data["blocks"] == []
        assert data["version"] == EDITOR_VERSION


class TestUploadImage:
    def test_sync_uploader(self):
        calls = []

        def uploader(filename, data, content_type):
            calls.append((filename, data, content_type))
            return f"https://cdn.example.com/{filename}"

        result = asyncio.run(upload_image(uploader, "a.png", b"\x89PNG", "image/png"))
        assert result == {"success": 1, "file": {"url": "https://cdn.example.com/a.png"}}
        assert calls == [("a.png", b"\x89PNG", "image/png")]

    def test_async_uploader(self):
        async def uploader(filename, data, content_type):
            return "https://cdn.example.com/b.jpg"

        result = asyncio.run(upload_image(uploader, "b.jpg", b"data", "image/jpeg"))
        assert result["success"] == 1

    def test_no_uploader(self):
        assert asyncio.run(upload_image(None, "a.png", b"x", "image/png")) == {"success": 0}

    def test_rejects_empty_and_non_images(self):
        def uploader(filename, data, content_type):
            raise AssertionError("should not be called")

        assert asyncio.run(upload_image(uploader, "a.png", b"", "image/png"))["success"] == 0
        assert asyncio.run(upload_image(uploader, "a.pdf", b"x", "application/pdf"))["success"] == 0

    def test_uploader_failure(self):
        def uploader(filename, data, content_type):
            raise ConnectionError("storage down")

        assert asyncio.run(upload_image(uploader, "a.png", b"x", "image/png")) == {"success": 0}

    def test_uploader_returns_nothing(self):
        assert asyncio.run(upload_image(lambda *a: None, "a.png", b"x", "image/png")) == {"success": 0}
