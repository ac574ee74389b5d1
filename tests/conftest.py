"""Shared test fixtures for portfoliocms."""

from __future__ import annotations

import json

import pytest

from portfoliocms.storage.database import Database
from portfoliocms.storage.repository import ContentStore

ARTICLE_BLOCKS = [
    {"type": "header", "data": {"text": "On Cities", "level": 2}},
    {"type": "paragraph", "data": {"text": "Cities are <b>loud</b>."}},
]


@pytest.fixture
def tmp_db(tmp_path):
    """Create a temp database with schema initialized."""
    db_path = tmp_path / "test.db"
    with Database(db_path) as db:
        yield db


@pytest.fixture
def store(tmp_db):
    """Content store backed by the temp database."""
    return ContentStore(tmp_db)


def populate(store: ContentStore) -> dict:
    """Insert a small site and return the ids by name.

    Writing (Essays: 2 articles, Reviews: empty), Media (Photos: 1 image),
    Empty (no subcategories).
    """
    ids = {}
    writing = store.create_category("Writing", 0)
    media = store.create_category("Media", 1)
    empty = store.create_category("Empty", 2)
    essays = store.create_subcategory(writing.id, "Essays", 0)
    reviews = store.create_subcategory(writing.id, "Reviews", 1)
    photos = store.create_subcategory(media.id, "Photos", 0)

    older = store.create_content(
        created_at="2024-01-10T09:00:00+00:00",
        subcategory_id=essays.id,
        type="article",
        title="Older Essay",
        content=json.dumps([{"type": "paragraph", "data": {"text": "Old words."}}]),
    )
    newer = store.create_content(
        created_at="2024-03-15T09:00:00+00:00",
        subcategory_id=essays.id,
        type="article",
        title="On Cities",
        sidebar_title="Cities",
        content=json.dumps(ARTICLE_BLOCKS),
        download_enabled=True,
        external_download_url="https://files.example.com/cities.pdf",
    )
    photo = store.create_content(
        created_at="2024-02-01T09:00:00+00:00",
        subcategory_id=photos.id,
        type="image",
        title="Harbour at Dawn",
        content="https://images.example.com/harbour.jpg",
    )

    ids.update(
        writing=writing.id,
        media=media.id,
        empty=empty.id,
        essays=essays.id,
        reviews=reviews.id,
        photos=photos.id,
        older=older.id,
        newer=newer.id,
        photo=photo.id,
    )
    return ids


@pytest.fixture
def populated(store):
    """Store with categories, subcategories and content inserted."""
    return store, populate(store)


@pytest.fixture
def tmp_site_json(tmp_path, monkeypatch):
    """Point the site registry at a temp file."""
    import portfoliocms.config as config_mod

    site_json = tmp_path / "site.json"
    monkeypatch.setattr(config_mod, "SITE_JSON_PATH", site_json)
    monkeypatch.setattr(config_mod, "PROJECT_ROOT", tmp_path)
    return site_json
