"""SQLite database schema and connection management."""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path

SCHEMA_VERSION = 1

SCHEMA_SQL = """
-- Top-level navigation groups
CREATE TABLE IF NOT EXISTS categories (
    id          TEXT PRIMARY KEY,
    name        TEXT NOT NULL,
    order_index INTEGER NOT NULL DEFAULT 0 CHECK (order_index >= 0),
    created_at  TEXT NOT NULL
);

-- Second-level groups, owned by a category
CREATE TABLE IF NOT EXISTS subcategories (
    id          TEXT PRIMARY KEY,
    category_id TEXT NOT NULL REFERENCES categories(id) ON DELETE CASCADE,
    name        TEXT NOT NULL,
    order_index INTEGER NOT NULL DEFAULT 0 CHECK (order_index >= 0),
    created_at  TEXT NOT NULL
);

-- Articles, images, video and audio
CREATE TABLE IF NOT EXISTS content (
    id                    TEXT PRIMARY KEY,
    subcategory_id        TEXT NOT NULL REFERENCES subcategories(id) ON DELETE CASCADE,
    type                  TEXT NOT NULL CHECK (type IN ('article', 'image', 'video', 'audio')),
    title                 TEXT NOT NULL,
    subtitle              TEXT,
    sidebar_title         TEXT,
    sidebar_subtitle      TEXT,
    content               TEXT,
    audio_url             TEXT,
    author_name           TEXT,
    publication_name      TEXT,
    publication_date      TEXT,
    source_link           TEXT,
    copyright_notice      TEXT,
    download_enabled      INTEGER NOT NULL DEFAULT 0,
    external_download_url TEXT,
    created_at            TEXT NOT NULL
);

-- Curated groupings of content
CREATE TABLE IF NOT EXISTS collections (
    id          TEXT PRIMARY KEY,
    name        TEXT NOT NULL,
    slug        TEXT NOT NULL UNIQUE,
    description TEXT,
    order_index INTEGER NOT NULL DEFAULT 0 CHECK (order_index >= 0),
    created_at  TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS content_collections (
    content_id    TEXT NOT NULL REFERENCES content(id) ON DELETE CASCADE,
    collection_id TEXT NOT NULL REFERENCES collections(id) ON DELETE CASCADE,
    order_index   INTEGER NOT NULL DEFAULT 0,
    PRIMARY KEY (content_id, collection_id)
);

-- Resume timeline
CREATE TABLE IF NOT EXISTS resume_entry_types (
    id          TEXT PRIMARY KEY,
    name        TEXT NOT NULL,
    icon        TEXT,
    order_index INTEGER NOT NULL DEFAULT 0 CHECK (order_index >= 0)
);

CREATE TABLE IF NOT EXISTS resume_entries (
    id            TEXT PRIMARY KEY,
    entry_type_id TEXT NOT NULL REFERENCES resume_entry_types(id) ON DELETE CASCADE,
    title         TEXT NOT NULL,
    subtitle      TEXT,
    date_start    TEXT NOT NULL,
    date_end      TEXT,
    description   TEXT,
    media_urls    TEXT NOT NULL DEFAULT '[]',
    order_index   INTEGER NOT NULL DEFAULT 0 CHECK (order_index >= 0),
    is_featured   INTEGER NOT NULL DEFAULT 0
);

-- Singleton profile / business card
CREATE TABLE IF NOT EXISTS profile (
    id                TEXT PRIMARY KEY,
    full_name         TEXT NOT NULL DEFAULT '',
    location          TEXT NOT NULL DEFAULT '',
    job_title_1       TEXT NOT NULL DEFAULT '',
    job_title_2       TEXT,
    job_title_3       TEXT,
    job_title_4       TEXT,
    profile_image     TEXT,
    email             TEXT,
    phone             TEXT,
    linkedin          TEXT,
    show_email        INTEGER NOT NULL DEFAULT 1,
    show_phone        INTEGER NOT NULL DEFAULT 1,
    show_linkedin     INTEGER NOT NULL DEFAULT 1,
    short_bio         TEXT NOT NULL DEFAULT '',
    full_bio          TEXT NOT NULL DEFAULT '',
    skills            TEXT NOT NULL DEFAULT '[]',
    languages         TEXT NOT NULL DEFAULT '[]',
    education         TEXT,
    executive_summary TEXT,
    updated_at        TEXT
);

-- Resume / portfolio PDFs, one row per file type
CREATE TABLE IF NOT EXISTS downloadable_files (
    id         TEXT PRIMARY KEY,
    file_type  TEXT NOT NULL UNIQUE,
    related_id TEXT,
    file_url   TEXT NOT NULL,
    file_name  TEXT NOT NULL,
    updated_at TEXT NOT NULL
);

-- Schema version tracking
CREATE TABLE IF NOT EXISTS schema_version (
    version INTEGER NOT NULL
);

-- Indexes
CREATE INDEX IF NOT EXISTS idx_subcategories_category ON subcategories(category_id);
CREATE INDEX IF NOT EXISTS idx_content_subcategory ON content(subcategory_id);
CREATE INDEX IF NOT EXISTS idx_content_created ON content(created_at);
CREATE INDEX IF NOT EXISTS idx_content_collections_collection ON content_collections(collection_id);
CREATE INDEX IF NOT EXISTS idx_resume_entries_type ON resume_entries(entry_type_id);
"""


class Database:
    """SQLite database connection manager."""

    def __init__(self, db_path: Path):
        self.db_path = db_path
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._conn: sqlite3.Connection | None = None

    @property
    def conn(self) -> sqlite3.Connection:
        if self._conn is None:
            self._conn = sqlite3.connect(str(self.db_path))
            self._conn.execute("PRAGMA journal_mode=WAL")
            self._conn.execute("PRAGMA foreign_keys=ON")
            self._conn.row_factory = sqlite3.Row
        return self._conn

    def initialize(self):
        """Create all tables if they don't exist."""
        self.conn.executescript(SCHEMA_SQL)
        # Set schema version if not present
        row = self.conn.execute(
            "SELECT version FROM schema_version LIMIT 1"
        ).fetchone()
        if row is None:
            self.conn.execute(
                "INSERT INTO schema_version (version) VALUES (?)",
                (SCHEMA_VERSION,),
            )
        self.conn.commit()

    @contextmanager
    def transaction(self):
        """Yield the connection; commit on success, roll back on error."""
        try:
            yield self.conn
            self.conn.commit()
        except Exception:
            self.conn.rollback()
            raise

    def close(self):
        if self._conn:
            self._conn.close()
            self._conn = None

    def __enter__(self):
        self.initialize()
        return self

    def __exit__(self, *args):
        self.close()
