"""CRUD operations for the portfolio content store.

Read methods never raise on database failures: the error is logged and an
empty result (``[]`` or ``None``) is returned. Write methods wrap database
failures in ``StoreError`` and re-raise so the caller can report them.
"""

from __future__ import annotations

import functools
import json
import logging
import sqlite3
import uuid
from contextlib import contextmanager
from dataclasses import asdict
from datetime import date, datetime, timezone
from pathlib import PurePosixPath
from urllib.parse import urlparse

from portfoliocms.config import DOWNLOAD_FILE_TYPES
from portfoliocms.storage.database import Database
from portfoliocms.storage.models import (
    Category,
    Collection,
    ContentItem,
    ContentType,
    DownloadableFile,
    Profile,
    ResumeEntry,
    ResumeEntryType,
    Subcategory,
)
from portfoliocms.storage.slugs import generate_slug

log = logging.getLogger(__name__)

# Columns a caller may set on a content row (id and created_at are store-owned)
CONTENT_FIELDS = (
    "subcategory_id",
    "type",
    "title",
    "subtitle",
    "sidebar_title",
    "sidebar_subtitle",
    "content",
    "audio_url",
    "author_name",
    "publication_name",
    "publication_date",
    "source_link",
    "copyright_notice",
    "download_enabled",
    "external_download_url",
)

PROFILE_FIELDS = (
    "full_name",
    "location",
    "job_title_1",
    "job_title_2",
    "job_title_3",
    "job_title_4",
    "profile_image",
    "email",
    "phone",
    "linkedin",
    "show_email",
    "show_phone",
    "show_linkedin",
    "short_bio",
    "full_bio",
    "skills",
    "languages",
    "education",
    "executive_summary",
)


class StoreError(Exception):
    """A write against the content store failed."""


class NotFoundError(StoreError):
    """A write targeted a row that does not exist."""


def _new_id() -> str:
    return uuid.uuid4().hex


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _reads(default):
    """Absorb database errors on a read path, returning ``default()``."""

    def decorator(func):
        @functools.wraps(func)
        def wrapper(self, *args, **kwargs):
            try:
                return func(self, *args, **kwargs)
            except sqlite3.Error:
                log.exception("Store read failed in %s", func.__name__)
                return default()

        return wrapper

    return decorator


def _none():
    return None


def validate_content_fields(fields: dict) -> list[str]:
    """Return a list of problems with a content payload (empty if valid)."""
    errors = []

    title = fields.get("title")
    if not title or not str(title).strip():
        errors.append("Title is required")

    type_value = fields.get("type")
    try:
        content_type = ContentType(type_value)
    except ValueError:
        errors.append(
            "Valid content type is required (article, image, video, or audio)"
        )
        content_type = None

    if content_type is ContentType.AUDIO:
        if not (fields.get("audio_url") or "").strip():
            errors.append("Audio URL is required")
    elif content_type is not None:
        if not (fields.get("content") or "").strip():
            errors.append("Content is required")

    if not fields.get("subcategory_id"):
        errors.append("Subcategory is required")

    return errors


def validate_url(url: str) -> bool:
    """True for absolute http(s) URLs."""
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def filename_from_url(url: str) -> str:
    """Last path segment of a URL, or a generic PDF name."""
    try:
        name = PurePosixPath(urlparse(url).path).name
    except ValueError:
        name = ""
    return name or "download.pdf"


def _check_date(value: str, label: str) -> date:
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        raise ValueError(f"{label} must be an ISO date (YYYY-MM-DD), got {value!r}") from None


class ContentStore:
    """Database operations for the portfolio site."""

    def __init__(self, db: Database):
        self.db = db

    @contextmanager
    def _writing(self, action: str):
        """Run a write in a transaction, converting database errors."""
        try:
            with self.db.transaction() as conn:
                yield conn
        except sqlite3.Error as e:
            log.error("Error %s: %s", action, e)
            raise StoreError(f"Error {action}: {e}") from e

    def _update(self, table: str, row_id: str, values: dict, action: str):
        if not values:
            if not self._exists(table, row_id):
                raise NotFoundError(f"Error {action}: {row_id} not found")
            return
        assignments = ", ".join(f"{col} = ?" for col in values)
        with self._writing(action) as conn:
            cursor = conn.execute(
                f"UPDATE {table} SET {assignments} WHERE id = ?",
                (*values.values(), row_id),
            )
            if cursor.rowcount == 0:
                raise NotFoundError(f"Error {action}: {row_id} not found")

    def _delete(self, table: str, row_id: str, action: str) -> bool:
        with self._writing(action) as conn:
            cursor = conn.execute(f"DELETE FROM {table} WHERE id = ?", (row_id,))
        return cursor.rowcount > 0

    def _exists(self, table: str, row_id: str) -> bool:
        row = self.db.conn.execute(
            f"SELECT 1 FROM {table} WHERE id = ?", (row_id,)
        ).fetchone()
        return row is not None

    # ── Categories ─────────────────────────────────────────────────

    @_reads(list)
    def list_categories(self) -> list[Category]:
        """All categories by display order, each with its nested subcategories."""
        cat_rows = self.db.conn.execute(
            "SELECT * FROM categories ORDER BY order_index, rowid"
        ).fetchall()
        sub_rows = self.db.conn.execute(
            "SELECT * FROM subcategories ORDER BY order_index, rowid"
        ).fetchall()

        by_category: dict[str, list[Subcategory]] = {}
        for row in sub_rows:
            by_category.setdefault(row["category_id"], []).append(
                Subcategory.from_row(row)
            )

        return [
            Category.from_row(row, by_category.get(row["id"], []))
            for row in cat_rows
        ]

    @_reads(_none)
    def get_category(self, category_id: str) -> Category | None:
        row = self.db.conn.execute(
            "SELECT * FROM categories WHERE id = ?", (category_id,)
        ).fetchone()
        if row is None:
            return None
        return Category.from_row(row, self.list_subcategories(category_id))

    def create_category(self, name: str, order_index: int = 0) -> Category:
        if not name or not name.strip():
            raise ValueError("Category name is required")
        category_id = _new_id()
        with self._writing("creating category") as conn:
            conn.execute(
                "INSERT INTO categories (id, name, order_index, created_at) "
                "VALUES (?, ?, ?, ?)",
                (category_id, name.strip(), order_index, _now()),
            )
        return self.get_category(category_id)

    def update_category(
        self, category_id: str, name: str | None = None, order_index: int | None = None
    ) -> Category:
        values = {}
        if name is not None:
            if not name.strip():
                raise ValueError("Category name is required")
            values["name"] = name.strip()
        if order_index is not None:
            values["order_index"] = order_index
        self._update("categories", category_id, values, "updating category")
        return self.get_category(category_id)

    def delete_category(self, category_id: str) -> bool:
        """Delete a category; its subcategories and content cascade."""
        return self._delete("categories", category_id, "deleting category")

    # ── Subcategories ──────────────────────────────────────────────

    @_reads(list)
    def list_subcategories(self, category_id: str) -> list[Subcategory]:
        rows = self.db.conn.execute(
            "SELECT * FROM subcategories WHERE category_id = ? "
            "ORDER BY order_index, rowid",
            (category_id,),
        ).fetchall()
        return [Subcategory.from_row(r) for r in rows]

    @_reads(_none)
    def get_subcategory(self, subcategory_id: str) -> Subcategory | None:
        row = self.db.conn.execute(
            "SELECT * FROM subcategories WHERE id = ?", (subcategory_id,)
        ).fetchone()
        return Subcategory.from_row(row) if row else None

    def create_subcategory(
        self, category_id: str, name: str, order_index: int = 0
    ) -> Subcategory:
        if not name or not name.strip():
            raise ValueError("Subcategory name is required")
        subcategory_id = _new_id()
        with self._writing("creating subcategory") as conn:
            conn.execute(
                "INSERT INTO subcategories (id, category_id, name, order_index, created_at) "
                "VALUES (?, ?, ?, ?, ?)",
                (subcategory_id, category_id, name.strip(), order_index, _now()),
            )
        return self.get_subcategory(subcategory_id)

    def update_subcategory(
        self,
        subcategory_id: str,
        name: str | None = None,
        category_id: str | None = None,
        order_index: int | None = None,
    ) -> Subcategory:
        values = {}
        if name is not None:
            if not name.strip():
                raise ValueError("Subcategory name is required")
            values["name"] = name.strip()
        if category_id is not None:
            values["category_id"] = category_id
        if order_index is not None:
            values["order_index"] = order_index
        self._update("subcategories", subcategory_id, values, "updating subcategory")
        return self.get_subcategory(subcategory_id)

    def delete_subcategory(self, subcategory_id: str) -> bool:
        return self._delete("subcategories", subcategory_id, "deleting subcategory")

    # ── Content ────────────────────────────────────────────────────

    @_reads(list)
    def list_content(self) -> list[ContentItem]:
        """All content items, newest first."""
        rows = self.db.conn.execute(
            "SELECT * FROM content ORDER BY created_at DESC, rowid DESC"
        ).fetchall()
        return [ContentItem.from_row(r) for r in rows]

    @_reads(list)
    def list_content_by_subcategory(self, subcategory_id: str) -> list[ContentItem]:
        """Content in one subcategory, newest first."""
        rows = self.db.conn.execute(
            "SELECT * FROM content WHERE subcategory_id = ? "
            "ORDER BY created_at DESC, rowid DESC",
            (subcategory_id,),
        ).fetchall()
        return [ContentItem.from_row(r) for r in rows]

    @_reads(_none)
    def get_content(self, content_id: str) -> ContentItem | None:
        row = self.db.conn.execute(
            "SELECT * FROM content WHERE id = ?", (content_id,)
        ).fetchone()
        return ContentItem.from_row(row) if row else None

    def create_content(self, created_at: str | None = None, **fields) -> ContentItem:
        """Insert a content item.

        ``fields`` uses the column names in CONTENT_FIELDS. ``created_at`` is
        normally assigned by the store; it can be passed explicitly when
        importing existing content.
        """
        unknown = set(fields) - set(CONTENT_FIELDS)
        if unknown:
            raise ValueError(f"Unknown content fields: {', '.join(sorted(unknown))}")
        errors = validate_content_fields(fields)
        if errors:
            raise ValueError("; ".join(errors))

        values = {col: fields.get(col) for col in CONTENT_FIELDS}
        values["type"] = ContentType(values["type"]).value
        values["download_enabled"] = int(bool(values["download_enabled"]))

        content_id = _new_id()
        columns = ", ".join(["id", *values, "created_at"])
        placeholders = ", ".join("?" for _ in range(len(values) + 2))
        with self._writing("creating content") as conn:
            conn.execute(
                f"INSERT INTO content ({columns}) VALUES ({placeholders})",
                (content_id, *values.values(), created_at or _now()),
            )
        return self.get_content(content_id)

    def update_content(self, content_id: str, **fields) -> ContentItem:
        unknown = set(fields) - set(CONTENT_FIELDS)
        if unknown:
            raise ValueError(f"Unknown content fields: {', '.join(sorted(unknown))}")

        current = self.get_content(content_id)
        if current is None:
            raise NotFoundError(f"Error updating content: {content_id} not found")

        merged = {col: getattr(current, col) for col in CONTENT_FIELDS}
        merged["type"] = current.type.value
        merged.update(fields)
        errors = validate_content_fields(merged)
        if errors:
            raise ValueError("; ".join(errors))

        values = dict(fields)
        if "type" in values:
            values["type"] = ContentType(values["type"]).value
        if "download_enabled" in values:
            values["download_enabled"] = int(bool(values["download_enabled"]))
        self._update("content", content_id, values, "updating content")
        return self.get_content(content_id)

    def delete_content(self, content_id: str) -> bool:
        return self._delete("content", content_id, "deleting content")

    @_reads(dict)
    def download_stats(self) -> dict:
        """Counts of download-enabled content, by type."""
        stats = {"total": 0, **{t.value: 0 for t in ContentType}}
        rows = self.db.conn.execute(
            "SELECT type, COUNT(*) AS cnt FROM content "
            "WHERE download_enabled = 1 GROUP BY type"
        ).fetchall()
        for r in rows:
            stats[r["type"]] = r["cnt"]
            stats["total"] += r["cnt"]
        return stats

    # ── Collections ────────────────────────────────────────────────

    @_reads(list)
    def list_collections(self) -> list[Collection]:
        rows = self.db.conn.execute(
            "SELECT * FROM collections ORDER BY order_index, rowid"
        ).fetchall()
        return [Collection.from_row(r) for r in rows]

    @_reads(_none)
    def get_collection(self, collection_id: str) -> Collection | None:
        row = self.db.conn.execute(
            "SELECT * FROM collections WHERE id = ?", (collection_id,)
        ).fetchone()
        return Collection.from_row(row) if row else None

    @_reads(_none)
    def get_collection_by_slug(self, slug: str) -> Collection | None:
        row = self.db.conn.execute(
            "SELECT * FROM collections WHERE slug = ?", (slug,)
        ).fetchone()
        return Collection.from_row(row) if row else None

    def create_collection(
        self,
        name: str,
        slug: str | None = None,
        description: str | None = None,
        order_index: int = 0,
    ) -> Collection:
        """Create a collection. The slug defaults to one derived from the name."""
        if not name or not name.strip():
            raise ValueError("Collection name is required")
        slug = generate_slug(slug or name)
        if not slug:
            raise ValueError(f"Cannot derive a slug from {name!r}")

        collection_id = _new_id()
        with self._writing("creating collection") as conn:
            conn.execute(
                "INSERT INTO collections (id, name, slug, description, order_index, created_at) "
                "VALUES (?, ?, ?, ?, ?, ?)",
                (collection_id, name.strip(), slug, description or None, order_index, _now()),
            )
        return self.get_collection(collection_id)

    def update_collection(
        self,
        collection_id: str,
        name: str | None = None,
        slug: str | None = None,
        description: str | None = None,
        order_index: int | None = None,
    ) -> Collection:
        values = {}
        if name is not None:
            if not name.strip():
                raise ValueError("Collection name is required")
            values["name"] = name.strip()
        if slug is not None:
            values["slug"] = generate_slug(slug)
            if not values["slug"]:
                raise ValueError(f"Invalid slug {slug!r}")
        if description is not None:
            values["description"] = description or None
        if order_index is not None:
            values["order_index"] = order_index
        self._update("collections", collection_id, values, "updating collection")
        return self.get_collection(collection_id)

    def delete_collection(self, collection_id: str) -> bool:
        return self._delete("collections", collection_id, "deleting collection")

    @_reads(list)
    def list_collection_content(self, collection_id: str) -> list[ContentItem]:
        """Content assigned to a collection, by assignment order."""
        rows = self.db.conn.execute(
            """SELECT c.* FROM content_collections cc
               JOIN content c ON c.id = cc.content_id
               WHERE cc.collection_id = ?
               ORDER BY cc.order_index, cc.rowid""",
            (collection_id,),
        ).fetchall()
        return [ContentItem.from_row(r) for r in rows]

    @_reads(list)
    def list_content_collections(self, content_id: str) -> list[Collection]:
        rows = self.db.conn.execute(
            """SELECT col.* FROM content_collections cc
               JOIN collections col ON col.id = cc.collection_id
               WHERE cc.content_id = ?
               ORDER BY col.order_index, col.rowid""",
            (content_id,),
        ).fetchall()
        return [Collection.from_row(r) for r in rows]

    def add_content_to_collection(
        self, content_id: str, collection_id: str, order_index: int = 0
    ):
        """Assign content to a collection (re-assigning updates the order)."""
        with self._writing("adding content to collection") as conn:
            conn.execute(
                """INSERT INTO content_collections (content_id, collection_id, order_index)
                   VALUES (?, ?, ?)
                   ON CONFLICT(content_id, collection_id)
                   DO UPDATE SET order_index = excluded.order_index""",
                (content_id, collection_id, order_index),
            )

    def remove_content_from_collection(self, content_id: str, collection_id: str) -> bool:
        with self._writing("removing content from collection") as conn:
            cursor = conn.execute(
                "DELETE FROM content_collections WHERE content_id = ? AND collection_id = ?",
                (content_id, collection_id),
            )
        return cursor.rowcount > 0

    # ── Resume ─────────────────────────────────────────────────────

    @_reads(list)
    def list_entry_types(self) -> list[ResumeEntryType]:
        rows = self.db.conn.execute(
            "SELECT * FROM resume_entry_types ORDER BY order_index, rowid"
        ).fetchall()
        return [ResumeEntryType.from_row(r) for r in rows]

    @_reads(_none)
    def get_entry_type(self, entry_type_id: str) -> ResumeEntryType | None:
        row = self.db.conn.execute(
            "SELECT * FROM resume_entry_types WHERE id = ?", (entry_type_id,)
        ).fetchone()
        return ResumeEntryType.from_row(row) if row else None

    def create_entry_type(
        self, name: str, icon: str | None = None, order_index: int = 0
    ) -> ResumeEntryType:
        if not name or not name.strip():
            raise ValueError("Entry type name is required")
        entry_type_id = _new_id()
        with self._writing("creating entry type") as conn:
            conn.execute(
                "INSERT INTO resume_entry_types (id, name, icon, order_index) VALUES (?, ?, ?, ?)",
                (entry_type_id, name.strip(), icon or None, order_index),
            )
        return self.get_entry_type(entry_type_id)

    def update_entry_type(
        self,
        entry_type_id: str,
        name: str | None = None,
        icon: str | None = None,
        order_index: int | None = None,
    ) -> ResumeEntryType:
        values = {}
        if name is not None:
            if not name.strip():
                raise ValueError("Entry type name is required")
            values["name"] = name.strip()
        if icon is not None:
            values["icon"] = icon or None
        if order_index is not None:
            values["order_index"] = order_index
        self._update("resume_entry_types", entry_type_id, values, "updating entry type")
        return self.get_entry_type(entry_type_id)

    def delete_entry_type(self, entry_type_id: str) -> bool:
        return self._delete("resume_entry_types", entry_type_id, "deleting entry type")

    @_reads(list)
    def list_resume_entries(self) -> list[ResumeEntry]:
        """All entries, most recent start date first."""
        rows = self.db.conn.execute(
            "SELECT * FROM resume_entries ORDER BY date_start DESC, order_index, rowid"
        ).fetchall()
        return [ResumeEntry.from_row(r) for r in rows]

    @_reads(list)
    def list_entries_by_type(self, entry_type_id: str) -> list[ResumeEntry]:
        rows = self.db.conn.execute(
            "SELECT * FROM resume_entries WHERE entry_type_id = ? "
            "ORDER BY date_start DESC, order_index, rowid",
            (entry_type_id,),
        ).fetchall()
        return [ResumeEntry.from_row(r) for r in rows]

    @_reads(list)
    def list_featured_entries(self) -> list[ResumeEntry]:
        rows = self.db.conn.execute(
            "SELECT * FROM resume_entries WHERE is_featured = 1 "
            "ORDER BY date_start DESC, order_index, rowid"
        ).fetchall()
        return [ResumeEntry.from_row(r) for r in rows]

    @_reads(_none)
    def get_resume_entry(self, entry_id: str) -> ResumeEntry | None:
        row = self.db.conn.execute(
            "SELECT * FROM resume_entries WHERE id = ?", (entry_id,)
        ).fetchone()
        return ResumeEntry.from_row(row) if row else None

    def create_resume_entry(
        self,
        entry_type_id: str,
        title: str,
        date_start: str,
        subtitle: str | None = None,
        date_end: str | None = None,
        description: str | None = None,
        media_urls: list[str] | None = None,
        order_index: int = 0,
        is_featured: bool = False,
    ) -> ResumeEntry:
        if not title or not title.strip():
            raise ValueError("Entry title is required")
        start = _check_date(date_start, "Start date")
        if date_end:
            if _check_date(date_end, "End date") < start:
                raise ValueError("End date cannot be before start date")

        entry_id = _new_id()
        with self._writing("creating resume entry") as conn:
            conn.execute(
                """INSERT INTO resume_entries
                   (id, entry_type_id, title, subtitle, date_start, date_end,
                    description, media_urls, order_index, is_featured)
                   VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
                (
                    entry_id,
                    entry_type_id,
                    title.strip(),
                    subtitle or None,
                    date_start,
                    date_end or None,
                    description or None,
                    json.dumps(media_urls or []),
                    order_index,
                    int(is_featured),
                ),
            )
        return self.get_resume_entry(entry_id)

    def update_resume_entry(self, entry_id: str, **fields) -> ResumeEntry:
        allowed = {
            "entry_type_id", "title", "subtitle", "date_start", "date_end",
            "description", "media_urls", "order_index", "is_featured",
        }
        unknown = set(fields) - allowed
        if unknown:
            raise ValueError(f"Unknown entry fields: {', '.join(sorted(unknown))}")

        current = self.get_resume_entry(entry_id)
        if current is None:
            raise NotFoundError(f"Error updating resume entry: {entry_id} not found")

        start = _check_date(fields.get("date_start", current.date_start), "Start date")
        end = fields.get("date_end", current.date_end)
        if end and _check_date(end, "End date") < start:
            raise ValueError("End date cannot be before start date")

        values = dict(fields)
        if "media_urls" in values:
            values["media_urls"] = json.dumps(values["media_urls"] or [])
        if "is_featured" in values:
            values["is_featured"] = int(bool(values["is_featured"]))
        if "date_end" in values:
            values["date_end"] = values["date_end"] or None
        self._update("resume_entries", entry_id, values, "updating resume entry")
        return self.get_resume_entry(entry_id)

    def delete_resume_entry(self, entry_id: str) -> bool:
        return self._delete("resume_entries", entry_id, "deleting resume entry")

    # ── Profile ────────────────────────────────────────────────────

    def _profile_row(self):
        return self.db.conn.execute(
            "SELECT * FROM profile ORDER BY rowid LIMIT 1"
        ).fetchone()

    @_reads(_none)
    def get_profile(self) -> Profile | None:
        row = self._profile_row()
        return Profile.from_row(row) if row else None

    def get_or_create_profile(self) -> Profile:
        """Return the singleton profile, inserting an empty one if needed."""
        profile = self.get_profile()
        if profile is not None:
            return profile
        with self._writing("creating profile") as conn:
            conn.execute(
                "INSERT INTO profile (id, updated_at) VALUES (?, ?)",
                (_new_id(), _now()),
            )
        return self.get_profile()

    def save_profile(self, data: Profile | dict) -> Profile:
        """Update the singleton profile, or create it if there is none."""
        if isinstance(data, Profile):
            data = asdict(data)
        defaults = asdict(Profile())

        values = {}
        for col in PROFILE_FIELDS:
            value = data.get(col, defaults[col])
            if col in ("skills", "languages"):
                value = json.dumps([s.strip() for s in (value or []) if s and s.strip()])
            elif col.startswith("show_"):
                value = int(bool(value))
            elif value is None and defaults[col] == "":
                value = ""
            values[col] = value
        values["updated_at"] = _now()

        existing = self._profile_row()
        with self._writing("saving profile") as conn:
            if existing:
                assignments = ", ".join(f"{col} = ?" for col in values)
                conn.execute(
                    f"UPDATE profile SET {assignments} WHERE id = ?",
                    (*values.values(), existing["id"]),
                )
            else:
                columns = ", ".join(["id", *values])
                placeholders = ", ".join("?" for _ in range(len(values) + 1))
                conn.execute(
                    f"INSERT INTO profile ({columns}) VALUES ({placeholders})",
                    (_new_id(), *values.values()),
                )
        return self.get_profile()

    # ── Downloadable files ─────────────────────────────────────────

    @_reads(list)
    def list_downloads(self) -> list[DownloadableFile]:
        rows = self.db.conn.execute(
            "SELECT * FROM downloadable_files ORDER BY updated_at DESC"
        ).fetchall()
        return [DownloadableFile.from_row(r) for r in rows]

    @_reads(_none)
    def get_download(self, file_type: str) -> DownloadableFile | None:
        row = self.db.conn.execute(
            "SELECT * FROM downloadable_files WHERE file_type = ?", (file_type,)
        ).fetchone()
        return DownloadableFile.from_row(row) if row else None

    def save_download(
        self, file_type: str, url: str, filename: str | None = None
    ) -> DownloadableFile:
        """Set the file for a download slot, replacing any existing one."""
        if file_type not in DOWNLOAD_FILE_TYPES:
            raise ValueError(
                f"Unknown file type {file_type!r} "
                f"(expected one of: {', '.join(DOWNLOAD_FILE_TYPES)})"
            )
        url = (url or "").strip()
        if not url:
            raise ValueError("Please enter a URL")
        if not validate_url(url):
            raise ValueError("Please enter a valid URL")
        filename = (filename or "").strip() or filename_from_url(url)

        existing = self.get_download(file_type)
        with self._writing("saving downloadable file") as conn:
            if existing:
                conn.execute(
                    "UPDATE downloadable_files SET file_url = ?, file_name = ?, updated_at = ? "
                    "WHERE id = ?",
                    (url, filename, _now(), existing.id),
                )
            else:
                conn.execute(
                    "INSERT INTO downloadable_files (id, file_type, file_url, file_name, updated_at) "
                    "VALUES (?, ?, ?, ?, ?)",
                    (_new_id(), file_type, url, filename, _now()),
                )
        return self.get_download(file_type)

    def delete_download(self, file_type: str) -> bool:
        with self._writing("deleting downloadable file") as conn:
            cursor = conn.execute(
                "DELETE FROM downloadable_files WHERE file_type = ?", (file_type,)
            )
        return cursor.rowcount > 0

    # ── Summary ────────────────────────────────────────────────────

    @_reads(dict)
    def get_counts(self) -> dict:
        """Row counts per entity, for status displays."""
        tables = {
            "categories": "categories",
            "subcategories": "subcategories",
            "content": "content",
            "collections": "collections",
            "resume_entries": "resume_entries",
            "downloads": "downloadable_files",
        }
        counts = {}
        for key, table in tables.items():
            row = self.db.conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()
            counts[key] = row[0]
        return counts
