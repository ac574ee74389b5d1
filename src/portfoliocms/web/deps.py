"""Dependency injection for web routes."""

from __future__ import annotations

from contextlib import contextmanager

from fastapi import Request

from portfoliocms.config import SiteConfig
from portfoliocms.storage.database import Database
from portfoliocms.storage.repository import ContentStore


def get_site(request: Request) -> SiteConfig:
    return request.app.state.site


@contextmanager
def get_db(site: SiteConfig):
    """Open the site database (creating the schema if needed), ensuring it's closed."""
    with Database(site.db_path) as db:
        yield db


def get_repo(db: Database) -> ContentStore:
    """Create a content store for database operations."""
    return ContentStore(db)
