"""Data models for portfoliocms."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class ContentType(str, Enum):
    ARTICLE = "article"  # body is a block-list document
    IMAGE = "image"  # body is an image URL
    VIDEO = "video"  # body is a video URL
    AUDIO = "audio"  # body unused, see audio_url

    @property
    def label(self) -> str:
        return self.value.upper()


def _json_list(value) -> list:
    if not value:
        return []
    if isinstance(value, list):
        return value
    try:
        parsed = json.loads(value)
    except ValueError:
        return []
    return parsed if isinstance(parsed, list) else []


@dataclass
class Subcategory:
    id: str
    category_id: str
    name: str
    order_index: int = 0
    created_at: Optional[str] = None

    @classmethod
    def from_row(cls, row) -> Subcategory:
        return cls(
            id=row["id"],
            category_id=row["category_id"],
            name=row["name"],
            order_index=row["order_index"],
            created_at=row["created_at"],
        )


@dataclass
class Category:
    id: str
    name: str
    order_index: int = 0
    subcategories: list[Subcategory] = field(default_factory=list)
    created_at: Optional[str] = None

    @classmethod
    def from_row(cls, row, subcategories: list[Subcategory] | None = None) -> Category:
        return cls(
            id=row["id"],
            name=row["name"],
            order_index=row["order_index"],
            subcategories=subcategories or [],
            created_at=row["created_at"],
        )


@dataclass
class ContentItem:
    id: str
    subcategory_id: str
    type: ContentType
    title: str
    content: Optional[str] = None  # block-list JSON or media URL, by type
    subtitle: Optional[str] = None
    sidebar_title: Optional[str] = None
    sidebar_subtitle: Optional[str] = None
    audio_url: Optional[str] = None
    author_name: Optional[str] = None
    publication_name: Optional[str] = None
    publication_date: Optional[str] = None
    source_link: Optional[str] = None
    copyright_notice: Optional[str] = None
    download_enabled: bool = False
    external_download_url: Optional[str] = None
    created_at: Optional[str] = None

    @property
    def nav_title(self) -> str:
        """Title shown in the navigation column."""
        return self.sidebar_title or self.title

    @property
    def nav_subtitle(self) -> str:
        return self.sidebar_subtitle or ""

    @property
    def media_url(self) -> Optional[str]:
        """URL of the playable/viewable media, if the type has one."""
        if self.type is ContentType.AUDIO:
            return self.audio_url
        if self.type in (ContentType.IMAGE, ContentType.VIDEO):
            return self.content
        return None

    @classmethod
    def from_row(cls, row) -> ContentItem:
        return cls(
            id=row["id"],
            subcategory_id=row["subcategory_id"],
            type=ContentType(row["type"]),
            title=row["title"],
            content=row["content"],
            subtitle=row["subtitle"],
            sidebar_title=row["sidebar_title"],
            sidebar_subtitle=row["sidebar_subtitle"],
            audio_url=row["audio_url"],
            author_name=row["author_name"],
            publication_name=row["publication_name"],
            publication_date=row["publication_date"],
            source_link=row["source_link"],
            copyright_notice=row["copyright_notice"],
            download_enabled=bool(row["download_enabled"]),
            external_download_url=row["external_download_url"],
            created_at=row["created_at"],
        )


@dataclass
class Collection:
    id: str
    name: str
    slug: str
    description: Optional[str] = None
    order_index: int = 0
    created_at: Optional[str] = None

    @classmethod
    def from_row(cls, row) -> Collection:
        return cls(
            id=row["id"],
            name=row["name"],
            slug=row["slug"],
            description=row["description"],
            order_index=row["order_index"],
            created_at=row["created_at"],
        )


@dataclass
class ResumeEntryType:
    id: str
    name: str  # "Jobs", "Education", ...
    icon: Optional[str] = None
    order_index: int = 0

    @classmethod
    def from_row(cls, row) -> ResumeEntryType:
        return cls(
            id=row["id"],
            name=row["name"],
            icon=row["icon"],
            order_index=row["order_index"],
        )


@dataclass
class ResumeEntry:
    id: str
    entry_type_id: str
    title: str
    date_start: str  # YYYY-MM-DD
    subtitle: Optional[str] = None
    date_end: Optional[str] = None  # None means ongoing
    description: Optional[str] = None
    media_urls: list[str] = field(default_factory=list)
    order_index: int = 0
    is_featured: bool = False

    @classmethod
    def from_row(cls, row) -> ResumeEntry:
        return cls(
            id=row["id"],
            entry_type_id=row["entry_type_id"],
            title=row["title"],
            date_start=row["date_start"],
            subtitle=row["subtitle"],
            date_end=row["date_end"],
            description=row["description"],
            media_urls=_json_list(row["media_urls"]),
            order_index=row["order_index"],
            is_featured=bool(row["is_featured"]),
        )


@dataclass
class Profile:
    id: Optional[str] = None
    full_name: str = ""
    location: str = ""
    job_title_1: str = ""
    job_title_2: Optional[str] = None
    job_title_3: Optional[str] = None
    job_title_4: Optional[str] = None
    profile_image: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    linkedin: Optional[str] = None
    show_email: bool = True
    show_phone: bool = True
    show_linkedin: bool = True
    short_bio: str = ""
    full_bio: str = ""
    skills: list[str] = field(default_factory=list)
    languages: list[str] = field(default_factory=list)
    education: Optional[str] = None
    executive_summary: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def job_titles(self) -> list[str]:
        titles = [self.job_title_1, self.job_title_2, self.job_title_3, self.job_title_4]
        return [t for t in titles if t and t.strip()]

    @classmethod
    def from_row(cls, row) -> Profile:
        return cls(
            id=row["id"],
            full_name=row["full_name"],
            location=row["location"],
            job_title_1=row["job_title_1"],
            job_title_2=row["job_title_2"],
            job_title_3=row["job_title_3"],
            job_title_4=row["job_title_4"],
            profile_image=row["profile_image"],
            email=row["email"],
            phone=row["phone"],
            linkedin=row["linkedin"],
            show_email=bool(row["show_email"]),
            show_phone=bool(row["show_phone"]),
            show_linkedin=bool(row["show_linkedin"]),
            short_bio=row["short_bio"],
            full_bio=row["full_bio"],
            skills=_json_list(row["skills"]),
            languages=_json_list(row["languages"]),
            education=row["education"],
            executive_summary=row["executive_summary"],
            updated_at=row["updated_at"],
        )


@dataclass
class DownloadableFile:
    id: str
    file_type: str  # "resume_full", "resume_condensed", "portfolio"
    file_url: str
    file_name: str
    related_id: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_row(cls, row) -> DownloadableFile:
        return cls(
            id=row["id"],
            file_type=row["file_type"],
            file_url=row["file_url"],
            file_name=row["file_name"],
            related_id=row["related_id"],
            updated_at=row["updated_at"],
        )
