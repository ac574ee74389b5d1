"""Request bodies for the admin JSON API."""

from __future__ import annotations

from typing import Any, List, Optional, Union

from pydantic import BaseModel, Field


class CategoryIn(BaseModel):
    name: str
    order_index: int = Field(default=0, ge=0)


class CategoryUpdate(BaseModel):
    name: Optional[str] = None
    order_index: Optional[int] = Field(default=None, ge=0)


class SubcategoryIn(BaseModel):
    category_id: str
    name: str
    order_index: int = Field(default=0, ge=0)


class SubcategoryUpdate(BaseModel):
    category_id: Optional[str] = None
    name: Optional[str] = None
    order_index: Optional[int] = Field(default=None, ge=0)


class ContentIn(BaseModel):
    subcategory_id: str
    type: str
    title: str
    # article: the editor's save() output (or its blocks list); image/video: a URL
    content: Union[str, List[Any], dict, None] = None
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


class ContentUpdate(BaseModel):
    subcategory_id: Optional[str] = None
    type: Optional[str] = None
    title: Optional[str] = None
    content: Union[str, List[Any], dict, None] = None
    subtitle: Optional[str] = None
    sidebar_title: Optional[str] = None
    sidebar_subtitle: Optional[str] = None
    audio_url: Optional[str] = None
    author_name: Optional[str] = None
    publication_name: Optional[str] = None
    publication_date: Optional[str] = None
    source_link: Optional[str] = None
    copyright_notice: Optional[str] = None
    download_enabled: Optional[bool] = None
    external_download_url: Optional[str] = None


class CollectionIn(BaseModel):
    name: str
    slug: Optional[str] = None
    description: Optional[str] = None
    order_index: int = Field(default=0, ge=0)


class CollectionUpdate(BaseModel):
    name: Optional[str] = None
    slug: Optional[str] = None
    description: Optional[str] = None
    order_index: Optional[int] = Field(default=None, ge=0)


class CollectionAssignment(BaseModel):
    order_index: int = Field(default=0, ge=0)


class EntryTypeIn(BaseModel):
    name: str
    icon: Optional[str] = None
    order_index: int = Field(default=0, ge=0)


class EntryTypeUpdate(BaseModel):
    name: Optional[str] = None
    icon: Optional[str] = None
    order_index: Optional[int] = Field(default=None, ge=0)


class ResumeEntryIn(BaseModel):
    entry_type_id: str
    title: str
    date_start: str
    subtitle: Optional[str] = None
    date_end: Optional[str] = None
    description: Optional[str] = None
    media_urls: List[str] = []
    order_index: int = Field(default=0, ge=0)
    is_featured: bool = False


class ResumeEntryUpdate(BaseModel):
    entry_type_id: Optional[str] = None
    title: Optional[str] = None
    date_start: Optional[str] = None
    subtitle: Optional[str] = None
    date_end: Optional[str] = None
    description: Optional[str] = None
    media_urls: Optional[List[str]] = None
    order_index: Optional[int] = Field(default=None, ge=0)
    is_featured: Optional[bool] = None


class ProfileIn(BaseModel):
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
    skills: List[str] = []
    languages: List[str] = []
    education: Optional[str] = None
    executive_summary: Optional[str] = None


class DownloadIn(BaseModel):
    url: str
    filename: Optional[str] = None
