"""
models/content.py — Pydantic models for blog tables and programmatic SEO pages.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from futureedge_shared.constants import PageType


class BlogAuthor(BaseModel):
    """Matches the blog_authors table row."""

    id: str
    name: str
    bio: str | None = None
    avatar_url: str | None = None
    email: str | None = None


class BlogCategory(BaseModel):
    """Matches the blog_categories table row."""

    id: str
    name: str
    slug: str
    description: str | None = None
    meta_title: str | None = None
    meta_description: str | None = None
    active: bool = True
    display_order: int = 0


class BlogTag(BaseModel):
    id: str
    name: str
    slug: str


class BlogPost(BaseModel):
    """Matches the blog_posts table row plus embedded author/category/tags."""

    model_config = ConfigDict(extra="allow")

    id: str
    title: str
    slug: str
    excerpt: str = ""
    content: str = ""
    featured_image: str | None = None
    author_id: str | None = None
    category_id: str | None = None
    seo_title: str | None = None
    seo_description: str | None = None
    seo_keywords: str | None = None
    canonical_url: str | None = None
    status: str = "draft"
    published_at: datetime | None = None
    view_count: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None
    author: BlogAuthor | None = None
    category: BlogCategory | None = None
    tags: list[BlogTag] = Field(default_factory=list)

    @classmethod
    def from_db_row(cls, row: dict[str, Any]) -> "BlogPost":
        data = dict(row)
        # tags arrive through the join table as [{"tag": {...}}, ...]
        raw_tags = data.pop("tags", None) or []
        data["tags"] = [t.get("tag", t) for t in raw_tags if t]
        return cls(**data)


class ProgrammaticPage(BaseModel):
    """Matches the programmatic_pages table row."""

    model_config = ConfigDict(extra="allow")

    id: str | None = None
    page_type: PageType
    slug: str
    location: str | None = None
    category: str | None = None
    age_min: int | None = None
    age_max: int | None = None
    title: str = ""
    meta_description: str | None = None
    h1_title: str | None = None
    intro_content: str | None = None
    auto_generated: bool = True
    camp_count: int = 0
    last_updated: datetime | None = None
    created_at: datetime | None = None

    @classmethod
    def from_db_row(cls, row: dict[str, Any]) -> "ProgrammaticPage":
        return cls(**row)
