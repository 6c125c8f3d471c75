"""Blog posts and categories for the public site."""

from __future__ import annotations

from typing import Any

import structlog

from futureedge_shared.db import get_supabase_client
from futureedge_shared.models import BlogPost

from futureedge_api.utils.cache import blog_cache
from futureedge_api.utils.filtering import ilike_any

log = structlog.get_logger(__name__)

POST_SELECT = "*, author:blog_authors(*), category:blog_categories(*)"
POST_DETAIL_SELECT = POST_SELECT + ", tags:blog_post_tags(tag:blog_tags(*))"
SEARCH_COLUMNS = ["title", "excerpt", "content"]
SEARCH_LIMIT = 20
RELATED_LIMIT = 3


def list_posts(limit: int | None = None) -> list[dict[str, Any]]:
    cache_key = f"posts:{limit}"
    cached = blog_cache.get(cache_key)
    if cached is not None:
        return cached

    supabase = get_supabase_client()
    query = (
        supabase.table("blog_posts")
        .select(POST_SELECT)
        .eq("status", "published")
        .order("published_at", desc=True)
    )
    if limit:
        query = query.limit(limit)
    data = query.execute().data or []
    blog_cache.set(cache_key, data)
    return data


def _find_published(slug: str, columns: str) -> dict[str, Any] | None:
    supabase = get_supabase_client()
    result = (
        supabase.table("blog_posts")
        .select(columns)
        .eq("slug", slug)
        .eq("status", "published")
        .limit(1)
        .execute()
    )
    return result.data[0] if result.data else None


def get_post_ref(slug: str) -> dict[str, Any] | None:
    """id and category_id of a published post, without counting a view."""
    return _find_published(slug, "id, category_id")


def get_post_by_slug(slug: str) -> dict[str, Any] | None:
    """Published post with author, category and tags; bumps its view count."""
    post = _find_published(slug, POST_DETAIL_SELECT)
    if post is None:
        return None

    supabase = get_supabase_client()
    views = (post.get("view_count") or 0) + 1
    supabase.table("blog_posts").update({"view_count": views}).eq("id", post["id"]).execute()
    post["view_count"] = views
    # cached listings carry the old view count
    blog_cache.invalidate_prefix("posts:")
    return BlogPost.from_db_row(post).model_dump(mode="json")


def list_posts_by_category(category_slug: str, limit: int | None = None) -> list[dict[str, Any]]:
    supabase = get_supabase_client()
    query = (
        supabase.table("blog_posts")
        .select("*, author:blog_authors(*), category:blog_categories!inner(*)")
        .eq("status", "published")
        .eq("category.slug", category_slug)
        .order("published_at", desc=True)
    )
    if limit:
        query = query.limit(limit)
    return query.execute().data or []


def list_categories() -> list[dict[str, Any]]:
    cached = blog_cache.get("categories")
    if cached is not None:
        return cached

    supabase = get_supabase_client()
    data = (
        supabase.table("blog_categories")
        .select("*")
        .eq("active", True)
        .order("display_order")
        .execute()
    ).data or []
    blog_cache.set("categories", data)
    return data


def list_related_posts(
    post_id: str,
    category_id: str | None,
    limit: int = RELATED_LIMIT,
) -> list[dict[str, Any]]:
    """Other published posts in the same category; empty on failure."""
    if not category_id:
        return []

    supabase = get_supabase_client()
    try:
        result = (
            supabase.table("blog_posts")
            .select(POST_SELECT)
            .eq("status", "published")
            .eq("category_id", category_id)
            .neq("id", post_id)
            .order("published_at", desc=True)
            .limit(limit)
            .execute()
        )
    except Exception as exc:
        log.warning("related_posts_failed", post_id=post_id, error=str(exc))
        return []
    return result.data or []


def search_posts(term: str) -> list[dict[str, Any]]:
    supabase = get_supabase_client()
    return (
        supabase.table("blog_posts")
        .select(POST_SELECT)
        .eq("status", "published")
        .or_(ilike_any(SEARCH_COLUMNS, term))
        .order("published_at", desc=True)
        .limit(SEARCH_LIMIT)
        .execute()
    ).data or []
