"""Blog endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query

from futureedge_api.responses import wrap_response
from futureedge_api.services import blog_service

router = APIRouter(prefix="/blog", tags=["blog"])


@router.get("/posts")
async def list_posts(
    limit: int | None = Query(None, ge=1, le=100),
    category: str | None = Query(None, description="Category slug"),
    q: str | None = Query(None, min_length=1, description="Search title, excerpt and content"),
):
    if q:
        data = blog_service.search_posts(q)
    elif category:
        data = blog_service.list_posts_by_category(category, limit)
    else:
        data = blog_service.list_posts(limit)
    return wrap_response(data, total_count=len(data))


@router.get("/posts/{slug}")
async def get_post(slug: str):
    post = blog_service.get_post_by_slug(slug)
    if post is None:
        raise HTTPException(status_code=404, detail=f"Post '{slug}' not found")
    return wrap_response(post)


@router.get("/posts/{slug}/related")
async def related_posts(slug: str, limit: int = Query(blog_service.RELATED_LIMIT, ge=1, le=12)):
    post = blog_service.get_post_ref(slug)
    if post is None:
        raise HTTPException(status_code=404, detail=f"Post '{slug}' not found")
    data = blog_service.list_related_posts(post["id"], post.get("category_id"), limit)
    return wrap_response(data, total_count=len(data))


@router.get("/categories")
async def list_categories():
    data = blog_service.list_categories()
    return wrap_response(data, total_count=len(data))
