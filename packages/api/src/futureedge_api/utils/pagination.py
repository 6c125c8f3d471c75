"""Offset pagination helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from fastapi import Query

MAX_PAGE_SIZE = 500


@dataclass
class PageParams:
    page: int = 1
    page_size: int = 50

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError("page must be >= 1")
        if not 1 <= self.page_size <= MAX_PAGE_SIZE:
            raise ValueError(f"page_size must be between 1 and {MAX_PAGE_SIZE}")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    def range_bounds(self) -> tuple[int, int]:
        """Inclusive (from, to) bounds for a PostgREST range query."""
        start = self.offset
        return start, start + self.page_size - 1


class PaginationParams:
    """Dependency for extracting pagination query params."""

    def __init__(
        self,
        page: int = Query(1, ge=1, description="1-based page number"),
        page_size: int = Query(50, ge=1, le=MAX_PAGE_SIZE, description="Number of results per page"),
    ) -> None:
        self.page = page
        self.page_size = page_size

    def to_page_params(self) -> PageParams:
        return PageParams(page=self.page, page_size=self.page_size)


def build_links(
    path: str,
    params: dict[str, Any],
    page: int,
    page_size: int,
    total_count: int | None,
) -> dict[str, str]:
    """Build self/next/prev links for a paginated response."""

    def _link(p: int) -> str:
        query = "&".join(
            f"{k}={v}" for k, v in {**params, "page": p, "page_size": page_size}.items()
            if v is not None
        )
        return f"{path}?{query}"

    links: dict[str, str] = {"self": _link(page)}
    if total_count is not None and page * page_size < total_count:
        links["next"] = _link(page + 1)
    if page > 1:
        links["prev"] = _link(page - 1)
    return links
