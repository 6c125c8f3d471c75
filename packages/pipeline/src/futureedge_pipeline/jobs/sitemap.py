"""
jobs/sitemap.py — XML sitemap for the public site.

Includes static pages, published camp detail pages, published blog posts
and every programmatic landing page. A section whose query fails is
logged and left out; the rest of the sitemap is still written.

Usage:
    from futureedge_pipeline.jobs.sitemap import run
    summary = await run(output_path=Path("public/sitemap.xml"))
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Literal
from xml.sax.saxutils import escape

from futureedge_shared.config import settings

from futureedge_pipeline.loaders.supabase_loader import SupabaseLoader
from futureedge_pipeline.utils.logging import get_logger

log = get_logger(__name__, job="sitemap")

DEFAULT_OUTPUT = Path("public/sitemap.xml")

ChangeFreq = Literal["always", "hourly", "daily", "weekly", "monthly", "yearly", "never"]

# path -> (priority, changefreq)
STATIC_PAGES: dict[str, tuple[float, ChangeFreq]] = {
    "/": (1.0, "daily"),
    "/camps": (0.9, "daily"),
    "/partners": (0.7, "monthly"),
    "/talk-to-advisor": (0.6, "monthly"),
    "/blog": (0.8, "weekly"),
}

PAGE_TYPE_PRIORITY: dict[str, float] = {
    "location": 0.8,
    "category": 0.7,
    "location_category": 0.75,
}
DEFAULT_PAGE_PRIORITY = 0.6


@dataclass(frozen=True)
class SitemapUrl:
    loc: str
    lastmod: str | None = None
    changefreq: ChangeFreq | None = None
    priority: float | None = None


def _day(value: str | None, fallback: str) -> str:
    return value.split("T")[0] if value else fallback


def _format_priority(priority: float) -> str:
    text = f"{priority:.2f}"
    return text[:-1] if text.endswith("0") else text


def static_urls(domain: str, today: str) -> list[SitemapUrl]:
    return [
        SitemapUrl(f"{domain}{path}", today, freq, priority)
        for path, (priority, freq) in STATIC_PAGES.items()
    ]


def camp_urls(rows: list[dict[str, Any]], domain: str, today: str) -> list[SitemapUrl]:
    return [
        SitemapUrl(f"{domain}/camps/{row['id']}", _day(row.get("updated_at"), today), "weekly", 0.8)
        for row in rows
    ]


def blog_urls(rows: list[dict[str, Any]], domain: str, today: str) -> list[SitemapUrl]:
    return [
        SitemapUrl(f"{domain}/blog/{row['slug']}", _day(row.get("updated_at"), today), "monthly", 0.7)
        for row in rows
    ]


def page_urls(rows: list[dict[str, Any]], domain: str, today: str) -> list[SitemapUrl]:
    return [
        SitemapUrl(
            f"{domain}/explore/{row['slug']}",
            _day(row.get("last_updated"), today),
            "weekly",
            PAGE_TYPE_PRIORITY.get(row.get("page_type") or "", DEFAULT_PAGE_PRIORITY),
        )
        for row in rows
    ]


def render_sitemap(urls: list[SitemapUrl]) -> str:
    """Serialise URLs to sitemaps.org XML."""
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">',
    ]
    for url in urls:
        lines.append("  <url>")
        lines.append(f"    <loc>{escape(url.loc)}</loc>")
        if url.lastmod:
            lines.append(f"    <lastmod>{url.lastmod}</lastmod>")
        if url.changefreq:
            lines.append(f"    <changefreq>{url.changefreq}</changefreq>")
        if url.priority is not None:
            lines.append(f"    <priority>{_format_priority(url.priority)}</priority>")
        lines.append("  </url>")
    lines.append("</urlset>")
    return "\n".join(lines)


async def _fetch_section(
    loader: SupabaseLoader,
    section: str,
    table: str,
    columns: str,
    **kwargs: Any,
) -> list[dict[str, Any]]:
    try:
        rows = await loader.fetch_all(table, columns, **kwargs)
    except Exception as exc:
        log.error("section_fetch_failed", section=section, error=str(exc))
        return []
    log.info("section_added", section=section, count=len(rows))
    return rows


async def run(
    *,
    output_path: Path = DEFAULT_OUTPUT,
    domain: str | None = None,
) -> dict[str, int]:
    """
    Build and write the sitemap.

    Args:
        output_path: Where to write the XML.
        domain:      Site origin; defaults to settings.site_domain.

    Returns:
        URL counts per section plus "total".
    """
    domain = (domain or settings.site_domain).rstrip("/")
    today = datetime.now(timezone.utc).date().isoformat()
    log.info("sitemap_start", domain=domain, output=str(output_path))

    loader = SupabaseLoader()
    camps = await _fetch_section(
        loader, "camps", "camps", "id, updated_at", eq={"status": "published"}, order="id",
    )
    posts = await _fetch_section(
        loader, "blog", "blog_posts", "slug, updated_at, published_at",
        eq={"status": "published"}, order="published_at", desc=True,
    )
    pages = await _fetch_section(
        loader, "explore", "programmatic_pages", "slug, last_updated, page_type",
        order="page_type",
    )

    sections = {
        "static": static_urls(domain, today),
        "camps": camp_urls(camps, domain, today),
        "blog": blog_urls(posts, domain, today),
        "explore": page_urls(pages, domain, today),
    }
    urls = [url for section in sections.values() for url in section]

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(render_sitemap(urls), encoding="utf-8")

    summary = {name: len(section) for name, section in sections.items()}
    summary["total"] = len(urls)
    log.info("sitemap_complete", output=str(output_path.resolve()), **summary)
    return summary
