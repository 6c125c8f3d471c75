"""
jobs/programmatic_pages.py — Seed the programmatic_pages table.

Builds SEO landing pages from fixed city, category and age-range lists:
  - one page per city
  - one page per category
  - top cities × top categories
  - one page per age range
  - top categories × age ranges

Slugs and copy come from futureedge_shared.seo so they match the pages the
API creates on demand. Rows are upserted on slug, so re-running the job
refreshes copy without duplicating pages.

Usage:
    from futureedge_pipeline.jobs.programmatic_pages import run
    result = await run(dry_run=True)
"""

from __future__ import annotations

from collections import Counter
from typing import Any

import polars as pl

from futureedge_shared.seo import PageSpec, build_page_row

from futureedge_pipeline.loaders.supabase_loader import LoadResult, SupabaseLoader
from futureedge_pipeline.utils.logging import get_logger

log = get_logger(__name__, job="programmatic_pages")

TABLE = "programmatic_pages"

# Ordered by population and camp demand; the head of the list gets combo pages
TOP_LOCATIONS: tuple[str, ...] = (
    "New York City", "Los Angeles", "Chicago", "Houston", "Phoenix",
    "Philadelphia", "San Antonio", "San Diego", "Dallas", "San Jose",
    "Austin", "Jacksonville", "Fort Worth", "Columbus", "Charlotte",
    "San Francisco", "Indianapolis", "Seattle", "Denver", "Boston",
    "Nashville", "Portland", "Las Vegas", "Detroit", "Memphis",
    "Atlanta", "Miami", "Minneapolis", "Cleveland", "Tampa",
)

CATEGORIES: tuple[str, ...] = (
    "stem", "sports", "arts", "outdoor", "adventure",
    "music", "theater", "coding", "robotics", "dance",
    "soccer", "basketball", "swimming", "nature",
)

AGE_RANGES: tuple[tuple[int, int], ...] = ((5, 8), (9, 12), (13, 17), (5, 12))

COMBO_LOCATIONS = 10
COMBO_CATEGORIES = 5


def build_page_specs() -> list[PageSpec]:
    """All landing pages the job maintains, in insertion order."""
    top_cities = TOP_LOCATIONS[:COMBO_LOCATIONS]
    top_categories = CATEGORIES[:COMBO_CATEGORIES]

    specs = [PageSpec(location=loc) for loc in TOP_LOCATIONS]
    specs += [PageSpec(category=cat) for cat in CATEGORIES]
    specs += [PageSpec(location=loc, category=cat) for loc in top_cities for cat in top_categories]
    specs += [PageSpec(age_min=lo, age_max=hi) for lo, hi in AGE_RANGES]
    specs += [
        PageSpec(category=cat, age_min=lo, age_max=hi)
        for cat in top_categories
        for lo, hi in AGE_RANGES
    ]
    return specs


def build_pages_frame(specs: list[PageSpec]) -> pl.DataFrame:
    rows: list[dict[str, Any]] = [build_page_row(spec) for spec in specs]
    return pl.DataFrame(rows, infer_schema_length=None)


async def run(*, dry_run: bool = False) -> LoadResult:
    """
    Generate and upsert the landing pages.

    Args:
        dry_run: Build the pages but do not write to Supabase.

    Returns:
        LoadResult for programmatic_pages.
    """
    specs = build_page_specs()
    log.info("pages_start", pages=len(specs), dry_run=dry_run)

    counts = Counter(spec.page_type for spec in specs)
    for page_type, count in counts.items():
        log.info("pages_built", page_type=page_type, count=count)

    df = build_pages_frame(specs)

    if dry_run:
        log.info("dry_run_sample", slugs=df["slug"].head(5).to_list())
        return LoadResult(table=TABLE, records_loaded=len(df))

    loader = SupabaseLoader()
    # Existing camp counts survive a re-run; new rows take the column default
    result = await loader.upsert(
        TABLE,
        df,
        conflict_columns=["slug"],
        ignore_columns=["camp_count"],
    )
    if result.errors:
        log.warning("pages_partial_failure", errors=result.errors)
    return result
