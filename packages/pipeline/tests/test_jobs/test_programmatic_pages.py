"""
tests/test_jobs/test_programmatic_pages.py — Unit tests for landing page generation.

Tests cover:
  - Page list composition and slugs
  - Dry run (no Supabase access)
  - Upsert on slug in batches
"""

from __future__ import annotations

from collections import Counter
from unittest.mock import patch

import polars as pl
import pytest

from futureedge_pipeline.jobs.programmatic_pages import (
    build_page_specs,
    build_pages_frame,
    run,
)


class TestBuildPageSpecs:
    def test_counts_per_page_type(self):
        counts = Counter(spec.page_type for spec in build_page_specs())
        assert counts == {
            "location": 30,
            "category": 14,
            "location_category": 50,
            "age": 4,
            "category_age": 20,
        }

    def test_slugs_are_unique(self):
        slugs = [spec.slug for spec in build_page_specs()]
        assert len(slugs) == len(set(slugs)) == 118

    def test_sample_slugs(self):
        slugs = {spec.slug for spec in build_page_specs()}
        assert "new-york-city-summer-camps" in slugs
        assert "stem-summer-camps" in slugs
        assert "new-york-city-stem-summer-camps" in slugs
        assert "ages-5-to-8-summer-camps" in slugs
        assert "adventure-ages-9-to-12-summer-camps" in slugs
        # Only the top five categories get age combinations
        assert "coding-ages-9-to-12-summer-camps" not in slugs
        # Only the top ten cities get category combinations
        assert "austin-stem-summer-camps" not in slugs


class TestBuildPagesFrame:
    def test_frame_columns(self):
        df = build_pages_frame(build_page_specs())

        assert len(df) == 118
        assert df["age_min"].dtype == pl.Int64
        assert df.filter(pl.col("page_type") == "category")["location"].null_count() == 14
        assert df["auto_generated"].all()
        assert df["title"][0] == "Summer Camps in New York City | FutureEdge"


class TestRun:
    @pytest.mark.asyncio
    async def test_dry_run_skips_supabase(self):
        with patch(
            "futureedge_pipeline.loaders.supabase_loader.get_supabase_client"
        ) as get_client:
            result = await run(dry_run=True)

        assert result.table == "programmatic_pages"
        assert result.records_loaded == 118
        get_client.assert_not_called()

    @pytest.mark.asyncio
    async def test_upserts_on_slug_in_batches(self, mock_supabase):
        result = await run()

        query = mock_supabase.queries["programmatic_pages"]
        batches = [c.args[0] for c in query.upsert.call_args_list]
        assert [len(b) for b in batches] == [100, 18]
        assert query.upsert.call_args.kwargs == {"on_conflict": "slug"}
        assert result.records_loaded == 118
        assert result.success

    @pytest.mark.asyncio
    async def test_rows_keep_existing_camp_counts(self, mock_supabase):
        await run()

        first_batch = mock_supabase.queries["programmatic_pages"].upsert.call_args_list[0].args[0]
        assert all("camp_count" not in row for row in first_batch)
        assert first_batch[0]["slug"] == "new-york-city-summer-camps"
        assert "category" not in first_batch[0]

    @pytest.mark.asyncio
    async def test_failed_batch_is_reported(self, mock_supabase):
        mock_supabase.table("programmatic_pages").execute.side_effect = RuntimeError("timeout")

        result = await run()

        assert result.status == "failure"
        assert result.records_failed == 118
        assert len(result.errors) == 2
