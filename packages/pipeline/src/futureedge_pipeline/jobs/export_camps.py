"""
jobs/export_camps.py — Dump every camp row to a spreadsheet-friendly CSV.

The header is the column order of the newest camp; list and object
columns (highlights, activities, images, ...) are written as JSON. The file
starts with a UTF-8 byte-order mark so Excel picks the right encoding.

Usage:
    from futureedge_pipeline.jobs.export_camps import run
    count = await run(output_path=Path("camp_data_from_database.csv"))
"""

from __future__ import annotations

from pathlib import Path

from futureedge_shared.csv_utils import write_records_csv

from futureedge_pipeline.loaders.supabase_loader import SupabaseLoader
from futureedge_pipeline.utils.logging import get_logger

log = get_logger(__name__, job="export_camps")

DEFAULT_OUTPUT = Path("camp_data_from_database.csv")


async def run(*, output_path: Path = DEFAULT_OUTPUT) -> int:
    """
    Export all camps, newest first.

    Returns:
        Number of camps written. No file is written when there are none.
    """
    log.info("export_start", output=str(output_path))

    loader = SupabaseLoader()
    camps = await loader.fetch_all("camps", order="created_at", desc=True)

    if not camps:
        log.warning("no_camps_found")
        return 0

    output_path.parent.mkdir(parents=True, exist_ok=True)
    count = write_records_csv(output_path, camps)

    for index, camp in enumerate(camps, start=1):
        log.debug(
            "camp_exported",
            index=index,
            name=camp.get("name"),
            category=camp.get("category"),
            status=camp.get("status"),
        )
    log.info("export_complete", camps=count, output=str(output_path.resolve()))
    return count
