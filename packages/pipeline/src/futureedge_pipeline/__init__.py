"""
futureedge_pipeline — batch jobs for the FutureEdge marketplace.

Architecture:
  jobs/     — one module per job (camp CSV export, landing pages, sitemap)
  loaders/  — paged Supabase reads and batched upserts
  utils/    — structlog configuration

Quick start:
    from futureedge_pipeline.jobs.programmatic_pages import run as run_pages
    import asyncio
    result = asyncio.run(run_pages(dry_run=True))

CLI:
    futureedge-pipeline export-camps
    futureedge-pipeline generate-pages --dry-run
    futureedge-pipeline sitemap --output public/sitemap.xml

Shared code from futureedge_shared:
    from futureedge_shared.config import settings
    from futureedge_shared.db import get_supabase_client
    from futureedge_shared.seo import PageSpec, build_page_row
    from futureedge_shared.csv_utils import write_records_csv
"""

__version__ = "0.1.0"
