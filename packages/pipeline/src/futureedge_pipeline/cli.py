"""
cli.py — Click CLI entrypoint for the batch jobs.

Usage:
    futureedge-pipeline export-camps
    futureedge-pipeline generate-pages --dry-run
    futureedge-pipeline --log-level DEBUG sitemap
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import click
import structlog

from futureedge_shared.config import settings

from futureedge_pipeline.jobs import export_camps as export_camps_job
from futureedge_pipeline.jobs import programmatic_pages, sitemap as sitemap_job
from futureedge_pipeline.utils.logging import configure_logging

log = structlog.get_logger(__name__)


@click.group()
@click.option(
    "--log-level",
    default=settings.log_level,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    help="Log level",
)
@click.option(
    "--log-format",
    default=settings.log_format,
    type=click.Choice(["json", "console"]),
    help="Log output format",
)
def main(log_level: str, log_format: str) -> None:
    """FutureEdge batch jobs."""
    configure_logging(log_level=log_level, log_format=log_format)


@main.command("export-camps")
@click.option(
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=export_camps_job.DEFAULT_OUTPUT,
    show_default=True,
)
def export_camps(output: Path) -> None:
    """Export every camp to a CSV file."""
    count = asyncio.run(export_camps_job.run(output_path=output))
    if count:
        click.echo(f"Exported {count} camps to {output}")
    else:
        click.echo("No camps found in database")


@main.command("generate-pages")
@click.option("--dry-run", is_flag=True, help="Build pages without writing to Supabase")
def generate_pages(dry_run: bool) -> None:
    """Create or refresh programmatic SEO landing pages."""
    result = asyncio.run(programmatic_pages.run(dry_run=dry_run))
    verb = "Built" if dry_run else "Upserted"
    click.echo(f"{verb} {result.records_loaded} pages ({result.status})")
    if not result.success:
        for error in result.errors:
            click.echo(f"  {error}", err=True)
        raise SystemExit(1)


@main.command()
@click.option(
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=sitemap_job.DEFAULT_OUTPUT,
    show_default=True,
)
@click.option("--domain", default=None, help="Site origin (default: SITE_DOMAIN)")
def sitemap(output: Path, domain: str | None) -> None:
    """Write the XML sitemap."""
    summary = asyncio.run(sitemap_job.run(output_path=output, domain=domain))
    click.echo(f"Wrote {summary['total']} URLs to {output}")
    for section in ("static", "camps", "blog", "explore"):
        click.echo(f"  {section:10s} {summary[section]}")
    log.info("sitemap_command_complete", total=summary["total"])


if __name__ == "__main__":
    main()
