"""
futureedge_pipeline.jobs — batch jobs run from the CLI.

Each job module exports a run() async function:

    from futureedge_pipeline.jobs import export_camps, programmatic_pages, sitemap

    count = await export_camps.run(output_path=Path("camps.csv"))
    result = await programmatic_pages.run(dry_run=True)
    summary = await sitemap.run()
"""
