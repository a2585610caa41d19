"""
Entrypoint for SEO audit jobs.

Receives job parameters via environment variables, crawls the site through
Firecrawl, runs the SEO audit and writes the CSV and summary reports.

Environment variables:
    FIRECRAWL_API_KEY   - Firecrawl API key (required)
    START_URL           - URL to start crawling (required)
    MAX_PAGES           - Max pages to crawl, 1-50 (default: 2)
    OUTPUT_DIR          - Directory for the report files (default: .)
    FIRECRAWL_BASE_URL  - Override the Firecrawl API base URL
"""

import os
import sys
import asyncio
import logging
from datetime import date
from pathlib import Path
from typing import Optional, Tuple

from .firecrawl import DEFAULT_BASE_URL, FirecrawlClient
from .seo_audit import SEOAnalyzer, report_filenames

logger = logging.getLogger("seo-audit-runner")


async def run(
    start_url: str,
    api_key: str,
    max_pages: int = 2,
    output_dir: str = ".",
    base_url: str = DEFAULT_BASE_URL,
    client: Optional[FirecrawlClient] = None,
    today: Optional[date] = None,
) -> Tuple[Path, Path]:
    """Crawl, audit and write both reports; returns the written file paths."""
    client = client or FirecrawlClient(api_key, base_url=base_url)
    today = today or date.today()

    crawl = await client.crawl_website(start_url, max_pages=max_pages)
    if not crawl.success:
        raise RuntimeError(crawl.error or "Failed to crawl website")
    logger.info(f"Crawled {len(crawl.pages)} pages")

    analyzer = SEOAnalyzer()
    site_result = analyzer.analyze_site(crawl.pages)
    summary = site_result.summary
    logger.info(
        f"Audit complete. Average score: {summary.average_score}/100, "
        f"{summary.total_issues} issues across {summary.total_pages} pages"
    )
    for top in summary.top_issues:
        logger.info(f"  {top.category.value}: {top.count}")

    report = analyzer.build_report(site_result.pages, generated_on=today)
    csv_name, summary_name = report_filenames(today)
    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)

    csv_path = out / csv_name
    summary_path = out / summary_name
    csv_path.write_text(report.csv, encoding="utf-8")
    summary_path.write_text(report.summary_text, encoding="utf-8")
    logger.info(f"Reports written to {csv_path} and {summary_path}")
    return csv_path, summary_path


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")

    api_key = os.environ.get("FIRECRAWL_API_KEY")
    start_url = os.environ.get("START_URL")
    if not api_key or not start_url:
        logger.error("FIRECRAWL_API_KEY and START_URL are required")
        return 1
    try:
        max_pages = int(os.environ.get("MAX_PAGES", "2"))
    except ValueError:
        logger.error("MAX_PAGES must be an integer")
        return 1

    try:
        asyncio.run(
            run(
                start_url,
                api_key,
                max_pages=max_pages,
                output_dir=os.environ.get("OUTPUT_DIR", "."),
                base_url=os.environ.get("FIRECRAWL_BASE_URL", DEFAULT_BASE_URL),
            )
        )
    except RuntimeError as e:
        logger.error(f"Audit failed: {e}")
        return 1
    except OSError as e:
        logger.error(f"Could not write reports: {e}", exc_info=True)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
