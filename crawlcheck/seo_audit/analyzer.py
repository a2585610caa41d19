"""
SEOAnalyzer — main orchestrator for SEO audits.

Provides single-page and multi-page (site-wide) audits plus the export
bundle. Works on CrawledPage records from the crawl provider or on raw
HTML directly.
"""

import logging
from datetime import date
from typing import Iterable, List, Optional, Sequence

from ..models import CrawledPage
from .models import (
    AuditReport,
    PageAnalysis,
    SiteAuditResult,
    Summary,
)
from .aggregator import summarize, summarize_rows, to_rows
from .checks import analyze_page
from .export import to_csv, to_summary_text
from .parser import LxmlDocument, ParseFn

logger = logging.getLogger(__name__)


class SEOAnalyzer:
    """
    SEO audit analyzer that processes crawled pages.

    Usage — single page:
        analyzer = SEOAnalyzer()
        result = analyzer.analyze_html(url, html)

    Usage — site-wide (from a list of CrawledPage):
        analyzer = SEOAnalyzer()
        site_result = analyzer.analyze_site(crawl_result.pages)
        report = analyzer.build_report(site_result.pages)
    """

    def __init__(self, parse: ParseFn = LxmlDocument.from_string):
        self._parse = parse

    def analyze_html(self, url: str, html: str) -> PageAnalysis:
        """Run all SEO checks on raw HTML."""
        return analyze_page(url, html, parse=self._parse)

    def analyze_page(self, page: CrawledPage) -> PageAnalysis:
        """Run all SEO checks on a single crawled page."""
        return self.analyze_html(page.url, page.html or "")

    def analyze_site(self, pages: Iterable[CrawledPage]) -> SiteAuditResult:
        """
        Analyze every crawled page and summarize the batch.

        Pages without HTML or without a source URL are skipped.

        Args:
            pages: CrawledPage records, in crawl order.

        Returns:
            SiteAuditResult with per-page analyses and the fleet summary.
        """
        analyses: List[PageAnalysis] = []
        for page in pages:
            if not page.html or not page.url:
                logger.debug(f"Skipping page without html or url: {page.url or '<no url>'}")
                continue
            analyses.append(self.analyze_page(page))
        summary = self.summarize(analyses)
        logger.debug(
            f"Analyzed {summary.total_pages} pages, "
            f"{summary.total_issues} issues, average score {summary.average_score}"
        )
        return SiteAuditResult(pages=analyses, summary=summary)

    def summarize(self, analyses: Sequence[PageAnalysis]) -> Summary:
        return summarize(analyses)

    def build_report(
        self, analyses: Sequence[PageAnalysis], generated_on: Optional[date] = None
    ) -> AuditReport:
        """Flatten analyses into export rows and render both report formats."""
        rows = to_rows(analyses)
        return AuditReport(
            rows=rows,
            row_summary=summarize_rows(rows),
            csv=to_csv(rows),
            summary_text=to_summary_text(rows, generated_on=generated_on),
        )
