"""
crawlcheck.seo_audit — on-page SEO analysis and reporting.

Usage:
    from crawlcheck.seo_audit import SEOAnalyzer

    analyzer = SEOAnalyzer()

    # Single page audit (raw HTML)
    page = analyzer.analyze_html(url, html)

    # Site-wide audit (from CrawledPage records)
    site_result = analyzer.analyze_site(pages)

    # CSV + plain-text exports
    report = analyzer.build_report(site_result.pages)
"""

from .analyzer import SEOAnalyzer
from .checks import analyze_page
from .aggregator import summarize, to_rows, summarize_rows
from .export import (
    CSV_HEADERS,
    CSV_MIME_TYPE,
    SUMMARY_MIME_TYPE,
    to_csv,
    to_summary_text,
    report_filenames,
)
from .parser import LxmlDocument, MarkupDocument
from .models import (
    IssueType,
    IssueCategory,
    IssueLabel,
    SeoIssue,
    H1TagInfo,
    ImageWithoutAlt,
    SeoDetails,
    PageAnalysis,
    CategoryCount,
    Summary,
    SeoDataRow,
    IssueStat,
    ImageAltStat,
    RowSummaryIssues,
    RowSummary,
    AuditReport,
    SiteAuditResult,
)

__all__ = [
    # Main entry points
    "SEOAnalyzer",
    "analyze_page",
    "summarize",
    "to_rows",
    "summarize_rows",
    "to_csv",
    "to_summary_text",
    "report_filenames",
    "CSV_HEADERS",
    "CSV_MIME_TYPE",
    "SUMMARY_MIME_TYPE",
    # Parser adapter
    "LxmlDocument",
    "MarkupDocument",
    # Enums
    "IssueType",
    "IssueCategory",
    "IssueLabel",
    # Page-level results
    "SeoIssue",
    "H1TagInfo",
    "ImageWithoutAlt",
    "SeoDetails",
    "PageAnalysis",
    # Site-level results
    "CategoryCount",
    "Summary",
    "SeoDataRow",
    "IssueStat",
    "ImageAltStat",
    "RowSummaryIssues",
    "RowSummary",
    "AuditReport",
    "SiteAuditResult",
]
