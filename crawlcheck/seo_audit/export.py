"""
Export formatting for SEO audit rows.

Pure string transforms: a CSV table for spreadsheets and a plain-text
summary report. Writing the result anywhere is up to the caller.
"""

import csv
import io
from datetime import date
from typing import Optional, Sequence, Tuple

from .aggregator import MISSING, summarize_rows
from .models import SeoDataRow


CSV_MIME_TYPE = "text/csv;charset=utf-8"
SUMMARY_MIME_TYPE = "text/plain;charset=utf-8"

CSV_HEADERS = [
    "Page URL",
    "Current Title Tag",
    "Title Issue",
    "Title Recommendation",
    "Current Meta Description",
    "Meta Issue",
    "Meta Recommendation",
    "H1 Count",
    "H1 Content",
    "H1 Issue",
    "H1 Recommendation",
    "Images Missing Alt Text",
    "Image Recommendation",
]


def _single_line(value: str) -> str:
    # One record per physical line
    return value.replace("\r\n", " ").replace("\r", " ").replace("\n", " ")


def _csv_fields(row: SeoDataRow) -> list:
    return [
        _single_line(row.url),
        _single_line(row.title_content),
        row.title_issue.value,
        row.title_suggestion,
        _single_line(row.meta_description),
        row.meta_issue.value,
        row.meta_suggestion,
        row.h1_count,
        _single_line(row.h1_content),
        row.h1_issue.value,
        row.h1_suggestion,
        row.images_without_alt,
        row.image_suggestion,
    ]


def to_csv(rows: Sequence[SeoDataRow]) -> str:
    """
    Render rows as CSV text.

    The header is unquoted, text fields are double-quoted with embedded
    quotes doubled, and the two count columns are left bare. Lines are
    joined with "\\n" and there is no trailing newline.
    """
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n")
    for row in rows:
        writer.writerow(_csv_fields(row))

    body = buf.getvalue()
    if body.endswith("\n"):
        body = body[:-1]
    header = ",".join(CSV_HEADERS)
    return f"{header}\n{body}" if body else header


def _length_label(value: str) -> str:
    return "Missing" if value == MISSING else f"{len(value)} chars"


def to_summary_text(
    rows: Sequence[SeoDataRow], generated_on: Optional[date] = None
) -> str:
    """Fixed-template plain-text report: overview block, then one block per page."""
    summary = summarize_rows(rows)
    issues = summary.issues

    lines = ["SEO Audit Summary Report"]
    if generated_on is not None:
        lines.append(f"Generated: {generated_on.isoformat()}")
    lines += [
        "",
        "OVERVIEW:",
        f"- Total Pages: {summary.total_pages}",
        f"- Missing Titles: {issues.missing_titles.count} ({issues.missing_titles.percentage}%)",
        f"- Missing Meta Descriptions: {issues.missing_meta_descriptions.count} "
        f"({issues.missing_meta_descriptions.percentage}%)",
        f"- Pages with no H1: {issues.no_h1_tags.count} ({issues.no_h1_tags.percentage}%)",
        f"- Pages with multiple H1: {issues.multiple_h1_tags.count} "
        f"({issues.multiple_h1_tags.percentage}%)",
        f"- Total images without alt: {issues.images_without_alt.total}",
        f"- Average images without alt per page: {issues.images_without_alt.average_per_page}",
        "",
        "DETAILED BREAKDOWN:",
    ]
    for row in rows:
        lines += [
            "",
            f"URL: {row.url}",
            f"- Title: {row.title_issue.value} ({_length_label(row.title_content)})",
            f"- Meta Description: {row.meta_issue.value} ({_length_label(row.meta_description)})",
            f"- H1 Count: {row.h1_count}",
            f"- Images without Alt: {row.images_without_alt}",
        ]
    return "\n".join(lines) + "\n"


def report_filenames(day: date) -> Tuple[str, str]:
    """Default download names for the CSV and summary reports of a given day."""
    stamp = day.isoformat()
    return f"seo-audit-{stamp}.csv", f"seo-summary-{stamp}.txt"
