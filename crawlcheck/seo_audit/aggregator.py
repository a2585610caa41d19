"""
Site-wide aggregation of page analyses.

Rolls a batch of PageAnalysis objects into a fleet Summary, flattens each
analysis into a suggestion-annotated SeoDataRow for export, and computes
row-level issue percentages. Every call recomputes from scratch.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Sequence, Tuple

from .checks import (
    TITLE_MIN_LENGTH,
    TITLE_MAX_LENGTH,
    META_MIN_LENGTH,
    META_MAX_LENGTH,
)
from .models import (
    IssueType,
    IssueCategory,
    IssueLabel,
    PageAnalysis,
    CategoryCount,
    Summary,
    SeoDataRow,
    IssueStat,
    ImageAltStat,
    RowSummaryIssues,
    RowSummary,
)


MISSING = "MISSING"
TOP_ISSUES_LIMIT = 3


def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 going up (round() would go to even)."""
    return int(Decimal(repr(value)).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def _percentage(count: int, total: int) -> int:
    return round_half_up(count / total * 100) if total else 0


# ─── Fleet Summary ────────────────────────────────────────────────────


def summarize(analyses: Sequence[PageAnalysis]) -> Summary:
    """
    Aggregate issue counts and scores across all pages.

    An empty batch yields a zero-page summary with an average score of 0.
    """
    by_type: Dict[IssueType, int] = {t: 0 for t in IssueType}
    by_category: Dict[IssueCategory, int] = {c: 0 for c in IssueCategory}
    total_issues = 0
    score_sum = 0

    for page in analyses:
        score_sum += page.score
        for issue in page.issues:
            by_type[issue.type] += 1
            by_category[issue.category] += 1
            total_issues += 1

    total_pages = len(analyses)
    average_score = round_half_up(score_sum / total_pages) if total_pages else 0

    # sorted() is stable, so equal counts keep IssueCategory declaration order
    ranked = sorted(by_category.items(), key=lambda item: item[1], reverse=True)
    top_issues = [
        CategoryCount(category=category, count=count)
        for category, count in ranked[:TOP_ISSUES_LIMIT]
    ]

    return Summary(
        total_pages=total_pages,
        total_issues=total_issues,
        average_score=average_score,
        issues_by_type=by_type,
        issues_by_category=by_category,
        top_issues=top_issues,
    )


# ─── Export Rows ──────────────────────────────────────────────────────


def _title_assessment(title: str) -> Tuple[IssueLabel, str]:
    if not title:
        return (
            IssueLabel.MISSING,
            "Add a unique, descriptive title tag (30-60 characters) that includes your main keyword.",
        )
    length = len(title)
    if length > TITLE_MAX_LENGTH:
        return (
            IssueLabel.TOO_LONG,
            f"Shorten your title to 50-60 characters (currently {length}). "
            "Focus on your main keyword and value proposition.",
        )
    if length < TITLE_MIN_LENGTH:
        return (
            IssueLabel.TOO_SHORT,
            f"Expand your title to 30-60 characters (currently {length}). "
            "Add more descriptive keywords.",
        )
    return IssueLabel.GOOD, "Your title tag is well optimized."


def _meta_assessment(description: str) -> Tuple[IssueLabel, str]:
    if not description:
        return (
            IssueLabel.MISSING,
            "Add a compelling meta description (120-160 characters) that summarizes "
            "your page and includes relevant keywords.",
        )
    length = len(description)
    if length > META_MAX_LENGTH:
        return (
            IssueLabel.TOO_LONG,
            f"Shorten your meta description to 120-160 characters (currently {length}). "
            "Focus on the most important benefits.",
        )
    if length < META_MIN_LENGTH:
        return (
            IssueLabel.TOO_SHORT,
            f"Expand your meta description to 120-160 characters (currently {length}). "
            "Add more compelling details.",
        )
    return IssueLabel.GOOD, "Your meta description is well optimized."


def _h1_assessment(count: int) -> Tuple[IssueLabel, str]:
    if count == 0:
        return (
            IssueLabel.MISSING,
            "Add exactly one H1 tag that clearly describes your page content and "
            "includes your main keyword.",
        )
    if count > 1:
        return (
            IssueLabel.MULTIPLE_H1S,
            f"Use only one H1 tag per page (you have {count}). "
            "Convert extra H1s to H2 or H3 tags for proper hierarchy.",
        )
    return IssueLabel.GOOD, "Your H1 tag structure is optimized."


def _image_suggestion(missing: int) -> str:
    if missing > 0:
        return (
            f"Add descriptive alt text to {missing} image(s). Alt text helps screen "
            "readers and search engines understand your images."
        )
    return "All images have alt text - great for accessibility!"


def to_row(analysis: PageAnalysis) -> SeoDataRow:
    details = analysis.seo_details
    title = details.title_text or ""
    description = details.meta_description or ""
    h1 = analysis.h1

    title_issue, title_suggestion = _title_assessment(title)
    meta_issue, meta_suggestion = _meta_assessment(description)
    h1_issue, h1_suggestion = _h1_assessment(h1.count)
    missing_alt = len(details.images_without_alt)

    return SeoDataRow(
        url=analysis.url,
        title_content=title or MISSING,
        title_issue=title_issue,
        meta_description=description or MISSING,
        meta_issue=meta_issue,
        h1_count=h1.count,
        h1_content=h1.text or MISSING,
        h1_issue=h1_issue,
        images_without_alt=missing_alt,
        total_images=details.total_images,
        title_suggestion=title_suggestion,
        meta_suggestion=meta_suggestion,
        h1_suggestion=h1_suggestion,
        image_suggestion=_image_suggestion(missing_alt),
    )


def to_rows(analyses: Sequence[PageAnalysis]) -> List[SeoDataRow]:
    """Flatten each analysis into one export row, preserving order."""
    return [to_row(a) for a in analyses]


# ─── Row Summary ──────────────────────────────────────────────────────


def summarize_rows(rows: Sequence[SeoDataRow]) -> RowSummary:
    """Issue counts and percentages over export rows; zeros for an empty batch."""
    total = len(rows)
    missing_titles = sum(1 for r in rows if r.title_issue == IssueLabel.MISSING)
    missing_meta = sum(1 for r in rows if r.meta_issue == IssueLabel.MISSING)
    no_h1 = sum(1 for r in rows if r.h1_count == 0)
    multiple_h1 = sum(1 for r in rows if r.h1_count > 1)
    images_without_alt = sum(r.images_without_alt for r in rows)

    return RowSummary(
        total_pages=total,
        issues=RowSummaryIssues(
            missing_titles=IssueStat(
                count=missing_titles, percentage=_percentage(missing_titles, total)
            ),
            missing_meta_descriptions=IssueStat(
                count=missing_meta, percentage=_percentage(missing_meta, total)
            ),
            no_h1_tags=IssueStat(count=no_h1, percentage=_percentage(no_h1, total)),
            multiple_h1_tags=IssueStat(
                count=multiple_h1, percentage=_percentage(multiple_h1, total)
            ),
            images_without_alt=ImageAltStat(
                total=images_without_alt,
                average_per_page=(
                    round_half_up(images_without_alt / total) if total else 0
                ),
            ),
        ),
    )
