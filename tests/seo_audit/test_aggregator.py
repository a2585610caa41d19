"""Tests for fleet summaries, export rows and row-level percentages."""

import pytest

from crawlcheck.seo_audit import (
    analyze_page,
    summarize,
    to_rows,
    summarize_rows,
    IssueType,
    IssueCategory,
    IssueLabel,
    SeoIssue,
    PageAnalysis,
    SeoDetails,
    H1TagInfo,
    ImageWithoutAlt,
)
from crawlcheck.seo_audit.aggregator import round_half_up


def _analysis(score=100, categories=(), url="https://example.com/", **details):
    issues = [
        SeoIssue(type=IssueType.WARNING, category=c, message=f"{c.value} issue")
        for c in categories
    ]
    return PageAnalysis(
        url=url,
        title="Page",
        issues=issues,
        score=score,
        seo_details=SeoDetails(**details),
    )


BARE_PAGE = '<html><head></head><body><img src="a.png"></body></html>'
GOOD_PAGE = (
    "<html><head><title>{title}</title>"
    '<meta name="description" content="{desc}"></head>'
    "<body><h1>Heading</h1></body></html>"
).format(title="T" * 40, desc="D" * 130)


# ---------------------------------------------------------------------------
# summarize()
# ---------------------------------------------------------------------------


class TestSummarize:
    def test_totals_match_pages(self):
        analyses = [
            analyze_page("https://example.com/a", BARE_PAGE),
            analyze_page("https://example.com/b", GOOD_PAGE),
            analyze_page("https://example.com/c", ""),
        ]
        summary = summarize(analyses)

        assert summary.total_pages == 3
        assert summary.total_issues == sum(len(a.issues) for a in analyses) == 7
        assert summary.average_score == round_half_up((43 + 100 + 45) / 3)
        assert summary.issues_by_type == {
            IssueType.ERROR: 6,
            IssueType.WARNING: 1,
            IssueType.INFO: 0,
        }
        assert summary.issues_by_category == {
            IssueCategory.TITLE: 2,
            IssueCategory.META_DESCRIPTION: 2,
            IssueCategory.H1: 2,
            IssueCategory.IMAGES: 1,
        }

    def test_average_rounds_half_up(self):
        summary = summarize([_analysis(score=42), _analysis(score=43)])
        assert summary.average_score == 43

    def test_top_issues_sorted_by_count(self):
        analyses = [
            _analysis(categories=[IssueCategory.IMAGES, IssueCategory.H1]),
            _analysis(categories=[IssueCategory.IMAGES, IssueCategory.H1, IssueCategory.TITLE]),
        ]
        top = summarize(analyses).top_issues
        assert [(t.category, t.count) for t in top] == [
            (IssueCategory.H1, 2),
            (IssueCategory.IMAGES, 2),
            (IssueCategory.TITLE, 1),
        ]

    def test_top_issue_ties_keep_category_order(self):
        top = summarize([_analysis()]).top_issues
        assert [t.category for t in top] == [
            IssueCategory.TITLE,
            IssueCategory.META_DESCRIPTION,
            IssueCategory.H1,
        ]
        assert all(t.count == 0 for t in top)

    def test_empty_batch_gives_zero_summary(self):
        summary = summarize([])
        assert summary.total_pages == 0
        assert summary.total_issues == 0
        assert summary.average_score == 0
        assert set(summary.issues_by_type.values()) == {0}
        assert len(summary.top_issues) == 3

    def test_recomputed_each_call(self):
        analyses = [_analysis(score=50, categories=[IssueCategory.TITLE])]
        assert summarize(analyses) == summarize(analyses)

    def test_serializes_with_original_keys(self):
        dumped = summarize([_analysis()]).model_dump(by_alias=True, mode="json")
        assert dumped["averageScore"] == 100
        assert dumped["issuesByType"] == {"error": 0, "warning": 0, "info": 0}
        assert dumped["topIssues"][0] == {"category": "title", "count": 0}


class TestRoundHalfUp:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (0.5, 1),
            (1.5, 2),
            (2.5, 3),
            (2.49, 2),
            (12.5, 13),
            (0, 0),
            (0.49999999999999994, 0),
            (28.999999999999996, 29),
        ],
    )
    def test_rounding(self, value, expected):
        assert round_half_up(value) == expected


# ---------------------------------------------------------------------------
# to_rows()
# ---------------------------------------------------------------------------


class TestToRows:
    def test_bare_page_row(self):
        row = to_rows([analyze_page("https://example.com/about-us", BARE_PAGE)])[0]

        assert row.url == "https://example.com/about-us"
        assert row.title_content == "MISSING"
        assert row.title_issue == IssueLabel.MISSING
        assert row.title_suggestion == (
            "Add a unique, descriptive title tag (30-60 characters) that includes your main keyword."
        )
        assert row.meta_description == "MISSING"
        assert row.meta_issue == IssueLabel.MISSING
        assert row.meta_suggestion == (
            "Add a compelling meta description (120-160 characters) that summarizes "
            "your page and includes relevant keywords."
        )
        assert row.h1_count == 0
        assert row.h1_content == "MISSING"
        assert row.h1_issue == IssueLabel.MISSING
        assert row.h1_suggestion == (
            "Add exactly one H1 tag that clearly describes your page content and "
            "includes your main keyword."
        )
        assert row.images_without_alt == 1
        assert row.total_images == 1
        assert row.image_suggestion == (
            "Add descriptive alt text to 1 image(s). Alt text helps screen readers "
            "and search engines understand your images."
        )

    def test_good_page_row(self):
        row = to_rows([analyze_page("https://example.com/", GOOD_PAGE)])[0]
        assert row.title_issue == IssueLabel.GOOD
        assert row.title_suggestion == "Your title tag is well optimized."
        assert row.meta_issue == IssueLabel.GOOD
        assert row.meta_suggestion == "Your meta description is well optimized."
        assert row.h1_issue == IssueLabel.GOOD
        assert row.h1_suggestion == "Your H1 tag structure is optimized."
        assert row.h1_content == "Heading"
        assert row.image_suggestion == "All images have alt text - great for accessibility!"

    def test_long_title_suggests_50_to_60(self):
        row = to_rows([_analysis(title_text="t" * 61)])[0]
        assert row.title_issue == IssueLabel.TOO_LONG
        assert row.title_suggestion == (
            "Shorten your title to 50-60 characters (currently 61). "
            "Focus on your main keyword and value proposition."
        )

    def test_short_title(self):
        row = to_rows([_analysis(title_text="t" * 29)])[0]
        assert row.title_issue == IssueLabel.TOO_SHORT
        assert "currently 29" in row.title_suggestion
        assert row.title_suggestion.startswith("Expand your title to 30-60 characters")

    def test_meta_bands(self):
        rows = to_rows([
            _analysis(meta_description="d" * 161),
            _analysis(meta_description="d" * 119),
            _analysis(meta_description="d" * 160),
        ])
        assert [r.meta_issue for r in rows] == [
            IssueLabel.TOO_LONG,
            IssueLabel.TOO_SHORT,
            IssueLabel.GOOD,
        ]
        assert "currently 161" in rows[0].meta_suggestion
        assert "currently 119" in rows[1].meta_suggestion

    def test_multiple_h1s(self):
        row = to_rows([_analysis(h1_tags=[H1TagInfo(text="A, B", count=2)])])[0]
        assert row.h1_issue == IssueLabel.MULTIPLE_H1S
        assert row.h1_count == 2
        assert row.h1_content == "A, B"
        assert row.h1_suggestion == (
            "Use only one H1 tag per page (you have 2). "
            "Convert extra H1s to H2 or H3 tags for proper hierarchy."
        )

    def test_one_row_per_analysis_in_order(self):
        analyses = [_analysis(url=f"https://example.com/{n}") for n in range(4)]
        assert [r.url for r in to_rows(analyses)] == [a.url for a in analyses]

    def test_image_count(self):
        missing = [ImageWithoutAlt(src=f"{n}.png") for n in range(3)]
        row = to_rows([_analysis(images_without_alt=missing, total_images=5)])[0]
        assert row.images_without_alt == 3
        assert row.total_images == 5
        assert "to 3 image(s)" in row.image_suggestion


# ---------------------------------------------------------------------------
# summarize_rows()
# ---------------------------------------------------------------------------


class TestSummarizeRows:
    def test_counts_and_percentages(self):
        analyses = [
            analyze_page("https://example.com/a", BARE_PAGE),
            analyze_page("https://example.com/b", GOOD_PAGE),
            analyze_page("https://example.com/c", '<h1>x</h1><h1>y</h1><img><img>'),
        ]
        summary = summarize_rows(to_rows(analyses))
        issues = summary.issues

        assert summary.total_pages == 3
        assert (issues.missing_titles.count, issues.missing_titles.percentage) == (2, 67)
        assert (issues.missing_meta_descriptions.count, issues.missing_meta_descriptions.percentage) == (2, 67)
        assert (issues.no_h1_tags.count, issues.no_h1_tags.percentage) == (1, 33)
        assert (issues.multiple_h1_tags.count, issues.multiple_h1_tags.percentage) == (1, 33)
        assert issues.images_without_alt.total == 3
        assert issues.images_without_alt.average_per_page == 1

    def test_percentage_rounds_half_up(self):
        rows = to_rows([_analysis(title_text=None)] + [_analysis(title_text="t" * 40)] * 7)
        assert summarize_rows(rows).issues.missing_titles.percentage == 13

    def test_average_images_rounds_half_up(self):
        rows = to_rows([
            _analysis(images_without_alt=[ImageWithoutAlt(), ImageWithoutAlt(), ImageWithoutAlt()]),
            _analysis(),
        ])
        assert summarize_rows(rows).issues.images_without_alt.average_per_page == 2

    def test_empty_rows(self):
        summary = summarize_rows([])
        assert summary.total_pages == 0
        assert summary.issues.missing_titles.percentage == 0
        assert summary.issues.images_without_alt.average_per_page == 0
