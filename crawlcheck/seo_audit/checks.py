"""
Per-page SEO checks.

Operates on raw HTML to produce a PageAnalysis: title, meta description,
H1 structure and image alt text, each deducting a fixed penalty from a
base score of 100.
"""

from typing import Optional, List, Tuple
from urllib.parse import urlsplit

from .models import (
    IssueType,
    IssueCategory,
    SeoIssue,
    H1TagInfo,
    ImageWithoutAlt,
    SeoDetails,
    PageAnalysis,
)
from .parser import LxmlDocument, MarkupDocument, ParseFn


BASE_SCORE = 100

TITLE_MIN_LENGTH = 30
TITLE_MAX_LENGTH = 60
META_MIN_LENGTH = 120
META_MAX_LENGTH = 160

MISSING_TITLE_PENALTY = 20
LONG_TITLE_PENALTY = 10
SHORT_TITLE_PENALTY = 5
MISSING_META_PENALTY = 20
LONG_META_PENALTY = 10
SHORT_META_PENALTY = 5
MISSING_H1_PENALTY = 15
MULTIPLE_H1_PENALTY = 10
IMAGE_ALT_PENALTY = 2
IMAGE_ALT_PENALTY_CAP = 15

NO_TITLE = "No title"

CheckOutcome = Tuple[Optional[SeoIssue], int]


# ─── Extraction ───────────────────────────────────────────────────────


def extract_title(doc: MarkupDocument) -> Optional[str]:
    """Trimmed text of the first <title>, or None when absent or blank."""
    el = doc.first_element("title")
    if el is None:
        return None
    return doc.text_content(el).strip() or None


def extract_meta_description(doc: MarkupDocument) -> Optional[str]:
    """Trimmed content of the first <meta name="description">."""
    for el in doc.all_elements("meta"):
        if doc.attribute(el, "name") == "description":
            return (doc.attribute(el, "content") or "").strip() or None
    return None


def extract_h1_texts(doc: MarkupDocument) -> List[str]:
    return [doc.text_content(el).strip() for el in doc.all_elements("h1")]


def extract_images_without_alt(doc: MarkupDocument) -> Tuple[List[ImageWithoutAlt], int]:
    """Images whose alt is absent or whitespace-only, plus the total image count."""
    images = doc.all_elements("img")
    missing: List[ImageWithoutAlt] = []
    for img in images:
        alt = doc.attribute(img, "alt")
        if alt is None or alt.strip() == "":
            missing.append(
                ImageWithoutAlt(src=doc.attribute(img, "src") or "", alt=alt)
            )
    return missing, len(images)


# ─── Individual Checks ────────────────────────────────────────────────


def check_title(title: Optional[str]) -> CheckOutcome:
    """Title must be present and 30-60 chars inclusive."""
    if not title:
        return SeoIssue(
            type=IssueType.ERROR,
            category=IssueCategory.TITLE,
            message="Missing title tag",
            details="Every page should have a unique title tag for SEO",
        ), MISSING_TITLE_PENALTY

    length = len(title)
    if length > TITLE_MAX_LENGTH:
        return SeoIssue(
            type=IssueType.WARNING,
            category=IssueCategory.TITLE,
            message="Title tag too long",
            details=f"Title is {length} characters. Recommended: 50-60 characters",
        ), LONG_TITLE_PENALTY
    if length < TITLE_MIN_LENGTH:
        return SeoIssue(
            type=IssueType.WARNING,
            category=IssueCategory.TITLE,
            message="Title tag too short",
            details=f"Title is {length} characters. Recommended: 30-60 characters",
        ), SHORT_TITLE_PENALTY
    return None, 0


def check_meta_description(description: Optional[str]) -> CheckOutcome:
    """Meta description must be present and 120-160 chars inclusive."""
    if not description:
        return SeoIssue(
            type=IssueType.ERROR,
            category=IssueCategory.META_DESCRIPTION,
            message="Missing meta description",
            details="Meta descriptions help search engines understand your page content",
        ), MISSING_META_PENALTY

    length = len(description)
    if length > META_MAX_LENGTH:
        return SeoIssue(
            type=IssueType.WARNING,
            category=IssueCategory.META_DESCRIPTION,
            message="Meta description too long",
            details=f"Description is {length} characters. Recommended: 120-160 characters",
        ), LONG_META_PENALTY
    if length < META_MIN_LENGTH:
        return SeoIssue(
            type=IssueType.WARNING,
            category=IssueCategory.META_DESCRIPTION,
            message="Meta description too short",
            details=f"Description is {length} characters. Recommended: 120-160 characters",
        ), SHORT_META_PENALTY
    return None, 0


def check_h1(h1_count: int) -> CheckOutcome:
    """Exactly one H1 per page."""
    if h1_count == 0:
        return SeoIssue(
            type=IssueType.ERROR,
            category=IssueCategory.H1,
            message="Missing H1 tag",
            details="Every page should have exactly one H1 tag for SEO hierarchy",
        ), MISSING_H1_PENALTY
    if h1_count > 1:
        return SeoIssue(
            type=IssueType.WARNING,
            category=IssueCategory.H1,
            message="Multiple H1 tags found",
            details=f"Found {h1_count} H1 tags. Recommended: exactly 1 H1 per page",
        ), MULTIPLE_H1_PENALTY
    return None, 0


def check_images(images_without_alt: List[ImageWithoutAlt]) -> CheckOutcome:
    """Two points per image lacking alt text, capped at 15."""
    missing = len(images_without_alt)
    if missing == 0:
        return None, 0
    return SeoIssue(
        type=IssueType.WARNING,
        category=IssueCategory.IMAGES,
        message=f"{missing} images without alt attributes",
        details="Alt attributes improve accessibility and help search engines understand image content",
    ), min(missing * IMAGE_ALT_PENALTY, IMAGE_ALT_PENALTY_CAP)


# ─── Display Title ────────────────────────────────────────────────────


def title_from_url(url: str) -> str:
    """Humanize the last path segment: /blog/about-us -> "About Us"."""
    try:
        parts = urlsplit(url)
    except ValueError:
        return NO_TITLE
    if not parts.scheme or not parts.netloc:
        return NO_TITLE

    segments = [s for s in parts.path.split("/") if s]
    if not segments:
        return NO_TITLE

    words = segments[-1].replace("-", " ").replace("_", " ").split(" ")
    return " ".join(w[:1].upper() + w[1:] for w in words) or NO_TITLE


def derive_display_title(url: str, title: Optional[str], h1_texts: List[str]) -> str:
    if title:
        return title
    first_h1 = h1_texts[0] if h1_texts else ""
    if len(first_h1) > 3:
        return first_h1
    return title_from_url(url)


# ─── Main Per-Page Analysis ───────────────────────────────────────────


def analyze_page(
    url: str, raw_html: str, parse: ParseFn = LxmlDocument.from_string
) -> PageAnalysis:
    """
    Run all per-page SEO checks on the given HTML.

    Args:
        url: The page URL.
        raw_html: The full HTML content of the page.
        parse: Callable turning HTML into a MarkupDocument.

    Returns:
        PageAnalysis with issues in detection order and the final score.
    """
    doc = parse(raw_html or "")

    title = extract_title(doc)
    description = extract_meta_description(doc)
    h1_texts = extract_h1_texts(doc)
    images_without_alt, total_images = extract_images_without_alt(doc)

    issues: List[SeoIssue] = []
    penalty = 0
    for issue, points in (
        check_title(title),
        check_meta_description(description),
        check_h1(len(h1_texts)),
        check_images(images_without_alt),
    ):
        if issue is not None:
            issues.append(issue)
            penalty += points

    return PageAnalysis(
        url=url,
        title=derive_display_title(url, title, h1_texts),
        issues=issues,
        score=max(0, BASE_SCORE - penalty),
        crawled=True,
        seo_details=SeoDetails(
            title_text=title,
            meta_description=description,
            h1_tags=[H1TagInfo(text=", ".join(h1_texts), count=len(h1_texts))],
            images_without_alt=images_without_alt,
            total_images=total_images,
        ),
    )
