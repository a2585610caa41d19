"""
SEO audit data models.

Pydantic models for per-page analyses, fleet summaries and the flattened
export rows. All models are immutable once built; attribute names are
snake_case and serialize to camelCase with ``model_dump(by_alias=True)``.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import List, Dict, Optional
from enum import Enum


class IssueType(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class IssueCategory(str, Enum):
    # Declaration order breaks ties in Summary.top_issues
    TITLE = "title"
    META_DESCRIPTION = "meta_description"
    H1 = "h1"
    IMAGES = "images"


class IssueLabel(str, Enum):
    GOOD = "Good"
    MISSING = "Missing"
    TOO_LONG = "Too Long"
    TOO_SHORT = "Too Short"
    MULTIPLE_H1S = "Multiple H1s"


class _FrozenModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


# ─── Per-Page Analysis ────────────────────────────────────────────────


class SeoIssue(_FrozenModel):
    type: IssueType
    category: IssueCategory
    message: str
    details: Optional[str] = None


class H1TagInfo(_FrozenModel):
    text: str = ""
    count: int = 0


class ImageWithoutAlt(_FrozenModel):
    src: str = ""
    alt: Optional[str] = None


class SeoDetails(_FrozenModel):
    title_text: Optional[str] = None
    meta_description: Optional[str] = None
    h1_tags: List[H1TagInfo] = Field(default_factory=lambda: [H1TagInfo()])
    images_without_alt: List[ImageWithoutAlt] = Field(default_factory=list)
    total_images: int = 0


class PageAnalysis(_FrozenModel):
    url: str
    title: str
    issues: List[SeoIssue] = Field(default_factory=list)
    score: int = Field(default=100, ge=0, le=100)
    crawled: bool = True
    seo_details: SeoDetails = Field(default_factory=SeoDetails)

    @property
    def h1(self) -> H1TagInfo:
        return self.seo_details.h1_tags[0] if self.seo_details.h1_tags else H1TagInfo()


# ─── Fleet Summary ────────────────────────────────────────────────────


class CategoryCount(_FrozenModel):
    category: IssueCategory
    count: int = 0


class Summary(_FrozenModel):
    total_pages: int = 0
    total_issues: int = 0
    average_score: int = 0
    issues_by_type: Dict[IssueType, int] = Field(default_factory=dict)
    issues_by_category: Dict[IssueCategory, int] = Field(default_factory=dict)
    top_issues: List[CategoryCount] = Field(default_factory=list)


# ─── Export Rows ──────────────────────────────────────────────────────


class SeoDataRow(_FrozenModel):
    url: str
    title_content: str
    title_issue: IssueLabel
    meta_description: str
    meta_issue: IssueLabel
    h1_count: int = 0
    h1_content: str
    h1_issue: IssueLabel
    images_without_alt: int = 0
    total_images: int = 0
    title_suggestion: str
    meta_suggestion: str
    h1_suggestion: str
    image_suggestion: str


class IssueStat(_FrozenModel):
    count: int = 0
    percentage: int = 0


class ImageAltStat(_FrozenModel):
    total: int = 0
    average_per_page: int = 0


class RowSummaryIssues(_FrozenModel):
    missing_titles: IssueStat = Field(default_factory=IssueStat)
    missing_meta_descriptions: IssueStat = Field(default_factory=IssueStat)
    no_h1_tags: IssueStat = Field(default_factory=IssueStat)
    multiple_h1_tags: IssueStat = Field(default_factory=IssueStat)
    images_without_alt: ImageAltStat = Field(default_factory=ImageAltStat)


class RowSummary(_FrozenModel):
    total_pages: int = 0
    issues: RowSummaryIssues = Field(default_factory=RowSummaryIssues)


# ─── Site-Level Results ───────────────────────────────────────────────


class AuditReport(_FrozenModel):
    rows: List[SeoDataRow] = Field(default_factory=list)
    row_summary: RowSummary = Field(default_factory=RowSummary)
    csv: str = ""
    summary_text: str = ""


class SiteAuditResult(_FrozenModel):
    pages: List[PageAnalysis] = Field(default_factory=list)
    summary: Summary = Field(default_factory=Summary)
