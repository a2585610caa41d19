from pydantic import BaseModel, Field
from typing import List, Dict, Optional, Any


class CrawledPage(BaseModel):
    """One page returned by the crawl provider."""

    url: str = ""
    html: str = ""
    markdown: Optional[str] = None
    content_type: str = ""

    @classmethod
    def from_firecrawl(cls, data: Dict[str, Any]) -> "CrawledPage":
        metadata = data.get("metadata") or {}
        content_type = metadata.get("contentType") or ""
        if isinstance(content_type, list):
            content_type = "; ".join(str(c) for c in content_type)
        return cls(
            url=metadata.get("sourceURL") or data.get("url") or "",
            html=data.get("html") or "",
            markdown=data.get("markdown"),
            content_type=content_type,
        )


class CrawlResult(BaseModel):
    success: bool
    error: Optional[str] = None
    pages: List[CrawledPage] = Field(default_factory=list)

    def page_urls(self) -> List[str]:
        return [p.url for p in self.pages if p.url]
