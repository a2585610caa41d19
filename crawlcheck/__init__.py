"""
crawlcheck — crawl a site through Firecrawl and audit its on-page SEO.

    from crawlcheck import FirecrawlClient, SEOAnalyzer

    result = await FirecrawlClient(api_key).crawl_website(url, max_pages=5)
    site_result = SEOAnalyzer().analyze_site(result.pages)
"""

from .models import CrawledPage, CrawlResult
from .firecrawl import FirecrawlClient
from .seo_audit import SEOAnalyzer

__version__ = "0.1.0"

__all__ = [
    "CrawledPage",
    "CrawlResult",
    "FirecrawlClient",
    "SEOAnalyzer",
]
