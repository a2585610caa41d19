"""
Firecrawl crawl provider client.

Submits a crawl job, polls it until it completes, fails or runs out of
attempts, and returns the HTML pages as a CrawlResult. Every failure is
reported through ``CrawlResult.error``; nothing is raised to the caller.
"""

import re
import asyncio
import logging
from typing import List, Optional, Dict, Any

import httpx

from .models import CrawledPage, CrawlResult

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.firecrawl.dev/v1"
POLL_INTERVAL = 2.0  # seconds
MAX_POLL_ATTEMPTS = 30  # 30 x 2s = 60s ceiling
MIN_PAGES = 1
MAX_PAGES = 50
REQUEST_TIMEOUT = 30

_NON_HTML_URL = re.compile(r"\.(pdf|jpg|jpeg|png|gif|css|js|xml|json|zip|doc|docx)$", re.IGNORECASE)


class CrawlError(Exception):
    """Crawl job could not be started or finished; message is safe to show."""


def is_html_page(page: CrawledPage) -> bool:
    """Keep pages that look like HTML documents and came back with markdown."""
    if _NON_HTML_URL.search(page.url):
        return False
    if page.content_type and "text/html" not in page.content_type:
        return False
    return bool(page.markdown)


def _json_object(resp: httpx.Response) -> Dict[str, Any]:
    body = resp.json()
    if not isinstance(body, dict):
        raise CrawlError("Unexpected response from Firecrawl")
    return body


def _page_records(raw_pages: Any) -> List[Dict[str, Any]]:
    """Crawled page payloads, each an object whose metadata (if any) is an object."""
    if not isinstance(raw_pages, list):
        raise CrawlError("Unexpected response from Firecrawl")
    for item in raw_pages:
        if not isinstance(item, dict) or not isinstance(item.get("metadata") or {}, dict):
            raise CrawlError("Unexpected response from Firecrawl")
    return raw_pages


def sanitize_error(error: BaseException) -> str:
    """Generic message for unexpected failures, without leaking internals."""
    message = str(error)
    if "API key" in message or "Authorization" in message:
        return "Authentication failed"
    if isinstance(error, httpx.TransportError) or "fetch" in message or "network" in message:
        return "Network error occurred"
    return "An error occurred while processing your request"


class FirecrawlClient:
    """
    Async client for the Firecrawl crawl API.

    Usage:
        client = FirecrawlClient(api_key)
        result = await client.crawl_website("https://example.com", max_pages=5)
        if result.success:
            pages = result.pages
    """

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = DEFAULT_BASE_URL,
        poll_interval: float = POLL_INTERVAL,
        max_attempts: int = MAX_POLL_ATTEMPTS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.poll_interval = poll_interval
        self.max_attempts = max_attempts
        self._transport = transport

    async def crawl_website(self, url: str, max_pages: int = 2) -> CrawlResult:
        if not url:
            return CrawlResult(success=False, error="URL is required")
        if (
            not isinstance(max_pages, int)
            or isinstance(max_pages, bool)
            or not MIN_PAGES <= max_pages <= MAX_PAGES
        ):
            return CrawlResult(
                success=False, error="maxPages must be a number between 1 and 50"
            )
        if not self.api_key:
            logger.error("FIRECRAWL_API_KEY not configured")
            return CrawlResult(success=False, error="Firecrawl API key not configured")

        logger.info(f"Starting crawl for URL: {url} with maxPages: {max_pages}")
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                headers={"Authorization": f"Bearer {self.api_key}"},
                timeout=REQUEST_TIMEOUT,
                transport=self._transport,
            ) as client:
                job_id = await self._start_job(client, url, max_pages)
                pages = await self._wait_for_job(client, job_id)
        except CrawlError as e:
            return CrawlResult(success=False, error=str(e))
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Error during crawl: {e}", exc_info=True)
            return CrawlResult(success=False, error=sanitize_error(e))

        logger.info(f"Successfully crawled {len(pages)} pages")
        return CrawlResult(success=True, pages=pages)

    async def _start_job(self, client: httpx.AsyncClient, url: str, max_pages: int) -> str:
        resp = await client.post(
            "/crawl",
            json={
                "url": url,
                "limit": max_pages,
                "scrapeOptions": {"formats": ["markdown", "html"]},
            },
        )
        if resp.is_error:
            logger.error(f"Firecrawl API error: {resp.status_code} {resp.text}")
            raise CrawlError("Failed to start crawl job. Please check your URL and try again.")

        body = _json_object(resp)
        logger.info(f"Crawl job started: {body}")
        if not body.get("success"):
            raise CrawlError(body.get("error") or "Failed to start crawl job")
        if not body.get("id"):
            raise CrawlError("Failed to start crawl job")
        return body["id"]

    async def _wait_for_job(self, client: httpx.AsyncClient, job_id: str) -> List[CrawledPage]:
        for attempt in range(1, self.max_attempts + 1):
            await asyncio.sleep(self.poll_interval)
            logger.info(f"Polling crawl status (attempt {attempt}/{self.max_attempts})")

            resp = await client.get(f"/crawl/{job_id}")
            if resp.is_error:
                logger.error(f"Error checking crawl status: {resp.status_code}")
                continue

            status = _json_object(resp)
            logger.info(
                f"Crawl status: {status.get('status')}, "
                f"completed: {status.get('completed') or 0}/{status.get('total') or 0}"
            )

            if status.get("status") == "completed":
                raw_pages = _page_records(status.get("data") or [])
                pages = [CrawledPage.from_firecrawl(p) for p in raw_pages]
                html_pages = [p for p in pages if is_html_page(p)]
                logger.info(
                    f"Crawl completed. Filtered {len(html_pages)} HTML pages "
                    f"from {len(raw_pages)} total pages"
                )
                return html_pages
            if status.get("status") == "failed":
                raise CrawlError("Crawl job failed")
            # scraping / waiting: keep polling

        raise CrawlError("Crawl job timed out")
