"""Tests for the environment-configured audit entrypoint."""

from datetime import date

import httpx
import pytest

from crawlcheck import run_audit
from crawlcheck.firecrawl import FirecrawlClient


def _firecrawl_api(status):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "POST":
            return httpx.Response(200, json={"success": True, "id": "job-9"})
        return httpx.Response(200, json=status)

    return httpx.MockTransport(handler)


COMPLETED = {
    "status": "completed",
    "data": [
        {
            "markdown": "# About",
            "html": '<html><head></head><body><img src="a.png"></body></html>',
            "metadata": {"sourceURL": "https://example.com/about-us", "contentType": "text/html"},
        }
    ],
}


class TestRun:
    @pytest.mark.asyncio
    async def test_writes_both_reports(self, tmp_path):
        client = FirecrawlClient("fc-test", poll_interval=0, transport=_firecrawl_api(COMPLETED))
        csv_path, summary_path = await run_audit.run(
            "https://example.com",
            "fc-test",
            output_dir=str(tmp_path / "out"),
            client=client,
            today=date(2024, 6, 30),
        )

        assert csv_path.name == "seo-audit-2024-06-30.csv"
        assert summary_path.name == "seo-summary-2024-06-30.txt"
        csv_lines = csv_path.read_text(encoding="utf-8").split("\n")
        assert len(csv_lines) == 2
        assert csv_lines[1].startswith('"https://example.com/about-us","MISSING","Missing"')
        summary = summary_path.read_text(encoding="utf-8")
        assert "Generated: 2024-06-30" in summary
        assert "URL: https://example.com/about-us" in summary

    @pytest.mark.asyncio
    async def test_crawl_failure_raises(self, tmp_path):
        client = FirecrawlClient(
            "fc-test", poll_interval=0, transport=_firecrawl_api({"status": "failed"})
        )
        with pytest.raises(RuntimeError, match="Crawl job failed"):
            await run_audit.run("https://example.com", "fc-test", output_dir=str(tmp_path), client=client)
        assert list(tmp_path.iterdir()) == []

    @pytest.mark.asyncio
    async def test_malformed_provider_response_raises(self, tmp_path):
        client = FirecrawlClient(
            "fc-test",
            poll_interval=0,
            transport=_firecrawl_api({"status": "completed", "data": [{"metadata": "x"}]}),
        )
        with pytest.raises(RuntimeError, match="Unexpected response from Firecrawl"):
            await run_audit.run("https://example.com", "fc-test", output_dir=str(tmp_path), client=client)
        assert list(tmp_path.iterdir()) == []


class TestMain:
    def test_missing_configuration(self, monkeypatch):
        monkeypatch.delenv("FIRECRAWL_API_KEY", raising=False)
        monkeypatch.delenv("START_URL", raising=False)
        assert run_audit.main() == 1

    def test_bad_max_pages(self, monkeypatch):
        monkeypatch.setenv("FIRECRAWL_API_KEY", "fc-test")
        monkeypatch.setenv("START_URL", "https://example.com")
        monkeypatch.setenv("MAX_PAGES", "lots")
        assert run_audit.main() == 1

    def test_crawl_error_exits_1(self, monkeypatch, tmp_path):
        async def fake_run(*args, **kwargs):
            raise RuntimeError("Crawl job timed out")

        monkeypatch.setenv("FIRECRAWL_API_KEY", "fc-test")
        monkeypatch.setenv("START_URL", "https://example.com")
        monkeypatch.setenv("OUTPUT_DIR", str(tmp_path))
        monkeypatch.setattr(run_audit, "run", fake_run)
        assert run_audit.main() == 1

    def test_success_exits_0(self, monkeypatch, tmp_path):
        seen = {}

        async def fake_run(start_url, api_key, **kwargs):
            seen.update(kwargs, start_url=start_url, api_key=api_key)
            return tmp_path / "a.csv", tmp_path / "b.txt"

        monkeypatch.setenv("FIRECRAWL_API_KEY", "fc-test")
        monkeypatch.setenv("START_URL", "https://example.com")
        monkeypatch.setenv("MAX_PAGES", "7")
        monkeypatch.setenv("OUTPUT_DIR", str(tmp_path))
        monkeypatch.delenv("FIRECRAWL_BASE_URL", raising=False)
        monkeypatch.setattr(run_audit, "run", fake_run)

        assert run_audit.main() == 0
        assert seen["start_url"] == "https://example.com"
        assert seen["max_pages"] == 7
        assert seen["output_dir"] == str(tmp_path)
