# File: tests/conftest.py
from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Dict, List, Sequence, Tuple, Union

import pytest
from aiohttp import web

from micrawl.config import CrawlConfig
from micrawl.crawler.models import FailureReason, FetchFailure, FetchOutcome, FetchSuccess

FakePage = Union[Tuple[int, str], FailureReason]


class FakeFetcher:
    """
    In-memory fetch executor: maps URL -> (status, html) or FailureReason.
    Unknown URLs answer 404. Every dispatched batch is recorded.
    """

    def __init__(self, pages: Dict[str, FakePage]) -> None:
        self.pages = pages
        self.batches: List[List[str]] = []

    @property
    def dispatched(self) -> List[str]:
        return [url for batch in self.batches for url in batch]

    async def fetch_batch(self, urls: Sequence[str]) -> List[FetchOutcome]:
        self.batches.append(list(urls))
        outcomes: List[FetchOutcome] = []
        for url in urls:
            page = self.pages.get(url, (404, ""))
            if isinstance(page, FailureReason):
                outcomes.append(FetchFailure(url, page, "fake"))
                continue
            status, html = page
            body = html if 200 <= status < 300 else None
            outcomes.append(FetchSuccess(url=url, final_url=url, status=status, body=body))
        return outcomes


@pytest.fixture()
def basic_config() -> CrawlConfig:
    """
    Return a basic valid CrawlConfig for crawler tests.
    """
    return CrawlConfig(seed="http://example.com/", threads=5, timeout=2.0)


async def serve_app(app: web.Application, port: int) -> AsyncIterator[str]:
    """Start *app* on *port*, yield base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "localhost", port)
    await site.start()
    try:
        yield f"http://localhost:{port}"
    finally:
        await runner.cleanup()


def html_response(body: str) -> web.Response:
    return web.Response(text=body, content_type="text/html")
