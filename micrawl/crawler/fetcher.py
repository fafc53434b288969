# micrawl/crawler/fetcher.py
"""
Fetcher module: bounded-concurrency HTTP GETs for one crawl generation.
"""
from __future__ import annotations

import asyncio
from typing import List, Sequence

from aiohttp import (
    ClientConnectionError,
    ClientError,
    ClientSession,
    RedirectClientError,
    TooManyRedirects,
)

from micrawl.crawler.headers import HeaderFactory, build_headers
from micrawl.crawler.models import FailureReason, FetchFailure, FetchOutcome, FetchSuccess
from micrawl.utils import normalize_url


class Fetcher:
    """Runs GET requests with at most ``concurrency`` of them in flight.

    The fetcher never touches crawl state: it turns every URL into exactly one
    :class:`FetchSuccess` or :class:`FetchFailure` and hands them back.
    """

    def __init__(
        self,
        session: ClientSession,
        concurrency: int,
        header_factory: HeaderFactory = build_headers,
    ) -> None:
        if concurrency < 1:
            raise ValueError("concurrency must be >= 1")
        self.session = session
        self.concurrency = concurrency
        self._header_factory = header_factory
        self._semaphore = asyncio.Semaphore(concurrency)

    async def fetch(self, url: str) -> FetchOutcome:
        """
        Fetch a single URL.

        The body is read only for 2xx responses. Timeouts come from the
        session's ``ClientTimeout``.
        """
        async with self._semaphore:
            try:
                async with self.session.get(
                    url, headers=self._header_factory(), raise_for_status=False
                ) as resp:
                    body = None
                    if 200 <= resp.status < 300:
                        body = await resp.text(errors="replace")
                    return FetchSuccess(
                        url=url,
                        final_url=normalize_url(str(resp.url)),
                        status=resp.status,
                        body=body,
                    )
            # ServerTimeoutError is also a ClientConnectionError; timeouts go first
            except asyncio.TimeoutError as exc:
                return FetchFailure(url, FailureReason.TIMEOUT, _describe(exc))
            except (TooManyRedirects, RedirectClientError) as exc:
                return FetchFailure(url, FailureReason.REDIRECT_POLICY, _describe(exc))
            except ClientConnectionError as exc:
                return FetchFailure(url, FailureReason.CONNECT_FAILED, _describe(exc))
            except (ClientError, ValueError) as exc:
                return FetchFailure(url, FailureReason.OTHER, _describe(exc))

    async def fetch_batch(self, urls: Sequence[str]) -> List[FetchOutcome]:
        """Fetch the whole batch and wait for every request to finish."""
        return list(await asyncio.gather(*(self.fetch(url) for url in urls)))


def _describe(exc: BaseException) -> str:
    return str(exc) or type(exc).__name__
