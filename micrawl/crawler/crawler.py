# === FILE: micrawl/crawler/crawler.py ===
from __future__ import annotations

import logging
import time
from typing import Dict, List, Optional, Protocol, Sequence, Set

from aiohttp import ClientSession, ClientTimeout

from micrawl.config import CrawlConfig
from micrawl.crawler.classifier import is_external, looks_like_webpage
from micrawl.crawler.fetcher import Fetcher
from micrawl.crawler.link_extractor import extract_anchors, extract_form_actions, parse_document
from micrawl.crawler.models import (
    CrawlResult,
    DiscoveredLink,
    FetchFailure,
    FetchOutcome,
    FetchSuccess,
    QueueEntry,
    ScopeTag,
)
from micrawl.crawler.robots import fetch_robots
from micrawl.utils import normalize_url

__all__ = ("AsyncCrawler", "FetchExecutor")


class FetchExecutor(Protocol):
    async def fetch_batch(self, urls: Sequence[str]) -> List[FetchOutcome]: ...


class AsyncCrawler:
    """Generational breadth-first crawler.

    Each generation drains the whole queue, fetches the internal entries
    concurrently and waits for all of them before touching any state. Queue,
    crawled set, block list and ledger are only mutated from :meth:`crawl`,
    so no locking is needed.
    """

    def __init__(self, config: CrawlConfig, fetcher: Optional[FetchExecutor] = None) -> None:
        self.config = config
        self.seed: str = normalize_url(config.seed_url)
        self.session: Optional[ClientSession] = None
        self.fetcher: Optional[FetchExecutor] = fetcher
        self.logger = logging.getLogger("Micrawl")
        self.robots: Optional[str] = None

        self._queue: List[QueueEntry] = [QueueEntry(self.seed, external=False)]
        self._queued: Set[str] = {self.seed}
        self._crawled: Set[str] = set()
        self._blocked: Set[str] = set()
        self._ledger: Dict[str, DiscoveredLink] = {}
        self._statuses: Dict[str, int] = {}

    async def __aenter__(self) -> AsyncCrawler:
        if self.fetcher is None:
            self.session = ClientSession(
                timeout=ClientTimeout(total=self.config.timeout),
                raise_for_status=False,
            )
            self.fetcher = Fetcher(self.session, self.config.threads)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    # ------------------------------------------------------------------ #
    # Read-only views                                                    #
    # ------------------------------------------------------------------ #

    @property
    def crawled(self) -> frozenset[str]:
        return frozenset(self._crawled)

    @property
    def blocked(self) -> frozenset[str]:
        return frozenset(self._blocked)

    @property
    def links(self) -> List[DiscoveredLink]:
        return list(self._ledger.values())

    # ------------------------------------------------------------------ #
    # Main loop                                                          #
    # ------------------------------------------------------------------ #

    async def crawl(self) -> CrawlResult:
        if self.fetcher is None:
            raise RuntimeError("Fetcher not initialized, use 'async with AsyncCrawler(...)'")
        self.logger.info("Crawl started: %s", self.seed)
        start = time.monotonic()

        if self.config.extract_robots:
            if self.session is None:
                self.logger.warning("[!] No HTTP session available, skipping robots.txt")
            else:
                self.robots = await fetch_robots(
                    self.session, self.seed, self.config.robots_timeout
                )

        generations = 0
        while self._queue:
            generations += 1
            batch = self._drain()
            pending = self._select_for_fetch(batch)
            if not pending:
                continue
            self.logger.debug("Generation %d: fetching %d pages", generations, len(pending))
            # barrier: every outcome of this generation is in before state changes
            outcomes = await self.fetcher.fetch_batch(pending)
            for outcome in outcomes:
                if isinstance(outcome, FetchFailure):
                    self._handle_failure(outcome)
                else:
                    self._handle_success(outcome)

        result = CrawlResult(
            seed=self.seed,
            links=self.links,
            statuses={u: s for u, s in self._statuses.items() if u in self._ledger},
            crawled=set(self._crawled),
            blocked=set(self._blocked),
            robots=self.robots,
            elapsed=time.monotonic() - start,
            generations=generations,
        )
        self.logger.info(result.summary())
        if self._blocked:
            self.logger.info("Unreachable: %d", len(self._blocked))
        return result

    def _drain(self) -> List[QueueEntry]:
        batch, self._queue = self._queue, []
        self._queued.clear()
        return batch

    def _select_for_fetch(self, batch: Sequence[QueueEntry]) -> List[str]:
        """Record external entries, return the internal ones that still need a fetch."""
        pending: List[str] = []
        for entry in batch:
            if entry.external:
                self._crawled.add(entry.url)
                if self._record(entry.url, ScopeTag.EXTERNAL):
                    self._print_result("...", entry.url)
                continue
            if entry.url in self._crawled or entry.url in self._blocked:
                continue
            # marked before dispatch so links to siblings are not queued again
            self._crawled.add(entry.url)
            pending.append(entry.url)
        return pending

    def _handle_success(self, outcome: FetchSuccess) -> None:
        self._crawled.add(outcome.url)
        self._crawled.add(outcome.final_url)
        self._statuses[outcome.url] = outcome.status
        self._print_result(str(outcome.status), outcome.url)

        if not outcome.ok or outcome.body is None:
            return
        final = outcome.final_url
        if is_external(self.seed, final):
            return

        doc = parse_document(outcome.body)
        for link in extract_anchors(doc, final):
            self._consider_anchor(link)
        for action in extract_form_actions(doc, final):
            self._consider_form(action)

    def _handle_failure(self, outcome: FetchFailure) -> None:
        self._crawled.add(outcome.url)
        self._blocked.add(outcome.url)
        self.logger.warning(
            "[!] Can't reach URL: %s (%s: %s)", outcome.url, outcome.reason.value, outcome.detail
        )

    def _consider_anchor(self, url: str) -> None:
        if not self._should_crawl(url):
            return
        internal = not is_external(self.seed, url)
        if not internal and not self.config.list_external:
            # seen, but neither fetched nor reported
            self._crawled.add(url)
            return
        scope = ScopeTag.INTERNAL if internal else ScopeTag.EXTERNAL
        if not looks_like_webpage(url):
            if self._record(url, scope):
                self._print_result("...", url)
            return
        self._queue.append(QueueEntry(url, external=not internal))
        self._queued.add(url)
        if internal:
            self._record(url, ScopeTag.INTERNAL)

    def _consider_form(self, url: str) -> None:
        if url in self._crawled:
            return
        if self._record(url, ScopeTag.FORM):
            self._print_result("...", url)

    def _should_crawl(self, url: str) -> bool:
        return url not in self._crawled and url not in self._queued and url not in self._blocked

    def _record(self, url: str, scope: ScopeTag) -> bool:
        """Add to the ledger unless already there; external links obey ``list_external``."""
        if url in self._ledger:
            return False
        if scope is ScopeTag.EXTERNAL and not self.config.list_external:
            return False
        self._ledger[url] = DiscoveredLink(url, scope)
        return True

    def _print_result(self, status: str, url: str) -> None:
        self.logger.info("[+] [%s]: %s", status, url)
