"""micrawl.crawler: generational crawl orchestration and its building blocks."""

from .crawler import AsyncCrawler
from .fetcher import Fetcher
from .models import CrawlResult, DiscoveredLink, FailureReason, ScopeTag

__all__ = ["AsyncCrawler", "CrawlResult", "DiscoveredLink", "FailureReason", "Fetcher", "ScopeTag"]
