# File: micrawl/engine.py
"""micrawl.engine: запуск обхода и предварительная проверка доступности хоста."""

from __future__ import annotations

import asyncio

from aiohttp import ClientError, ClientSession, ClientTimeout

from micrawl.config import ConfigError, CrawlConfig
from micrawl.crawler.crawler import AsyncCrawler
from micrawl.crawler.headers import build_headers
from micrawl.crawler.models import CrawlResult
from micrawl.logger import logger

__all__ = ["check_reachable", "start_crawl"]


async def check_reachable(config: CrawlConfig) -> None:
    """Один GET на стартовый URL; любой HTTP-статус годится, ошибка сети — нет."""
    timeout = ClientTimeout(total=config.timeout)
    try:
        async with ClientSession(timeout=timeout) as session:
            async with session.get(config.seed_url, headers=build_headers()) as resp:
                logger.debug("Pre-flight %s -> HTTP %s", config.seed_url, resp.status)
    except (ClientError, asyncio.TimeoutError) as exc:
        raise ConfigError(f"Failed to connect to host {config.seed_url}") from exc


async def start_crawl(config: CrawlConfig) -> CrawlResult:
    """
    Запускает AsyncCrawler в контексте и возвращает результат обхода.

    Parameters
    ----------
    config : CrawlConfig
        Конфигурация обхода.
    """
    async with AsyncCrawler(config) as crawler:
        return await crawler.crawl()
