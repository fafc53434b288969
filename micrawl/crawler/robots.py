# micrawl/crawler/robots.py
"""
One-shot download of robots.txt content for the report.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Optional
from urllib.parse import urljoin

from aiohttp import ClientError, ClientSession, ClientTimeout

from micrawl.crawler.headers import HeaderFactory, build_headers

logger = logging.getLogger("Micrawl")


def robots_url(seed: str) -> str:
    return urljoin(seed, "/robots.txt")


async def fetch_robots(
    session: ClientSession,
    seed: str,
    timeout: float,
    header_factory: HeaderFactory = build_headers,
) -> Optional[str]:
    """
    Return the trimmed body of ``/robots.txt`` on the seed host.

    Any problem (non-2xx, network error, undecodable body) is logged and
    yields ``None``; it never aborts the crawl.
    """
    url = robots_url(seed)
    try:
        async with session.get(
            url, headers=header_factory(), timeout=ClientTimeout(total=timeout)
        ) as resp:
            if not 200 <= resp.status < 300:
                logger.warning("[!] Robots.txt not found at %s (HTTP %s)", url, resp.status)
                return None
            try:
                text = await resp.text()
            except UnicodeDecodeError:
                logger.warning(
                    "[!] Robots.txt exists but could not extract content. Please manually extract content."
                )
                return None
    except (ClientError, asyncio.TimeoutError) as exc:
        logger.warning("[!] Error loading robots.txt from %s: %s", url, str(exc) or type(exc).__name__)
        return None
    return text.strip()
