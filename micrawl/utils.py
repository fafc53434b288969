# File: micrawl/utils.py
"""micrawl.utils: URL canonicalisation, host/domain helpers and time formatting."""

from __future__ import annotations

import ipaddress
from typing import Optional, Sequence
from urllib.parse import urlparse

from yarl import URL

from micrawl.logger import logger

__all__: Sequence[str] = (
    "normalize_url",
    "extract_host",
    "extract_domain",
    "is_http_url",
    "format_elapsed",
)

_HTTP_SCHEMES = ("http", "https")


def normalize_url(url: str) -> str:
    """Canonical form of an absolute URL.

    Dot segments are resolved, percent-encoding is made uniform, the port is
    dropped when it is the scheme default, the fragment is removed and an
    empty path becomes ``/``. Raises :class:`ValueError` for URLs yarl
    cannot parse.
    """
    parsed = URL(url)
    if parsed.fragment:
        parsed = parsed.with_fragment(None)
    if parsed.explicit_port is not None and parsed.is_default_port():
        parsed = parsed.with_port(None)
    if parsed.raw_path == "/":
        parsed = parsed.with_path("/", encoded=True, keep_query=True)
    normalized = str(parsed)
    if normalized != url:
        logger.debug("Normalized URL: %s -> %s", url, normalized)
    return normalized


def is_http_url(url: str) -> bool:
    """Проверяет, что URL абсолютный и использует http(s)."""
    parsed = urlparse(url)
    return parsed.scheme in _HTTP_SCHEMES and bool(parsed.netloc)


def extract_host(url: str) -> Optional[str]:
    """Host part of *url* without port or credentials, or ``None``."""
    try:
        return urlparse(url).hostname
    except ValueError:
        return None


def extract_domain(url: str) -> Optional[str]:
    """Like :func:`extract_host`, but ``None`` when the host is an IP literal."""
    host = extract_host(url)
    if not host:
        return None
    try:
        ipaddress.ip_address(host)
    except ValueError:
        return host
    return None


def format_elapsed(seconds: float) -> str:
    """``12.345`` style: whole seconds, dot, zero-padded milliseconds."""
    whole = int(seconds)
    millis = int(round((seconds - whole) * 1000))
    if millis == 1000:
        whole, millis = whole + 1, 0
    return f"{whole}.{millis:03d}"
