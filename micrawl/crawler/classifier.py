"""
Address classification relative to the crawl seed.

All functions are pure and take absolute, canonical URLs.
"""
from __future__ import annotations

from typing import FrozenSet
from urllib.parse import urlparse

from micrawl.utils import extract_domain, extract_host

__all__ = ("WEBPAGE_EXTENSIONS", "same_domain", "same_host", "is_external", "looks_like_webpage")

WEBPAGE_EXTENSIONS: FrozenSet[str] = frozenset(("html", "php"))


def same_domain(base: str, candidate: str) -> bool:
    """True if the candidate's domain contains the base domain (catches subdomains).

    IP-literal hosts have no domain and never match here; see :func:`same_host`.
    """
    base_domain = extract_domain(base)
    domain = extract_domain(candidate)
    if not base_domain or not domain:
        return False
    return base_domain in domain


def same_host(base: str, candidate: str) -> bool:
    base_host = extract_host(base)
    host = extract_host(candidate)
    return base_host is not None and base_host == host


def is_external(base: str, candidate: str) -> bool:
    return not same_domain(base, candidate) and not same_host(base, candidate)


def looks_like_webpage(candidate: str) -> bool:
    """Extension heuristic on the last path segment.

    ``/a``, ``/a/``, ``/page.html`` and ``/x.php`` pass; ``/image.png`` and
    ``/trailing.`` do not. Comparison is case-sensitive.
    """
    segment = urlparse(candidate).path.rsplit("/", 1)[-1]
    if "." not in segment:
        return True
    return segment.rsplit(".", 1)[1] in WEBPAGE_EXTENSIONS
