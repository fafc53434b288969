# micrawl/crawler/link_extractor.py
"""
Anchor and form-action extraction for Micrawl.
"""
from __future__ import annotations

from typing import List
from urllib.parse import urljoin

from bs4 import BeautifulSoup
from bs4.element import Tag

from micrawl.utils import is_http_url, normalize_url

__all__ = ("parse_document", "extract_anchors", "extract_form_actions")


def parse_document(body: str) -> BeautifulSoup:
    return BeautifulSoup(body, "html.parser")


def _resolve(base: str, raw: str) -> str | None:
    try:
        absolute = urljoin(base, raw.strip())
        if not is_http_url(absolute):
            # mailto:, javascript:, tel: and friends
            return None
        return normalize_url(absolute)
    except ValueError:
        return None


def _collect(doc: BeautifulSoup, base: str, tag_name: str, attr: str) -> List[str]:
    resolved: List[str] = []
    for tag in doc.find_all(tag_name):
        if not isinstance(tag, Tag):
            continue
        value = tag.get(attr)
        if not isinstance(value, str):
            continue
        url = _resolve(base, value)
        if url is not None:
            resolved.append(url)
    return resolved


def extract_anchors(doc: BeautifulSoup, base: str) -> List[str]:
    """
    Resolve every ``<a href>`` against *base*, in document order.

    Values that cannot be resolved to an http(s) URL are dropped silently.
    """
    return _collect(doc, base, "a", "href")


def extract_form_actions(doc: BeautifulSoup, base: str) -> List[str]:
    """Resolve every ``<form action>`` against *base*, in document order."""
    return _collect(doc, base, "form", "action")
