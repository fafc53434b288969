"""
Data models for the Micrawl crawler.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Set, Union

from micrawl.utils import format_elapsed


class ScopeTag(str, Enum):
    """How a discovered address relates to the seed."""

    INTERNAL = "internal"
    EXTERNAL = "external"
    FORM = "form"


class FailureReason(str, Enum):
    CONNECT_FAILED = "connect-failed"
    TIMEOUT = "timeout"
    REDIRECT_POLICY = "redirect-policy"
    OTHER = "other"


@dataclass(frozen=True, slots=True)
class QueueEntry:
    """Address waiting for the next generation; ``external`` is fixed at discovery."""

    url: str
    external: bool = False


@dataclass(frozen=True, slots=True)
class DiscoveredLink:
    url: str
    scope: ScopeTag


@dataclass(frozen=True, slots=True)
class FetchSuccess:
    """A response arrived. ``body`` is only read for 2xx responses."""

    url: str
    final_url: str
    status: int
    body: Optional[str] = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


@dataclass(frozen=True, slots=True)
class FetchFailure:
    url: str
    reason: FailureReason
    detail: str = ""


FetchOutcome = Union[FetchSuccess, FetchFailure]


@dataclass(slots=True)
class CrawlResult:
    """Everything a finished run hands over to the reporters."""

    seed: str
    links: List[DiscoveredLink] = field(default_factory=list)
    statuses: Dict[str, int] = field(default_factory=dict)
    crawled: Set[str] = field(default_factory=set)
    blocked: Set[str] = field(default_factory=set)
    robots: Optional[str] = None
    elapsed: float = 0.0
    generations: int = 0

    @property
    def elapsed_display(self) -> str:
        return format_elapsed(self.elapsed)

    def summary(self) -> str:
        return f"Found {len(self.links)} links in {self.elapsed_display} sec."
