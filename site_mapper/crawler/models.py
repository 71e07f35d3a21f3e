# site_mapper/crawler/models.py
"""
Data models for the SiteMapper crawler.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(slots=True, frozen=True)
class PageRecord:
    """One fetched page: status, extracted links and where it sits in the crawl.

    ``response_time`` is the elapsed wall-clock time in seconds between
    sending the request and receiving the response headers. The Fetcher
    leaves ``depth`` and ``parent_url`` at their defaults; the engine stamps
    them once it knows which task produced the record.
    """

    url: str
    status_code: int
    depth: int = 0
    parent_url: str = ""
    links: Tuple[str, ...] = ()
    response_time: float = 0.0


@dataclass(slots=True, frozen=True)
class CrawlTask:
    """A page waiting to be fetched."""

    url: str
    depth: int
    parent_url: str = ""


@dataclass(slots=True, frozen=True)
class DroppedLink:
    """A discovered link whose fetch failed and which is absent from the site map."""

    url: str
    parent_url: str
    depth: int
    reason: str
