"""site_mapper.crawler: fetching, deduplication and the concurrent crawl engine."""

from site_mapper.crawler.crawler import CrawlEngine, SeedFetchError, frontier_capacity
from site_mapper.crawler.fetcher import FetchError, Fetcher
from site_mapper.crawler.models import CrawlTask, DroppedLink, PageRecord
from site_mapper.crawler.store import CrawlResultStore
from site_mapper.crawler.visited import VisitedSet

__all__ = [
    "CrawlEngine",
    "CrawlResultStore",
    "CrawlTask",
    "DroppedLink",
    "FetchError",
    "Fetcher",
    "PageRecord",
    "SeedFetchError",
    "VisitedSet",
    "frontier_capacity",
]
