# File: site_mapper/engine.py
"""site_mapper.engine: orchestration layer that runs a crawl and builds the site map."""

from __future__ import annotations

import asyncio
from typing import Callable, Optional

from site_mapper.config import CrawlerConfig
from site_mapper.crawler.crawler import CrawlEngine
from site_mapper.crawler.fetcher import Fetcher
from site_mapper.crawler.models import DroppedLink
from site_mapper.crawler.store import CrawlResultStore
from site_mapper.sitemap import SiteMapNode, build_site_tree

__all__ = ["Engine", "start_crawl"]

DropHook = Callable[[DroppedLink], None]


async def start_crawl(cfg: CrawlerConfig, *, on_drop: Optional[DropHook] = None) -> CrawlResultStore:
    """
    Open a Fetcher session, run one CrawlEngine and return its result store.

    Parameters
    ----------
    cfg : CrawlerConfig
        Crawl configuration.
    on_drop : callable, optional
        Called with every DroppedLink (non-seed fetch failure).

    Raises
    ------
    SeedFetchError
        The seed page could not be fetched.
    """
    async with Fetcher(cfg) as fetcher:
        engine = CrawlEngine(cfg, fetcher, on_drop=on_drop)
        return await engine.crawl()


class Engine:
    """Synchronous facade for scripts: crawl with a ready config, build the tree."""

    def __init__(self, config: CrawlerConfig, *, on_drop: Optional[DropHook] = None) -> None:
        self.config = config
        self.on_drop = on_drop

    def crawl(self) -> CrawlResultStore:
        """Run the crawl to completion on a fresh event loop."""
        return asyncio.run(start_crawl(self.config, on_drop=self.on_drop))

    def run(self) -> SiteMapNode:
        """Crawl and return the site map tree."""
        return build_site_tree(self.crawl(), sort_children=self.config.sort_children)
