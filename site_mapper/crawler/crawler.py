# === FILE: site_mapper/crawler/crawler.py ===
from __future__ import annotations

import asyncio
import time
from dataclasses import replace
from typing import Awaitable, Callable, List, Optional, Protocol

from site_mapper.config import CrawlerConfig
from site_mapper.crawler.fetcher import FetchError
from site_mapper.crawler.link_extractor import normalize_url
from site_mapper.crawler.models import CrawlTask, DroppedLink, PageRecord
from site_mapper.crawler.store import CrawlResultStore
from site_mapper.crawler.visited import VisitedSet
from site_mapper.logger import logger

__all__ = ("CrawlEngine", "SeedFetchError", "frontier_capacity")


class PageFetcher(Protocol):
    def fetch(self, url: str) -> Awaitable[PageRecord]: ...


class SeedFetchError(Exception):
    """The seed page could not be fetched, so there is nothing to map."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"seed {url} could not be fetched: {reason}")


def frontier_capacity(link_limit: int, max_depth: int) -> int:
    """
    Upper bound on the number of tasks one crawl can ever enqueue.

    Only pages above ``max_depth`` expand, each into at most ``link_limit``
    children: 1 + L + L**2 + ... + L**max_depth.
    """
    return sum(link_limit ** depth for depth in range(max_depth + 1))


class CrawlEngine:
    """
    Depth-bounded crawl over a fixed pool of worker tasks.

    A pending-work counter tracks tasks that were enqueued but not yet fully
    processed. When it drops to zero no task can produce new work, so the
    queue is closed (one ``None`` per worker) and the workers return.

    One instance runs one crawl and owns its visited set, result store and
    list of dropped links.
    """

    def __init__(
        self,
        config: CrawlerConfig,
        fetcher: PageFetcher,
        *,
        on_drop: Optional[Callable[[DroppedLink], None]] = None,
    ) -> None:
        self.config = config
        self.fetcher = fetcher
        self.visited = VisitedSet()
        self.store = CrawlResultStore()
        self.dropped: List[DroppedLink] = []
        self.logger = logger
        self._on_drop = on_drop
        self._queue: Optional[asyncio.Queue[Optional[CrawlTask]]] = None
        self._pending = 0
        self._cancelled = asyncio.Event()
        self._seed_error: Optional[FetchError] = None
        self._started = False

    @property
    def seed_url(self) -> str:
        return normalize_url(str(self.config.base_url))

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def cancel(self) -> None:
        """Stop taking new work; tasks still queued are discarded."""
        if not self._cancelled.is_set():
            self.logger.warning("Crawl cancelled, finishing in-flight fetches")
        self._cancelled.set()

    async def crawl(self) -> CrawlResultStore:
        """
        Crawl from the seed until the frontier is exhausted or cancelled.

        Returns the result store. Raises SeedFetchError when the seed itself
        could not be fetched.
        """
        if self._started:
            raise RuntimeError("CrawlEngine runs a single crawl; create a new instance")
        self._started = True

        seed = self.seed_url
        workers_count = self.config.workers
        self.logger.info(
            "Crawl started: %s (max depth %d, %d workers)", seed, self.config.max_depth, workers_count
        )
        start = time.monotonic()

        capacity = frontier_capacity(self.config.link_limit, self.config.max_depth)
        self._queue = asyncio.Queue(maxsize=capacity + workers_count)
        self.visited.try_mark(seed)
        self._pending = 1
        self._queue.put_nowait(CrawlTask(seed, 0))

        timer: Optional[asyncio.TimerHandle] = None
        if self.config.crawl_timeout is not None:
            timer = asyncio.get_running_loop().call_later(self.config.crawl_timeout, self.cancel)

        workers = [
            asyncio.create_task(self._worker(), name=f"site-mapper-worker-{i}")
            for i in range(workers_count)
        ]
        try:
            await asyncio.gather(*workers)
        finally:
            if timer is not None:
                timer.cancel()
            for w in workers:
                w.cancel()
            await asyncio.gather(*workers, return_exceptions=True)

        duration = time.monotonic() - start
        if not self.store.at_depth(0) and not self.cancelled:
            reason = self._seed_error.reason if self._seed_error else "no response"
            self.logger.error("Seed %s failed: %s", seed, reason)
            raise SeedFetchError(seed, reason)

        self.logger.info(
            "Crawl finished: %d pages in %.2f s, %d dropped links",
            len(self.store),
            duration,
            len(self.dropped),
        )
        return self.store

    async def _worker(self) -> None:
        assert self._queue is not None
        while True:
            task = await self._queue.get()
            if task is None:
                break
            try:
                if not self.cancelled:
                    await self._process(task)
            finally:
                self._task_done()

    async def _process(self, task: CrawlTask) -> None:
        try:
            page = await self.fetcher.fetch(task.url)
        except FetchError as exc:
            self._drop(task, exc)
            return

        record = replace(page, depth=task.depth, parent_url=task.parent_url)
        self.store.add(record)
        if task.depth >= self.config.max_depth or self.cancelled:
            return

        for link in record.links[: self.config.link_limit]:
            if not self.visited.try_mark(link):
                continue
            self._pending += 1
            # capacity covers every task a crawl can produce, so this never fills
            self._queue.put_nowait(CrawlTask(link, task.depth + 1, record.url))

    def _task_done(self) -> None:
        self._pending -= 1
        if self._pending == 0:
            for _ in range(self.config.workers):
                self._queue.put_nowait(None)

    def _drop(self, task: CrawlTask, exc: FetchError) -> None:
        if task.depth == 0:
            self._seed_error = exc
            return
        dropped = DroppedLink(task.url, task.parent_url, task.depth, exc.reason)
        self.dropped.append(dropped)
        self.logger.warning("Dropped %s (linked from %s): %s", task.url, task.parent_url, exc.reason)
        if self._on_drop is not None:
            self._on_drop(dropped)
