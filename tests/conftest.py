# File: tests/conftest.py
import asyncio
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import pytest

from site_mapper.config import CrawlerConfig
from site_mapper.crawler.fetcher import FetchError
from site_mapper.crawler.models import PageRecord

SEED = "http://example.test/"


def pytest_configure(config):
    """Register custom markers so that `--strict-markers` does not fail."""
    config.addinivalue_line(
        "markers",
        "slow: marks tests as slow (deselect with '-m \"not slow\"')",
    )


class FakeFetcher:
    """
    In-memory stand-in for Fetcher.

    *pages* maps URL -> (status, links); URLs missing from it fail like a
    refused connection. Every fetch sleeps *delay* seconds so workers overlap.
    """

    def __init__(
        self,
        pages: Dict[str, Tuple[int, Sequence[str]]],
        delay: float = 0.01,
        on_fetch: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.pages = pages
        self.delay = delay
        self.on_fetch = on_fetch
        self.calls: List[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def fetch(self, url: str) -> PageRecord:
        self.calls.append(url)
        if self.on_fetch is not None:
            self.on_fetch(url)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delay)
        finally:
            self.in_flight -= 1
        if url not in self.pages:
            raise FetchError(url, "connection refused")
        status, links = self.pages[url]
        if status != 200:
            links = ()
        return PageRecord(url=url, status_code=status, links=tuple(links), response_time=0.0042)


@pytest.fixture()
def make_config() -> Callable[..., CrawlerConfig]:
    """
    Return a factory for CrawlerConfig seeded at SEED; keyword args override.
    """

    def _make(**overrides) -> CrawlerConfig:
        data = {"base_url": SEED, "max_depth": 2, "workers": 4, "timeout": 2.0}
        data.update(overrides)
        return CrawlerConfig(**data)

    return _make


@pytest.fixture()
def basic_config(make_config) -> CrawlerConfig:
    """
    Return a basic valid CrawlerConfig for crawler tests.
    """
    return make_config(max_depth=1)
