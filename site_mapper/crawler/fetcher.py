# site_mapper/crawler/fetcher.py
"""
Fetcher module: issues one HTTP GET per page, times it, and extracts links.
"""
from __future__ import annotations

import asyncio
import time
from typing import Optional
from urllib.parse import urlparse

from aiohttp import ClientError, ClientSession, ClientTimeout

from site_mapper.config import CrawlerConfig
from site_mapper.crawler.link_extractor import extract_links
from site_mapper.crawler.models import PageRecord
from site_mapper.logger import logger


class FetchError(Exception):
    """Network-level failure (DNS, refused connection, timeout) for one URL."""

    def __init__(self, url: str, reason: object) -> None:
        self.url = url
        self.reason = str(reason) or type(reason).__name__
        super().__init__(f"{url}: {self.reason}")


class Fetcher:
    """
    Fetches single pages over a shared aiohttp session.

    Use as ``async with Fetcher(config) as fetcher``; the session is created
    on enter and closed on exit. An externally managed *session* may be
    passed instead and is then left open.
    """

    def __init__(self, config: CrawlerConfig, session: Optional[ClientSession] = None) -> None:
        self.config = config
        self.session = session
        self._owns_session = session is None
        self._host = urlparse(str(config.base_url)).hostname or ""
        self.logger = logger

    async def __aenter__(self) -> Fetcher:
        if self.session is None:
            self.session = ClientSession(
                timeout=ClientTimeout(total=self.config.timeout),
                headers={"User-Agent": self.config.user_agent},
                raise_for_status=False,
            )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()

    async def fetch(self, url: str) -> PageRecord:
        """
        GET *url* and return a partial PageRecord.

        Non-200 responses come back with their status and no links; the body
        is not parsed. Raises FetchError when no response was received.
        """
        if not self.session:
            raise RuntimeError("Session not initialized")

        start = time.perf_counter()
        try:
            async with self.session.get(url) as resp:
                elapsed = time.perf_counter() - start
                if resp.status != 200:
                    self.logger.debug("GET %s -> %d (%.3f s)", url, resp.status, elapsed)
                    return PageRecord(url=url, status_code=resp.status, response_time=elapsed)
                body = await resp.read()
                final_url = str(resp.url)
        except (ClientError, asyncio.TimeoutError) as exc:
            raise FetchError(url, exc) from exc

        links = await asyncio.to_thread(
            extract_links,
            body,
            final_url,
            allowed_host=self._host,
            limit=self.config.link_limit,
        )
        self.logger.debug("GET %s -> 200 (%.3f s, %d links)", url, elapsed, len(links))
        return PageRecord(url=url, status_code=200, links=tuple(links), response_time=elapsed)
