# site_mapper/crawler/visited.py
"""
Concurrency-safe set of URLs already scheduled during one crawl.
"""
from __future__ import annotations

import threading
from typing import FrozenSet, Set


class VisitedSet:
    """Grows monotonically for the lifetime of one crawl; no eviction."""

    def __init__(self) -> None:
        self._urls: Set[str] = set()
        self._lock = threading.Lock()

    def try_mark(self, url: str) -> bool:
        """
        Record *url* and return True if it was not seen before.

        Check and insert happen under one lock, so two concurrent callers can
        never both get True for the same URL.
        """
        with self._lock:
            if url in self._urls:
                return False
            self._urls.add(url)
            return True

    def snapshot(self) -> FrozenSet[str]:
        with self._lock:
            return frozenset(self._urls)

    def __contains__(self, url: object) -> bool:
        with self._lock:
            return url in self._urls

    def __len__(self) -> int:
        with self._lock:
            return len(self._urls)
