# site_mapper/crawler/store.py
"""
Per-depth storage of fetched page records.
"""
from __future__ import annotations

import threading
from typing import Dict, Iterator, List, Set

from site_mapper.crawler.models import PageRecord


class CrawlResultStore:
    """
    Maps depth -> records fetched at that depth.

    Every read-modify-write of a bucket happens under a single lock. Order
    inside a bucket is the order in which workers finished their fetches.
    """

    def __init__(self) -> None:
        self._buckets: Dict[int, List[PageRecord]] = {}
        self._lock = threading.Lock()

    def add(self, record: PageRecord) -> None:
        with self._lock:
            self._buckets.setdefault(record.depth, []).append(record)

    def at_depth(self, depth: int) -> List[PageRecord]:
        """Return a copy of the bucket for *depth* (empty if none)."""
        with self._lock:
            return list(self._buckets.get(depth, ()))

    def depths(self) -> List[int]:
        with self._lock:
            return sorted(depth for depth, bucket in self._buckets.items() if bucket)

    def records(self) -> Iterator[PageRecord]:
        """All records, shallowest depth first."""
        for depth in self.depths():
            yield from self.at_depth(depth)

    def urls(self) -> Set[str]:
        return {record.url for record in self.records()}

    def __len__(self) -> int:
        with self._lock:
            return sum(len(bucket) for bucket in self._buckets.values())
