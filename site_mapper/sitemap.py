# File: site_mapper/sitemap.py
"""site_mapper.sitemap: rebuilds the page hierarchy from the flat crawl results."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple

from site_mapper.crawler.models import PageRecord
from site_mapper.crawler.store import CrawlResultStore

__all__ = ["SiteMapNode", "SiteTreeError", "build_site_tree", "RESPONSE_TIME_DIGITS"]

#: response_time is kept in seconds, rounded to microseconds
RESPONSE_TIME_DIGITS = 6


class SiteTreeError(Exception):
    """The store does not hold exactly one depth-0 record."""


@dataclass(slots=True)
class SiteMapNode:
    """A page in the site map; children are owned by their parent."""

    url: str
    status_code: int
    response_time: float
    children: List[SiteMapNode] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Plain mapping with the stable export field names."""
        return {
            "url": self.url,
            "status_code": self.status_code,
            "response_time": self.response_time,
            "children": [child.to_dict() for child in self.children],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> SiteMapNode:
        return cls(
            url=str(data["url"]),
            status_code=int(data["status_code"]),
            response_time=float(data["response_time"]),
            children=[cls.from_dict(child) for child in data.get("children") or []],
        )

    def walk(self) -> Iterator[SiteMapNode]:
        """Pre-order traversal starting with this node."""
        yield self
        for child in self.children:
            yield from child.walk()

    def find(self, url: str) -> Optional[SiteMapNode]:
        return next((node for node in self.walk() if node.url == url), None)

    def count(self) -> int:
        return sum(1 for _ in self.walk())


def build_site_tree(store: CrawlResultStore, *, sort_children: bool = False) -> SiteMapNode:
    """
    Assemble the tree rooted at the single depth-0 record.

    Children are matched on ``(parent_url, depth)`` so a record only hangs
    under a parent one level above it; records whose parent never made it
    into the store are left out. Child order is fetch-completion order, or
    URL order when *sort_children* is set.
    """
    roots = store.at_depth(0)
    if len(roots) != 1:
        raise SiteTreeError(f"expected exactly one depth-0 record, found {len(roots)}")

    children_of: Dict[Tuple[str, int], List[PageRecord]] = defaultdict(list)
    for record in store.records():
        if record.depth > 0:
            children_of[(record.parent_url, record.depth)].append(record)

    def _node(record: PageRecord) -> SiteMapNode:
        kids = children_of.get((record.url, record.depth + 1), [])
        if sort_children:
            kids = sorted(kids, key=lambda r: r.url)
        return SiteMapNode(
            url=record.url,
            status_code=record.status_code,
            response_time=round(record.response_time, RESPONSE_TIME_DIGITS),
            children=[_node(kid) for kid in kids],
        )

    return _node(roots[0])
