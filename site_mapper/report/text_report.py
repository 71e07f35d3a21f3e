# site_mapper/report/text_report.py
"""Plain-text rendering of the site map for the terminal."""
from __future__ import annotations

from typing import List

from site_mapper.crawler.link_extractor import strip_hostname
from site_mapper.sitemap import SiteMapNode


def render_tree(tree: SiteMapNode) -> str:
    """
    Render the tree as indented lines::

        Main Domain: http://example.test/ [200, 12 ms]
          ├── /a [200, 8 ms]
            ├── /a/deeper [404, 3 ms]
    """
    lines: List[str] = [f"Main Domain: {tree.url} {_annotation(tree)}"]

    def _walk(node: SiteMapNode, level: int) -> None:
        for child in node.children:
            lines.append(f"{'  ' * level}├── {strip_hostname(child.url)} {_annotation(child)}")
            _walk(child, level + 1)

    _walk(tree, 1)
    return "\n".join(lines)


def _annotation(node: SiteMapNode) -> str:
    return f"[{node.status_code}, {node.response_time * 1000:.0f} ms]"
