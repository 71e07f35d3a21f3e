# site_mapper/report/json_report.py

"""
JSON export of the site map.

Field names are ``url``, ``status_code``, ``response_time`` (seconds, float)
and ``children``.
"""
import json
from pathlib import Path
from typing import Union

from site_mapper.sitemap import SiteMapNode


def to_json_bytes(tree: SiteMapNode, *, pretty: bool = True) -> bytes:
    """Serialize *tree* to UTF-8 JSON."""
    return json.dumps(tree.to_dict(), ensure_ascii=False, indent=2 if pretty else None).encode("utf-8")


def from_json_bytes(data: Union[bytes, str]) -> SiteMapNode:
    """Parse a tree previously written by :func:`to_json_bytes`."""
    return SiteMapNode.from_dict(json.loads(data))


def render_json(tree: SiteMapNode, output_path: Union[Path, str]) -> Path:
    """
    Save the site map as JSON at the given path.

    :param tree: root of the site map
    :param output_path: path of the JSON file
    :return: Path of the saved file

    Example:
    ```python
    from site_mapper.report.json_report import render_json
    report_path = render_json(tree, 'reports/sitemap.json')
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(to_json_bytes(tree))
    return output
