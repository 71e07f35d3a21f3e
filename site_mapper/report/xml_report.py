# site_mapper/report/xml_report.py
"""site_mapper.report.xml_report: XML export of the site map.

Layout::

    <site_map_node>
      <url>http://example.test/</url>
      <status_code>200</status_code>
      <response_time>0.012345</response_time>
      <children>
        <site_map_node>...</site_map_node>
      </children>
    </site_map_node>

``response_time`` uses the same decimal seconds as the JSON export.
"""
from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Union

from site_mapper.sitemap import SiteMapNode

NODE_TAG = "site_map_node"


def _to_element(node: SiteMapNode) -> ET.Element:
    element = ET.Element(NODE_TAG)
    ET.SubElement(element, "url").text = node.url
    ET.SubElement(element, "status_code").text = str(node.status_code)
    ET.SubElement(element, "response_time").text = repr(float(node.response_time))
    children = ET.SubElement(element, "children")
    for child in node.children:
        children.append(_to_element(child))
    return element


def _from_element(element: ET.Element) -> SiteMapNode:
    if element.tag != NODE_TAG:
        raise ValueError(f"expected <{NODE_TAG}>, got <{element.tag}>")
    children = element.find("children")
    return SiteMapNode(
        url=element.findtext("url", default=""),
        status_code=int(element.findtext("status_code", default="0")),
        response_time=float(element.findtext("response_time", default="0")),
        children=[_from_element(child) for child in children] if children is not None else [],
    )


def to_xml_bytes(tree: SiteMapNode) -> bytes:
    """Serialize *tree* to an indented UTF-8 XML document."""
    root = _to_element(tree)
    ET.indent(root, space="  ")
    return ET.tostring(root, encoding="utf-8", xml_declaration=True)


def from_xml_bytes(data: Union[bytes, str]) -> SiteMapNode:
    """Parse a tree previously written by :func:`to_xml_bytes`."""
    return _from_element(ET.fromstring(data))


def render_xml(tree: SiteMapNode, output_path: Union[Path, str]) -> Path:
    """Save the site map as XML and return the written path."""
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(to_xml_bytes(tree))
    return output
