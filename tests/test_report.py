# File: tests/test_report.py
import json
import xml.etree.ElementTree as ET

import pytest

from site_mapper.crawler.link_extractor import extract_links
from site_mapper.report.json_report import from_json_bytes, render_json, to_json_bytes
from site_mapper.report.text_report import render_tree
from site_mapper.report.xml_report import from_xml_bytes, render_xml, to_xml_bytes
from site_mapper.sitemap import SiteMapNode

ROOT = "http://example.test/"


@pytest.fixture()
def tree() -> SiteMapNode:
    return SiteMapNode(
        ROOT,
        200,
        0.012345,
        [
            SiteMapNode(ROOT + "a", 200, 0.1, [SiteMapNode(ROOT + "a/deep?x=1&y=2", 404, 0.003)]),
            SiteMapNode(ROOT + "b", 500, 1.5),
        ],
    )


def _shape(node: SiteMapNode):
    """Comparable form that ignores child order."""
    return (
        node.url,
        node.status_code,
        node.response_time,
        frozenset(_shape(child) for child in node.children),
    )


def test_json_uses_stable_field_names(tree):
    data = json.loads(to_json_bytes(tree))
    assert data["url"] == ROOT
    assert data["status_code"] == 200
    assert data["response_time"] == 0.012345
    assert [child["url"] for child in data["children"]] == [ROOT + "a", ROOT + "b"]


def test_xml_layout(tree):
    root = ET.fromstring(to_xml_bytes(tree))
    assert root.tag == "site_map_node"
    assert root.findtext("url") == ROOT
    assert root.findtext("status_code") == "200"
    assert root.findtext("response_time") == "0.012345"
    assert [c.findtext("url") for c in root.find("children")] == [ROOT + "a", ROOT + "b"]


def test_json_to_xml_round_trip_keeps_tree(tree):
    from_json = from_json_bytes(to_json_bytes(tree))
    from_xml = from_xml_bytes(to_xml_bytes(from_json))
    assert _shape(from_xml) == _shape(tree)
    assert from_xml == tree


def test_xml_to_json_round_trip_keeps_tree(tree):
    back = from_json_bytes(to_json_bytes(from_xml_bytes(to_xml_bytes(tree))))
    assert _shape(back) == _shape(tree)


def test_extracted_urls_with_odd_characters_round_trip():
    [odd] = extract_links(b'<a href="/odd\x01 path?q=<1>&r=2">x</a>', ROOT)
    assert "\x01" not in odd and "%01" in odd
    tree = SiteMapNode(ROOT, 200, 0.01, [SiteMapNode(odd, 200, 0.02)])

    from_xml = from_xml_bytes(to_xml_bytes(from_json_bytes(to_json_bytes(tree))))
    assert from_xml == tree
    assert from_xml.children[0].url == odd


def test_from_xml_rejects_foreign_root():
    with pytest.raises(ValueError):
        from_xml_bytes(b"<urlset/>")


def test_render_files(tmp_path, tree):
    json_path = render_json(tree, tmp_path / "out" / "map.json")
    xml_path = render_xml(tree, tmp_path / "out" / "map.xml")

    assert json_path.is_file()
    assert xml_path.read_bytes().startswith(b"<?xml")
    assert from_json_bytes(json_path.read_bytes()) == from_xml_bytes(xml_path.read_bytes())


def test_render_tree_text(tree):
    text = render_tree(tree)
    assert text.splitlines() == [
        "Main Domain: http://example.test/ [200, 12 ms]",
        "  ├── /a [200, 100 ms]",
        "    ├── /a/deep?x=1&y=2 [404, 3 ms]",
        "  ├── /b [500, 1500 ms]",
    ]
