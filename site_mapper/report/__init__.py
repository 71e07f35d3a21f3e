# File: site_mapper/report/__init__.py
"""site_mapper.report: site map exporters (JSON, XML) and the terminal tree view."""

from __future__ import annotations

from site_mapper.report.json_report import from_json_bytes, render_json, to_json_bytes
from site_mapper.report.text_report import render_tree
from site_mapper.report.xml_report import from_xml_bytes, render_xml, to_xml_bytes

__all__ = [
    "from_json_bytes",
    "from_xml_bytes",
    "render_json",
    "render_tree",
    "render_xml",
    "to_json_bytes",
    "to_xml_bytes",
]
