# site_mapper/crawler/link_extractor.py
"""
Link extraction and URL normalization utilities for SiteMapper.
"""
from __future__ import annotations

from typing import List, Optional, Union
from urllib.parse import urljoin, urlparse, urlunparse

from bs4 import BeautifulSoup
from bs4.element import Tag
from yarl import URL

DEFAULT_LINK_LIMIT = 4

_DEFAULT_PORTS = {"http": 80, "https": 443}


def extract_links(
    content: Union[str, bytes],
    base_url: str,
    *,
    allowed_host: Optional[str] = None,
    limit: int = DEFAULT_LINK_LIMIT,
) -> List[str]:
    """
    Extract up to *limit* same-host links from anchor ``href`` attributes.

    Relative hrefs are resolved against *base_url*. Links keep document
    order and are returned normalized. Ignores mailto:, javascript:,
    malformed hrefs and hosts other than *allowed_host* (the host of
    *base_url* when not given).
    """
    host = (allowed_host or urlparse(base_url).hostname or "").lower()
    soup = BeautifulSoup(content, "html.parser")
    links: List[str] = []
    for tag in soup.find_all("a", href=True):
        if len(links) >= limit:
            break
        if not isinstance(tag, Tag):
            continue
        href_val = tag.get("href")
        if not isinstance(href_val, str):
            continue
        raw = href_val.strip()
        if not raw or raw.startswith(("mailto:", "javascript:")):
            continue
        try:
            absolute = urljoin(base_url, raw)
            parsed = urlparse(absolute)
            if parsed.scheme not in ("http", "https") or (parsed.hostname or "") != host:
                continue
            # bad ports and IPv6 brackets only surface here
            links.append(normalize_url(absolute))
        except ValueError:
            continue
    return links


def normalize_url(url: str) -> str:
    """
    Normalize URL for deduplication: lowercase scheme and host, drop the
    default port and the fragment, turn an empty path into ``/``.
    The query string is kept; it distinguishes pages.

    Path and query are percent-encoded by yarl, the same way aiohttp encodes
    them on the wire, so ``/a b`` and ``/a%20b`` give one key and the result
    never carries control characters.
    """
    parsed = urlparse(url)
    scheme = parsed.scheme.lower()
    host = (parsed.hostname or "").lower()
    if ":" in host:
        host = f"[{host}]"
    port = parsed.port
    netloc = host if port is None or _DEFAULT_PORTS.get(scheme) == port else f"{host}:{port}"
    if parsed.username or parsed.password:
        userinfo = parsed.username or ""
        if parsed.password:
            userinfo += f":{parsed.password}"
        netloc = f"{userinfo}@{netloc}"
    wire = URL(url)
    path = wire.raw_path or "/"
    return urlunparse((scheme, netloc, path, "", wire.raw_query_string, ""))


def strip_hostname(url: str) -> str:
    """Return path plus query of *url*, used when printing the tree."""
    parsed = urlparse(url)
    stripped = parsed.path or "/"
    if parsed.query:
        stripped += "?" + parsed.query
    return stripped
