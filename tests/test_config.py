# File: tests/test_config.py
import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from site_mapper.config import CrawlerConfig, load_config


def write_file(tmp_path: Path, content: str, suffix: str) -> Path:
    path = tmp_path / f"config{suffix}"
    path.write_text(content, encoding="utf-8")
    return path


@pytest.mark.parametrize(
    "content,suffix,expect_exc",
    [
        ("base_url: http://example.com\nmax_depth: 3", ".yaml", None),
        (json.dumps({"base_url": "http://example.com", "max_depth": 3}), ".json", None),
        ("{}", ".json", ValidationError),
        ("not: a: mapping", ".yaml", ValueError),
        ("- just\n- a list", ".yml", TypeError),
        ("{broken json", ".json", ValueError),
        ("base_url = 'http://example.com'", ".toml", ValueError),
    ],
)
def test_load_config_variants(tmp_path, content, suffix, expect_exc):
    cfg_path = write_file(tmp_path, content, suffix)
    if expect_exc:
        with pytest.raises(expect_exc):
            load_config(cfg_path)
    else:
        cfg = load_config(cfg_path)
        assert isinstance(cfg, CrawlerConfig)
        assert str(cfg.base_url).rstrip("/") == "http://example.com"
        assert cfg.max_depth == 3


def test_defaults():
    cfg = load_config(base_url="http://example.com")
    assert cfg.max_depth == 2
    assert cfg.workers == 10
    assert cfg.link_limit == 4
    assert cfg.crawl_timeout is None
    assert cfg.sort_children is False


def test_overrides_win_over_file_and_none_is_ignored(tmp_path):
    cfg_path = write_file(tmp_path, "base_url: http://example.com\nmax_depth: 5\nworkers: 3", ".yaml")
    cfg = load_config(cfg_path, max_depth=1, workers=None)
    assert cfg.max_depth == 1
    assert cfg.workers == 3


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "absent.yaml")


@pytest.mark.parametrize("url", ["not a url", "ftp://example.com", "http://", ""])
def test_invalid_seed_url(url):
    with pytest.raises(ValidationError):
        load_config(base_url=url)


@pytest.mark.parametrize(
    "field,value",
    [("max_depth", -1), ("workers", 0), ("timeout", 0), ("link_limit", 0), ("crawl_timeout", -5)],
)
def test_out_of_range_values(field, value):
    with pytest.raises(ValidationError):
        CrawlerConfig(base_url="http://example.com", **{field: value})


def test_unknown_keys_rejected():
    with pytest.raises(ValidationError):
        CrawlerConfig(base_url="http://example.com", max_pages=10)


def test_config_is_frozen():
    cfg = CrawlerConfig(base_url="http://example.com")
    with pytest.raises(ValidationError):
        cfg.max_depth = 7
