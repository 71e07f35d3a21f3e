# === FILE: site_mapper/config.py ===
"""
Loading and validation of the SiteMapper crawl configuration.
Pydantic describes the schema and checks the data; YAML and JSON files are
accepted, and explicit overrides (CLI flags) win over file values.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    field_validator,
)


class CrawlerConfig(BaseModel):
    """Configuration of a single crawl."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    base_url: HttpUrl = Field(..., description="Seed URL the crawl starts from.")
    max_depth: int = Field(2, ge=0, description="Maximum number of link hops from the seed.")
    workers: int = Field(10, ge=1, description="Size of the fetch worker pool.")
    link_limit: int = Field(4, ge=1, description="Same-host links kept per page.")
    timeout: float = Field(10.0, gt=0, description="Per-request timeout (seconds).")
    crawl_timeout: Optional[float] = Field(
        None, gt=0, description="Budget for the whole crawl; partial results when exceeded."
    )
    user_agent: str = Field("SiteMapperBot/1.0", min_length=1, description="User-Agent header.")
    sort_children: bool = Field(False, description="Order tree children by URL instead of completion.")

    @field_validator("base_url", mode="before")
    def _strip_whitespace(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of JSON must be a mapping, got {type(data).__name__}")
    return data


def read_config_file(path: Union[str, Path]) -> dict[str, Any]:
    """Read a YAML or JSON config file into a plain mapping."""
    path_obj = Path(path).expanduser().resolve()
    if not path_obj.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return _read_yaml(path_obj)
    if suffix == ".json":
        return _read_json(path_obj)
    raise ValueError(f"Unsupported config format: {suffix}")


def load_config(path: Union[str, Path, None] = None, **overrides: Any) -> CrawlerConfig:
    """
    Build a validated CrawlerConfig.

    Values come from the optional config file at *path*; keyword overrides
    that are not ``None`` replace them. Raises ``FileNotFoundError`` for a
    missing file and ``pydantic.ValidationError`` for an invalid schema,
    including a seed URL that cannot be parsed.
    """
    data: dict[str, Any] = read_config_file(path) if path is not None else {}
    data.update({key: value for key, value in overrides.items() if value is not None})
    return CrawlerConfig(**data)
