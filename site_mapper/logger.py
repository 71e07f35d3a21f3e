# === FILE: site_mapper/logger.py ===
"""Logging setup for **SiteMapper**.

Every module logs through the one named logger exported here::

    from site_mapper.logger import logger
    logger.warning("Dropped %s", url)

Records go to stderr so that the site map printed on stdout can be piped,
and optionally to a size-rotated log file. The CLI calls :func:`init_logging`
once its ``--log-level``/``--log-file`` options are parsed.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, List, Optional, Union

LOGGER_NAME: Final[str] = "SiteMapper"
DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

_ROTATE_BYTES: Final[int] = 5 * 1024 * 1024
_ROTATE_BACKUPS: Final[int] = 3

_LevelT = Union[int, str]

logger: logging.Logger = logging.getLogger(LOGGER_NAME)


def _build_handlers(log_file: Optional[Union[str, Path]], fmt: str) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        handlers.append(
            RotatingFileHandler(
                str(log_file),
                maxBytes=_ROTATE_BYTES,
                backupCount=_ROTATE_BACKUPS,
                encoding="utf-8",
            )
        )
    formatter = logging.Formatter(fmt)
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def configure(
    *,
    level: _LevelT = "INFO",
    log_file: Optional[Union[str, Path]] = None,
    log_format: str = DEFAULT_FORMAT,
    replace_handlers: bool = True,
) -> logging.Logger:
    """Set the level and handlers of the SiteMapper logger.

    With *replace_handlers* the previous handlers are detached and closed
    first; otherwise the new ones are added next to them.
    """
    if replace_handlers:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
    for handler in _build_handlers(log_file, log_format):
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger


def init_logging(
    level: _LevelT = "INFO",
    log_file: Optional[Union[str, Path]] = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    return configure(level=level, log_file=log_file, log_format=log_format)


init_logging()

__all__ = ["logger", "configure", "init_logging", "LOGGER_NAME", "DEFAULT_FORMAT"]
