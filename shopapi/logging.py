"""
Logging setup.

Usage:
    from shopapi.logging import get_logger
    logger = get_logger(__name__)
"""
import logging
import os
import sys
from functools import lru_cache
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _level(name: Optional[str]) -> int:
    return getattr(logging, (name or "INFO").upper(), logging.INFO)


def _configure_root_logger() -> None:
    root = logging.getLogger()
    if root.handlers:
        return

    level = _level(os.environ.get("SHOP_LOG_LEVEL"))
    root.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


_configure_root_logger()


def configure_logging(level: str) -> None:
    """Apply the configured level to the root logger."""
    logging.getLogger().setLevel(_level(level))


@lru_cache
def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
