"""
Logging for the storefront cart.

Every module asks for its logger through ``get_logger(__name__)``; the
root handler is installed once, when this module is first imported.
LOG_LEVEL picks the level, VERCEL=1 drops timestamps (the platform
adds its own).
"""

import logging
import os
import sys
from functools import cache

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_FORMAT_HOSTED = "%(levelname)s - %(name)s - %(message)s"


def _setup_root() -> None:
    root = logging.getLogger()
    if root.handlers:
        # Host application (or pytest) already owns logging
        return

    level = getattr(logging, os.environ.get("LOG_LEVEL", "INFO").upper(), logging.INFO)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_FORMAT_HOSTED if os.environ.get("VERCEL") == "1" else _FORMAT))
    root.setLevel(level)
    root.addHandler(handler)

    # The Upstash REST client logs every request through httpx
    for noisy in ("httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


_setup_root()


@cache
def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def sanitize_id_for_logging(item_id) -> str:
    """Short, single-line form of a caller-supplied id (ids come from shopper input)."""
    if item_id is None or item_id == "":
        return "N/A"
    text = str(item_id).replace("\x00", "")
    text = text.replace("\r", "\\r").replace("\n", "\\n").replace("\t", "\\t")
    return text[:8]


__all__ = ["get_logger", "sanitize_id_for_logging"]
