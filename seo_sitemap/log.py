"""
Logging helpers shared by the library and the command line.
"""

from __future__ import annotations

import logging

LOG_FORMAT = "%(levelname)s | %(asctime)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def setup_logging(level: str = "INFO") -> None:
    root = logging.getLogger("seo_sitemap")
    root.setLevel(level.upper())
    if not any(getattr(handler, "_seo_sitemap", False) for handler in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        handler._seo_sitemap = True  # type: ignore[attr-defined]
        root.addHandler(handler)
