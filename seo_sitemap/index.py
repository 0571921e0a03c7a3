"""
Sitemap index assembly for runs that produced more than one file.
"""

from __future__ import annotations

from collections.abc import Sequence

from .config import SitemapConfig
from .log import get_logger
from .models import ProducedFile
from .render import render_index
from .sink import FileSink

logger = get_logger("seo_sitemap.index")


def assemble_index(config: SitemapConfig, sink: FileSink, produced: Sequence[ProducedFile]) -> ProducedFile | None:
    if len(produced) <= 1:
        return None
    index = sink.write(config.sitemap_index_filename, render_index(produced, config.stylesheet_url), len(produced))
    logger.info("Wrote sitemap index %s referencing %d sitemaps", index.storage_path, len(produced))
    return index
