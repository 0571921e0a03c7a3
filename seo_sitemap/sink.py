"""
Writes rendered sitemap documents into the save directory.
"""

from __future__ import annotations

import gzip
from datetime import UTC, datetime
from pathlib import Path

from .config import SitemapConfig
from .errors import NotWritable
from .log import get_logger
from .models import ProducedFile
from .validation import join_url

logger = get_logger("seo_sitemap.sink")


class FileSink:
    def __init__(self, config: SitemapConfig):
        self.config = config
        self.directory: Path = config.save_directory
        if not config.runtime.is_writable(self.directory):
            raise NotWritable(f"Cannot write to directory: {self.directory}")

    def storage_name(self, name: str) -> str:
        return f"{name}.gz" if self.config.compression else name

    def public_url(self, stored_name: str) -> str:
        return join_url(self.config.files_base_url, stored_name)

    def write(self, name: str, data: bytes, url_count: int = 0) -> ProducedFile:
        """Write one complete document; ``name`` gains ``.gz`` when compression is on."""
        stored_name = self.storage_name(name)
        path = self.directory / stored_name
        payload = gzip.compress(data, mtime=0) if self.config.compression else data
        path.write_bytes(payload)
        logger.debug("Wrote %s (%d bytes, %d URLs)", path, len(payload), url_count)
        return ProducedFile(
            public_url=self.public_url(stored_name),
            storage_path=path,
            last_modified_at=datetime.now(UTC),
            url_count=url_count,
        )

    def rename(self, produced: ProducedFile, name: str) -> ProducedFile:
        stored_name = self.storage_name(name)
        target = self.directory / stored_name
        produced.storage_path.replace(target)
        logger.debug("Renamed %s -> %s", produced.storage_path.name, stored_name)
        return ProducedFile(
            public_url=self.public_url(stored_name),
            storage_path=target,
            last_modified_at=produced.last_modified_at,
            url_count=produced.url_count,
        )
