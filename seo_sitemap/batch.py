"""
Accumulates URL records and flushes them into numbered sitemap files.
"""

from __future__ import annotations

from enum import Enum

from .config import SitemapConfig
from .log import get_logger
from .models import Batch, ProducedFile, URLRecord
from .render import render_url, render_urlset, urlset_head, urlset_tail
from .sink import FileSink

logger = get_logger("seo_sitemap.batch")


class AppendOutcome(Enum):
    APPENDED = "appended"
    FLUSHED_AND_APPENDED = "flushed_and_appended"


class BatchAccumulator:
    """Owns the in-progress batch and the ordered list of flushed files.

    Every flushed batch is written under the numbered name (sitemap1.xml,
    sitemap2.xml, ...). :meth:`settle` renames a lone first file to the plain
    sitemap filename once no further batch can follow.
    """

    def __init__(self, config: SitemapConfig, sink: FileSink):
        self.config = config
        self.sink = sink
        self.produced: list[ProducedFile] = []
        self._envelope_bytes = len((urlset_head(config.stylesheet_url) + urlset_tail()).encode("utf-8"))
        self.batch = self._new_batch()

    def _new_batch(self) -> Batch:
        return Batch(estimated_bytes=self._envelope_bytes)

    def is_empty(self) -> bool:
        return not self.batch.records

    def append(self, record: URLRecord) -> AppendOutcome:
        record_bytes = len(render_url(record).encode("utf-8"))
        if self._envelope_bytes + record_bytes > self.config.max_bytes_per_sitemap:
            logger.warning(
                "URL %s alone renders to %d bytes, more than the %d byte file limit",
                record.location,
                record_bytes,
                self.config.max_bytes_per_sitemap,
            )

        outcome = AppendOutcome.APPENDED
        over_count = len(self.batch) + 1 > self.config.max_urls_per_sitemap
        over_size = self.batch.estimated_bytes + record_bytes > self.config.max_bytes_per_sitemap
        if not self.is_empty() and (over_count or over_size):
            self.flush()
            outcome = AppendOutcome.FLUSHED_AND_APPENDED

        self.batch.records.append(record)
        self.batch.estimated_bytes += record_bytes
        return outcome

    def flush(self) -> ProducedFile | None:
        if self.is_empty():
            return None
        batch, self.batch = self.batch, self._new_batch()
        name = self.config.numbered_filename(len(self.produced) + 1)
        produced = self.sink.write(name, render_urlset(batch.records, self.config.stylesheet_url), len(batch))
        self.produced.append(produced)
        return produced

    def write_empty(self) -> ProducedFile:
        produced = self.sink.write(self.config.sitemap_filename, render_urlset([], self.config.stylesheet_url))
        self.produced.append(produced)
        return produced

    def settle(self) -> list[ProducedFile]:
        """Flush the remainder and fix up the final file names."""
        self.flush()
        if not self.produced:
            self.write_empty()
        elif len(self.produced) == 1 and self.produced[0].storage_path.name != self.sink.storage_name(
            self.config.sitemap_filename
        ):
            self.produced[0] = self.sink.rename(self.produced[0], self.config.sitemap_filename)
        return list(self.produced)
