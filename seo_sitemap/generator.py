"""
SitemapGenerator: the public entry point tying the pipeline together.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from .batch import AppendOutcome, BatchAccumulator
from .config import SitemapConfig
from .errors import GeneratorStateError
from .index import assemble_index
from .log import get_logger
from .models import GenerationResult, PingResult
from .robots import update_robots_file
from .sink import FileSink
from .submission import submit
from .validation import validate_record

logger = get_logger("seo_sitemap.generator")


class SitemapGenerator:
    """Build sitemap files for a stream of URLs.

    Typical use::

        generator = SitemapGenerator(SitemapConfig(base_url="https://example.com", save_directory=out))
        generator.add_url("/about", lastmod, "monthly", 0.5)
        result = generator.finalize()
        generator.update_robots()

    One generator handles exactly one run; nothing may be added after
    :meth:`finalize`.
    """

    def __init__(self, config: SitemapConfig):
        self.config = config
        self.sink = FileSink(config)
        self.accumulator = BatchAccumulator(config, self.sink)
        self.url_count = 0
        self._result: GenerationResult | None = None

    def _require_open(self, action: str) -> None:
        if self._result is not None:
            raise GeneratorStateError(f"Cannot {action} after finalize()")

    def _require_result(self, action: str) -> GenerationResult:
        if self._result is None:
            raise GeneratorStateError(f"To {action}, call finalize() first")
        return self._result

    def add_url(
        self,
        path: str,
        last_modified: Any = None,
        change_frequency: str | None = None,
        priority: float | None = None,
        alternates: Iterable[Any] | None = None,
        extensions: Mapping[str, Any] | None = None,
    ) -> AppendOutcome:
        self._require_open("add URLs")
        record = validate_record(
            self.config,
            path,
            last_modified=last_modified,
            change_frequency=change_frequency,
            priority=priority,
            alternates=alternates,
            extensions=extensions,
        )
        outcome = self.accumulator.append(record)
        self.url_count += 1
        return outcome

    def flush(self) -> None:
        """Close the current file now, even if no limit was reached."""
        self._require_open("flush")
        self.accumulator.flush()

    def finalize(self) -> GenerationResult:
        if self._result is not None:
            return self._result
        sitemaps = self.accumulator.settle()
        index = assemble_index(self.config, self.sink, sitemaps)
        entry_point = index.public_url if index is not None else sitemaps[0].public_url
        self._result = GenerationResult(sitemaps=tuple(sitemaps), index=index, entry_point_url=entry_point)
        logger.info("Finalized %d URLs into %d sitemap file(s); entry point %s", self.url_count, len(sitemaps), entry_point)
        return self._result

    def get_generated_files(self) -> dict[str, object]:
        return self._require_result("list generated files").as_dict()

    def submit_sitemap(self, extra_ping_url: str | None = None) -> list[PingResult]:
        result = self._require_result("submit the sitemap")
        templates = list(self.config.search_engines)
        if extra_ping_url:
            templates.append(extra_ping_url)
        return submit(self.config.runtime, templates, result.entry_point_url, self.config.ping_timeout)

    def update_robots(self) -> Path:
        result = self._require_result("update robots.txt")
        path = self.config.save_directory / self.config.robots_filename
        update_robots_file(path, result.entry_point_url)
        logger.info("Updated %s with Sitemap: %s", path, result.entry_point_url)
        return path
