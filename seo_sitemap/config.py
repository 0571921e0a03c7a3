"""
Generator configuration and the runtime capabilities it depends on.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import requests

from .errors import ConfigError

HEADERS = {
    "User-Agent": "Mozilla/5.0 (compatible; SeoSitemap/1.0)",
    "Accept": "text/html,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.8",
}

MAX_URLS_PER_SITEMAP = 50000
MAX_BYTES_PER_SITEMAP = 10 * 1024 * 1024
MAX_URL_LENGTH = 2048
MAX_IMAGES_PER_URL = 1000
DEFAULT_SEARCH_ENGINES = ("https://webmaster.yandex.ru/ping?sitemap={sitemap}",)


@dataclass(frozen=True)
class HttpResponse:
    status_code: int
    text: str


class Runtime:
    """Filesystem and network capabilities, swappable in tests."""

    def __init__(self, session: requests.Session | None = None):
        self._session = session

    def is_writable(self, path: Path) -> bool:
        return os.access(path, os.W_OK)

    def has_http(self) -> bool:
        return True

    def http_get(self, url: str, timeout: int) -> HttpResponse:
        if self._session is None:
            self._session = requests.Session()
            self._session.headers.update(HEADERS)
        response = self._session.get(url, timeout=timeout, allow_redirects=True)
        try:
            return HttpResponse(status_code=response.status_code, text=response.text)
        finally:
            response.close()

    def close(self) -> None:
        """Release the HTTP session; the next request opens a fresh one."""
        if self._session is not None:
            self._session.close()
            self._session = None


def _check_absolute(value: str, label: str) -> None:
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigError(f"{label} must be an absolute http/https URL, got '{value}'")


def _check_filename(value: str, label: str) -> None:
    if not value or "/" in value or "\\" in value:
        raise ConfigError(f"{label} must be a bare file name, got '{value}'")
    if not value.endswith(".xml"):
        raise ConfigError(f"{label} must end with .xml, got '{value}'")


@dataclass(frozen=True)
class SitemapConfig:
    base_url: str
    save_directory: Path
    sitemap_filename: str = "sitemap.xml"
    sitemap_index_filename: str = "sitemap-index.xml"
    robots_filename: str = "robots.txt"
    max_urls_per_sitemap: int = MAX_URLS_PER_SITEMAP
    max_bytes_per_sitemap: int = MAX_BYTES_PER_SITEMAP
    max_url_length: int = MAX_URL_LENGTH
    max_images_per_url: int = MAX_IMAGES_PER_URL
    compression: bool = False
    stylesheet_url: str | None = None
    sitemap_index_url: str | None = None
    search_engines: tuple[str, ...] = DEFAULT_SEARCH_ENGINES
    ping_timeout: int = 20
    runtime: Runtime = field(default_factory=Runtime, compare=False, repr=False)

    def __post_init__(self) -> None:
        _check_absolute(self.base_url, "base_url")
        if self.sitemap_index_url:
            _check_absolute(self.sitemap_index_url, "sitemap_index_url")
        object.__setattr__(self, "save_directory", Path(self.save_directory))
        object.__setattr__(self, "search_engines", tuple(self.search_engines))
        _check_filename(self.sitemap_filename, "sitemap_filename")
        _check_filename(self.sitemap_index_filename, "sitemap_index_filename")
        if not 1 <= self.max_urls_per_sitemap <= MAX_URLS_PER_SITEMAP:
            raise ConfigError(f"max_urls_per_sitemap must be between 1 and {MAX_URLS_PER_SITEMAP}")
        if not 1 <= self.max_bytes_per_sitemap <= MAX_BYTES_PER_SITEMAP:
            raise ConfigError(f"max_bytes_per_sitemap must be between 1 and {MAX_BYTES_PER_SITEMAP}")
        if self.max_url_length < 1:
            raise ConfigError("max_url_length must be positive")
        if self.max_images_per_url < 1:
            raise ConfigError("max_images_per_url must be positive")

    def replace(self, **changes: Any) -> SitemapConfig:
        return replace(self, **changes)

    @property
    def files_base_url(self) -> str:
        """Prefix used for the public URL of every written file."""
        return self.sitemap_index_url or self.base_url

    def numbered_filename(self, number: int) -> str:
        stem = self.sitemap_filename[: -len(".xml")]
        return f"{stem}{number}.xml"
