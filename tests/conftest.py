from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path

import pytest

from seo_sitemap.config import HttpResponse, Runtime, SitemapConfig

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
NS = {
    "sm": SITEMAP_NS,
    "xhtml": "http://www.w3.org/1999/xhtml",
    "video": "http://www.google.com/schemas/sitemap-video/1.1",
    "image": "http://www.google.com/schemas/sitemap-image/1.1",
}


class FakeRuntime(Runtime):
    def __init__(self, writable=True, http=True, responses=None):
        super().__init__()
        self.writable = writable
        self.http = http
        self.responses = list(responses or [])
        self.calls = []
        self.writable_checks = 0

    def is_writable(self, path):
        self.writable_checks += 1
        return self.writable

    def has_http(self):
        return self.http

    def http_get(self, url, timeout):
        self.calls.append(url)
        response = self.responses.pop(0) if self.responses else HttpResponse(200, "")
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def fake_runtime():
    return FakeRuntime


@pytest.fixture
def make_config(tmp_path):
    def _make(**overrides):
        values = {"base_url": "https://example.com", "save_directory": tmp_path}
        values.update(overrides)
        return SitemapConfig(**values)

    return _make


@pytest.fixture
def parse_xml():
    def _parse(path: Path | bytes) -> ET.Element:
        data = path if isinstance(path, bytes) else Path(path).read_bytes()
        return ET.fromstring(data)

    return _parse


@pytest.fixture
def ns():
    return NS
