"""
Search-engine ping planning and execution.
"""

from __future__ import annotations

from collections.abc import Iterable
from urllib.parse import quote, urlparse

import requests
from bs4 import BeautifulSoup

from .config import Runtime
from .errors import CapabilityUnavailable
from .log import get_logger
from .models import PingResult

logger = get_logger("seo_sitemap.submission")

PLACEHOLDER = "{sitemap}"


def build_ping_url(template: str, entry_point_url: str) -> str:
    encoded = quote(entry_point_url, safe="")
    if PLACEHOLDER in template:
        return template.replace(PLACEHOLDER, encoded)
    return template + encoded


def build_ping_requests(templates: Iterable[str], entry_point_url: str) -> list[str]:
    return [build_ping_url(template, entry_point_url) for template in templates if template]


def short_site(url: str) -> str:
    host = (urlparse(url).hostname or "").rstrip(".")
    parts = host.split(".")
    return ".".join(parts[-2:]) if len(parts) >= 2 else host


def response_message(body: str) -> str:
    if not body.strip():
        return ""
    text = BeautifulSoup(body, "html.parser").get_text(" ", strip=True)
    return " ".join(text.split())


def submit(runtime: Runtime, templates: Iterable[str], entry_point_url: str, timeout: int) -> list[PingResult]:
    """Issue one GET per ping template, in order, and report every outcome."""
    if not runtime.has_http():
        raise CapabilityUnavailable("An HTTP client is needed to submit sitemaps")

    results: list[PingResult] = []
    try:
        for url in build_ping_requests(templates, entry_point_url):
            site = short_site(url)
            try:
                response = runtime.http_get(url, timeout)
            except requests.exceptions.RequestException as exc:
                logger.warning("Ping to %s failed: %s", site, exc)
                results.append(PingResult(site=site, url=url, status_code=None, message=str(exc)))
                continue
            result = PingResult(
                site=site,
                url=url,
                status_code=response.status_code,
                message=response_message(response.text),
            )
            if result.ok:
                logger.info("Pinged %s (%s)", site, result.status_code)
            else:
                logger.warning("Ping to %s returned HTTP %s", site, result.status_code)
            results.append(result)
    finally:
        runtime.close()
    return results
