"""
Normalization and validation of incoming URL records.
"""

from __future__ import annotations

import math
import re
from collections.abc import Iterable, Mapping
from datetime import date, datetime
from typing import Any
from urllib.parse import urlparse

from .config import SitemapConfig
from .encoding import percent_encode
from .errors import (
    InvalidAlternate,
    InvalidChangeFrequency,
    InvalidLastModified,
    InvalidPriority,
    InvalidURL,
    URLTooLong,
)
from .extensions import validate_extensions
from .models import CHANGE_FREQUENCIES, Alternate, URLRecord

HREFLANG_CODE_RE = re.compile(r"^[A-Za-z]{2,3}(?:-[A-Za-z]{2}|-[0-9]{3}|-[A-Za-z]{4}|-[A-Za-z]{4}-[A-Za-z]{2})?$")


def is_absolute(url: str) -> bool:
    parsed = urlparse(url)
    return bool(parsed.scheme) and bool(parsed.netloc)


def resolve_location(raw_path: str, base_url: str) -> str:
    """Absolute inputs pass through; anything else is appended to the base URL."""
    if not isinstance(raw_path, str):
        raise InvalidURL(f"URL path must be a string, got {type(raw_path).__name__}")
    value = raw_path.strip()
    if is_absolute(value):
        return value
    return f"{base_url.rstrip('/')}/{value.lstrip('/')}"


def join_url(base_url: str, name: str) -> str:
    return f"{base_url.rstrip('/')}/{name}"


def format_last_modified(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.astimezone()
        return value.isoformat(timespec="seconds")
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, str) and value.strip():
        return value.strip()
    raise InvalidLastModified(f"lastmod must be a datetime, date or ISO-8601 string, got '{value}'")


def check_priority(value: Any) -> float | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidPriority(f"priority must be a number between 0.0 and 1.0, got '{value}'")
    priority = float(value)
    if math.isnan(priority) or not 0.0 <= priority <= 1.0:
        raise InvalidPriority(f"priority must be between 0.0 and 1.0, got {value}")
    return priority


def check_change_frequency(value: Any) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str) or value not in CHANGE_FREQUENCIES:
        raise InvalidChangeFrequency(
            f"changefreq must be one of: {', '.join(CHANGE_FREQUENCIES)}, got '{value}'"
        )
    return value


def check_alternates(alternates: Iterable[Any] | None) -> tuple[Alternate, ...]:
    if not alternates:
        return ()
    out: list[Alternate] = []
    for idx, item in enumerate(alternates):
        if isinstance(item, Alternate):
            alternate = item
        elif isinstance(item, Mapping):
            missing = [key for key in ("hreflang", "href") if not str(item.get(key) or "").strip()]
            if missing:
                raise InvalidAlternate(f"alternate #{idx} is missing: {', '.join(missing)}")
            alternate = Alternate(hreflang=str(item["hreflang"]).strip(), href=str(item["href"]).strip())
        else:
            raise InvalidAlternate(f"alternate #{idx} must be a mapping with 'hreflang' and 'href'")

        if alternate.hreflang.lower() != "x-default" and not HREFLANG_CODE_RE.fullmatch(alternate.hreflang):
            raise InvalidAlternate(
                f"Invalid hreflang format '{alternate.hreflang}'. Use language or language-region/script format."
            )
        if not is_absolute(alternate.href):
            raise InvalidAlternate(f"alternate href must be an absolute URL, got '{alternate.href}'")
        out.append(alternate)
    return tuple(out)


def validate_record(
    config: SitemapConfig,
    path: str,
    last_modified: Any = None,
    change_frequency: str | None = None,
    priority: float | None = None,
    alternates: Iterable[Any] | None = None,
    extensions: Mapping[str, Any] | None = None,
) -> URLRecord:
    location = resolve_location(path, config.base_url)
    if not is_absolute(location):
        raise InvalidURL(f"URL must resolve to an absolute URL, got '{location}'")
    encoded_length = len(percent_encode(location))
    if encoded_length > config.max_url_length:
        raise URLTooLong(encoded_length, config.max_url_length)

    return URLRecord(
        location=location,
        last_modified=format_last_modified(last_modified),
        change_frequency=check_change_frequency(change_frequency),
        priority=check_priority(priority),
        alternates=check_alternates(alternates),
        extensions=validate_extensions(extensions, location, config.max_images_per_url),
    )
