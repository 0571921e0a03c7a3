"""
Validation of Google Video and Google Image sitemap extension payloads.

Payloads arrive as plain mappings (or already-built extension objects) and
leave as the frozen dataclasses in :mod:`seo_sitemap.models`.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping, Sequence
from dataclasses import asdict
from typing import Any

from .errors import InvalidExtensionValue, MissingRequiredFields, TooManyImages, UnsupportedExtension
from .models import (
    Extension,
    ImageEntry,
    ImageExtension,
    VideoExtension,
    VideoPrice,
    VideoRelationship,
    VideoUploader,
)

VIDEO_NS = "http://www.google.com/schemas/sitemap-video/1.1"
IMAGE_NS = "http://www.google.com/schemas/sitemap-image/1.1"

VIDEO_REQUIRED_FIELDS = ("thumbnail_loc", "title", "description")
VIDEO_EITHER_FIELDS = ("content_loc", "player_loc")
VIDEO_YES_NO_FIELDS = ("family_friendly", "requires_subscription", "live")
VIDEO_MAX_DURATION = 28800
VIDEO_MAX_TAGS = 32
VIDEO_MAX_DESCRIPTION = 2048
RELATIONSHIPS = {"allow", "deny"}
PRICE_TYPES = {"rent", "own"}
PRICE_RESOLUTIONS = {"hd", "sd"}
CURRENCY_RE = re.compile(r"^[A-Za-z]{3}$")

IMAGE_REQUIRED_FIELDS = ("loc",)


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict)):
        return not value
    return False


def _text(value: Any, label: str) -> str:
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise InvalidExtensionValue(f"{label} must be a string, got {type(value).__name__}")
    return str(value).strip()


def _optional_text(payload: Mapping[str, Any], key: str, label: str) -> str | None:
    value = payload.get(key)
    if _is_blank(value):
        return None
    return _text(value, label)


def _as_list(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def _yes_no(payload: Mapping[str, Any], key: str) -> str | None:
    value = payload.get(key)
    if value is None:
        return None
    if isinstance(value, bool):
        return "yes" if value else "no"
    text = _text(value, f"video {key}").lower()
    if text not in ("yes", "no"):
        raise InvalidExtensionValue(f"video {key} must be 'yes' or 'no', got '{value}'")
    return text


def _relationship(payload: Mapping[str, Any], key: str) -> VideoRelationship | None:
    value = payload.get(key)
    if value is None:
        return None
    if isinstance(value, VideoRelationship):
        item = value
    elif isinstance(value, Mapping):
        if _is_blank(value.get("value")):
            raise MissingRequiredFields([f"{key}.value"])
        item = VideoRelationship(
            relationship=_text(value.get("relationship", ""), f"video {key} relationship").lower(),
            value=_text(value["value"], f"video {key} value"),
        )
    else:
        raise InvalidExtensionValue(f"video {key} must be a mapping with 'relationship' and 'value'")
    if item.relationship not in RELATIONSHIPS:
        raise InvalidExtensionValue(
            f"video {key} relationship must be one of: allow, deny, got '{item.relationship}'"
        )
    return item


def _price(value: Any) -> VideoPrice:
    if isinstance(value, VideoPrice):
        price = value
    elif isinstance(value, Mapping):
        missing = [name for name in ("currency", "value") if _is_blank(value.get(name))]
        if missing:
            raise MissingRequiredFields([f"price.{name}" for name in missing])
        price = VideoPrice(
            currency=_text(value["currency"], "video price currency").upper(),
            value=_text(value["value"], "video price value"),
            type=_optional_text(value, "type", "video price type"),
            resolution=_optional_text(value, "resolution", "video price resolution"),
        )
    else:
        raise InvalidExtensionValue("video price entries must be mappings")

    if not CURRENCY_RE.fullmatch(price.currency):
        raise InvalidExtensionValue(f"video price currency must be an ISO 4217 code, got '{price.currency}'")
    if price.type is not None and price.type.lower() not in PRICE_TYPES:
        raise InvalidExtensionValue(f"video price type must be one of: rent, own, got '{price.type}'")
    if price.resolution is not None and price.resolution.lower() not in PRICE_RESOLUTIONS:
        raise InvalidExtensionValue(f"video price resolution must be one of: hd, sd, got '{price.resolution}'")
    return price


def _uploader(value: Any) -> VideoUploader | None:
    if value is None:
        return None
    if isinstance(value, VideoUploader):
        value = asdict(value)
    if isinstance(value, Mapping):
        if _is_blank(value.get("value")):
            raise MissingRequiredFields(["uploader.value"])
        info = value.get("info")
        return VideoUploader(
            value=_text(value["value"], "video uploader"),
            info=None if _is_blank(info) else _text(info, "video uploader info"),
        )
    if _is_blank(value):
        raise MissingRequiredFields(["uploader.value"])
    return VideoUploader(value=_text(value, "video uploader"))


def _int_in_range(payload: Mapping[str, Any], key: str, low: int, high: int | None) -> int | None:
    value = payload.get(key)
    if value is None:
        return None
    try:
        if isinstance(value, bool):
            raise ValueError
        number = int(value)
        if isinstance(value, float) and number != value:
            raise ValueError
    except (TypeError, ValueError):
        raise InvalidExtensionValue(f"video {key} must be an integer, got '{value}'") from None
    if number < low or (high is not None and number > high):
        bound = f"between {low} and {high}" if high is not None else f"at least {low}"
        raise InvalidExtensionValue(f"video {key} must be {bound}, got {number}")
    return number


def _rating(payload: Mapping[str, Any]) -> float | None:
    value = payload.get("rating")
    if value is None:
        return None
    try:
        if isinstance(value, bool):
            raise ValueError
        rating = float(value)
    except (TypeError, ValueError):
        raise InvalidExtensionValue(f"video rating must be a number, got '{value}'") from None
    if not 0.0 <= rating <= 5.0:
        raise InvalidExtensionValue(f"video rating must be between 0.0 and 5.0, got {rating}")
    return rating


def _content_locs(payload: Mapping[str, Any]) -> tuple[str, ...]:
    value = payload.get("content_loc")
    if _is_blank(value):
        return ()
    items = _as_list(value)
    if any(_is_blank(item) for item in items):
        raise MissingRequiredFields(["content_loc"])
    return tuple(_text(item, "video content_loc") for item in items)


def validate_video(payload: Any, loc: str) -> VideoExtension:
    """Check a video payload and build a :class:`VideoExtension`.

    Typed ``VideoExtension`` values go through the same checks as mappings.
    """
    if isinstance(payload, VideoExtension):
        payload = asdict(payload)
    if payload is None or payload == []:
        payload = {}
    if not isinstance(payload, Mapping):
        raise InvalidExtensionValue("google_video extension must be a mapping")

    missing = [name for name in VIDEO_REQUIRED_FIELDS if _is_blank(payload.get(name))]
    if missing:
        raise MissingRequiredFields(missing)

    content_locs = _content_locs(payload)
    player_loc = _optional_text(payload, "player_loc", "video player_loc")
    if not content_locs and player_loc is None:
        raise MissingRequiredFields([" or ".join(VIDEO_EITHER_FIELDS)])
    if loc in content_locs:
        raise InvalidExtensionValue("video content_loc must not be the same as the page <loc> URL")
    if player_loc is not None and player_loc == loc:
        raise InvalidExtensionValue("video player_loc must not be the same as the page <loc> URL")

    description = _text(payload["description"], "video description")
    if len(description) > VIDEO_MAX_DESCRIPTION:
        raise InvalidExtensionValue(
            f"video description must be at most {VIDEO_MAX_DESCRIPTION} characters, got {len(description)}"
        )

    tags = tuple(_text(item, "video tag") for item in _as_list(payload.get("tag")))
    if len(tags) > VIDEO_MAX_TAGS:
        raise InvalidExtensionValue(f"video tag allows at most {VIDEO_MAX_TAGS} entries, got {len(tags)}")

    price = payload.get("price")
    if isinstance(price, (Mapping, VideoPrice)):
        price = [price]

    yes_no = {key: _yes_no(payload, key) for key in VIDEO_YES_NO_FIELDS}
    return VideoExtension(
        thumbnail_loc=_text(payload["thumbnail_loc"], "video thumbnail_loc"),
        title=_text(payload["title"], "video title"),
        description=description,
        content_loc=content_locs,
        player_loc=player_loc,
        duration=_int_in_range(payload, "duration", 1, VIDEO_MAX_DURATION),
        expiration_date=_optional_text(payload, "expiration_date", "video expiration_date"),
        rating=_rating(payload),
        view_count=_int_in_range(payload, "view_count", 0, None),
        publication_date=_optional_text(payload, "publication_date", "video publication_date"),
        family_friendly=yes_no["family_friendly"],
        restriction=_relationship(payload, "restriction"),
        platform=_relationship(payload, "platform"),
        price=tuple(_price(item) for item in _as_list(price)),
        requires_subscription=yes_no["requires_subscription"],
        uploader=_uploader(payload.get("uploader")),
        live=yes_no["live"],
        tag=tags,
        category=_optional_text(payload, "category", "video category"),
    )


def _image_entry(payload: Any) -> ImageEntry:
    if isinstance(payload, ImageEntry):
        payload = asdict(payload)
    if not isinstance(payload, Mapping):
        raise InvalidExtensionValue("google_image entries must be mappings")
    missing = [name for name in IMAGE_REQUIRED_FIELDS if _is_blank(payload.get(name))]
    if missing:
        raise MissingRequiredFields(missing)
    return ImageEntry(
        loc=_text(payload["loc"], "image loc"),
        title=_optional_text(payload, "title", "image title"),
        caption=_optional_text(payload, "caption", "image caption"),
        geo_location=_optional_text(payload, "geo_location", "image geo_location"),
        license=_optional_text(payload, "license", "image license"),
    )


def validate_image(payload: Any, max_images: int) -> ImageExtension:
    entries: Sequence[Any]
    if isinstance(payload, ImageExtension):
        entries = payload.images
    elif isinstance(payload, (Mapping, ImageEntry)):
        entries = [payload]
    elif isinstance(payload, (list, tuple)):
        entries = payload
    else:
        raise InvalidExtensionValue("google_image extension must be a mapping or a list of mappings")

    if not entries:
        raise MissingRequiredFields(IMAGE_REQUIRED_FIELDS)
    if len(entries) > max_images:
        raise TooManyImages(max_images, len(entries))
    return ImageExtension(images=tuple(_image_entry(item) for item in entries))


VALIDATORS: dict[str, Callable[[Any, str, int], Extension]] = {
    VideoExtension.name: lambda payload, loc, _max_images: validate_video(payload, loc),
    ImageExtension.name: lambda payload, _loc, max_images: validate_image(payload, max_images),
}


def validate_extensions(extensions: Mapping[str, Any] | None, loc: str, max_images: int) -> tuple[Extension, ...]:
    """Validate every extension payload of one URL, in a fixed render order.

    Unknown extension names are rejected rather than dropped.
    """
    if not extensions:
        return ()
    unknown = [name for name in extensions if name not in VALIDATORS]
    if unknown:
        raise UnsupportedExtension(unknown[0], VALIDATORS)
    return tuple(VALIDATORS[name](extensions[name], loc, max_images) for name in VALIDATORS if name in extensions)
