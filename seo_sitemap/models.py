"""
Typed records flowing through the sitemap pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Union

CHANGE_FREQUENCIES = ("always", "hourly", "daily", "weekly", "monthly", "yearly", "never")


@dataclass(frozen=True)
class Alternate:
    hreflang: str
    href: str


@dataclass(frozen=True)
class VideoRelationship:
    """Shared shape of <video:restriction> and <video:platform>."""

    relationship: str
    value: str


@dataclass(frozen=True)
class VideoPrice:
    currency: str
    value: str
    type: str | None = None
    resolution: str | None = None


@dataclass(frozen=True)
class VideoUploader:
    value: str
    info: str | None = None


@dataclass(frozen=True)
class VideoExtension:
    thumbnail_loc: str
    title: str
    description: str
    content_loc: tuple[str, ...] = ()
    player_loc: str | None = None
    duration: int | None = None
    expiration_date: str | None = None
    rating: float | None = None
    view_count: int | None = None
    publication_date: str | None = None
    family_friendly: str | None = None
    restriction: VideoRelationship | None = None
    platform: VideoRelationship | None = None
    price: tuple[VideoPrice, ...] = ()
    requires_subscription: str | None = None
    uploader: VideoUploader | None = None
    live: str | None = None
    tag: tuple[str, ...] = ()
    category: str | None = None

    name = "google_video"


@dataclass(frozen=True)
class ImageEntry:
    loc: str
    title: str | None = None
    caption: str | None = None
    geo_location: str | None = None
    license: str | None = None


@dataclass(frozen=True)
class ImageExtension:
    images: tuple[ImageEntry, ...]

    name = "google_image"


Extension = Union[VideoExtension, ImageExtension]


@dataclass(frozen=True)
class URLRecord:
    location: str
    last_modified: str | None = None
    change_frequency: str | None = None
    priority: float | None = None
    alternates: tuple[Alternate, ...] = ()
    extensions: tuple[Extension, ...] = ()

    @property
    def video(self) -> VideoExtension | None:
        return next((ext for ext in self.extensions if isinstance(ext, VideoExtension)), None)

    @property
    def image(self) -> ImageExtension | None:
        return next((ext for ext in self.extensions if isinstance(ext, ImageExtension)), None)


@dataclass(frozen=True)
class ProducedFile:
    public_url: str
    storage_path: Path
    last_modified_at: datetime
    url_count: int = 0


@dataclass(frozen=True)
class GenerationResult:
    sitemaps: tuple[ProducedFile, ...]
    index: ProducedFile | None
    entry_point_url: str

    @property
    def sitemap_locations(self) -> list[str]:
        return [str(item.storage_path) for item in self.sitemaps]

    def as_dict(self) -> dict[str, object]:
        out: dict[str, object] = {"sitemaps_location": self.sitemap_locations}
        if self.index is not None:
            out["sitemaps_index_location"] = str(self.index.storage_path)
        out["sitemaps_index_url"] = self.entry_point_url
        return out


@dataclass(frozen=True)
class PingResult:
    site: str
    url: str
    status_code: int | None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status_code == 200


@dataclass
class Batch:
    """Records waiting for one output file. Mutable until flushed."""

    records: list[URLRecord] = field(default_factory=list)
    estimated_bytes: int = 0

    def __len__(self) -> int:
        return len(self.records)
