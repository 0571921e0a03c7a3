__all__ = [
    "Alternate",
    "CapabilityUnavailable",
    "GenerationResult",
    "ImageEntry",
    "ImageExtension",
    "MissingRequiredFields",
    "NotWritable",
    "PingResult",
    "ProducedFile",
    "Runtime",
    "SitemapConfig",
    "SitemapError",
    "SitemapGenerator",
    "TooManyImages",
    "URLRecord",
    "ValidationError",
    "VideoExtension",
    "encode_url",
]

from .config import Runtime, SitemapConfig
from .encoding import encode_url
from .errors import (
    CapabilityUnavailable,
    MissingRequiredFields,
    NotWritable,
    SitemapError,
    TooManyImages,
    ValidationError,
)
from .generator import SitemapGenerator
from .models import (
    Alternate,
    GenerationResult,
    ImageEntry,
    ImageExtension,
    PingResult,
    ProducedFile,
    URLRecord,
    VideoExtension,
)
