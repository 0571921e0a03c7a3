"""
Error types raised by the sitemap generator.
"""

from __future__ import annotations

from collections.abc import Iterable


class SitemapError(Exception):
    pass


class ConfigError(SitemapError, ValueError):
    pass


class ValidationError(SitemapError, ValueError):
    pass


class InvalidURL(ValidationError):
    pass


class URLTooLong(ValidationError):
    def __init__(self, length: int, limit: int):
        self.length = length
        self.limit = limit
        super().__init__(f"URL length must be less than or equal to {limit}, got {length}")


class InvalidPriority(ValidationError):
    pass


class InvalidChangeFrequency(ValidationError):
    pass


class InvalidLastModified(ValidationError):
    pass


class InvalidAlternate(ValidationError):
    pass


class MissingRequiredFields(ValidationError):
    def __init__(self, fields: Iterable[str]):
        self.fields = list(fields)
        super().__init__(f"Missing required fields: {', '.join(self.fields)}")


class TooManyImages(ValidationError):
    def __init__(self, limit: int, count: int):
        self.limit = limit
        self.count = count
        super().__init__(
            "Too many images for a single URL. "
            f"Maximum number of images allowed per page is {limit}, got {count}. "
            "For more information, see https://www.google.com/schemas/sitemap-image/1.1/sitemap-image.xsd"
        )


class InvalidExtensionValue(ValidationError):
    pass


class UnsupportedExtension(ValidationError):
    def __init__(self, name: str, supported: Iterable[str]):
        self.name = name
        super().__init__(f"Unsupported extension '{name}'. Supported extensions: {', '.join(supported)}")


class NotWritable(SitemapError, PermissionError):
    pass


class CapabilityUnavailable(SitemapError, RuntimeError):
    pass


class GeneratorStateError(SitemapError, RuntimeError):
    pass
