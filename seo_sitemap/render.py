"""
XML rendering of urlset and sitemapindex documents.
"""

from __future__ import annotations

from collections.abc import Iterable

from .encoding import encode_url, xml_escape
from .extensions import IMAGE_NS, VIDEO_NS
from .models import ImageExtension, ProducedFile, URLRecord, VideoExtension

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
XSI_NS = "http://www.w3.org/2001/XMLSchema-instance"
XHTML_NS = "http://www.w3.org/1999/xhtml"
SITEMAP_XSD = "http://www.sitemaps.org/schemas/sitemap/0.9/sitemap.xsd"
SITEINDEX_XSD = "http://www.sitemaps.org/schemas/sitemap/0.9/siteindex.xsd"

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'
URLSET_OPEN = (
    f'<urlset xmlns="{SITEMAP_NS}" xmlns:xsi="{XSI_NS}" '
    f'xsi:schemaLocation="{SITEMAP_NS} {SITEMAP_XSD}" '
    f'xmlns:xhtml="{XHTML_NS}" xmlns:video="{VIDEO_NS}" xmlns:image="{IMAGE_NS}">'
)
URLSET_CLOSE = "</urlset>"
INDEX_OPEN = (
    f'<sitemapindex xmlns="{SITEMAP_NS}" xmlns:xsi="{XSI_NS}" '
    f'xsi:schemaLocation="{SITEMAP_NS} {SITEINDEX_XSD}">'
)
INDEX_CLOSE = "</sitemapindex>"


def _attrs(attrs: dict[str, str | None] | None) -> str:
    if not attrs:
        return ""
    return "".join(f' {key}="{value}"' for key, value in attrs.items() if value is not None)


def _element(pad: str, name: str, text: str, attrs: dict[str, str | None] | None = None) -> str:
    return f"{pad}<{name}{_attrs(attrs)}>{text}</{name}>"


def prologue(stylesheet_url: str | None) -> list[str]:
    lines = [XML_DECLARATION]
    if stylesheet_url:
        lines.append(f'<?xml-stylesheet type="text/xsl" href="{xml_escape(stylesheet_url)}"?>')
    return lines


def render_video(video: VideoExtension, pad: str) -> list[str]:
    inner = pad + "  "
    lines = [f"{pad}<video:video>"]
    lines.append(_element(inner, "video:thumbnail_loc", encode_url(video.thumbnail_loc)))
    lines.append(_element(inner, "video:title", xml_escape(video.title)))
    lines.append(_element(inner, "video:description", xml_escape(video.description)))
    for content_loc in video.content_loc:
        lines.append(_element(inner, "video:content_loc", encode_url(content_loc)))
    if video.player_loc is not None:
        lines.append(_element(inner, "video:player_loc", encode_url(video.player_loc)))
    if video.duration is not None:
        lines.append(_element(inner, "video:duration", str(video.duration)))
    if video.expiration_date is not None:
        lines.append(_element(inner, "video:expiration_date", xml_escape(video.expiration_date)))
    if video.rating is not None:
        lines.append(_element(inner, "video:rating", str(video.rating)))
    if video.view_count is not None:
        lines.append(_element(inner, "video:view_count", str(video.view_count)))
    if video.publication_date is not None:
        lines.append(_element(inner, "video:publication_date", xml_escape(video.publication_date)))
    if video.family_friendly is not None:
        lines.append(_element(inner, "video:family_friendly", video.family_friendly))
    if video.restriction is not None:
        lines.append(
            _element(
                inner,
                "video:restriction",
                xml_escape(video.restriction.value),
                {"relationship": video.restriction.relationship},
            )
        )
    if video.platform is not None:
        lines.append(
            _element(
                inner,
                "video:platform",
                xml_escape(video.platform.value),
                {"relationship": video.platform.relationship},
            )
        )
    for price in video.price:
        attrs = {
            "currency": xml_escape(price.currency),
            "type": xml_escape(price.type) if price.type else None,
            "resolution": xml_escape(price.resolution) if price.resolution else None,
        }
        lines.append(_element(inner, "video:price", xml_escape(price.value), attrs))
    if video.requires_subscription is not None:
        lines.append(_element(inner, "video:requires_subscription", video.requires_subscription))
    if video.uploader is not None:
        info = encode_url(video.uploader.info) if video.uploader.info else None
        lines.append(_element(inner, "video:uploader", xml_escape(video.uploader.value), {"info": info}))
    if video.live is not None:
        lines.append(_element(inner, "video:live", video.live))
    for tag in video.tag:
        lines.append(_element(inner, "video:tag", xml_escape(tag)))
    if video.category is not None:
        lines.append(_element(inner, "video:category", xml_escape(video.category)))
    lines.append(f"{pad}</video:video>")
    return lines


def render_images(image: ImageExtension, pad: str) -> list[str]:
    inner = pad + "  "
    lines: list[str] = []
    for entry in image.images:
        lines.append(f"{pad}<image:image>")
        lines.append(_element(inner, "image:loc", encode_url(entry.loc)))
        if entry.title is not None:
            lines.append(_element(inner, "image:title", xml_escape(entry.title)))
        if entry.caption is not None:
            lines.append(_element(inner, "image:caption", xml_escape(entry.caption)))
        if entry.geo_location is not None:
            lines.append(_element(inner, "image:geo_location", xml_escape(entry.geo_location)))
        if entry.license is not None:
            lines.append(_element(inner, "image:license", encode_url(entry.license)))
        lines.append(f"{pad}</image:image>")
    return lines


def render_url(record: URLRecord) -> str:
    """Render one <url> block, newline-terminated."""
    lines = ["  <url>"]
    lines.append(_element("    ", "loc", encode_url(record.location)))
    if record.last_modified is not None:
        lines.append(_element("    ", "lastmod", xml_escape(record.last_modified)))
    if record.change_frequency is not None:
        lines.append(_element("    ", "changefreq", record.change_frequency))
    if record.priority is not None:
        lines.append(_element("    ", "priority", f"{record.priority:.1f}"))
    for alternate in record.alternates:
        lines.append(
            f'    <xhtml:link rel="alternate" hreflang="{xml_escape(alternate.hreflang)}" '
            f'href="{encode_url(alternate.href)}"/>'
        )
    for extension in record.extensions:
        if isinstance(extension, VideoExtension):
            lines.extend(render_video(extension, "    "))
        elif isinstance(extension, ImageExtension):
            lines.extend(render_images(extension, "    "))
    lines.append("  </url>")
    return "\n".join(lines) + "\n"


def urlset_head(stylesheet_url: str | None) -> str:
    return "\n".join(prologue(stylesheet_url) + [URLSET_OPEN]) + "\n"


def urlset_tail() -> str:
    return URLSET_CLOSE + "\n"


def render_urlset(records: Iterable[URLRecord], stylesheet_url: str | None = None) -> bytes:
    body = "".join(render_url(record) for record in records)
    return (urlset_head(stylesheet_url) + body + urlset_tail()).encode("utf-8")


def render_index(files: Iterable[ProducedFile], stylesheet_url: str | None = None) -> bytes:
    lines = prologue(stylesheet_url) + [INDEX_OPEN]
    for item in files:
        lines.append("  <sitemap>")
        lines.append(_element("    ", "loc", encode_url(item.public_url)))
        lines.append(_element("    ", "lastmod", item.last_modified_at.isoformat(timespec="seconds")))
        lines.append("  </sitemap>")
    lines.append(INDEX_CLOSE)
    return ("\n".join(lines) + "\n").encode("utf-8")
