"""
URL encoding for <loc> values: percent-encode non-ASCII text, then XML-escape.
"""

from __future__ import annotations

import re
from urllib.parse import quote

STRUCTURAL_RE = re.compile(r"([:/?&=#])")
XML_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#039;",
}
XML_ESCAPE_RE = re.compile("[&<>\"']")


def percent_encode_segment(segment: str) -> str:
    # ASCII passes through untouched so existing %XX sequences stay valid.
    return "".join(ch if ord(ch) < 0x80 else quote(ch, safe="") for ch in segment)


def percent_encode(url: str) -> str:
    parts = STRUCTURAL_RE.split(url)
    # Odd indexes hold the captured structural characters.
    return "".join(part if idx % 2 else percent_encode_segment(part) for idx, part in enumerate(parts))


def xml_escape(text: str) -> str:
    return XML_ESCAPE_RE.sub(lambda m: XML_ESCAPES[m.group(0)], text)


def encode_url(url: str) -> str:
    return xml_escape(percent_encode(url))
