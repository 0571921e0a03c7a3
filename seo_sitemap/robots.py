"""
robots.txt maintenance: point the Sitemap directive at the current entry point.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_ROBOTS_LINES = ["User-agent: *", "Allow: /"]


def robots_content(existing: str | None, sitemap_url: str) -> str:
    if existing is None:
        lines = list(DEFAULT_ROBOTS_LINES)
    else:
        lines = [line for line in existing.splitlines() if "sitemap:" not in line.lower()]
    lines.append(f"Sitemap: {sitemap_url}")
    return "\n".join(lines) + "\n"


def update_robots_file(path: Path, sitemap_url: str) -> Path:
    existing = path.read_text(encoding="utf-8") if path.exists() else None
    path.write_text(robots_content(existing, sitemap_url), encoding="utf-8")
    return path
