#!/usr/bin/env python3
"""
Command line front end for the sitemap generator.
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any

from .config import MAX_URLS_PER_SITEMAP, SitemapConfig
from .errors import SitemapError, ValidationError
from .generator import SitemapGenerator
from .log import get_logger, setup_logging

logger = get_logger("seo_sitemap.cli")

RECORD_KEYS = {"path", "lastmod", "changefreq", "priority", "alternates", "extensions"}


def load_url_list(path: str) -> list[dict[str, Any]]:
    values = []
    for raw in Path(path).read_text(encoding="utf-8").splitlines():
        value = raw.strip()
        if not value or value.startswith("#"):
            continue
        values.append({"path": value})
    return values


def load_records(path_value: str) -> list[dict[str, Any]]:
    path = Path(path_value).resolve()
    if not path.exists():
        raise ValueError(f"Records file not found: {path}")
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc

    if isinstance(raw, dict) and isinstance(raw.get("urls"), list):
        entries = raw["urls"]
    elif isinstance(raw, list):
        entries = raw
    else:
        raise ValueError("Records file must be a JSON list or {\"urls\": [...]} object")

    records: list[dict[str, Any]] = []
    for idx, entry in enumerate(entries, start=1):
        if isinstance(entry, str):
            entry = {"path": entry}
        if not isinstance(entry, dict) or not entry.get("path"):
            raise ValueError(f"Invalid record at index {idx}: expected an object with a 'path'")
        unknown = set(entry) - RECORD_KEYS
        if unknown:
            raise ValueError(f"Invalid record at index {idx}: unknown keys {', '.join(sorted(unknown))}")
        records.append(entry)
    return records


def build_config(args: argparse.Namespace) -> SitemapConfig:
    out_dir = Path(args.output_dir).resolve()
    out_dir.mkdir(parents=True, exist_ok=True)
    return SitemapConfig(
        base_url=args.base_url,
        save_directory=out_dir,
        sitemap_filename=args.sitemap_filename,
        sitemap_index_filename=args.index_filename,
        max_urls_per_sitemap=args.split_size,
        compression=args.compress,
        stylesheet_url=args.stylesheet or None,
        sitemap_index_url=args.index_url or None,
    )


def run_generate(args: argparse.Namespace) -> int:
    if bool(args.urls_file) == bool(args.records_file):
        print("Error: provide exactly one of --urls-file or --records-file")
        return 2
    try:
        records = load_url_list(args.urls_file) if args.urls_file else load_records(args.records_file)
    except (OSError, ValueError) as exc:
        print(f"Error: {exc}")
        return 2
    if not records:
        print("Error: no URLs to include in sitemap")
        return 2

    try:
        generator = SitemapGenerator(build_config(args))
        for idx, record in enumerate(records, start=1):
            try:
                generator.add_url(
                    record["path"],
                    record.get("lastmod"),
                    record.get("changefreq"),
                    record.get("priority"),
                    record.get("alternates"),
                    record.get("extensions"),
                )
            except ValidationError as exc:
                print(f"Error: record {idx} ({record['path']}): {exc}")
                return 2
        result = generator.finalize()
        robots_path = generator.update_robots() if args.update_robots else None
        pings = generator.submit_sitemap() if args.ping else []
    except (SitemapError, ValueError) as exc:
        print(f"Error: {exc}")
        return 2
    except OSError as exc:
        print(f"Error: {exc}")
        return 1

    print(f"Base URL: {args.base_url}")
    print(f"Total URLs included: {generator.url_count}")
    print(f"Sitemap files: {len(result.sitemaps)}")
    for item in result.sitemaps:
        print(f"  {item.storage_path} ({item.url_count} URLs)")
    if result.index is not None:
        print(f"Sitemap index: {result.index.storage_path}")
    print(f"Entry point: {result.entry_point_url}")
    if robots_path is not None:
        print(f"robots.txt: {robots_path}")
    for ping in pings:
        print(f"Ping {ping.site}: {ping.status_code if ping.status_code is not None else 'unreachable'}")

    if args.summary_file:
        summary = dict(result.as_dict())
        summary["total_urls"] = generator.url_count
        summary["pings"] = [
            {"site": ping.site, "url": ping.url, "http_code": ping.status_code, "message": ping.message}
            for ping in pings
        ]
        Path(args.summary_file).write_text(json.dumps(summary, indent=2), encoding="utf-8")
        print(f"Summary: {args.summary_file}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate XML sitemaps and sitemap indexes.")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Logging level",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_generate = sub.add_parser("generate", help="Generate sitemap XML from a URL list")
    p_generate.add_argument("--base-url", required=True, help="Canonical base URL")
    p_generate.add_argument("--urls-file", default="", help="Newline-delimited URLs or paths to include")
    p_generate.add_argument("--records-file", default="", help="JSON list of URL records with metadata")
    p_generate.add_argument("--output-dir", default="seo-sitemap-output")
    p_generate.add_argument(
        "--split-size",
        type=int,
        default=MAX_URLS_PER_SITEMAP,
        help=f"URLs per sitemap file (max {MAX_URLS_PER_SITEMAP})",
    )
    p_generate.add_argument("--sitemap-filename", default="sitemap.xml")
    p_generate.add_argument("--index-filename", default="sitemap-index.xml")
    p_generate.add_argument("--compress", action="store_true", help="Write gzip-compressed files")
    p_generate.add_argument("--stylesheet", default="", help="XSL stylesheet URL for browsers")
    p_generate.add_argument("--index-url", default="", help="Public base URL of the sitemap files, if not base-url")
    p_generate.add_argument("--update-robots", action="store_true", help="Add a Sitemap line to robots.txt")
    p_generate.add_argument("--ping", action="store_true", help="Ping search engines after generating")
    p_generate.add_argument("--summary-file", default="", help="Optional JSON summary output path")
    p_generate.set_defaults(func=run_generate)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
