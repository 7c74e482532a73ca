# -*- coding: utf-8 -*-
"""
aucatalog CLI - Headless detection and search over a catalog file.

Usage::

    python -m aucatalog detect index.json
    python -m aucatalog search index.json -q "ブラー" --tag filter
    python -m aucatalog status index.json --settings settings.json
    python -m aucatalog hash C:/ProgramData/aviutl2/Plugin/foo.auf

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-18

Modified
--------
2026-10-18
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional


def _load_catalog(path: Path) -> Optional[list]:
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        print(f"Error: cannot read catalog {path}: {e}", file=sys.stderr)
        return None
    if not isinstance(data, list):
        print(f"Error: catalog {path} is not a JSON array", file=sys.stderr)
        return None
    return data


def _detect(args: argparse.Namespace, items: list) -> dict:
    from aucatalog.catalog.detector import detect_versions_map
    from aucatalog.core.config import load_config

    config = load_config(args.settings)
    return detect_versions_map(items, config=config, cache_path=args.cache)


def _cmd_detect(args: argparse.Namespace) -> int:
    items = _load_catalog(args.catalog)
    if items is None:
        return 1
    detected = _detect(args, items)
    if args.save_installed:
        from aucatalog.catalog.installed import InstalledStore
        InstalledStore().save_snapshot(detected)
    print(json.dumps(detected, indent=2, ensure_ascii=False))
    return 0


def _cmd_status(args: argparse.Namespace) -> int:
    items = _load_catalog(args.catalog)
    if items is None:
        return 1
    from aucatalog.catalog.updater import UpdateChecker

    detected = _detect(args, items)
    for r in UpdateChecker(items, detected).run():
        if args.updates_only and not r.update_available:
            continue
        state = "update" if r.update_available else (
            "latest" if r.is_latest else (
                "installed" if r.installed else "-"
            )
        )
        print(f"{r.item.id}\t{r.installed_version or '-'}\t"
              f"{r.latest_version or '-'}\t{state}")
    return 0


def _cmd_search(args: argparse.Namespace) -> int:
    items = _load_catalog(args.catalog)
    if items is None:
        return 1
    from aucatalog.catalog.index import CatalogIndex
    from aucatalog.core.config import load_config

    index = CatalogIndex.from_config(load_config(args.settings))
    index.set_index(items)
    for item_id in index.query(
        text=args.query,
        tags=args.tags,
        types=args.types,
        sort=args.sort,
        dir=args.dir,
    ):
        print(item_id)
    return 0


def _cmd_hash(args: argparse.Namespace) -> int:
    from aucatalog.catalog.hashing import hash_file

    try:
        print(hash_file(str(args.path)))
    except OSError as e:
        print(f"Error: cannot hash {args.path}: {e}", file=sys.stderr)
        return 1
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="aucatalog",
        description="aucatalog - Detect installed packages and search the catalog.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Append log lines to this file (pruned to the configured size).",
    )
    parser.add_argument(
        "--log",
        action="store_true",
        help="Append log lines to logs/app.log in the config dir.",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log progress to stderr.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    def add_detection_args(p: argparse.ArgumentParser) -> None:
        p.add_argument("catalog", type=Path, help="Catalog JSON file.")
        p.add_argument(
            "--settings",
            type=Path,
            default=None,
            help="Settings JSON file (default: settings.json in the config dir).",
        )
        p.add_argument(
            "--cache",
            type=Path,
            default=None,
            help="Hash cache JSON file (default: hash-cache.json in the config dir).",
        )

    p_detect = sub.add_parser("detect", help="Print detected versions as JSON.")
    add_detection_args(p_detect)
    p_detect.add_argument(
        "--save-installed",
        action="store_true",
        help="Also store the result in installed.json.",
    )
    p_detect.set_defaults(func=_cmd_detect)

    p_status = sub.add_parser("status", help="Print install/update status.")
    add_detection_args(p_status)
    p_status.add_argument(
        "--updates-only",
        action="store_true",
        help="Only list items with an update available.",
    )
    p_status.set_defaults(func=_cmd_status)

    p_search = sub.add_parser("search", help="Print matching item ids.")
    p_search.add_argument("catalog", type=Path, help="Catalog JSON file.")
    p_search.add_argument(
        "--settings",
        type=Path,
        default=None,
        help="Settings JSON file (default: settings.json in the config dir).",
    )
    p_search.add_argument("--query", "-q", default=None, help="Free-text query.")
    p_search.add_argument(
        "--tag", dest="tags", action="append", default=None,
        help="Tag filter (repeatable, any match).",
    )
    p_search.add_argument(
        "--type", dest="types", action="append", default=None,
        help="Type filter (repeatable, any match).",
    )
    p_search.add_argument("--sort", choices=("name", "newest"), default=None)
    p_search.add_argument("--dir", choices=("asc", "desc"), default=None)
    p_search.set_defaults(func=_cmd_search)

    p_hash = sub.add_parser("hash", help="Print the xxh3-128 hash of a file.")
    p_hash.add_argument("path", type=Path, help="File to hash.")
    p_hash.set_defaults(func=_cmd_hash)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    if args.log or args.log_file is not None:
        from aucatalog.core.config import load_config
        from aucatalog.core.logs import configure_logging

        config = load_config(getattr(args, 'settings', None))
        configure_logging(args.log_file, max_lines=config.log_max_lines)

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
