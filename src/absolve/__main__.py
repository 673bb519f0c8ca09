"""CLI entry point for absolve."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import __version__
from .cli.renderer import render_error, render_json, render_resolved, result_record
from .config import AppConfig, load_config
from .errors import ResolveError
from .parts import PrefixKind
from .resolver import to_absolute, to_absolute_from_current_dir


def _load_config_or_exit(config_path: str | None) -> AppConfig:
    try:
        return load_config(Path(config_path) if config_path else None)
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)


def _resolve_one(path: str, base_dir: str | None, allowed_prefixes: frozenset[PrefixKind]) -> str:
    if base_dir:
        return to_absolute(base_dir, path, allowed_prefixes=allowed_prefixes)
    return to_absolute_from_current_dir(path, allowed_prefixes=allowed_prefixes)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="absolve",
        description="Resolve paths into canonical absolute paths. Targets must exist.",
    )
    parser.add_argument("paths", nargs="+", metavar="PATH", help="Path to resolve")
    parser.add_argument(
        "-b",
        "--base",
        dest="base_dir",
        default=None,
        help="Absolute base directory for relative paths (default: cli.base_dir, then cwd)",
    )
    parser.add_argument("--json", action="store_true", help="Print one JSON object per path")
    parser.add_argument("--config", dest="config_path", default=None, help="Path to config.yaml")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = _build_parser().parse_args(argv)
    config = _load_config_or_exit(args.config_path)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.log_level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    base_dir = args.base_dir or config.cli.base_dir
    allowed_prefixes = config.resolver.prefix_kinds()
    as_json = args.json or config.cli.output == "json"

    records = []
    failed = False
    for path in args.paths:
        try:
            resolved = _resolve_one(path, base_dir, allowed_prefixes)
        except ResolveError as e:
            failed = True
            if as_json:
                records.append(result_record(path, error=e))
            else:
                render_error(path, e)
            continue
        if as_json:
            records.append(result_record(path, resolved=resolved))
        else:
            render_resolved(resolved)

    if as_json:
        render_json(records)
    if failed:
        sys.exit(1)


if __name__ == "__main__":
    main()
