"""Command line entry point: scan script files and print a JSON report."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .constants import SUPPORTED_LANGUAGES
from .core.config import ScanSettings
from .core.exceptions import ConfigurationError
from .core.logging_config import configure_scan_logging
from .scanner import ScanOrchestrator
from .sources import load_script_sources

logger = logging.getLogger("runtime_js_scan")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="runtime-js-scan",
        description="Detect bundlers, duplicated webpack modules and custom elements in JavaScript files.",
    )
    parser.add_argument(
        "paths",
        nargs="+",
        type=Path,
        help="Script files or directories containing .js/.mjs/.cjs files",
    )
    parser.add_argument(
        "--language",
        choices=sorted(SUPPORTED_LANGUAGES),
        default=None,
        help="Grammar used to parse scripts (default: javascript)",
    )
    parser.add_argument(
        "--no-byte-accounting",
        action="store_true",
        help="Do not measure the size of duplicated webpack modules",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Write JSON scan events to this file (rotated hourly)",
    )
    return parser


def _settings_from_args(args: argparse.Namespace) -> ScanSettings:
    settings = ScanSettings.from_env()
    overrides: dict[str, object] = {}
    if args.language:
        overrides["language"] = args.language
    if args.no_byte_accounting:
        overrides["track_duplicated_bytes"] = False
    if args.log_level:
        overrides["log_level"] = args.log_level.upper()
    if args.log_file:
        overrides["log_file"] = args.log_file
    if not overrides:
        return settings
    try:
        return ScanSettings(**{**settings.model_dump(), **overrides})
    except ValueError as e:
        raise ConfigurationError(str(e)) from e


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = _settings_from_args(args)
    except ConfigurationError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=settings.log_level,
        format="[%(asctime)s] %(name)s %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )
    configure_scan_logging(log_file=settings.log_file, log_level=settings.log_level)

    scripts = load_script_sources(args.paths)
    if not scripts:
        logger.error("No scripts could be loaded")
        return 1

    report = ScanOrchestrator(settings=settings).run_scan(scripts)
    print(report.model_dump_json(indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
