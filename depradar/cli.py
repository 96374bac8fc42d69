"""Command-line entry point.

Reads manifest URLs from stdin, one per line, and scans them::

    cat urls.txt | depradar -c 10 -v

Exit status is 0 whatever the scan finds; 1 only when stdin cannot be read.
"""

import argparse
import sys
from typing import Sequence, TextIO

import yaml
from pydantic import ValidationError

from .config import ScanConfig, find_config, load_config
from .pipeline import scan_urls
from .report import StatusReporter


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="depradar",
        description="Flag package.json dependencies that are not published on npm.",
    )
    parser.add_argument("-c", "--concurrency", type=int, default=None, help="Number of concurrent workers (default 5)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose output")
    return parser


def _read_urls(stream: TextIO) -> list[str]:
    """Read every line of ``stream``; blank lines are kept as empty URLs."""
    return stream.read().splitlines()


def _stdin() -> TextIO:
    """Return stdin, decoding undecodable bytes as U+FFFD instead of failing."""
    reconfigure = getattr(sys.stdin, "reconfigure", None)
    if reconfigure is not None:
        reconfigure(errors="replace")
    return sys.stdin


def _load_settings(parser: argparse.ArgumentParser, args: argparse.Namespace) -> ScanConfig:
    path = find_config()
    try:
        config = load_config(path) if path is not None else ScanConfig()
    except (OSError, ValueError, ValidationError, yaml.YAMLError) as e:
        parser.error(f"invalid config {path}: {e}")
    overrides: dict = {}
    if args.concurrency is not None:
        overrides["concurrency"] = args.concurrency
    if args.verbose:
        overrides["verbose"] = True
    return ScanConfig.model_validate({**config.model_dump(), **overrides})


def main(argv: Sequence[str] | None = None, stdin: TextIO | None = None) -> int:
    """Run a scan and return the process exit code."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    config = _load_settings(parser, args)
    reporter = StatusReporter(verbose=config.verbose)

    try:
        urls = _read_urls(stdin or _stdin())
    except (OSError, UnicodeDecodeError) as e:
        print(f"[ERROR] Failed to read input: {e}")
        return 1

    try:
        scan_urls(urls, config, reporter)
    except KeyboardInterrupt:
        return 130
    return 0
