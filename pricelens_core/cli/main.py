#!/usr/bin/env python3
"""pricelens command line: detect products on a page and save the report."""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import List, Optional

from pricelens_core import runner
from pricelens_core.config import config
from pricelens_core.data_export import DataExporter
from pricelens_logs import create_run_logger

FORMAT_SUFFIXES = {"text": ".txt", "json": ".json", "csv": ".csv"}


def _report_path(args: argparse.Namespace) -> Path:
    if args.output:
        return Path(args.output)
    default = Path(config.report_filename)
    if args.format != "text":
        default = default.with_suffix(FORMAT_SUFFIXES[args.format])
    return default


def cmd_detect(args: argparse.Namespace) -> int:
    if bool(args.url) == bool(args.snapshot):
        print("Provide either a URL or --snapshot FILE", file=sys.stderr)
        return 2

    run_logger = None
    if args.log_dir:
        run_logger = create_run_logger(
            url=args.url or args.snapshot,
            command_line=" ".join(["pricelens"] + sys.argv[1:]),
            log_dir=args.log_dir,
        )

    if args.snapshot:
        status = runner.run_on_snapshot(args.snapshot, run_logger=run_logger)
    else:
        status = asyncio.run(runner.run_on_url(args.url, run_logger=run_logger))

    if not status.ok:
        print(status.message, file=sys.stderr)
        return 1

    path = _report_path(args)
    DataExporter(status.records).export(args.format, path)
    print(f"Saved {status.count} product(s) to {path}")
    return 0


def cmd_capture(args: argparse.Namespace) -> int:
    try:
        count = asyncio.run(runner.capture_url(args.url, args.output))
    except Exception as e:
        print(f"Capture failed: {e}", file=sys.stderr)
        return 1
    print(f"Saved snapshot ({count} elements) to {args.output}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="pricelens", description="pricelens - Detect products (title, price, image) on any page")
    sub = p.add_subparsers(dest="sub")

    p_detect = sub.add_parser("detect", help="Detect products and save a report")
    p_detect.add_argument("url", nargs="?", help="Page URL to open in a headless browser")
    p_detect.add_argument("--snapshot", help="Run on a saved JSON snapshot instead of a live page")
    p_detect.add_argument("-o", "--output", help=f"Report path (default: {config.report_filename})")
    p_detect.add_argument("--format", choices=sorted(FORMAT_SUFFIXES), default="text", help="Report format")
    p_detect.add_argument("--log-dir", help="Write a markdown run log to this directory")
    p_detect.set_defaults(func=cmd_detect)

    p_capture = sub.add_parser("capture", help="Save a DOM snapshot of a page for offline runs")
    p_capture.add_argument("url", help="Page URL")
    p_capture.add_argument("-o", "--output", default="snapshot.json", help="Snapshot path")
    p_capture.set_defaults(func=cmd_capture)

    return p


def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    parser = build_parser()
    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        return 0
    return int(args.func(args) or 0)


if __name__ == "__main__":
    raise SystemExit(main())
