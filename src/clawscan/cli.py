# SPDX-License-Identifier: MIT
"""
ClawScan - Command Line Interface

This CLI provides:
- clawscan version
- clawscan scan <root> --format {console,json,sarif} --severity <level> --fail-on <level>
- clawscan init <root>

Exit codes: 0 clean, 1 findings at or above --fail-on, 2 usage/config errors.
"""

import argparse
import logging
import sys
from pathlib import Path

from . import __version__
from .core.exceptions import ClawScanError
from .core.findings import Severity
from .reporters import FORMATS, format_results
from .scanner.config import (
    CONFIG_FILE_NAMES,
    create_default_config_template,
    load_scanner_config,
)
from .scanner.engine import scan

logger = logging.getLogger("clawscan")

SEVERITY_CHOICES = [s.value for s in Severity]

EXIT_OK = 0
EXIT_FINDINGS = 1
EXIT_ERROR = 2


def _split_csv(value):
    return [v.strip() for v in value.split(",") if v.strip()]


def build_parser():
    p = argparse.ArgumentParser(prog="clawscan", description="ClawScan - AI Agent Security Scanner")
    p.add_argument("--version", action="store_true", help="print version and exit")

    sub = p.add_subparsers(dest="cmd")
    sub.add_parser("version", help="print version")

    sp = sub.add_parser("scan", help="scan a directory for security issues")
    sp.add_argument("root", nargs="?", default=".", help="path to scan")
    sp.add_argument(
        "-f", "--format",
        choices=FORMATS,
        default="console",
        help="output format (default: console)"
    )
    sp.add_argument(
        "-s", "--severity",
        choices=SEVERITY_CHOICES,
        help="minimum severity to report"
    )
    sp.add_argument(
        "--scanners",
        type=_split_csv,
        help="comma-separated list of scanners to run"
    )
    sp.add_argument(
        "--exclude",
        type=_split_csv,
        help="comma-separated exclusion patterns (replaces the defaults)"
    )
    sp.add_argument(
        "--config",
        help="path to a .clawscan.yml config file"
    )
    sp.add_argument(
        "--fail-on",
        dest="fail_on",
        choices=SEVERITY_CHOICES,
        help="exit with code 1 if findings at or above this severity exist (default: high)"
    )
    sp.add_argument(
        "--no-color",
        dest="no_color",
        action="store_true",
        help="disable colored console output"
    )
    sp.add_argument(
        "-o", "--output",
        help="write the report to a file instead of stdout"
    )
    sp.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="log progress to stderr (-vv for debug)"
    )

    ip = sub.add_parser("init", help="write a default .clawscan.yml")
    ip.add_argument("root", nargs="?", default=".", help="directory to write the config into")
    ip.add_argument("--force", action="store_true", help="overwrite an existing config")

    return p


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    p = build_parser()
    args = p.parse_args(argv)

    if args.version or args.cmd == "version":
        print(__version__)
        return EXIT_OK

    if args.cmd == "scan":
        return handle_scan_command(args)

    if args.cmd == "init":
        return handle_init_command(args)

    p.print_help()
    return EXIT_OK


def _configure_logging(verbosity):
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="[clawscan] %(levelname)s %(name)s: %(message)s",
    )


def handle_scan_command(args):
    """Handle the scan subcommand."""
    _configure_logging(args.verbose)
    root = Path(args.root).resolve()

    try:
        config = load_scanner_config(args.config, repo_root=str(root))
    except ClawScanError as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return EXIT_ERROR

    # CLI flags win over the config file
    exclude = args.exclude if args.exclude is not None else config["exclude"]
    scanners = args.scanners if args.scanners is not None else config["scanners"]
    min_severity = args.severity or config["min_severity"]
    fail_on = args.fail_on or config["fail_on"]

    if args.format == "console" and not args.output:
        print(f"\n🔍 Scanning {root}...", file=sys.stderr)

    try:
        result = scan(root, exclude=exclude, scanners=scanners, min_severity=min_severity)
        output = format_results(result, args.format, color=False if args.no_color else None)
    except ClawScanError as e:
        print(f"Error during scan: {e}", file=sys.stderr)
        return EXIT_ERROR

    if args.output:
        try:
            Path(args.output).write_text(output, encoding="utf-8")
        except OSError as e:
            print(f"Error writing report: {e}", file=sys.stderr)
            return EXIT_ERROR
        logger.info("Report written to %s", args.output)
    else:
        print(output)

    if result.exceeds(fail_on):
        return EXIT_FINDINGS
    return EXIT_OK


def handle_init_command(args):
    """Handle the init subcommand."""
    target = Path(args.root) / CONFIG_FILE_NAMES[0]
    if target.exists() and not args.force:
        print(f"{target} already exists (use --force to overwrite)", file=sys.stderr)
        return EXIT_ERROR
    target.write_text(create_default_config_template(), encoding="utf-8")
    print(f"Wrote {target}")
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
