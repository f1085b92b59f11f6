# linelog/cli/args.py
from __future__ import annotations

import argparse
from dataclasses import replace
from typing import Optional, Tuple

from linelog.app.config import LoggerConfig, load_config


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def build_parser() -> argparse.ArgumentParser:
    """
    Single parser: config file first, then flags that override it.
    Flags left unset (None) keep the config/default value.
    """
    parser = argparse.ArgumentParser(
        prog="linelog",
        description="Append rows read from stdin (one comma-separated row per line) to a log file.",
    )
    parser.add_argument("--config", default=None, help="YAML file with a 'logger' root node.")
    parser.add_argument("--file", dest="filename", default=None,
                        help="Output file; relative paths land in the documents/app-data directory.")
    parser.add_argument("--header", nargs="*", default=None, help="Column names.")
    parser.add_argument("--precision", type=int, default=None, help="Fractional digits for floats.")

    parser.add_argument("--no-time", dest="log_time", action="store_false", default=None,
                        help="Do not prefix lines with a timestamp.")
    parser.add_argument("--no-millis", dest="log_millis", action="store_false", default=None,
                        help="Drop the .mmm suffix from timestamps.")
    parser.add_argument("--console", dest="to_console", action="store_true", default=None,
                        help="Write lines to stdout instead of a file.")

    parser.add_argument("--log-level", default="WARNING", choices=LOG_LEVELS,
                        help="Diagnostics level (stderr).")
    return parser


def parse_args(argv: Optional[list[str]] = None) -> Tuple[argparse.Namespace, LoggerConfig]:
    """
    Returns: (args, config)

    config is the YAML config (or defaults) with CLI overrides applied.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    config = load_config(args.config) if args.config else LoggerConfig()

    overrides = {}
    if args.filename is not None:
        overrides["filename"] = args.filename
    if args.header is not None:
        overrides["header"] = tuple(args.header)
    if args.precision is not None:
        if args.precision < 0:
            parser.error("--precision must be >= 0")
        overrides["precision"] = args.precision
    for name in ("log_time", "log_millis", "to_console"):
        value = getattr(args, name)
        if value is not None:
            overrides[name] = value

    return args, replace(config, **overrides)
