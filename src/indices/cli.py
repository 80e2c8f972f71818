"""Evaluate an index file and print the computed indices.

Usage:
    custom-indices < quotes.txt
    custom-indices quotes.txt
    custom-indices quotes.txt --config settings.yaml -v

Exit codes:
    0: all indices computed and printed
    1: any parse, lookup or evaluation error (message printed, no report)
"""

import argparse
import logging
import sys
from pathlib import Path

from .config import Settings, load_settings
from .database import Database
from .errors import IndicesError
from .interpreter import load
from .records import iter_records
from .report import build_report, format_report

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> logging.Handler:
    """Attach a stderr handler to the package logger for one run."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    package_logger = logging.getLogger("indices")
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    return handler


def _read_lines(source: str) -> list[str]:
    if source == "-":
        return sys.stdin.read().splitlines()
    return Path(source).read_text().splitlines()


def evaluate_lines(lines: list[str], settings: Settings) -> list[str]:
    """Run one load/evaluate/report pass and return the formatted report."""
    db = load(iter_records(lines, settings.delimiter), Database())
    db.evaluate_all()
    return format_report(build_report(db), settings.precision)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Compute custom indices from quotes and rules")
    parser.add_argument(
        "input", nargs="?", default="-", help="Record file to read (default: stdin)"
    )
    parser.add_argument("--config", type=Path, default=None, help="YAML settings file")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log debug output to stderr"
    )
    args = parser.parse_args(argv)

    try:
        settings = load_settings(args.config)
    except IndicesError as e:
        print(e)
        return 1

    handler = _configure_logging("DEBUG" if args.verbose else settings.log_level)
    try:
        report = evaluate_lines(_read_lines(args.input), settings)
        logger.debug("evaluated %d indices from %s", len(report), args.input)
    except IndicesError as e:
        print(e)
        return 1
    except UnicodeDecodeError as e:
        print(f"cannot decode {args.input}: {e.reason} at byte {e.start}")
        return 1
    except OSError as e:
        print(f"cannot read {args.input}: {e.strerror or e}")
        return 1
    finally:
        logging.getLogger("indices").removeHandler(handler)

    for line in report:
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
