"""Custom indices: lazily evaluated formulas over quoted values.

Pipeline: parse "|"-delimited records -> load cells into a database ->
evaluate formulas in declaration order -> report.

Example:
    from indices import evaluate

    report = evaluate("R|A|S\nR|B|S\nR|X|+|A|B\nQ|A|10\nQ|B|5\n")
    report.values  # {"X": 15.0}
"""

__version__ = "0.1.0"

from .cell import Cell, Computed, Pending, Running, Unset
from .config import Settings, load_settings
from .database import Database, Phase
from .errors import (
    CircularReference,
    ConfigError,
    DuplicateName,
    IndicesError,
    MalformedRecord,
    PhaseError,
    UnknownName,
    UnknownOperation,
    UnsetValue,
)
from .interpreter import OPERATIONS, SOURCE, apply, interpret, load
from .records import Quote, Record, Rule, iter_records, parse, parse_file, parse_line
from .report import Report, build_report, format_report, write_report


def evaluate(source: str, settings: Settings | None = None) -> Report:
    """Parse, load and evaluate a document in one pass."""
    settings = settings or Settings()
    db = load(parse(source, settings.delimiter))
    db.evaluate_all()
    return build_report(db)


def run(source: str, settings: Settings | None = None) -> list[str]:
    """Evaluate a document and return the formatted report lines."""
    settings = settings or Settings()
    return format_report(evaluate(source, settings), settings.precision)


__all__ = [
    # Cells
    "Cell",
    "Unset",
    "Pending",
    "Running",
    "Computed",
    # Records
    "Quote",
    "Rule",
    "Record",
    "parse",
    "parse_line",
    "parse_file",
    "iter_records",
    # Database
    "Database",
    "Phase",
    # Interpret
    "OPERATIONS",
    "SOURCE",
    "interpret",
    "apply",
    "load",
    # Report
    "Report",
    "build_report",
    "format_report",
    "write_report",
    # Config
    "Settings",
    "load_settings",
    # Errors
    "IndicesError",
    "MalformedRecord",
    "UnknownOperation",
    "UnknownName",
    "DuplicateName",
    "UnsetValue",
    "CircularReference",
    "PhaseError",
    "ConfigError",
    # High-level
    "evaluate",
    "run",
]
