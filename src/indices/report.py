"""Report of computed index values."""

from typing import TextIO

from pydantic import BaseModel

from .database import Database


class Report(BaseModel):
    """Computed index values, in declaration order."""

    values: dict[str, float] = {}

    def format(self, precision: int = 2) -> list[str]:
        return format_report(self, precision)


def build_report(db: Database) -> Report:
    """Collect the values of an evaluated database."""
    return Report(values=db.values())


def format_report(report: Report, precision: int = 2) -> list[str]:
    return [f"{name}: {value:.{precision}f}" for name, value in report.values.items()]


def write_report(out: TextIO, report: Report, precision: int = 2) -> None:
    for line in format_report(report, precision):
        out.write(line + "\n")
