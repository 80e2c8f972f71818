"""Database of named cells.

Formula cells ("indices") are kept in declaration order. Every formula
may only reference cells declared before it, so walking that order and
reading each cell evaluates the whole graph; reads of formulas that
feed other formulas are served from each cell's cache.
"""

import logging
from collections.abc import Iterator
from enum import Enum

from .cell import Cell
from .errors import DuplicateName, MalformedRecord, PhaseError, UnknownName

logger = logging.getLogger(__name__)


class Phase(Enum):
    LOADING = "loading"
    EVALUATING = "evaluating"
    REPORTING = "reporting"
    FAILED = "failed"


class Database:
    """Owns all cells by name and drives evaluation of the formula cells."""

    def __init__(self):
        self.cells: dict[str, Cell] = {}
        self.formula_order: list[tuple[str, Cell]] = []
        self.phase = Phase.LOADING

    def __contains__(self, name: str) -> bool:
        return name in self.cells

    def __len__(self) -> int:
        return len(self.cells)

    def _require(self, phase: Phase, action: str) -> None:
        if self.phase is not phase:
            raise PhaseError(f"cannot {action} while {self.phase.value}")

    def add_value(self, name: str, cell: Cell, line: int | None = None) -> None:
        """Register a new named cell."""
        self._require(Phase.LOADING, f"add {name!r}")
        if name in self.cells:
            raise DuplicateName(name, line)
        self.cells[name] = cell

    def add_index(self, name: str, cell: Cell, line: int | None = None) -> None:
        """Register a formula cell and append it to the evaluation order."""
        self.add_value(name, cell, line)
        self.formula_order.append((name, cell))

    def lookup(self, name: str, line: int | None = None) -> Cell:
        try:
            return self.cells[name]
        except KeyError:
            raise UnknownName(name, line) from None

    def set_value(self, name: str, value: float, line: int | None = None) -> None:
        """Overwrite the literal of an existing source cell."""
        self._require(Phase.LOADING, f"set {name!r}")
        cell = self.lookup(name, line)
        if cell.is_formula:
            raise MalformedRecord(f"cannot quote formula cell {name!r}", line)
        cell.set_literal(value)

    def evaluate_all(self) -> None:
        """Read every formula cell in declaration order.

        An error from any cell leaves the database FAILED; nothing can be
        loaded, evaluated or reported afterwards.
        """
        self._require(Phase.LOADING, "evaluate")
        self.phase = Phase.EVALUATING
        logger.debug("evaluating %d indices", len(self.formula_order))
        try:
            for _, cell in self.formula_order:
                cell.read()
        except Exception:
            self.phase = Phase.FAILED
            raise
        self.phase = Phase.REPORTING

    def names(self) -> list[str]:
        return list(self.cells)

    def indices(self) -> Iterator[tuple[str, Cell]]:
        """Formula cells in declaration order."""
        yield from self.formula_order

    def values(self) -> dict[str, float]:
        """Computed formula values in declaration order."""
        self._require(Phase.REPORTING, "report")
        return {name: cell.read() for name, cell in self.formula_order}
