"""Lazily evaluated numeric cells.

A cell is either a source (a literal supplied later by a quote) or a
formula (a deferred computation over earlier cells). Formula cells run
their computation on first read and cache the result; later reads never
re-run it.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from .errors import CircularReference, UnsetValue

logger = logging.getLogger(__name__)

Computation = Callable[[], float]


# Cell states
@dataclass(frozen=True)
class Unset:
    """Source cell awaiting a quote."""


@dataclass(frozen=True)
class Pending:
    computation: Computation


@dataclass(frozen=True)
class Running:
    """Computation in progress; a read in this state is re-entrant."""

    computation: Computation


@dataclass(frozen=True)
class Computed:
    value: float


State = Unset | Pending | Running | Computed


class Cell:
    """A numeric value that is computed at most once."""

    __slots__ = ("name", "_formula", "_state")

    def __init__(self, state: State, formula: bool, name: str | None = None):
        self.name = name
        self._formula = formula
        self._state: State = state

    @classmethod
    def source(cls, name: str | None = None) -> "Cell":
        return cls(Unset(), formula=False, name=name)

    @classmethod
    def literal(cls, value: float, name: str | None = None) -> "Cell":
        return cls(Computed(float(value)), formula=False, name=name)

    @classmethod
    def deferred(cls, computation: Computation, name: str | None = None) -> "Cell":
        return cls(Pending(computation), formula=True, name=name)

    @property
    def is_formula(self) -> bool:
        return self._formula

    @property
    def is_computed(self) -> bool:
        return isinstance(self._state, Computed)

    def set_literal(self, value: float) -> None:
        """Store a literal on a source cell. Later calls overwrite earlier ones."""
        if self._formula:
            raise TypeError(f"cannot set a literal on formula cell {self.name!r}")
        self._state = Computed(float(value))

    def read(self) -> float:
        """Return the cell's value, running its computation on first read."""
        match self._state:
            case Computed(value=value):
                return value
            case Pending(computation=computation):
                self._state = Running(computation)
                try:
                    value = float(computation())
                except BaseException:
                    self._state = Pending(computation)
                    raise
                self._state = Computed(value)
                logger.debug("computed %s = %r", self.name, value)
                return value
            case Running():
                raise CircularReference(self.name)
            case Unset():
                raise UnsetValue(self.name)
            case _:
                raise TypeError(f"unknown cell state: {self._state!r}")

    def __repr__(self) -> str:
        kind = "formula" if self._formula else "source"
        return f"Cell({kind}, name={self.name!r}, state={self._state!r})"
