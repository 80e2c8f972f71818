"""Interpreter: turns parsed records into cells in a database."""

import logging
import operator
from collections.abc import Callable, Iterable

from .cell import Cell
from .database import Database
from .errors import MalformedRecord, UnknownOperation
from .records import Quote, Record, Rule

logger = logging.getLogger(__name__)

SOURCE = "S"

OPERATIONS: dict[str, Callable[[float, float], float]] = {
    "+": operator.add,
    "-": operator.sub,
}


def _binary(fn: Callable[[float, float], float], left: Cell, right: Cell) -> Callable[[], float]:
    return lambda: fn(left.read(), right.read())


def interpret(rule: Rule, db: Database) -> Cell:
    """Build the cell a rule declares and register it in the database.

    Operands are resolved now, so the formula holds the cells themselves
    rather than their names.
    """
    if rule.op == SOURCE:
        cell = Cell.source(rule.name)
        db.add_value(rule.name, cell, rule.line)
        logger.debug("declared source %s", rule.name)
        return cell

    fn = OPERATIONS.get(rule.op)
    if fn is None:
        raise UnknownOperation(rule.op, rule.line)
    if rule.left is None or rule.right is None:
        raise MalformedRecord(f"operation {rule.op!r} requires two operands", rule.line)

    left = db.lookup(rule.left, rule.line)
    right = db.lookup(rule.right, rule.line)
    cell = Cell.deferred(_binary(fn, left, right), rule.name)
    db.add_index(rule.name, cell, rule.line)
    logger.debug("declared index %s = %s %s %s", rule.name, rule.left, rule.op, rule.right)
    return cell


def apply(record: Record, db: Database) -> None:
    """Apply a single record to the database."""
    match record:
        case Rule():
            interpret(record, db)
        case Quote(name=name, value=value, line=line):
            db.set_value(name, value, line)
            logger.debug("quoted %s = %r", name, value)
        case _:
            raise MalformedRecord(f"unknown record type: {type(record).__name__}")


def load(records: Iterable[Record], db: Database | None = None) -> Database:
    """Apply a record stream to a database, creating one if needed."""
    if db is None:
        db = Database()
    for record in records:
        apply(record, db)
    return db
