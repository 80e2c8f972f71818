"""Record parser for delimited index files.

Grammar (one record per nonblank line, fields separated by "|"):
    rule   = "R" "|" NAME "|" OP ["|" NAME "|" NAME]
    quote  = "Q" "|" NAME "|" NUMBER

Lines with any other leading tag are skipped.
"""

import logging
import re
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Annotated
from typing import Literal as TypingLiteral

from pydantic import BaseModel, Field

from .errors import MalformedRecord

logger = logging.getLogger(__name__)

RULE_TAG = "R"
QUOTE_TAG = "Q"

NUMBER = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")


class Quote(BaseModel):
    """Set a source cell's value."""

    type: TypingLiteral["quote"] = "quote"
    name: str
    value: float
    line: int = 0


class Rule(BaseModel):
    """Declare a cell: a source ("S") or a binary formula ("+", "-")."""

    type: TypingLiteral["rule"] = "rule"
    name: str
    op: str
    left: str | None = None
    right: str | None = None
    line: int = 0


Record = Annotated[Quote | Rule, Field(discriminator="type")]


def _split(text: str, delimiter: str) -> list[str]:
    fields = [f.strip() for f in text.split(delimiter)]
    if fields and fields[-1] == "":
        fields.pop()
    return fields


def _parse_number(text: str, line: int) -> float:
    if not NUMBER.fullmatch(text):
        raise MalformedRecord(f"invalid number: {text!r}", line)
    return float(text)


def parse_line(text: str, line: int = 0, delimiter: str = "|") -> Record | None:
    """Parse one line. Returns None for blank lines and unknown tags."""
    if not text.strip():
        return None

    fields = _split(text.strip("\r\n"), delimiter)
    tag = fields[0]
    if tag in (RULE_TAG, QUOTE_TAG) and len(fields) > 1 and not fields[1]:
        raise MalformedRecord(f"empty name in {text!r}", line)

    if tag == RULE_TAG:
        if len(fields) < 3:
            raise MalformedRecord(f"rule requires name and operation, got {text!r}", line)
        left = fields[3] if len(fields) > 3 else None
        right = fields[4] if len(fields) > 4 else None
        return Rule(name=fields[1], op=fields[2], left=left, right=right, line=line)

    if tag == QUOTE_TAG:
        if len(fields) < 3:
            raise MalformedRecord(f"quote requires name and value, got {text!r}", line)
        return Quote(name=fields[1], value=_parse_number(fields[2], line), line=line)

    logger.warning("line %d: skipping record with unknown tag %r", line, tag)
    return None


def iter_records(lines: Iterable[str], delimiter: str = "|") -> Iterator[Record]:
    """Parse lines lazily, numbering them from 1."""
    for lineno, text in enumerate(lines, start=1):
        record = parse_line(text, lineno, delimiter)
        if record is not None:
            yield record


def parse(source: str, delimiter: str = "|") -> list[Record]:
    """Parse a whole document into records."""
    return list(iter_records(source.splitlines(), delimiter))


def parse_file(filepath: str | Path, delimiter: str = "|") -> list[Record]:
    """Parse a record file."""
    filepath = Path(filepath)
    return parse(filepath.read_text(), delimiter)
