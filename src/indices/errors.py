"""Exceptions raised while loading and evaluating an index database.

Every error is fatal to a run: the CLI reports the message and exits 1.
"""


class IndicesError(Exception):
    """Base class for all index database errors."""

    def __init__(self, msg: str, line: int | None = None):
        if line:
            msg = f"line {line}: {msg}"
        super().__init__(msg)
        self.line = line


class MalformedRecord(IndicesError):
    pass


class UnknownOperation(IndicesError):
    def __init__(self, op: str, line: int | None = None):
        super().__init__(f"unknown operation: {op!r}", line)
        self.op = op


class UnknownName(IndicesError):
    def __init__(self, name: str, line: int | None = None):
        super().__init__(f"not found: {name!r}", line)
        self.name = name


class DuplicateName(IndicesError):
    def __init__(self, name: str, line: int | None = None):
        super().__init__(f"duplicate name: {name!r}", line)
        self.name = name


class UnsetValue(IndicesError):
    """A source cell was read before any quote supplied its value."""

    def __init__(self, name: str | None):
        super().__init__(f"value not set: {name!r}")
        self.name = name


class CircularReference(IndicesError):
    def __init__(self, name: str | None):
        super().__init__(f"circular reference involving {name!r}")
        self.name = name


class PhaseError(IndicesError):
    pass


class ConfigError(IndicesError):
    pass
