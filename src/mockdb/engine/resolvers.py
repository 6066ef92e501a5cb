# src/mockdb/engine/resolvers.py
"""Resolution of configured programs into values, rows or raised errors.

ResponseProgram implements the generic algorithm over the program
variants in mockdb.contracts.programs. The subclasses specialize it:

- RowCountProgram: default 0, a plain int is returned unchanged forever
- IdentityCounter: default None, a plain int auto-increments per call
- RowFeeder: resolves to zero or more row-records instead of a scalar

The row-count/identifier asymmetry for plain ints is intentional.

Every resolver mutates state (sequence cursors, the identity counter)
under a lock. Engines pass their own lock so that all program state of
one engine shares a single mutual-exclusion scope.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterable, Mapping
from typing import Any, ClassVar, NoReturn

from mockdb.contracts.errors import InvalidProgramError, InvalidRowShapeError
from mockdb.contracts.programs import (
    Dynamic,
    Empty,
    ErrorClass,
    Fixed,
    Program,
    Sequence,
    Unrecognized,
    classify,
    is_plain_int,
)

type Row = dict[str, Any]


def raise_error_class(exc_type: type, kind: str) -> NoReturn:
    """Raise a fresh instance of a configured error class.

    Raises:
        InvalidProgramError: If exc_type is not an Exception subclass.
    """
    if not issubclass(exc_type, Exception):
        raise InvalidProgramError(kind, exc_type)
    raise exc_type()


class ResponseProgram:
    """Generic resolver for a scalar-producing program."""

    kind: ClassVar[str] = "response"

    def __init__(self, value: Any = None, *, lock: threading.RLock | None = None) -> None:
        self._lock = lock if lock is not None else threading.RLock()
        self._program: Program = Empty()
        self._configured: Any = None
        self.configure(value)

    @property
    def program(self) -> Program:
        """The currently configured program variant."""
        return self._program

    @property
    def configured(self) -> Any:
        """The raw value passed to the last configure() call."""
        return self._configured

    def configure(self, value: Any) -> None:
        """Replace the program. The value is validated when first resolved."""
        with self._lock:
            self._configured = value
            self._program = self._classify(value)

    def resolve(self, query: str, default: Any) -> Any:
        """Resolve the program for one query.

        Args:
            query: Annotated query text, passed to callable programs.
            default: Returned for an empty or exhausted program.

        Raises:
            InvalidProgramError: If the program (or a callable's result)
                has an unrecognized shape.
        """
        with self._lock:
            return self._resolve(self._program, query, default)

    def _classify(self, value: Any) -> Program:
        return classify(value, self._is_fixed)

    def _is_fixed(self, value: Any) -> bool:
        return is_plain_int(value)

    def _accepts_result(self, value: Any) -> bool:
        """Whether a callable program's return value is usable."""
        return is_plain_int(value)

    def _resolve(self, program: Program, query: str, default: Any) -> Any:
        match program:
            case Empty():
                return default
            case Fixed(value=value):
                return value
            case Sequence() as sequence:
                if not sequence.items:
                    return default
                return self._resolve(self._classify(sequence.pop()), query, default)
            case Dynamic(func=func):
                result = func(query)
                if not self._accepts_result(result):
                    raise InvalidProgramError(self.kind, result)
                return result
            case ErrorClass(exc_type=exc_type):
                raise_error_class(exc_type, self.kind)
            case Unrecognized(value=value):
                raise InvalidProgramError(self.kind, value)


class RowCountProgram(ResponseProgram):
    """Number of rows affected by update/delete statements."""

    kind = "rowcount"

    def count(self, query: str) -> int:
        """Resolve the affected-row count, defaulting to 0."""
        result: int = self.resolve(query, 0)
        return result


class IdentityCounter(ResponseProgram):
    """Generated primary key returned for inserts.

    A plain int is a running counter: each call returns the current value
    and stores value + 1. Every other shape is a generic program with a
    default of None.
    """

    kind = "identifier"

    def _accepts_result(self, value: Any) -> bool:
        return value is None or is_plain_int(value)

    def next(self, query: str) -> int | None:
        with self._lock:
            if isinstance(self._program, Fixed):
                value: int = self._program.value
                self._program = Fixed(value + 1)
                return value
            result: int | None = self._resolve(self._program, query, None)
            return result


class RowFeeder(ResponseProgram):
    """Row-records yielded for select queries.

    Configured shapes:
        None                        -> no rows
        mapping                     -> that single row, every call
        list of mappings            -> every row, every call (not consumed)
        list (otherwise)            -> one element consumed per call, resolved
                                       as its own program
        callable                    -> called with the query; must return a
                                       mapping or an iterable of mappings
        exception class             -> raised
    """

    kind = "fetch"

    def _is_fixed(self, value: Any) -> bool:
        return isinstance(value, Mapping)

    def rows(self, query: str) -> list[Row]:
        """Resolve the rows for one query without emitting them."""
        with self._lock:
            return self._rows(self._program, query)

    def fetch(self, query: str, emit: Callable[[Row], object]) -> None:
        """Resolve rows and pass each one to emit, in order.

        Rows are resolved under the lock and emitted after it is released,
        so emit may safely run further queries.
        """
        for row in self.rows(query):
            emit(row)

    def _rows(self, program: Program, query: str) -> list[Row]:
        match program:
            case Empty():
                return []
            case Fixed(value=row):
                return [dict(row)]
            case Sequence(items=items):
                if all(isinstance(item, Mapping) for item in items):
                    return [dict(item) for item in items]
                return self._rows(self._classify(items.popleft()), query)
            case Dynamic(func=func):
                return self._shape_rows(func(query))
            case ErrorClass(exc_type=exc_type):
                raise_error_class(exc_type, self.kind)
            case Unrecognized(value=value):
                raise InvalidRowShapeError(value)

    @staticmethod
    def _shape_rows(result: Any) -> list[Row]:
        if isinstance(result, Mapping):
            return [dict(result)]
        if isinstance(result, (str, bytes)) or not isinstance(result, Iterable):
            raise InvalidRowShapeError(result)
        rows = list(result)
        for row in rows:
            if not isinstance(row, Mapping):
                raise InvalidRowShapeError(result)
        return [dict(row) for row in rows]
