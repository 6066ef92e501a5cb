# src/mockdb/contracts/errors.py
"""Error taxonomy for the mock database engine.

Every error raised while executing a query is funnelled through a single
boundary and surfaces as DatabaseError, so callers only ever need to
handle one type. The other classes describe what went wrong underneath.

All classes can be built without arguments, so any of them can be
configured as an error-class program.
"""


class MockDBError(Exception):
    """Base class for all mockdb errors."""


class InvalidProgramError(MockDBError):
    """Raised when a configured program is not one of the recognized shapes.

    Programs are validated lazily, so this surfaces on the first
    resolution that reaches the bad value, not when it is configured.
    """

    def __init__(self, kind: str | None = None, value: object = None) -> None:
        self.kind = kind
        self.value = value
        if kind is None:
            super().__init__("Invalid program")
        else:
            super().__init__(f"Invalid {kind} program: {value!r}")


class InvalidRowShapeError(InvalidProgramError):
    """Raised when a fetch program resolves to something other than row-records."""

    def __init__(self, value: object = None) -> None:
        super().__init__("fetch", value)


class ConfiguredError(MockDBError):
    """Ready-made failure for programs that simulate a database error.

    Any Exception subclass works as an error-class program; this one
    exists so tests don't have to declare their own.
    """


class DatabaseError(MockDBError):
    """Uniform error raised at the engine boundary.

    Attributes:
        wrapped: The original exception (also available as __cause__),
            or None when raised directly by an error-class program
    """

    def __init__(self, wrapped: BaseException | None = None) -> None:
        self.wrapped = wrapped
        if wrapped is None:
            super().__init__("Database error")
        else:
            super().__init__(f"{type(wrapped).__name__}: {wrapped}")
