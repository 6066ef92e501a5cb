# src/mockdb/contracts/__init__.py
"""Shared contracts: error taxonomy, execution kinds and program shapes."""

from mockdb.contracts.enums import DEFAULT_SHARD, ExecutionKind
from mockdb.contracts.errors import (
    ConfiguredError,
    DatabaseError,
    InvalidProgramError,
    InvalidRowShapeError,
    MockDBError,
)
from mockdb.contracts.programs import (
    Dynamic,
    Empty,
    ErrorClass,
    Fixed,
    Program,
    Sequence,
    Unrecognized,
    classify,
)

__all__ = [
    "DEFAULT_SHARD",
    "ConfiguredError",
    "DatabaseError",
    "Dynamic",
    "Empty",
    "ErrorClass",
    "ExecutionKind",
    "Fixed",
    "InvalidProgramError",
    "InvalidRowShapeError",
    "MockDBError",
    "Program",
    "Sequence",
    "Unrecognized",
    "classify",
]
