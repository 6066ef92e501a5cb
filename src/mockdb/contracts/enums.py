# src/mockdb/contracts/enums.py
"""Kinds and constants shared across engine boundaries."""

from enum import StrEnum

# Shard token used when the caller does not route a query explicitly.
DEFAULT_SHARD = "default"


class ExecutionKind(StrEnum):
    """What result an execution asks the engine to resolve.

    Rows are requested by passing an emit callback, independent of kind.
    """

    STATEMENT = "statement"
    ROWCOUNT = "rowcount"
    IDENTIFIER = "identifier"
