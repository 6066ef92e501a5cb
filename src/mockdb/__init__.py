# src/mockdb/__init__.py
"""
mockdb: a scriptable, stateful stand-in for a database connection.

Configure what queries return (rows, affected-row counts, generated
identifiers or errors), run data-access code against the engine, then
inspect exactly which queries it executed.
"""

__version__ = "0.3.0"

from mockdb.contracts import (
    DEFAULT_SHARD,
    ConfiguredError,
    DatabaseError,
    ExecutionKind,
    InvalidProgramError,
    InvalidRowShapeError,
    MockDBError,
)
from mockdb.core.config import EngineSettings, load_settings
from mockdb.engine import MockConnection, MockDataset, MockEngine
from mockdb.plugins import hookimpl

__all__ = [
    "DEFAULT_SHARD",
    "ConfiguredError",
    "DatabaseError",
    "EngineSettings",
    "ExecutionKind",
    "InvalidProgramError",
    "InvalidRowShapeError",
    "MockConnection",
    "MockDBError",
    "MockDataset",
    "MockEngine",
    "__version__",
    "hookimpl",
    "load_settings",
]
