# src/mockdb/engine/__init__.py
"""Engine: program resolution, execution log, connections and datasets."""

from mockdb.engine.connection import ConnectionPool, MockConnection
from mockdb.engine.database import MockEngine
from mockdb.engine.dataset import MockDataset
from mockdb.engine.execution_log import ExecutionLog
from mockdb.engine.resolvers import (
    IdentityCounter,
    ResponseProgram,
    Row,
    RowCountProgram,
    RowFeeder,
)

__all__ = [
    "ConnectionPool",
    "ExecutionLog",
    "IdentityCounter",
    "MockConnection",
    "MockDataset",
    "MockEngine",
    "ResponseProgram",
    "Row",
    "RowCountProgram",
    "RowFeeder",
]
