# src/mockdb/engine/connection.py
"""Connection handles and the per-shard connection pool."""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from mockdb.contracts.enums import DEFAULT_SHARD, ExecutionKind

if TYPE_CHECKING:
    from mockdb.engine.database import MockEngine
    from mockdb.engine.resolvers import Row


@dataclass(eq=False)
class MockConnection:
    """One logical connection bound to a shard.

    Holds a back-reference to the engine that created it; execution is
    delegated straight back to that engine so it can read the shard for
    annotation.

    Attributes:
        engine: Owning engine (not owned by the connection)
        shard: Shard/route token this connection serves
        options: Connection options resolved for the shard
        transaction_depth: Open transaction/savepoint levels
    """

    engine: MockEngine = field(repr=False)
    shard: str = DEFAULT_SHARD
    options: dict[str, Any] = field(default_factory=dict)
    transaction_depth: int = 0

    def execute(
        self,
        query: str,
        *,
        emit: Callable[[Row], object] | None = None,
        kind: ExecutionKind = ExecutionKind.STATEMENT,
    ) -> Any:
        return self.engine._execute(self, query, emit=emit, kind=kind)


class ConnectionPool:
    """Lazily created connections, one per shard.

    with_connection() serializes access per shard with a re-entrant lock,
    so a thread that already holds a shard (e.g. inside a transaction)
    can keep executing on it while other threads wait.
    """

    def __init__(self, connect: Callable[[str], MockConnection]) -> None:
        self._connect = connect
        self._lock = threading.Lock()
        self._connections: dict[str, MockConnection] = {}
        self._shard_locks: dict[str, threading.RLock] = {}

    @contextmanager
    def with_connection(self, shard: str = DEFAULT_SHARD) -> Iterator[MockConnection]:
        """Hold the connection for a shard for the duration of the block."""
        with self._lock:
            shard_lock = self._shard_locks.setdefault(shard, threading.RLock())
        with shard_lock:
            yield self._acquire(shard)

    def _acquire(self, shard: str) -> MockConnection:
        with self._lock:
            connection = self._connections.get(shard)
        if connection is None:
            connection = self._connect(shard)
            with self._lock:
                self._connections[shard] = connection
        return connection

    def connections(self) -> dict[str, MockConnection]:
        """Connections created so far, keyed by shard."""
        with self._lock:
            return dict(self._connections)

    def disconnect(self) -> None:
        """Forget all connections; they are recreated on next use."""
        with self._lock:
            self._connections.clear()
