# src/mockdb/engine/database.py
"""MockEngine: a scriptable stand-in for a database connection.

Every query funnels through one execution path:

    1. annotate the query (" -- <host>" if a host is configured,
       " -- <shard>" for non-default shards)
    2. append it to the execution log
    3. run extension hooks, then resolve the fetch, row-count or
       identifier program depending on what the caller asked for

Anything raised in step 3 crosses the public boundary as DatabaseError.

Usage:
    engine = MockEngine(fetch_program=[{"id": 1}, {"id": 2}], rowcount_program=[1, 2])
    rows = engine.dataset("SELECT * FROM items").all()
    assert engine.execute_for_mutation("UPDATE items SET x = 1") == 1
    assert engine.drain_log() == ["SELECT * FROM items", "UPDATE items SET x = 1"]
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any, ClassVar

from mockdb.contracts.enums import DEFAULT_SHARD, ExecutionKind
from mockdb.contracts.errors import DatabaseError
from mockdb.core.config import EngineSettings
from mockdb.core.logging import get_logger
from mockdb.engine.connection import ConnectionPool, MockConnection
from mockdb.engine.dataset import MockDataset
from mockdb.engine.execution_log import ExecutionLog
from mockdb.engine.resolvers import IdentityCounter, Row, RowCountProgram, RowFeeder
from mockdb.plugins.manager import ExtensionManager


class MockEngine:
    """Orchestrates programs, the execution log and connections.

    Args:
        settings: Pre-built settings. Keyword options, if also given,
            override individual fields.
        **options: Any EngineSettings field (identifier_program,
            fetch_program, rowcount_program, extension, log_buffer,
            host, servers).
    """

    # Nested transactions are always available through savepoints.
    supports_savepoints: ClassVar[bool] = True

    def __init__(self, settings: EngineSettings | None = None, **options: Any) -> None:
        if settings is None:
            settings = EngineSettings(**options)
        elif options:
            settings = settings.with_overrides(**options)
        self.settings = settings

        # One mutual-exclusion scope for all mutable program and log state.
        self._lock = threading.RLock()
        self._identifier = IdentityCounter(settings.identifier_program, lock=self._lock)
        self._fetch = RowFeeder(settings.fetch_program, lock=self._lock)
        self._rowcount = RowCountProgram(settings.rowcount_program, lock=self._lock)
        self._log = ExecutionLog(settings.log_buffer, lock=self._lock)
        self._pool = ConnectionPool(self.connect)

        self._extensions = ExtensionManager()
        self._extensions.register(settings.extension)
        self._extensions.configure(self)

    # --- Program configuration -------------------------------------------------

    @property
    def identifier_program(self) -> Any:
        """The value last configured, as given (not the resolver state)."""
        return self._identifier.configured

    @identifier_program.setter
    def identifier_program(self, value: Any) -> None:
        self._identifier.configure(value)

    @property
    def fetch_program(self) -> Any:
        return self._fetch.configured

    @fetch_program.setter
    def fetch_program(self, value: Any) -> None:
        self._fetch.configure(value)

    @property
    def rowcount_program(self) -> Any:
        return self._rowcount.configured

    @rowcount_program.setter
    def rowcount_program(self, value: Any) -> None:
        self._rowcount.configure(value)

    @property
    def extensions(self) -> list[Any]:
        return self._extensions.extensions

    @property
    def pool(self) -> ConnectionPool:
        return self._pool

    # --- Connections -------------------------------------------------------------

    def server_options(self, shard: str = DEFAULT_SHARD) -> dict[str, Any]:
        """Connection options for a shard: global options plus its overrides."""
        options = self.settings.connection_options()
        options.update(self.settings.servers.get(shard, {}))
        return options

    def connect(self, shard: str = DEFAULT_SHARD) -> MockConnection:
        """Build a new connection handle scoped to shard."""
        return MockConnection(self, shard, self.server_options(shard))

    def disconnect(self) -> None:
        self._pool.disconnect()

    # --- Execution ---------------------------------------------------------------

    def execute(
        self,
        query: str,
        *,
        shard: str = DEFAULT_SHARD,
        emit: Callable[[Row], object] | None = None,
        kind: ExecutionKind = ExecutionKind.STATEMENT,
    ) -> Any:
        """Execute a query on a shard.

        Args:
            query: Query text as built by the caller.
            shard: Shard to route to.
            emit: Row callback. When given, the fetch program is resolved
                and each row is passed to emit; nothing is returned.
            kind: Scalar to resolve when no emit callback is given.

        Returns:
            The row count for ROWCOUNT, the identifier for IDENTIFIER,
            otherwise None.

        Raises:
            DatabaseError: For any failure while resolving the result.
        """
        with self._pool.with_connection(shard) as connection:
            return self._execute(connection, query, emit=emit, kind=kind)

    execute_ddl = execute

    def execute_for_mutation(self, query: str, *, shard: str = DEFAULT_SHARD) -> int:
        """Execute an update/delete and return the affected-row count."""
        result: int = self.execute(query, shard=shard, kind=ExecutionKind.ROWCOUNT)
        return result

    def execute_for_insert(self, query: str, *, shard: str = DEFAULT_SHARD) -> int | None:
        """Execute an insert and return the generated identifier."""
        result: int | None = self.execute(query, shard=shard, kind=ExecutionKind.IDENTIFIER)
        return result

    def drain_log(self) -> list[str]:
        """Return every query logged since the last drain, and clear the log."""
        return self._log.drain()

    def dataset(self, sql: str, *, shard: str = DEFAULT_SHARD) -> MockDataset:
        return MockDataset(self, sql, shard=shard)

    @contextmanager
    def transaction(self, shard: str = DEFAULT_SHARD, *, savepoint: bool = False) -> Iterator[MockConnection]:
        """Run a block inside a (possibly nested) transaction.

        The outermost level logs BEGIN and COMMIT/ROLLBACK. A nested level
        with savepoint=True logs SAVEPOINT/RELEASE SAVEPOINT or ROLLBACK TO
        SAVEPOINT; without it the block joins the enclosing transaction.
        The exception that triggered a rollback is re-raised.
        """
        with self._pool.with_connection(shard) as connection:
            depth = connection.transaction_depth
            if depth == 0:
                begin, commit, rollback = "BEGIN", "COMMIT", "ROLLBACK"
            elif savepoint:
                name = f"autopoint_{depth}"
                begin = f"SAVEPOINT {name}"
                commit = f"RELEASE SAVEPOINT {name}"
                rollback = f"ROLLBACK TO SAVEPOINT {name}"
            else:
                yield connection
                return

            connection.execute(begin)
            connection.transaction_depth += 1
            try:
                yield connection
            except BaseException:
                connection.transaction_depth -= 1
                connection.execute(rollback)
                raise
            connection.transaction_depth -= 1
            connection.execute(commit)

    def _annotate(self, connection: MockConnection, query: str) -> str:
        if self.settings.host is not None:
            query += f" -- {self.settings.host}"
        if connection.shard != DEFAULT_SHARD:
            query += f" -- {connection.shard}"
        return query

    def _execute(
        self,
        connection: MockConnection,
        query: str,
        *,
        emit: Callable[[Row], object] | None,
        kind: ExecutionKind,
    ) -> Any:
        sql = self._annotate(connection, query)
        self._log.append(sql)
        logger = get_logger(__name__)
        logger.debug("mock_query", sql=sql, shard=connection.shard, kind=kind.value, fetch=emit is not None)

        try:
            self._extensions.before_execute(self, connection, sql, kind)
            if emit is not None:
                self._fetch.fetch(sql, emit)
                return None
            if kind is ExecutionKind.ROWCOUNT:
                return self._rowcount.count(sql)
            if kind is ExecutionKind.IDENTIFIER:
                return self._identifier.next(sql)
            return None
        except Exception as exc:
            # Already wrapped by a nested execution.
            if isinstance(exc, DatabaseError) and exc.wrapped is not None:
                raise
            logger.debug("mock_query_failed", sql=sql, shard=connection.shard, error_type=type(exc).__name__)
            raise DatabaseError(exc) from exc
