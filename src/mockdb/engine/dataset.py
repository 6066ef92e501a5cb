# src/mockdb/engine/dataset.py
"""Dataset collaborator that reads its rows from an engine."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Self

from mockdb.contracts.enums import DEFAULT_SHARD

if TYPE_CHECKING:
    from mockdb.engine.database import MockEngine
    from mockdb.engine.resolvers import Row


class MockDataset:
    """A fixed query whose rows come from the engine's fetch program.

    Enumerating the dataset executes its SQL through the engine, so each
    enumeration is logged and advances any sequence program.
    """

    def __init__(
        self,
        engine: MockEngine,
        sql: str,
        *,
        shard: str = DEFAULT_SHARD,
        columns: tuple[str, ...] | None = None,
    ) -> None:
        self._engine = engine
        self._sql = sql
        self._shard = shard
        self._columns = columns

    def __repr__(self) -> str:
        return f"MockDataset({self._sql!r}, shard={self._shard!r})"

    @property
    def sql(self) -> str:
        return self._sql

    @property
    def shard(self) -> str:
        return self._shard

    def fetch_rows(self, emit: Callable[[Row], object]) -> None:
        self._engine.execute(self._sql, shard=self._shard, emit=emit)

    each = fetch_rows

    def all(self) -> list[Row]:
        rows: list[Row] = []
        self.fetch_rows(rows.append)
        return rows

    def first(self) -> Row | None:
        rows = self.all()
        return rows[0] if rows else None

    def columns(self) -> list[str]:
        """Column names: explicit if set, else the keys of the first row.

        Computing columns runs the query once and caches the result.
        """
        if self._columns is None:
            row = self.first()
            self._columns = tuple(row) if row is not None else ()
        return list(self._columns)

    def set_columns(self, *names: str) -> Self:
        """Override the column names and return the dataset."""
        self._columns = names
        return self

    def server(self, shard: str) -> MockDataset:
        """Return a copy of this dataset routed to another shard."""
        return MockDataset(self._engine, self._sql, shard=shard, columns=self._columns)
