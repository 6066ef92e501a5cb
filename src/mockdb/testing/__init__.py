# src/mockdb/testing/__init__.py
"""Factories for tests that drive a MockEngine.

Usage:
    from mockdb.testing import make_engine, make_rows

    engine = make_engine(rows=make_rows(3, name="n"), rowcount=1)
    engine = make_engine(identifier=100, host="primary")
"""

from __future__ import annotations

from typing import Any

from mockdb.engine.database import MockEngine
from mockdb.engine.resolvers import Row


def make_rows(count: int, **columns: Any) -> list[Row]:
    """Build `count` row-records with an ``id`` column starting at 1.

    Extra keyword columns get the row number appended to string values,
    e.g. make_rows(2, name="n") -> [{"id": 1, "name": "n1"}, {"id": 2, "name": "n2"}].
    """
    rows: list[Row] = []
    for i in range(1, count + 1):
        row: Row = {"id": i}
        for key, value in columns.items():
            row[key] = f"{value}{i}" if isinstance(value, str) else value
        rows.append(row)
    return rows


def make_engine(
    *,
    rows: Any = None,
    rowcount: Any = None,
    identifier: Any = None,
    host: str | None = None,
    servers: dict[str, dict[str, Any]] | None = None,
    **options: Any,
) -> MockEngine:
    """Build a MockEngine with short names for the three programs."""
    return MockEngine(
        fetch_program=rows,
        rowcount_program=rowcount,
        identifier_program=identifier,
        host=host,
        servers=servers or {},
        **options,
    )
