# src/mockdb/engine/execution_log.py
"""Append-only, drainable record of executed queries."""

from __future__ import annotations

import threading


class ExecutionLog:
    """Ordered buffer of every query string submitted for execution.

    Draining returns everything recorded since the previous drain and
    clears the buffer in one step, so concurrent appends land either in
    the drained batch or in the next one, never in neither.

    A caller-supplied list may be used as the backing store; it is
    appended to and cleared in place.
    """

    def __init__(self, buffer: list[str] | None = None, *, lock: threading.RLock | None = None) -> None:
        self._entries: list[str] = buffer if buffer is not None else []
        self._lock = lock if lock is not None else threading.RLock()

    def append(self, query: str) -> None:
        with self._lock:
            self._entries.append(query)

    def drain(self) -> list[str]:
        """Return all entries since the last drain and clear the buffer."""
        with self._lock:
            entries = list(self._entries)
            self._entries.clear()
            return entries

    def peek(self) -> list[str]:
        """Return a copy of the pending entries without clearing them."""
        with self._lock:
            return list(self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
