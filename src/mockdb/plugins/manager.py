# src/mockdb/plugins/manager.py
"""Extension registration for a single engine."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pluggy

from mockdb.plugins.hookspecs import PROJECT_NAME, MockDBSpec

if TYPE_CHECKING:
    from mockdb.contracts.enums import ExecutionKind
    from mockdb.engine.connection import MockConnection
    from mockdb.engine.database import MockEngine


class ExtensionManager:
    """Owns the pluggy manager and dispatches engine hooks.

    Usage:
        manager = ExtensionManager()
        manager.register(MyExtension())
        manager.configure(engine)
    """

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(MockDBSpec)

    def register(self, extension: Any) -> None:
        """Register an extension, or each item of a list/tuple of them.

        Raises:
            ValueError: If the same extension object is registered twice.
        """
        if extension is None:
            return
        if isinstance(extension, (list, tuple)):
            for item in extension:
                self.register(item)
            return
        self._pm.register(extension)

    @property
    def extensions(self) -> list[Any]:
        return list(self._pm.get_plugins())

    def configure(self, engine: MockEngine) -> None:
        self._pm.hook.mockdb_configure(engine=engine)

    def before_execute(
        self,
        engine: MockEngine,
        connection: MockConnection,
        query: str,
        kind: ExecutionKind,
    ) -> None:
        self._pm.hook.mockdb_execute(engine=engine, connection=connection, query=query, kind=kind)
