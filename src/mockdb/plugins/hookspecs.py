# src/mockdb/plugins/hookspecs.py
"""pluggy hook specifications for engine extensions.

Extensions are the fixed extension point of a MockEngine: objects passed
as the ``extension`` option are registered with the engine's plugin
manager and may implement any of the hooks below.

Usage (implementing an extension):
    from mockdb.plugins.hookspecs import hookimpl

    class FailOnDrop:
        @hookimpl
        def mockdb_execute(self, engine, connection, query, kind):
            if query.startswith("DROP"):
                raise RuntimeError("drop not allowed")

    engine = MockEngine(extension=FailOnDrop())
"""

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from mockdb.contracts.enums import ExecutionKind
    from mockdb.engine.connection import MockConnection
    from mockdb.engine.database import MockEngine

PROJECT_NAME = "mockdb"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)

hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class MockDBSpec:
    """Hook specifications for engine extensions."""

    @hookspec
    def mockdb_configure(self, engine: "MockEngine") -> None:
        """Called once when the engine has finished construction.

        Typical use is setting programs on the engine.
        """

    @hookspec
    def mockdb_execute(
        self,
        engine: "MockEngine",
        connection: "MockConnection",
        query: str,
        kind: "ExecutionKind",
    ) -> None:
        """Called for every execution after the query is logged.

        Runs before any program is resolved. Exceptions raised here are
        wrapped as DatabaseError like any other execution failure.
        """
