# src/mockdb/plugins/__init__.py
"""Extension point for MockEngine, built on pluggy."""

from mockdb.plugins.hookspecs import hookimpl, hookspec
from mockdb.plugins.manager import ExtensionManager

__all__ = ["ExtensionManager", "hookimpl", "hookspec"]
