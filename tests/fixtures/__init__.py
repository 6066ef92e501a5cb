# tests/fixtures/__init__.py
"""Shared pytest fixtures for mockdb tests.

Available fixtures:
- mock_engine: MockEngine configured by the @pytest.mark.mockdb marker
"""

from tests.fixtures.mockdb import mock_engine

__all__ = [
    "mock_engine",
]
