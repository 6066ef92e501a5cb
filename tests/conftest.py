"""Shared test fixtures and Hypothesis configuration.

Fixtures:
- mock_engine: MockEngine configured by @pytest.mark.mockdb (tests/fixtures/mockdb.py)
- reset_structlog: restores structlog defaults after tests that configure logging

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/
"""

import logging
import os
from collections.abc import Iterator

import pytest
import structlog
from hypothesis import Phase, Verbosity, settings

from tests.fixtures.mockdb import mock_engine
from tests.fixtures.mockdb import pytest_configure as _mockdb_pytest_configure

__all__ = ["mock_engine"]


def pytest_configure(config: pytest.Config) -> None:
    _mockdb_pytest_configure(config)


@pytest.fixture
def reset_structlog() -> Iterator[None]:
    """Run with an unconfigured structlog and undo configure_logging() afterwards."""
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    structlog.reset_defaults()
    yield
    structlog.reset_defaults()
    root.handlers = saved_handlers
    root.setLevel(saved_level)


settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,  # Timing varies on shared runners
)

settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))
