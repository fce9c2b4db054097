"""
Global test configuration and fixtures for the communicatord test suite.

This module provides:
- Pytest collection hooks for automatic test categorization based on file location
- Fixtures pointing the process-wide flags directory and flag store at a
  temporary directory with a deterministic environment
"""

from pathlib import Path

import pytest

from communicatord.flags import (
    FlagStore,
    FlagsDirectory,
    reset_flag_store,
    reset_flags_directory,
    set_flag_store,
    set_flags_directory,
)
from tests.fixtures import FakeClock, FakeHostIdentity, FakeVersionProvider


# ============================================================================
# PYTEST CONFIGURATION AND HOOKS
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: marks tests as unit tests (fast, isolated)")
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (moderate speed)"
    )
    config.addinivalue_line("markers", "flags: marks tests related to the flag registry")
    config.addinivalue_line("markers", "cache: marks tests related to the message cache")


def pytest_collection_modifyitems(config, items):
    """Automatically add markers to tests based on their directory."""
    tests_root = Path(__file__).parent
    dir_to_marker = {
        "unit": pytest.mark.unit,
        "integration": pytest.mark.integration,
        "flags": pytest.mark.flags,
        "cache": pytest.mark.cache,
    }

    for item in items:
        try:
            parts = Path(item.fspath).relative_to(tests_root).parts
        except ValueError:
            parts = Path(item.fspath).parts
        for key, marker in dir_to_marker.items():
            if key in parts:
                item.add_marker(marker)


# ============================================================================
# FLAG ENVIRONMENT FIXTURES
# ============================================================================


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def flags_dir(tmp_path):
    """An existing, empty flags directory."""
    directory = tmp_path / "flags"
    directory.mkdir()
    return directory


@pytest.fixture
def flag_store(flags_dir, clock):
    """
    Process-wide flag store writing to ``flags_dir``.

    The process-wide flags directory and store are restored afterward so
    that tests do not see each other's resolution cache.
    """
    directory = FlagsDirectory.at(str(flags_dir))
    store = FlagStore(
        directory=directory,
        clock=clock,
        host_identity=FakeHostIdentity(),
        version_provider=FakeVersionProvider(),
    )
    set_flags_directory(directory)
    set_flag_store(store)
    yield store
    reset_flag_store()
    reset_flags_directory()
