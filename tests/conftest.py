"""
Pytest configuration and shared fixtures for twinmerkle tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Pins the default runtime config so environment variables cannot leak in
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

# =============================================================================
# Import fixtures using importlib (more robust for pytest loading)
# =============================================================================

import importlib

_common = importlib.import_module("fixtures.common")

make_qm31_leaves = _common.make_qm31_leaves
make_int_leaves = _common.make_int_leaves
make_tree = _common.make_tree

from twinmerkle.config.runtime import RuntimeConfig, set_default_config


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture(autouse=True)
def default_runtime_config():
    """Use built-in defaults for every test and reset afterwards."""
    config = RuntimeConfig()
    set_default_config(config)
    yield config
    set_default_config(None)


@pytest.fixture
def qm31_leaves():
    """16 seeded leaves of 4 M31 elements each."""
    return make_qm31_leaves(16)


@pytest.fixture
def small_leaves():
    """4 small-integer leaves of width 2."""
    return make_int_leaves(4, 2)


@pytest.fixture
def tree():
    """A 16-leaf tree over seeded QM31 leaves."""
    return make_tree(16)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
