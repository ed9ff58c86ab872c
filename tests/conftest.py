"""
Pytest configuration and shared fixtures for Merkle tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers and settings
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

# Get the project root (parent of tests/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

# Add both project root and tests root to sys.path
for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

# =============================================================================
# Import fixtures using importlib (more robust for pytest loading)
# =============================================================================

import importlib

_common = importlib.import_module("fixtures.common")

make_eight_word_multiproof = _common.make_eight_word_multiproof
make_upload = _common.make_upload


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def eight_word_multiproof():
    """Provide the reference multiproof for indices [0, 1, 6]."""
    return make_eight_word_multiproof()


@pytest.fixture
def upload_payload():
    """Provide a three-file upload payload."""
    return make_upload()


@pytest.fixture
def file_store():
    """Provide an empty FileStore using the default hasher."""
    from api.store import FileStore
    return FileStore()


@pytest.fixture
def api_client(file_store):
    """Provide a TestClient bound to a fresh app and store."""
    from fastapi.testclient import TestClient
    from api.app import create_app
    return TestClient(create_app(file_store))


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every MERKLE_* variable from the environment."""
    import os
    for key in list(os.environ):
        if key.startswith("MERKLE_"):
            monkeypatch.delenv(key, raising=False)
    return monkeypatch


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
