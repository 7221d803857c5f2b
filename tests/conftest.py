# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# Sets up environment variables before any application import, then provides
# fixtures for the API client, a scratch database and the feature manager.
# =============================================================================

import os
import tempfile
from pathlib import Path

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# snippets.api.main reads settings and configures logging at import time

_TMP_DIR = Path(tempfile.mkdtemp(prefix="snippets-tests-"))

os.environ["APP_ENV"] = "development"
os.environ["LOG_LEVEL"] = "DEBUG"
os.environ["LOG_FORMAT"] = "text"
os.environ["LOG_DIR"] = str(_TMP_DIR / "logs")
os.environ["DATABASE_URL"] = f"sqlite:///{_TMP_DIR / 'bookstore.db'}"
os.environ["BOOKSTORE_INIT_ON_STARTUP"] = "true"
os.environ["FEATURE_FLAGS"] = "FeatureB=true,FeatureC=false,FeatureD=true"
os.environ["ENABLE_REQUEST_LOGGING"] = "true"

import pytest
from fastapi.testclient import TestClient

from snippets.api.main import app
from snippets.core.config import get_settings
from snippets.core.feature_flags import get_feature_manager
from snippets.database import DatabaseConnection, init_bookstore


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def client():
    """API client; entering it runs startup, which reseeds the database."""
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def feature_manager():
    """The app's feature manager, restored to configured flags afterwards."""
    manager = get_feature_manager()
    yield manager
    manager.reset(get_settings().feature_flags)


@pytest.fixture
def db(tmp_path):
    """A freshly seeded bookstore database independent of the app."""
    connection = DatabaseConnection(f"sqlite:///{tmp_path / 'scratch.db'}")
    init_bookstore(connection)
    yield connection
    connection.close()


@pytest.fixture
def clean_settings():
    """Clear the settings cache before and after tests that edit the env."""
    get_settings.cache_clear()
    yield get_settings
    get_settings.cache_clear()
