"""Root pytest configuration.

Test Structure:
    tests/
    ├── unit/           # Fast, isolated tests with mocked collaborators
    ├── integration/    # Tests against SQLite (aiosqlite) and the HTTP layer
    └── shared/         # Shared fixtures and factories

Integration tests carry ``@pytest.mark.integration`` and can be deselected
with ``-m "not integration"``.
"""

import os

import pytest

from userhub.config import clear_settings_cache

# The application refuses to start without a signing key
os.environ.setdefault("JWT_SECRET_KEY", "test-jwt-secret-for-testing-only")


@pytest.fixture(scope="session", autouse=True)
def configure_app_settings():
    """Start and finish the test session with a fresh settings cache."""
    clear_settings_cache()
    yield
    clear_settings_cache()
