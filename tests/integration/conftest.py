"""
Pytest configuration for integration tests.

Integration tests run against an in-memory SQLite database (aiosqlite).
Import the shared fixtures to make them available.
"""

from tests.shared.fixtures.database import (
    async_engine,
    db_session,
    session_maker,
)

__all__ = [
    "async_engine",
    "db_session",
    "session_maker",
]
