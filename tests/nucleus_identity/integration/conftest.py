"""
Pytest configuration for nucleus_identity integration tests.

Integration tests use Testcontainers for an ephemeral PostgreSQL instance.
Import the shared fixtures to make them available.
"""

# Re-export shared database fixtures
from tests.shared.fixtures.database import (
    postgres_container,
    postgres_engine,
    postgres_session_maker,
    postgres_url,
)

__all__ = [
    "postgres_container",
    "postgres_engine",
    "postgres_session_maker",
    "postgres_url",
]
