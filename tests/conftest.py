"""
Pytest configuration and fixtures.

This file provides pytest-specific configuration and fixtures.
For shared helpers, see tests/support.py
"""

import pytest

from tests.support import make_session_factory


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "db: marks tests as using the in-memory database (deselect with '-m \"not db\"')"
    )


@pytest.fixture
def session_factory():
    """In-memory SQLite session factory with all tables created."""
    return make_session_factory()
