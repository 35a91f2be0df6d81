"""
Pytest configuration and fixtures for bookquiz tests.
"""

import os
import pytest
from unittest.mock import MagicMock

# Set test environment before importing bookquiz modules
os.environ["BOOKQUIZ_ENV"] = "development"
os.environ["BOOKQUIZ_AUTO_ADVANCE_SECONDS"] = "2.5"

from bookquiz.config import QuizSettings
from bookquiz.persistence import InMemoryPersistenceClient


@pytest.fixture
def settings():
    """Settings with defaults only (no .env file)."""
    return QuizSettings(_env_file=None)


@pytest.fixture
def store():
    """In-memory persistence client."""
    return InMemoryPersistenceClient()


@pytest.fixture
def failing_store():
    """Persistence client whose every call fails."""
    return InMemoryPersistenceClient(fail=True)


@pytest.fixture
def mock_supabase():
    """Mock Supabase client for unit tests."""
    mock_client = MagicMock()

    # Mock table operations
    mock_table = MagicMock()
    mock_table.select.return_value = mock_table
    mock_table.insert.return_value = mock_table
    mock_table.upsert.return_value = mock_table
    mock_table.update.return_value = mock_table
    mock_table.delete.return_value = mock_table
    mock_table.eq.return_value = mock_table
    mock_table.execute.return_value = MagicMock(data=[])

    mock_client.table.return_value = mock_table

    return mock_client


@pytest.fixture
def young_series():
    """Series ids shown to an 8-10 year old."""
    return ["harry-potter", "diary-wimpy-kid", "captain-underpants", "dog-man"]
