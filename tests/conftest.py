"""
Pytest configuration and fixtures for Haady tests.
"""

import os
import pytest
from unittest.mock import MagicMock

# Set test environment before importing haady modules
os.environ["HAADY_ENV"] = "development"
os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key-not-real")

USER_ID = "5b0c1f7e-3c1a-4d0e-9a57-2f4f0d9f1a11"


QUERY_METHODS = (
    "select", "insert", "update", "delete", "upsert",
    "eq", "in_", "limit", "order", "range",
)


def make_table(data: list | None = None) -> MagicMock:
    """Chainable PostgREST query mock whose execute() returns `data`."""
    table = MagicMock()
    for method in QUERY_METHODS:
        getattr(table, method).return_value = table
    table.execute.return_value = MagicMock(data=data if data is not None else [])
    return table


@pytest.fixture
def make_supabase():
    """
    Build a mock Supabase client from {table_name: rows}.

    Returns (client, tables); tables not listed return no rows.
    """
    def _make(data: dict[str, list] | None = None):
        tables = {name: make_table(rows) for name, rows in (data or {}).items()}
        client = MagicMock()
        client.table.side_effect = lambda name: tables.setdefault(name, make_table())
        return client, tables

    return _make


@pytest.fixture
def mock_supabase(make_supabase):
    """Mock Supabase client with no rows anywhere."""
    client, _ = make_supabase()
    return client


@pytest.fixture
def sample_user_row():
    """A users row for someone who finished step 1 and is on personality traits."""
    return {
        "id": USER_ID,
        "full_name": "Sara Al-Harbi",
        "username": "sara",
        "avatar_url": None,
        "onboarding_step": 2,
        "is_onboarded": False,
        "profile_completion": 25,
        "created_at": "2026-01-04T09:12:00+00:00",
        "updated_at": "2026-01-04T09:15:00+00:00",
    }
