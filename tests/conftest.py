"""Shared pytest fixtures."""

import os
from datetime import date

import pytest

# Settings are read lazily by the app; provide the required values once.
os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "test-supabase-key")


@pytest.fixture
def august_clock():
    """Clock pinned to a date in the Kiangazi dry season (no Kipupwe)."""
    return lambda: date(2024, 8, 15)


@pytest.fixture
def february_clock():
    """Clock pinned to February, which no season covers."""
    return lambda: date(2024, 2, 10)
