"""Tests for Supabase client initialization."""

import os
import pytest
from unittest.mock import patch, MagicMock
from pydantic import ValidationError

from app.db.supabase_client import get_supabase_client, reset_supabase_client
from app.config import get_settings


@pytest.fixture(autouse=True)
def setup_env(monkeypatch):
    """Set up test environment variables and a fresh client singleton."""
    get_settings.cache_clear()
    reset_supabase_client()

    monkeypatch.setenv("SUPABASE_URL", "https://test-project.supabase.co")
    monkeypatch.setenv("SUPABASE_KEY", "test-supabase-key")
    monkeypatch.delenv("SUPABASE_SERVICE_ROLE_KEY", raising=False)

    yield

    get_settings.cache_clear()
    reset_supabase_client()


class TestGetSupabaseClient:
    """Tests for get_supabase_client function."""

    @patch("app.db.supabase_client.create_client")
    def test_successful_client_creation(self, mock_create_client):
        """Test successful Supabase client creation with valid credentials."""
        mock_client = MagicMock()
        mock_create_client.return_value = mock_client

        client = get_supabase_client()

        assert client is mock_client
        mock_create_client.assert_called_once_with(
            "https://test-project.supabase.co",
            "test-supabase-key"
        )

    @patch("app.db.supabase_client.create_client")
    def test_prefers_service_role_key(self, mock_create_client, monkeypatch):
        """Test that the service role key wins over the anon key."""
        monkeypatch.setenv("SUPABASE_SERVICE_ROLE_KEY", "service-key")
        get_settings.cache_clear()

        get_supabase_client()

        mock_create_client.assert_called_once_with(
            "https://test-project.supabase.co",
            "service-key"
        )

    @patch("app.db.supabase_client.create_client")
    def test_logs_which_key_is_used(self, mock_create_client, caplog):
        """Test that client creation logs the key type, never the key."""
        with caplog.at_level("INFO", logger="app.db.supabase_client"):
            get_supabase_client()

        assert "anon key" in caplog.text
        assert "test-supabase-key" not in caplog.text

    @patch("app.db.supabase_client.create_client")
    def test_client_is_singleton(self, mock_create_client):
        """Test that repeated calls reuse the first client."""
        mock_create_client.return_value = MagicMock()

        first = get_supabase_client()
        second = get_supabase_client()

        assert first is second
        mock_create_client.assert_called_once()

    @patch("app.db.supabase_client.create_client")
    def test_reset_creates_new_client(self, mock_create_client):
        """Test that reset_supabase_client drops the cached client."""
        mock_create_client.side_effect = [MagicMock(), MagicMock()]

        first = get_supabase_client()
        reset_supabase_client()
        second = get_supabase_client()

        assert first is not second
        assert mock_create_client.call_count == 2

    def test_missing_supabase_url(self):
        """Test that missing SUPABASE_URL raises ValidationError."""
        del os.environ["SUPABASE_URL"]

        with pytest.raises(ValidationError) as exc_info:
            get_supabase_client()

        assert "supabase_url" in str(exc_info.value).lower()

    def test_invalid_supabase_url_not_https(self):
        """Test that non-HTTPS SUPABASE_URL raises ValidationError."""
        os.environ["SUPABASE_URL"] = "http://test-project.supabase.co"

        with pytest.raises(ValidationError) as exc_info:
            get_supabase_client()

        assert "https" in str(exc_info.value).lower()

    @patch("app.db.supabase_client.create_client")
    def test_create_client_raises_exception(self, mock_create_client):
        """Test that create_client exceptions are wrapped with clear message."""
        mock_create_client.side_effect = Exception("Connection failed")

        with pytest.raises(ValueError) as exc_info:
            get_supabase_client()

        assert "Failed to create Supabase client" in str(exc_info.value)
        assert "Connection failed" in str(exc_info.value)
