"""
Supabase client initialization module.

This module provides a thread-safe singleton Supabase client for database operations.
When SUPABASE_SERVICE_ROLE_KEY is set, the client uses it to bypass RLS so that
classification metadata can be written to any source row. Falls back to the anon key.
"""

import logging
import threading

from supabase import create_client, Client
from app.config import get_settings

logger = logging.getLogger(__name__)

_client: Client | None = None
_lock = threading.Lock()


def get_supabase_client() -> Client:
    """
    Return the shared Supabase client (singleton), initializing once in a thread-safe way.

    Prefers ``supabase_service_role_key`` (bypasses RLS) when available,
    otherwise falls back to ``supabase_key`` (anon key).

    Returns:
        Client: Shared Supabase client instance

    Raises:
        ValueError: If SUPABASE_URL or SUPABASE_KEY are missing or invalid
    """
    global _client
    # Fast path: already initialized, no locking
    if _client is not None:
        return _client
    with _lock:
        # Another thread may have won the race while we waited
        if _client is not None:
            return _client
        settings = get_settings()
        # Metadata writes to other users' sources need the service role key
        uses_service_role = settings.supabase_service_role_key is not None
        key = settings.supabase_service_role_key or settings.supabase_key
        try:
            _client = create_client(settings.supabase_url, key)
        except Exception as e:
            raise ValueError(f"Failed to create Supabase client: {str(e)}") from e
        logger.info(
            "Supabase client created (%s key)",
            "service role" if uses_service_role else "anon",
        )
        return _client


def reset_supabase_client() -> None:
    """Drop the cached client so the next call re-reads settings."""
    global _client
    with _lock:
        _client = None
