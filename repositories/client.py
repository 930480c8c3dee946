"""
Supabase client initialization.

This module contains *only* the database connection setup. Unlike a module-level
singleton, the client is created on demand so that importing repositories never
requires credentials (tests run against the in-memory store).

Environment variables required when a client is created:
- SUPABASE_URL: Your Supabase project URL
- SUPABASE_KEY: Your Supabase API key (use a server-side key only on the backend)
"""

from __future__ import annotations

import threading
from typing import Optional

# The dependency is `supabase` (supabase-py). If your editor can't resolve it,
# install it in your environment: `pip install supabase`.
from supabase import Client, create_client  # type: ignore[import-not-found]

from config.settings import Settings, load_settings

_client: Optional[Client] = None
_client_lock = threading.Lock()


def create_supabase_client(settings: Settings) -> Client:
    if not settings.supabase_url:
        raise RuntimeError(
            "Missing environment variable: SUPABASE_URL. "
            "Set SUPABASE_URL to your Supabase project URL."
        )

    if not settings.supabase_key:
        raise RuntimeError(
            "Missing environment variable: SUPABASE_KEY. "
            "Set SUPABASE_KEY to your Supabase API key."
        )

    return create_client(settings.supabase_url, settings.supabase_key)


def get_supabase(settings: Optional[Settings] = None) -> Client:
    """Return the process-wide Supabase client, creating it on first use."""

    global _client
    with _client_lock:
        if _client is None:
            _client = create_supabase_client(settings or load_settings())
        return _client


__all__ = ["create_supabase_client", "get_supabase"]
