"""
Supabase Client
===============
Configured Supabase client for the ``supabase`` storage backend.

Uses the service_role key: the journal backend reads and writes its own
key/value table and never exposes the client to the mobile app.
"""

import logging
from functools import lru_cache

from supabase import Client, create_client

from moodjournal.config import get_settings

logger = logging.getLogger(__name__)


@lru_cache
def get_supabase_client() -> Client:
    settings = get_settings()
    if not settings.supabase_service_key:
        raise RuntimeError("SUPABASE_SERVICE_KEY must be set when STORAGE_BACKEND=supabase")
    logger.info("Connecting to Supabase at %s", settings.supabase_url)
    return create_client(settings.supabase_url, settings.supabase_service_key)
