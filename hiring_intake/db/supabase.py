"""Supabase client singleton.

Provides ``get_supabase()`` which returns a lazily-initialized, process-wide
Supabase client using credentials from ``settings``, and ``ping_database()``
for the health check.
"""

import logging

from supabase import Client, create_client

from hiring_intake.core.config import settings

logger = logging.getLogger(__name__)

_client: Client | None = None


def get_supabase() -> Client:
    """Return the singleton Supabase client, creating it on first call."""
    global _client
    if _client is None:
        _client = create_client(settings.SUPABASE_URL, settings.SUPABASE_KEY)
        logger.info("supabase_client_created", extra={"url": settings.SUPABASE_URL})
    return _client


def ping_database() -> bool:
    """Run a one-row read against ``candidates``; False when it fails."""
    try:
        result = get_supabase().table("candidates").select("id").limit(1).execute()
    except Exception:
        logger.warning("Health check: Supabase connection failed", exc_info=True)
        return False
    return result is not None
