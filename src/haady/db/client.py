"""
Haady - Supabase Client.

Low-level database access. All queries go through a client from here:
- get_client(): anon key, shared
- get_service_client(): service role, bypasses RLS (server-side jobs, auth checks)
- get_authenticated_client(): per-request, acts as the signed-in user so RLS applies
"""

import logging

from supabase import Client, create_client

from haady.config import settings

logger = logging.getLogger(__name__)

# Singleton client instances
_client: Client | None = None
_service_client: Client | None = None


def get_client() -> Client:
    """
    Get the anon Supabase client.

    Uses singleton pattern to reuse connection.
    """
    global _client

    if _client is None:
        _client = create_client(
            settings.supabase_url,
            settings.supabase_anon_key,
        )

    return _client


def get_service_client() -> Client:
    """Get the service-role client. Falls back to the anon key when unset."""
    global _service_client

    if _service_client is None:
        key = settings.supabase_service_role_key
        if not key:
            logger.warning("SUPABASE_SERVICE_ROLE_KEY not set, using anon key")
            key = settings.supabase_anon_key
        _service_client = create_client(settings.supabase_url, key)

    return _service_client


def get_authenticated_client(access_token: str) -> Client:
    """
    Create a client that runs queries as the user owning `access_token`.

    Not cached: one per request.
    """
    client = create_client(settings.supabase_url, settings.supabase_anon_key)
    client.postgrest.auth(access_token)
    return client
