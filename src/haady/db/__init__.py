"""
Haady - Database access.

Supabase client helpers and the repositories built on them.
"""

from haady.db.client import get_authenticated_client, get_client, get_service_client
from haady.db.errors import AppError, ErrorCode, map_supabase_error
from haady.db.users import fetch_user_profile

__all__ = [
    "AppError",
    "ErrorCode",
    "fetch_user_profile",
    "get_authenticated_client",
    "get_client",
    "get_service_client",
    "map_supabase_error",
]
