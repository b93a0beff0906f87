"""
Authentication utilities for FastAPI routes.

Shared auth dependencies used by all route modules.
"""

import logging

from fastapi import Depends, Header
from pydantic import BaseModel
from supabase import Client

from haady.db.client import get_authenticated_client, get_service_client
from haady.db.errors import auth_error

logger = logging.getLogger(__name__)


class AuthenticatedUser(BaseModel):
    """Authenticated user info from Supabase JWT."""
    id: str
    email: str | None
    access_token: str


async def get_current_user(authorization: str | None = Header(None)) -> AuthenticatedUser:
    """
    Validate Supabase JWT and extract user info.

    Expects Authorization header: "Bearer <access_token>"
    """
    if not authorization:
        raise auth_error("Missing authorization header")

    if not authorization.startswith("Bearer "):
        raise auth_error("Invalid authorization format")

    access_token = authorization[7:]  # Remove "Bearer " prefix

    try:
        # Use service client to validate the token
        user_response = get_service_client().auth.get_user(access_token)
    except Exception as e:
        logger.warning(f"Auth validation failed: {e}")
        raise auth_error("Invalid or expired token") from e

    if not user_response or not user_response.user:
        raise auth_error("Invalid or expired token")

    user = user_response.user
    return AuthenticatedUser(
        id=user.id,
        email=user.email,
        access_token=access_token,
    )


def get_user_client(user: AuthenticatedUser = Depends(get_current_user)) -> Client:
    """Supabase client acting as the current user, so RLS applies."""
    return get_authenticated_client(user.access_token)
