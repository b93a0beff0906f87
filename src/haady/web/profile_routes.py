"""
Profile endpoints.

Public profile read by username (where finished users are redirected) and
the signed-in user's own profile update.
"""

import logging
from datetime import date

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from supabase import Client

from haady.db.client import get_service_client
from haady.db.errors import not_found_error
from haady.db.users import get_public_profile, upsert_user
from haady.web.auth import AuthenticatedUser, get_current_user, get_user_client
from haady.web.responses import success_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users/profile", tags=["profile"])


class ProfileUpdateRequest(BaseModel):
    """Editable profile fields. Only fields present in the body are written."""
    full_name: str | None = Field(None, min_length=1, max_length=100)
    username: str | None = Field(None, min_length=3, max_length=30)
    avatar_url: str | None = None
    phone: str | None = Field(None, max_length=20)
    country: str | None = None
    city: str | None = None
    birthdate: date | None = None
    gender: str | None = None
    preferred_language: str | None = None


class CompleteProfileRequest(ProfileUpdateRequest):
    """Personal-info form for onboarding step 1: a full name is required."""
    full_name: str = Field(..., min_length=1, max_length=100)


@router.post("/update")
async def update_profile(
    request: ProfileUpdateRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    client: Client = Depends(get_user_client),
):
    """Update the signed-in user's profile. Leaves the onboarding pointer alone."""
    fields = request.model_dump(mode="json", exclude_unset=True)
    row = await upsert_user(user.id, fields, client=client)
    logger.info(f"User {user.id} updated profile fields: {sorted(fields)}")
    return success_response(row)


@router.get("/{username}")
async def get_profile(username: str, client: Client = Depends(get_service_client)):
    profile = await get_public_profile(username, client=client)
    if profile is None:
        raise not_found_error("User not found")
    return success_response(profile)
