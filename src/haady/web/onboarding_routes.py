"""
Onboarding API endpoints.

Exposes the step resolver: where the signed-in user should go next,
their progress, and the static step table. Step 1 (personal info) is
saved here; the optional steps live in preference_routes.
"""

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from supabase import Client

from haady.db.errors import not_found_error
from haady.db.users import complete_profile, fetch_user_profile
from haady.onboarding import STEP_DEFINITIONS, UserProfileSnapshot, summarize
from haady.web.auth import AuthenticatedUser, get_current_user, get_user_client
from haady.web.profile_routes import CompleteProfileRequest
from haady.web.responses import success_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/onboarding", tags=["onboarding"])


class SnapshotRequest(BaseModel):
    """Explicit snapshot to resolve. All fields optional."""
    full_name: str | None = None
    username: str | None = None
    onboarding_step: int | None = None
    is_onboarded: bool | None = None
    has_personality_traits: bool | None = None
    has_favorite_brands: bool | None = None
    has_favorite_colors: bool | None = None


@router.get("/steps")
async def list_steps():
    """Static onboarding step table."""
    return success_response([d.to_dict() for d in STEP_DEFINITIONS.values()])


@router.post("/resolve")
async def resolve_snapshot(request: SnapshotRequest):
    """Resolve navigation and progress for a caller-supplied snapshot."""
    snapshot = UserProfileSnapshot.from_row(request.model_dump())
    return success_response(summarize(snapshot).to_dict(snapshot.username))


@router.get("/next")
async def get_next_step(
    user: AuthenticatedUser = Depends(get_current_user),
    client: Client = Depends(get_user_client),
):
    """Where the signed-in user should go next, plus progress."""
    snapshot = await fetch_user_profile(user.id, client=client)
    if snapshot is None:
        raise not_found_error("User profile not found")

    progress = summarize(snapshot)
    logger.debug(f"User {user.id} next target: {progress.next_target}")
    return success_response(progress.to_dict(snapshot.username))


@router.post("/complete-profile")
async def save_personal_info(
    request: CompleteProfileRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    client: Client = Depends(get_user_client),
):
    """Save the personal-info form and return where to go next."""
    profile = request.model_dump(mode="json", exclude_unset=True)
    snapshot = await complete_profile(user.id, profile, client=client)
    return success_response(summarize(snapshot).to_dict(snapshot.username))
