"""
Preference step endpoints: personality traits, favorite brands, favorite colors.

Saving or skipping a step replaces the user's selections (save only) and
moves the onboarding pointer to the following step. The options endpoint
lists the master-table choices for each step.
"""

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from supabase import Client

from haady.db.errors import not_found_error
from haady.db.preferences import (
    get_master_catalog,
    get_preference_table,
    get_user_preferences,
    replace_user_preferences,
)
from haady.db.users import apply_step_advancement, get_user_by_id
from haady.onboarding import summarize
from haady.web.auth import AuthenticatedUser, get_current_user, get_user_client
from haady.web.responses import success_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["preferences"])


class PreferenceSelectionRequest(BaseModel):
    """Selected master-table IDs for one preference kind."""
    ids: list[str] = Field(default_factory=list)


@router.get("/{kind}")
async def list_preferences(
    kind: str,
    user: AuthenticatedUser = Depends(get_current_user),
    client: Client = Depends(get_user_client),
):
    ids = await get_user_preferences(kind, user.id, client=client)
    return success_response({"kind": kind, "ids": ids})


@router.get("/{kind}/options")
async def list_options(
    kind: str,
    user: AuthenticatedUser = Depends(get_current_user),
    client: Client = Depends(get_user_client),
):
    """Catalog of choices for a preference step."""
    options = await get_master_catalog(kind, client=client)
    return success_response({"kind": kind, "options": options})


@router.post("/{kind}")
async def save_preferences(
    kind: str,
    request: PreferenceSelectionRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    client: Client = Depends(get_user_client),
):
    """Replace selections and advance past this step."""
    pref = get_preference_table(kind)
    if await get_user_by_id(user.id, client=client) is None:
        raise not_found_error("User profile not found")

    count = await replace_user_preferences(kind, user.id, request.ids, client=client)
    snapshot = await apply_step_advancement(user.id, pref.step, client=client)

    return success_response({
        "count": count,
        "message": f"Successfully saved {count} {pref.label}(s)",
        "next": summarize(snapshot).to_dict(snapshot.username),
    })


@router.post("/{kind}/skip")
async def skip_preferences(
    kind: str,
    user: AuthenticatedUser = Depends(get_current_user),
    client: Client = Depends(get_user_client),
):
    """Advance past this step without touching selections."""
    pref = get_preference_table(kind)
    snapshot = await apply_step_advancement(user.id, pref.step, client=client)
    logger.info(f"User {user.id} skipped {kind}")

    return success_response({"next": summarize(snapshot).to_dict(snapshot.username)})
