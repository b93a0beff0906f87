"""
Users repository.

Reads the users row and the preference junction tables into a
UserProfileSnapshot, persists profile and onboarding pointer updates,
and serves the public profile read by username.
"""

import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any

from supabase import Client

from haady.db.client import get_service_client
from haady.db.errors import (
    AppError,
    ErrorCode,
    map_supabase_error,
    not_found_error,
    validation_error,
)
from haady.onboarding import (
    UserProfileSnapshot,
    calculate_completion_percentage,
    pointer_advancement,
    profile_advancement,
)

logger = logging.getLogger(__name__)

USERS_TABLE = "users"

# Columns anyone may read on a /@username page
PUBLIC_PROFILE_COLUMNS = "id, username, full_name, avatar_url, country, city, created_at"

# Junction table -> snapshot flag
PREFERENCE_FLAGS = {
    "user_traits": ("trait_id", "has_personality_traits"),
    "user_brands": ("brand_id", "has_favorite_brands"),
    "user_colors": ("color_id", "has_favorite_colors"),
}


def execute(query) -> Any:
    """Run a PostgREST query, converting failures to AppError."""
    try:
        return query.execute()
    except Exception as e:
        raise map_supabase_error(e) from e


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


async def get_user_by_id(user_id: str, client: Client | None = None) -> dict | None:
    """Get a user row by ID. None when the row does not exist."""
    client = client or get_service_client()
    try:
        response = execute(
            client.table(USERS_TABLE).select("*").eq("id", user_id).limit(1)
        )
    except AppError as e:
        if e.code == ErrorCode.NOT_FOUND:
            return None
        raise
    return response.data[0] if response.data else None


async def has_preferences(table: str, user_id: str, client: Client | None = None) -> bool:
    """True when the user has at least one row in a preference junction table."""
    client = client or get_service_client()
    id_column, _ = PREFERENCE_FLAGS[table]
    response = execute(
        client.table(table).select(id_column).eq("user_id", user_id).limit(1)
    )
    return bool(response.data)


async def fetch_user_profile(
    user_id: str, client: Client | None = None
) -> UserProfileSnapshot | None:
    """
    Build the onboarding snapshot for a user.

    Returns None if the users row is missing.
    """
    client = client or get_service_client()
    user = await get_user_by_id(user_id, client=client)
    if user is None:
        return None

    row = dict(user)
    for table, (_, flag) in PREFERENCE_FLAGS.items():
        row[flag] = await has_preferences(table, user_id, client=client)

    return UserProfileSnapshot.from_row(row)


async def update_user(
    user_id: str, updates: dict[str, Any], client: Client | None = None
) -> dict:
    """Update a user row, stamping updated_at. Returns the updated row."""
    client = client or get_service_client()
    data = {**updates, "updated_at": _now()}
    response = execute(client.table(USERS_TABLE).update(data).eq("id", user_id))
    if not response.data:
        raise not_found_error("User not found")
    return response.data[0]


async def apply_step_advancement(
    user_id: str, step: int, client: Client | None = None
) -> UserProfileSnapshot:
    """
    Move the user's onboarding pointer past an optional step.

    The pointer only moves for users inside the optional steps, and only
    forward (see pointer_advancement). Everyone else, including users
    editing preferences from settings, keeps their pointer.
    users.profile_completion is refreshed either way. Returns the snapshot
    as it stands after the write.
    """
    client = client or get_service_client()
    snapshot = await fetch_user_profile(user_id, client=client)
    if snapshot is None:
        raise not_found_error("User profile not found")

    updates = pointer_advancement(step, snapshot.onboarding_step, snapshot.is_onboarded)
    advanced = replace(snapshot, **updates)
    updates["profile_completion"] = calculate_completion_percentage(advanced)

    await update_user(user_id, updates, client=client)
    if "onboarding_step" in updates:
        logger.info(
            f"User {user_id} advanced past step {step} -> {updates['onboarding_step']}"
        )
    return advanced


async def upsert_user(
    user_id: str, data: dict[str, Any], client: Client | None = None
) -> dict:
    """Create or update a user row, stamping updated_at. Returns the row."""
    client = client or get_service_client()
    payload = {"id": user_id, **data, "updated_at": _now()}
    response = execute(client.table(USERS_TABLE).upsert(payload))
    return response.data[0] if response.data else payload


async def complete_profile(
    user_id: str, profile: dict[str, Any], client: Client | None = None
) -> UserProfileSnapshot:
    """
    Save the personal-info form (onboarding step 1).

    Upserts the profile fields with the refreshed profile_completion, and
    points the user at the first optional step unless they are onboarded
    or already past step 1. Returns the snapshot as it stands after the write.
    """
    client = client or get_service_client()
    full_name = (profile.get("full_name") or "").strip()
    if not full_name:
        raise validation_error("Full name is required")

    existing = await fetch_user_profile(user_id, client=client) or UserProfileSnapshot()
    updates = {
        **profile,
        "full_name": full_name,
        **profile_advancement(existing.onboarding_step, existing.is_onboarded),
    }
    advanced = UserProfileSnapshot.from_row({**existing.to_dict(), **updates})
    updates["profile_completion"] = calculate_completion_percentage(advanced)

    await upsert_user(user_id, updates, client=client)
    logger.info(
        f"User {user_id} saved personal info, step {existing.onboarding_step} -> "
        f"{advanced.onboarding_step}"
    )
    return advanced


async def get_public_profile(username: str, client: Client | None = None) -> dict | None:
    """
    Public profile fields for a username. A leading "@" is ignored.

    Defaults to the service client; only PUBLIC_PROFILE_COLUMNS are read.
    """
    username = username.strip().removeprefix("@")
    if not username:
        raise validation_error("Username is required")

    client = client or get_service_client()
    try:
        response = execute(
            client.table(USERS_TABLE)
            .select(PUBLIC_PROFILE_COLUMNS)
            .eq("username", username)
            .limit(1)
        )
    except AppError as e:
        if e.code == ErrorCode.NOT_FOUND:
            return None
        raise
    return response.data[0] if response.data else None
