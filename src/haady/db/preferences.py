"""
Preference repositories: personality traits, favorite brands, favorite colors.

All three are user -> master-table junctions replaced wholesale on save.
The master tables double as the catalog of choices for each step.
"""

import logging
import re
from dataclasses import dataclass

from supabase import Client

from haady.db.client import get_service_client
from haady.db.errors import not_found_error, validation_error
from haady.db.users import execute
from haady.onboarding import OnboardingStep

logger = logging.getLogger(__name__)

UUID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class PreferenceTable:
    """Where one preference kind lives and which onboarding step it belongs to."""
    kind: str
    table: str
    id_column: str
    master_table: str
    step: OnboardingStep
    label: str
    # brands_master has no is_active column
    active_only: bool = True


PREFERENCE_TABLES = {
    "traits": PreferenceTable(
        kind="traits",
        table="user_traits",
        id_column="trait_id",
        master_table="traits_master",
        step=OnboardingStep.PERSONALITY_TRAITS,
        label="trait",
    ),
    "brands": PreferenceTable(
        kind="brands",
        table="user_brands",
        id_column="brand_id",
        master_table="brands_master",
        step=OnboardingStep.FAVORITE_BRANDS,
        label="brand",
        active_only=False,
    ),
    "colors": PreferenceTable(
        kind="colors",
        table="user_colors",
        id_column="color_id",
        master_table="colors_master",
        step=OnboardingStep.FAVORITE_COLORS,
        label="color",
    ),
}


def get_preference_table(kind: str) -> PreferenceTable:
    """Look up a preference kind, raising NOT_FOUND for unknown kinds."""
    try:
        return PREFERENCE_TABLES[kind]
    except KeyError:
        raise not_found_error(f"Unknown preference type: {kind}")


async def get_user_preferences(
    kind: str, user_id: str, client: Client | None = None
) -> list[str]:
    """IDs the user currently has selected for a preference kind."""
    pref = get_preference_table(kind)
    client = client or get_service_client()
    response = execute(
        client.table(pref.table).select(pref.id_column).eq("user_id", user_id)
    )
    return [row[pref.id_column] for row in response.data or []]


async def get_master_catalog(kind: str, client: Client | None = None) -> list[dict]:
    """All selectable entries for a preference kind, ordered by name."""
    pref = get_preference_table(kind)
    client = client or get_service_client()
    query = client.table(pref.master_table).select("*")
    if pref.active_only:
        query = query.eq("is_active", True)
    response = execute(query.order("name"))
    return response.data or []


async def _validate_ids(pref: PreferenceTable, ids: list[str], client: Client) -> None:
    invalid = [i for i in ids if not UUID_RE.match(i)]
    if invalid:
        raise validation_error(
            f"Invalid {pref.label} IDs: {', '.join(invalid)}",
            details={"invalid_ids": invalid},
        )

    if not ids:
        return

    response = execute(client.table(pref.master_table).select("id").in_("id", ids))
    existing = {row["id"] for row in response.data or []}
    missing = [i for i in ids if i not in existing]
    if missing:
        raise validation_error(
            f"{pref.label.capitalize()} IDs not found: {', '.join(missing)}",
            details={"missing_ids": missing},
        )


async def replace_user_preferences(
    kind: str, user_id: str, ids: list[str], client: Client | None = None
) -> int:
    """
    Replace all of a user's selections for a preference kind.

    Validates that every ID is a UUID present in the master table, then
    deletes existing rows and bulk-inserts the new set. Returns the count.
    """
    pref = get_preference_table(kind)
    client = client or get_service_client()

    # Preserve order, drop duplicates
    unique_ids = list(dict.fromkeys(ids))
    await _validate_ids(pref, unique_ids, client)

    execute(client.table(pref.table).delete().eq("user_id", user_id))

    if unique_ids:
        rows = [{"user_id": user_id, pref.id_column: i} for i in unique_ids]
        execute(client.table(pref.table).insert(rows))

    logger.info(f"Saved {len(unique_ids)} {kind} for user {user_id}")
    return len(unique_ids)
