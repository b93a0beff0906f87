"""
User profile snapshot.

Read-only view of the profile-completion fields the resolver looks at.
Built from the users row plus the has_* flags derived from the
preference junction tables.
"""

from dataclasses import asdict, dataclass, fields
from typing import Any, Mapping


@dataclass(frozen=True)
class UserProfileSnapshot:
    """
    Profile-completion state at a point in time.

    Every field is optional. None means "absent", which is kept distinct
    from False and from an empty string.
    """
    full_name: str | None = None
    username: str | None = None  # Not used for gating
    onboarding_step: int | None = None
    is_onboarded: bool | None = None
    has_personality_traits: bool | None = None
    has_favorite_brands: bool | None = None
    has_favorite_colors: bool | None = None

    @property
    def has_full_name(self) -> bool:
        return bool(self.full_name)

    @classmethod
    def from_row(cls, row: Mapping[str, Any] | None) -> "UserProfileSnapshot":
        """Build a snapshot from a DB row or JSON body. Unknown keys are ignored."""
        if not row:
            return cls()
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in row.items() if k in known})

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
