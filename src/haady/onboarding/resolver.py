"""
Onboarding Resolver.

Pure functions over a UserProfileSnapshot:
- resolve_next_target: where to route the user (driven by the stored step pointer)
- resolve_current_step: step number for progress indicators (driven by completion flags)
- calculate_completion_percentage: 0-100 profile completion

Navigation and progress are deliberately computed independently and can
disagree: a user with step 3 incomplete but no stored pointer is routed to
their profile while the progress bar still shows step 3.
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, Literal

from .snapshot import UserProfileSnapshot
from .steps import OPTIONAL_STEPS, STEP_DEFINITIONS, OnboardingStep

logger = logging.getLogger(__name__)

# Step 1 plus the three optional steps. Username is not counted.
TOTAL_COMPLETION_STEPS = 4


@dataclass(frozen=True)
class NavigationTarget:
    """
    Where to send the user next.

    kind="path" carries a literal page path in `value`.
    kind="profile-redirect" means "the user's own profile"; callers
    resolve it with href(username).
    """
    kind: Literal["path", "profile-redirect"]
    value: str | None = None

    @classmethod
    def to_path(cls, path: str) -> "NavigationTarget":
        return cls(kind="path", value=path)

    @property
    def is_profile_redirect(self) -> bool:
        return self.kind == "profile-redirect"

    def href(self, username: str | None = None) -> str:
        """Concrete URL for this target. Profile redirects need a username."""
        if self.is_profile_redirect:
            return f"/@{username}" if username else "/home"
        return self.value

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "value": self.value}


PROFILE_REDIRECT = NavigationTarget(kind="profile-redirect")


def _target_for(step: OnboardingStep) -> NavigationTarget:
    return NavigationTarget.to_path(STEP_DEFINITIONS[step].path)


def resolve_next_target(snapshot: UserProfileSnapshot) -> NavigationTarget:
    """
    Determine where an in-progress or returning user should be routed.

    Only step 1 is derived from profile data; steps 2-4 follow the stored
    onboarding_step pointer and are never enforced.
    """
    if snapshot.is_onboarded:
        return PROFILE_REDIRECT

    # Terminal pointer without the flag (partial write)
    if snapshot.onboarding_step == OnboardingStep.COMPLETED:
        return PROFILE_REDIRECT

    if not snapshot.has_full_name:
        return _target_for(OnboardingStep.PERSONAL_INFO)

    step = snapshot.onboarding_step
    if not step:
        return PROFILE_REDIRECT

    if step in OPTIONAL_STEPS:
        return _target_for(OnboardingStep(step))

    logger.debug(f"Unrecognized onboarding_step {step!r}, redirecting to profile")
    return PROFILE_REDIRECT


def resolve_current_step(snapshot: UserProfileSnapshot) -> int:
    """First incomplete step by completion flags, or COMPLETED (5)."""
    if not snapshot.has_full_name:
        return OnboardingStep.PERSONAL_INFO
    if not snapshot.has_personality_traits:
        return OnboardingStep.PERSONALITY_TRAITS
    if not snapshot.has_favorite_brands:
        return OnboardingStep.FAVORITE_BRANDS
    if not snapshot.has_favorite_colors:
        return OnboardingStep.FAVORITE_COLORS
    return OnboardingStep.COMPLETED


def calculate_completion_percentage(snapshot: UserProfileSnapshot) -> int:
    """Profile completion as an integer percentage, rounded half up."""
    completed = sum(
        1
        for done in (
            snapshot.has_full_name,
            snapshot.has_personality_traits,
            snapshot.has_favorite_brands,
            snapshot.has_favorite_colors,
        )
        if done
    )
    return math.floor(completed / TOTAL_COMPLETION_STEPS * 100 + 0.5)


@dataclass(frozen=True)
class OnboardingProgress:
    """Navigation and progress for one snapshot, computed together."""
    next_target: NavigationTarget
    current_step: int
    completion_percentage: int

    @property
    def is_complete(self) -> bool:
        return self.current_step == OnboardingStep.COMPLETED

    def to_dict(self, username: str | None = None) -> dict[str, Any]:
        return {
            "target": self.next_target.to_dict(),
            "redirect_to": self.next_target.href(username),
            "current_step": int(self.current_step),
            "completion_percentage": self.completion_percentage,
            "is_complete": self.is_complete,
        }


def summarize(snapshot: UserProfileSnapshot) -> OnboardingProgress:
    """Run all three resolvers over one snapshot."""
    return OnboardingProgress(
        next_target=resolve_next_target(snapshot),
        current_step=resolve_current_step(snapshot),
        completion_percentage=calculate_completion_percentage(snapshot),
    )
