"""
Onboarding Steps.

Static step table for the Haady onboarding flow, plus the pointer
advancement rules applied when an optional step is saved or skipped.

Steps:
1. Personal info      - unskippable, gates everything else
2. Personality traits - skippable
3. Favorite brands    - skippable
4. Favorite colors    - skippable
5. Completed          - terminal, redirects to the user's profile
"""

from dataclasses import dataclass
from enum import IntEnum
from types import MappingProxyType
from typing import Any, Mapping


class OnboardingStep(IntEnum):
    """Onboarding step numbers as stored in users.onboarding_step."""
    PERSONAL_INFO = 1
    PERSONALITY_TRAITS = 2
    FAVORITE_BRANDS = 3
    FAVORITE_COLORS = 4
    COMPLETED = 5


@dataclass(frozen=True)
class StepDefinition:
    """One row of the step table. `path` is None for the terminal step."""
    step: OnboardingStep
    skippable: bool
    path: str | None

    @property
    def is_terminal(self) -> bool:
        return self.step == OnboardingStep.COMPLETED

    def to_dict(self) -> dict[str, Any]:
        return {
            "step": int(self.step),
            "name": self.step.name.lower(),
            "skippable": self.skippable,
            "path": self.path,
            "terminal": self.is_terminal,
        }


STEP_DEFINITIONS: Mapping[int, StepDefinition] = MappingProxyType({
    OnboardingStep.PERSONAL_INFO: StepDefinition(
        OnboardingStep.PERSONAL_INFO, skippable=False, path="/complete-profile"
    ),
    OnboardingStep.PERSONALITY_TRAITS: StepDefinition(
        OnboardingStep.PERSONALITY_TRAITS, skippable=True, path="/personality-traits"
    ),
    OnboardingStep.FAVORITE_BRANDS: StepDefinition(
        OnboardingStep.FAVORITE_BRANDS, skippable=True, path="/favorite-brands"
    ),
    OnboardingStep.FAVORITE_COLORS: StepDefinition(
        OnboardingStep.FAVORITE_COLORS, skippable=True, path="/favorite-colors"
    ),
    # Terminal: callers resolve this to /@{username}
    OnboardingStep.COMPLETED: StepDefinition(
        OnboardingStep.COMPLETED, skippable=False, path=None
    ),
})

# Optional steps the stored pointer may send a user back to
OPTIONAL_STEPS = tuple(
    d.step for d in STEP_DEFINITIONS.values() if d.skippable
)


def next_step(step: int) -> OnboardingStep:
    """
    Step that follows an optional step.

    Only skippable steps advance this way; step 1 is completed by the
    profile form and step 5 has nowhere to go.
    """
    if step not in OPTIONAL_STEPS:
        raise ValueError(f"Step {step} is not an optional onboarding step")
    return OnboardingStep(step + 1)


def advancement_for(step: int) -> dict[str, Any]:
    """
    Column updates to persist after an optional step is saved or skipped.

    Leaving the last optional step marks the user as onboarded.
    """
    following = next_step(step)
    updates: dict[str, Any] = {"onboarding_step": int(following)}
    if following == OnboardingStep.COMPLETED:
        updates["is_onboarded"] = True
    return updates


def pointer_advancement(
    step: int, current: Any, is_onboarded: bool | None
) -> dict[str, Any]:
    """
    Pointer updates for saving or skipping `step`, given the stored pointer.

    Only users inside the optional steps move, and only forward. Onboarded
    users, pointers outside 2..4 (unset, step 1, malformed) and pointers
    already past the following step are left alone.
    """
    updates = advancement_for(step)
    if is_onboarded or current not in OPTIONAL_STEPS:
        return {}
    if current > updates["onboarding_step"]:
        return {}
    return updates


def profile_advancement(current: Any, is_onboarded: bool | None) -> dict[str, Any]:
    """
    Pointer update once the personal-info form is saved.

    Sends the user on to the first optional step unless they are onboarded
    or already past step 1.
    """
    if is_onboarded or current in OPTIONAL_STEPS or current == OnboardingStep.COMPLETED:
        return {}
    return {"onboarding_step": int(OnboardingStep.PERSONALITY_TRAITS)}
