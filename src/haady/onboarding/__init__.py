"""
Haady Onboarding.

Pure step resolution for the onboarding flow. No I/O: callers supply a
UserProfileSnapshot and act on the returned NavigationTarget.
"""

from .resolver import (
    PROFILE_REDIRECT,
    NavigationTarget,
    OnboardingProgress,
    calculate_completion_percentage,
    resolve_current_step,
    resolve_next_target,
    summarize,
)
from .snapshot import UserProfileSnapshot
from .steps import (
    STEP_DEFINITIONS,
    OnboardingStep,
    StepDefinition,
    advancement_for,
    next_step,
    pointer_advancement,
    profile_advancement,
)

__all__ = [
    "PROFILE_REDIRECT",
    "NavigationTarget",
    "OnboardingProgress",
    "OnboardingStep",
    "STEP_DEFINITIONS",
    "StepDefinition",
    "UserProfileSnapshot",
    "advancement_for",
    "calculate_completion_percentage",
    "next_step",
    "pointer_advancement",
    "profile_advancement",
    "resolve_current_step",
    "resolve_next_target",
    "summarize",
]
