"""
Tests for the onboarding resolver.

Navigation follows the stored pointer; progress follows completion flags.
"""

import pytest

from haady.onboarding import (
    PROFILE_REDIRECT,
    NavigationTarget,
    OnboardingStep,
    UserProfileSnapshot,
    calculate_completion_percentage,
    resolve_current_step,
    resolve_next_target,
    summarize,
)


def path(value: str) -> NavigationTarget:
    return NavigationTarget.to_path(value)


class TestResolveNextTarget:
    """Routing for in-progress and returning users."""

    @pytest.mark.parametrize("step", [None, 0, 1, 2, 3, 4, 5, 99])
    def test_onboarded_always_goes_to_profile(self, step):
        snapshot = UserProfileSnapshot(is_onboarded=True, onboarding_step=step)
        assert resolve_next_target(snapshot) == PROFILE_REDIRECT

    def test_onboarded_without_name_goes_to_profile(self):
        snapshot = UserProfileSnapshot(full_name=None, is_onboarded=True)
        assert resolve_next_target(snapshot) == PROFILE_REDIRECT

    @pytest.mark.parametrize("flag", [None, False])
    def test_completed_pointer_goes_to_profile(self, flag):
        snapshot = UserProfileSnapshot(onboarding_step=5, is_onboarded=flag)
        assert resolve_next_target(snapshot) == PROFILE_REDIRECT

    @pytest.mark.parametrize("name", [None, ""])
    @pytest.mark.parametrize("step", [None, 0, 1, 2, 3, 4, 99])
    def test_missing_name_goes_to_complete_profile(self, name, step):
        snapshot = UserProfileSnapshot(full_name=name, onboarding_step=step)
        assert resolve_next_target(snapshot) == path("/complete-profile")

    def test_missing_name_ignores_completion_flags(self):
        snapshot = UserProfileSnapshot(
            onboarding_step=3,
            has_personality_traits=True,
            has_favorite_brands=True,
            has_favorite_colors=True,
        )
        assert resolve_next_target(snapshot) == path("/complete-profile")

    @pytest.mark.parametrize("step", [None, 0])
    def test_name_without_pointer_goes_to_profile(self, step):
        snapshot = UserProfileSnapshot(full_name="A", onboarding_step=step)
        assert resolve_next_target(snapshot) == PROFILE_REDIRECT

    @pytest.mark.parametrize("step,expected", [
        (2, "/personality-traits"),
        (3, "/favorite-brands"),
        (4, "/favorite-colors"),
    ])
    def test_optional_step_pointer(self, step, expected):
        snapshot = UserProfileSnapshot(full_name="A", onboarding_step=step)
        assert resolve_next_target(snapshot) == path(expected)

    @pytest.mark.parametrize("step", [1, 6, 99, -1])
    def test_other_pointers_fall_back_to_profile(self, step):
        snapshot = UserProfileSnapshot(full_name="A", onboarding_step=step)
        assert resolve_next_target(snapshot) == PROFILE_REDIRECT

    def test_pointer_wins_over_flags(self):
        """Flags never pick the next optional step."""
        snapshot = UserProfileSnapshot(
            full_name="A",
            onboarding_step=2,
            has_personality_traits=True,
        )
        assert resolve_next_target(snapshot) == path("/personality-traits")

    def test_empty_snapshot(self):
        assert resolve_next_target(UserProfileSnapshot()) == path("/complete-profile")


class TestResolveCurrentStep:
    """Progress step from completion flags."""

    def test_empty(self):
        assert resolve_current_step(UserProfileSnapshot()) == 1

    def test_name_only(self):
        assert resolve_current_step(UserProfileSnapshot(full_name="A")) == 2

    def test_name_and_traits(self):
        snapshot = UserProfileSnapshot(full_name="A", has_personality_traits=True)
        assert resolve_current_step(snapshot) == 3

    def test_name_traits_brands(self):
        snapshot = UserProfileSnapshot(
            full_name="A", has_personality_traits=True, has_favorite_brands=True
        )
        assert resolve_current_step(snapshot) == 4

    def test_all_flags(self):
        snapshot = UserProfileSnapshot(
            full_name="A",
            has_personality_traits=True,
            has_favorite_brands=True,
            has_favorite_colors=True,
        )
        assert resolve_current_step(snapshot) == OnboardingStep.COMPLETED

    def test_first_falsy_flag_wins(self):
        snapshot = UserProfileSnapshot(
            full_name="A",
            has_personality_traits=False,
            has_favorite_brands=True,
            has_favorite_colors=True,
        )
        assert resolve_current_step(snapshot) == 2

    def test_empty_name_counts_as_missing(self):
        snapshot = UserProfileSnapshot(full_name="", has_personality_traits=True)
        assert resolve_current_step(snapshot) == 1

    def test_ignores_pointer(self):
        snapshot = UserProfileSnapshot(full_name="A", onboarding_step=4, is_onboarded=True)
        assert resolve_current_step(snapshot) == 2


class TestCompletionPercentage:
    """Completion percentage over four steps."""

    def test_empty(self):
        assert calculate_completion_percentage(UserProfileSnapshot()) == 0

    def test_name_only(self):
        assert calculate_completion_percentage(UserProfileSnapshot(full_name="A")) == 25

    def test_name_and_one_flag(self):
        snapshot = UserProfileSnapshot(full_name="A", has_favorite_colors=True)
        assert calculate_completion_percentage(snapshot) == 50

    def test_three_of_four(self):
        snapshot = UserProfileSnapshot(
            full_name="A", has_personality_traits=True, has_favorite_brands=True
        )
        assert calculate_completion_percentage(snapshot) == 75

    def test_all(self):
        snapshot = UserProfileSnapshot(
            full_name="A",
            has_personality_traits=True,
            has_favorite_brands=True,
            has_favorite_colors=True,
        )
        assert calculate_completion_percentage(snapshot) == 100

    def test_username_not_counted(self):
        snapshot = UserProfileSnapshot(username="sara")
        assert calculate_completion_percentage(snapshot) == 0

    def test_flags_without_name(self):
        snapshot = UserProfileSnapshot(has_personality_traits=True, has_favorite_brands=True)
        assert calculate_completion_percentage(snapshot) == 50


class TestIdempotence:
    """Same snapshot, same answers."""

    @pytest.mark.parametrize("snapshot", [
        UserProfileSnapshot(),
        UserProfileSnapshot(full_name="A", onboarding_step=3, has_personality_traits=True),
        UserProfileSnapshot(full_name="A", is_onboarded=True, has_favorite_colors=True),
    ])
    def test_repeat_calls_agree(self, snapshot):
        assert resolve_next_target(snapshot) == resolve_next_target(snapshot)
        assert resolve_current_step(snapshot) == resolve_current_step(snapshot)
        assert calculate_completion_percentage(snapshot) == calculate_completion_percentage(snapshot)


class TestBoundaryAgreement:
    """Complete flags plus a terminal marker always land on the profile."""

    @pytest.mark.parametrize("extra", [
        {"onboarding_step": 5},
        {"is_onboarded": True},
    ])
    def test_completed_step_redirects(self, extra):
        snapshot = UserProfileSnapshot(
            full_name="A",
            has_personality_traits=True,
            has_favorite_brands=True,
            has_favorite_colors=True,
            **extra,
        )
        assert resolve_current_step(snapshot) == 5
        assert resolve_next_target(snapshot) == PROFILE_REDIRECT

    def test_navigation_and_progress_can_diverge(self):
        snapshot = UserProfileSnapshot(full_name="A", has_personality_traits=True)
        assert resolve_next_target(snapshot) == PROFILE_REDIRECT
        assert resolve_current_step(snapshot) == 3


class TestNavigationTarget:
    """Tagged target and sentinel handling."""

    def test_sentinel_is_not_a_path(self):
        assert PROFILE_REDIRECT.is_profile_redirect
        assert PROFILE_REDIRECT.value is None
        assert PROFILE_REDIRECT != path("__PROFILE__")

    def test_href_for_profile(self):
        assert PROFILE_REDIRECT.href("sara") == "/@sara"
        assert PROFILE_REDIRECT.href(None) == "/home"

    def test_href_for_path(self):
        assert path("/favorite-brands").href("sara") == "/favorite-brands"

    def test_to_dict(self):
        assert PROFILE_REDIRECT.to_dict() == {"kind": "profile-redirect", "value": None}
        assert path("/favorite-colors").to_dict() == {"kind": "path", "value": "/favorite-colors"}


class TestSummarize:
    """Combined progress view."""

    def test_summary_fields(self):
        snapshot = UserProfileSnapshot(
            full_name="A", username="sara", onboarding_step=3, has_personality_traits=True
        )
        progress = summarize(snapshot)
        assert progress.next_target == path("/favorite-brands")
        assert progress.current_step == 3
        assert progress.completion_percentage == 50
        assert progress.is_complete is False

    def test_to_dict_resolves_redirect(self):
        snapshot = UserProfileSnapshot(
            full_name="A",
            is_onboarded=True,
            has_personality_traits=True,
            has_favorite_brands=True,
            has_favorite_colors=True,
        )
        data = summarize(snapshot).to_dict("sara")
        assert data == {
            "target": {"kind": "profile-redirect", "value": None},
            "redirect_to": "/@sara",
            "current_step": 5,
            "completion_percentage": 100,
            "is_complete": True,
        }
