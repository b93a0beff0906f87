"""
Onboarding consistency checks.

Navigation follows the stored pointer while progress follows completion
flags, so persisted rows can drift. These checks report the drift; they
never fix it.
"""

from dataclasses import dataclass

from .resolver import calculate_completion_percentage, resolve_current_step, resolve_next_target
from .snapshot import UserProfileSnapshot
from .steps import STEP_DEFINITIONS, OnboardingStep


@dataclass(frozen=True)
class AuditFinding:
    kind: str
    message: str


def audit_snapshot(
    snapshot: UserProfileSnapshot, stored_completion: int | None = None
) -> list[AuditFinding]:
    """List inconsistencies between a user's pointer, flags and stored completion."""
    findings: list[AuditFinding] = []
    target = resolve_next_target(snapshot)
    current = resolve_current_step(snapshot)
    step = snapshot.onboarding_step

    if step is not None and step != 0 and step not in STEP_DEFINITIONS:
        findings.append(AuditFinding("invalid_step", f"onboarding_step {step} is out of range"))

    if step == OnboardingStep.COMPLETED and not snapshot.is_onboarded:
        findings.append(AuditFinding(
            "partial_completion",
            "onboarding_step is COMPLETED but is_onboarded is not set",
        ))

    if target.is_profile_redirect and current != OnboardingStep.COMPLETED:
        findings.append(AuditFinding(
            "skipped_steps",
            f"routed to profile while step {current} is still incomplete",
        ))

    expected = calculate_completion_percentage(snapshot)
    if stored_completion is not None and stored_completion != expected:
        findings.append(AuditFinding(
            "stale_completion",
            f"profile_completion is {stored_completion}, flags give {expected}",
        ))

    return findings
