"""Plan request builder.

Deterministic transformation from a PlanIntake to the prompt pair sent to
the completion service, and from stored intake details back to display
lines. No I/O happens here.
"""

from collections.abc import Mapping
from typing import Any

from ..errors import IntakeValidationError
from ..prompts import get_plan_request_template, get_plan_system_template
from .models import PlanIntake, PlanRequest

PLAN_DAYS = ("DAY 1", "DAY 2", "DAY 3")
PROGRESS_SECTION = "\nPROGRESS TRACKING:\n[Include specific tracking tips]\n"


def validate_intake(intake: PlanIntake) -> None:
    """Reject an intake that is missing mandatory fields.

    Raises:
        IntakeValidationError: Listing the missing fields
    """
    missing = intake.missing_fields()
    if missing:
        raise IntakeValidationError(missing)


def build_plan_request(intake: PlanIntake) -> PlanRequest:
    """Build the system instruction and user prompt for a 3-day plan.

    The prompt has one section per day (DAY 1 to DAY 3, in order), then
    preparation, safety and nutrition sections, plus a progress tracking
    section only when a goal is set. The system instruction pins the
    per-day meal count to intake.meals_per_day.

    Args:
        intake: Completed intake

    Returns:
        PlanRequest ready for a completion call

    Raises:
        IntakeValidationError: If mandatory fields are missing
    """
    validate_intake(intake)

    system_instruction = get_plan_system_template().format(
        meals_per_day=intake.meals_per_day
    )
    user_prompt = get_plan_request_template().format(
        details="\n".join(_prompt_detail_lines(intake)),
        progress_section=PROGRESS_SECTION if intake.goal else "",
    )
    return PlanRequest(system_instruction=system_instruction, user_prompt=user_prompt)


def _prompt_detail_lines(intake: PlanIntake) -> list[str]:
    details = intake.to_plan_details()
    lines = [
        f"Age: {details['age']} months",
        f"Height: {details['height']} cm",
        f"Weight: {details['weight']} kg",
        f"Sex: {details['sex']}",
    ]
    if details["goals"]:
        lines.append(f"Goals: {details['goals']}")
    lines.extend([
        f"Meals per day: {details['mealCount']}",
        f"Allergies: {', '.join(details['allergies']) or 'None'}",
        f"Diet: {details['dietary'] or 'Standard'}",
    ])
    return lines


def summarize_intake(details: Mapping[str, Any] | PlanIntake) -> list[str]:
    """Human-readable lines describing a stored intake.

    Accepts either a stored plan_details mapping or a PlanIntake.
    Optional goal lines are omitted when unset.
    """
    if isinstance(details, PlanIntake):
        details = details.to_plan_details()

    lines = [
        f"Age: {details.get('age', '')} months",
        f"Height: {details.get('height', '')} cm",
        f"Weight: {details.get('weight', '')} kg",
        f"Sex: {details.get('sex', '')}",
    ]
    if details.get("goals"):
        lines.append(f"Goals: {details['goals']}")
    lines.extend([
        f"Meals per day: {details.get('mealCount', '')}",
        f"Allergies: {', '.join(details.get('allergies') or []) or 'None'}",
        f"Dietary Preference: {details.get('dietary') or 'No specific preference'}",
    ])
    return lines
