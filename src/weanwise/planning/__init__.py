"""Meal plan module for weanwise.

Module structure:
- models.py: PlanIntake and its enumerations, PlanRequest, FoodLog
- builder.py: Intake -> prompt pair; stored details -> display lines
- generator.py: PlanGenerator (single-shot generation, save)
- logs.py: Food log listing and deletion
"""

from .builder import PLAN_DAYS, build_plan_request, summarize_intake, validate_intake
from .generator import PlanGenerator
from .logs import delete_log, get_log, list_logs
from .models import (
    MEAL_COUNTS,
    AgeRange,
    Allergy,
    DietaryPreference,
    FoodLog,
    Goal,
    PlanIntake,
    PlanRequest,
    Sex,
)

__all__ = [
    "AgeRange",
    "Allergy",
    "DietaryPreference",
    "FoodLog",
    "Goal",
    "MEAL_COUNTS",
    "PLAN_DAYS",
    "PlanGenerator",
    "PlanIntake",
    "PlanRequest",
    "Sex",
    "build_plan_request",
    "delete_log",
    "get_log",
    "list_logs",
    "summarize_intake",
    "validate_intake",
]
