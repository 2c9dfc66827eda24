"""Data models for plan intake, plan requests and saved food logs."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..llm import ChatMessage
from ..storage import Record


class AgeRange(str, Enum):
    """Baby age brackets, in months."""

    MONTHS_6_8 = "6-8"
    MONTHS_8_12 = "8-12"
    MONTHS_12_16 = "12-16"
    MONTHS_16_20 = "16-20"
    MONTHS_20_24 = "20-24"


class Sex(str, Enum):
    BOY = "boy"
    GIRL = "girl"


class Goal(str, Enum):
    """Optional focus of a plan."""

    HEALTHY_WEIGHT_GAIN = "healthy-weight-gain"
    BALANCED_NUTRITION = "balanced-nutrition"
    ALLERGY_PREVENTION = "allergy-prevention"
    PICKY_EATER = "picky-eater"
    DIGESTIVE_HEALTH = "digestive-health"


class Allergy(str, Enum):
    DAIRY = "Dairy"
    EGGS = "Eggs"
    NUTS = "Nuts"
    SOY = "Soy"
    WHEAT = "Wheat"


class DietaryPreference(str, Enum):
    VEGETARIAN = "vegetarian"
    VEGAN = "vegan"
    NO_PREFERENCE = "no-preference"


MEAL_COUNTS = (2, 3, 4, 5, 6)
REQUIRED_FIELDS = ("age_range", "height_cm", "weight_kg", "sex")


class PlanIntake(BaseModel):
    """Structured description of one plan-generation request.

    Starts empty and is filled field by field; every assignment is
    validated. Blank strings mean "not set".
    """

    model_config = ConfigDict(validate_assignment=True)

    age_range: AgeRange | None = None
    height_cm: float | None = Field(default=None, gt=0, description="Height in centimeters")
    weight_kg: float | None = Field(default=None, ge=3, le=20, description="Weight in kilograms")
    sex: Sex | None = None
    goal: Goal | None = None
    meals_per_day: int = Field(default=3, ge=2, le=6)
    allergies: frozenset[Allergy] = Field(default_factory=frozenset)
    dietary_preference: DietaryPreference | None = None

    @field_validator(
        "age_range", "height_cm", "weight_kg", "sex", "goal", "dietary_preference",
        mode="before",
    )
    @classmethod
    def blank_is_unset(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("allergies", mode="before")
    @classmethod
    def split_allergies(cls, v: Any) -> Any:
        """Accept a comma-separated string as well as any iterable."""
        if isinstance(v, str):
            return frozenset(part.strip() for part in v.split(",") if part.strip())
        return v

    def missing_fields(self) -> list[str]:
        """Names of mandatory fields that are still unset."""
        return [name for name in REQUIRED_FIELDS if getattr(self, name) is None]

    @property
    def is_complete(self) -> bool:
        return not self.missing_fields()

    def toggle_allergy(self, allergy: Allergy | str) -> None:
        """Add the allergy if absent, remove it if present."""
        self.allergies = self.allergies ^ {Allergy(allergy)}

    def sorted_allergies(self) -> list[Allergy]:
        """Allergies in enumeration order."""
        return [a for a in Allergy if a in self.allergies]

    def to_plan_details(self) -> dict[str, Any]:
        """Serialize to the stored plan_details layout."""
        return {
            "age": self.age_range.value if self.age_range else "",
            "height": _format_number(self.height_cm),
            "weight": _format_number(self.weight_kg),
            "sex": self.sex.value if self.sex else "",
            "goals": self.goal.value if self.goal else "",
            "mealCount": str(self.meals_per_day),
            "allergies": [a.value for a in self.sorted_allergies()],
            "dietary": self.dietary_preference.value if self.dietary_preference else "",
        }

    @classmethod
    def from_plan_details(cls, details: dict[str, Any]) -> "PlanIntake":
        """Rebuild an intake from a stored plan_details mapping."""
        return cls(
            age_range=details.get("age") or None,
            height_cm=details.get("height") or None,
            weight_kg=details.get("weight") or None,
            sex=details.get("sex") or None,
            goal=details.get("goals") or None,
            meals_per_day=details.get("mealCount") or 3,
            allergies=details.get("allergies") or [],
            dietary_preference=details.get("dietary") or None,
        )


def _format_number(value: float | None) -> str:
    return "" if value is None else f"{value:g}"


class PlanRequest(BaseModel):
    """Prompt pair handed to the completion service."""

    model_config = ConfigDict(frozen=True)

    system_instruction: str
    user_prompt: str

    def to_messages(self) -> list[ChatMessage]:
        return [
            ChatMessage(role="system", content=self.system_instruction),
            ChatMessage(role="user", content=self.user_prompt),
        ]


class FoodLog(BaseModel):
    """A saved plan, as stored in the food_logs table."""

    id: str
    user_id: str
    created_at: datetime
    plan_details: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_record(cls, record: Record) -> "FoodLog":
        return cls(
            id=record.id,
            user_id=record.data.get("user_id", ""),
            created_at=record.created_at,
            plan_details=record.data.get("plan_details", {}),
        )

    @property
    def plan(self) -> str:
        return self.plan_details.get("plan", "")
