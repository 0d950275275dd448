"""Pydantic models for meal cards, plan constraints and generation results."""

from collections.abc import Iterable
from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, field_serializer, field_validator

JOKER_TAG = "joker"
MAX_BATCH_SIZE = 255


def _clean_entries(value: Any) -> Any:
    """Strip tag/ingredient entries and drop blank ones."""
    if value is None:
        return set()
    if isinstance(value, str):
        raise ValueError("expected a collection of strings, not a single string")
    if not isinstance(value, Iterable):
        return value
    cleaned = []
    for item in value:
        if isinstance(item, str):
            item = item.strip()
            if not item:
                continue
        cleaned.append(item)
    return cleaned


# =============================================================================
# Cards
# =============================================================================


class Card(BaseModel):
    """A reusable meal record."""

    id: int = Field(..., ge=1, frozen=True, description="Assigned by the card store")
    name: str
    tags: set[str] = Field(default_factory=set)
    ingredients: set[str] = Field(default_factory=set)
    max_batch_size: int = Field(
        default=1,
        ge=1,
        le=MAX_BATCH_SIZE,
        description="Portions of this meal allowed in one plan",
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Strip the name and reject blank ones."""
        v = v.strip()
        if not v:
            raise ValueError("Card name cannot be empty")
        return v

    @field_validator("tags", "ingredients", mode="before")
    @classmethod
    def clean_entries(cls, v: Any) -> Any:
        return _clean_entries(v)

    @field_serializer("tags", "ingredients")
    def serialize_sorted(self, v: set[str]) -> list[str]:
        return sorted(v)

    @property
    def is_joker(self) -> bool:
        """Jokers are placeholder suggestions, hidden unless explicitly allowed."""
        return JOKER_TAG in self.tags

    @property
    def is_batchable(self) -> bool:
        return self.max_batch_size > 1

    def __str__(self) -> str:
        return f"[{self.id}] {self.name}"


# =============================================================================
# Filters and constraints
# =============================================================================


class FilterMode(str, Enum):
    """How a set of filter values is matched against a card's set."""

    ALL = "all"  # every filter value must be present
    ANY = "any"  # at least one filter value must be present


class BatchMode(str, Enum):
    """Restriction on a card's batchability."""

    ALLOW = "allow"  # batchable and non-batchable cards
    ONLY = "only"  # max_batch_size > 1
    PREVENT = "prevent"  # max_batch_size <= 1


class CardFilters(BaseModel):
    """
    Filter specification for candidate cards.

    All families are combined with AND. Empty values impose no constraint:
    an empty name substring matches every name, and an empty tag or
    ingredient set matches every card regardless of its mode.
    """

    name_contains: str = ""
    tag_filters: set[str] = Field(default_factory=set)
    tag_mode: FilterMode = FilterMode.ANY
    ingredient_filters: set[str] = Field(default_factory=set)
    ingredient_mode: FilterMode = FilterMode.ANY
    allow_jokers: bool = False
    batch_mode: BatchMode = BatchMode.ALLOW

    @field_validator("tag_filters", "ingredient_filters", mode="before")
    @classmethod
    def clean_entries(cls, v: Any) -> Any:
        return _clean_entries(v)


class PlanConstraints(BaseModel):
    """Everything needed for one plan generation run."""

    number_of_meals: int = Field(default=0, ge=0)
    filters: CardFilters = Field(default_factory=CardFilters)
    no_consecutive: bool = False
    max_repeats_per_plan: int = Field(default=0, ge=0, description="0 means unlimited")


# =============================================================================
# Schedules and results
# =============================================================================


class DaySlot(str, Enum):
    """Lunch and dinner slots of a week."""

    MONDAY_LUNCH = "monday_lunch"
    MONDAY_DINNER = "monday_dinner"
    TUESDAY_LUNCH = "tuesday_lunch"
    TUESDAY_DINNER = "tuesday_dinner"
    WEDNESDAY_LUNCH = "wednesday_lunch"
    WEDNESDAY_DINNER = "wednesday_dinner"
    THURSDAY_LUNCH = "thursday_lunch"
    THURSDAY_DINNER = "thursday_dinner"
    FRIDAY_LUNCH = "friday_lunch"
    FRIDAY_DINNER = "friday_dinner"
    SATURDAY_LUNCH = "saturday_lunch"
    SATURDAY_DINNER = "saturday_dinner"
    SUNDAY_LUNCH = "sunday_lunch"
    SUNDAY_DINNER = "sunday_dinner"


class IdeaSchedule(BaseModel):
    """Unordered list of distinct meal ideas."""

    kind: Literal["ideas"] = "ideas"
    cards: list[Card] = Field(default_factory=list)


class WeeklySchedule(BaseModel):
    """
    Day-slot assignment.

    Reserved shape: no generator produces weekly schedules yet.
    """

    kind: Literal["weekly"] = "weekly"
    slots: dict[DaySlot, Card] = Field(default_factory=dict)


PlanSchedule = Annotated[IdeaSchedule | WeeklySchedule, Field(discriminator="kind")]


class MealPlan(BaseModel):
    """A generated plan."""

    schedule: PlanSchedule


class GenerationResult(BaseModel):
    """Plan plus the warnings describing any constraint relaxation."""

    plan: MealPlan
    warnings: list[str] = Field(default_factory=list)

    @property
    def ideas(self) -> list[Card]:
        """Cards of an idea schedule, empty for other shapes."""
        schedule = self.plan.schedule
        return schedule.cards if isinstance(schedule, IdeaSchedule) else []
