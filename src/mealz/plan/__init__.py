"""Meal plan generation engine."""

from mealz.plan.filters import card_matches, find_candidates
from mealz.plan.finalizer import IDEAS_TRIMMED_WARNING, finalize_ideas
from mealz.plan.generator import MealPlanGenerator, NoCandidatesError
from mealz.plan.inventory import Shuffler, expand_inventory, make_rng
from mealz.plan.scheduler import (
    CONSTRAINTS_RELAXED_WARNING,
    OUT_OF_PORTIONS_WARNING,
    RawSchedule,
    build_raw_schedule,
)

__all__ = [
    "CONSTRAINTS_RELAXED_WARNING",
    "IDEAS_TRIMMED_WARNING",
    "OUT_OF_PORTIONS_WARNING",
    "MealPlanGenerator",
    "NoCandidatesError",
    "RawSchedule",
    "Shuffler",
    "build_raw_schedule",
    "card_matches",
    "expand_inventory",
    "find_candidates",
    "finalize_ideas",
    "make_rng",
]
