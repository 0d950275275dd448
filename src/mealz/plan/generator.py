"""Meal plan generation pipeline."""

import uuid

from mealz.config import get_settings
from mealz.logging_config import LoggingContext, get_logger
from mealz.models import GenerationResult, IdeaSchedule, MealPlan, PlanConstraints
from mealz.plan.filters import find_candidates
from mealz.plan.finalizer import finalize_ideas
from mealz.plan.inventory import Shuffler, expand_inventory, make_rng
from mealz.plan.scheduler import build_raw_schedule
from mealz.store import CardStore

logger = get_logger(__name__)


class NoCandidatesError(Exception):
    """Raised when no card passes the filters; no plan is produced."""

    def __init__(self, message: str = "No cards match the specified filters."):
        super().__init__(message)


class MealPlanGenerator:
    """
    Generates idea-list meal plans from the cards of a store.

    Each call runs the pipeline once:
    filter -> expand and shuffle -> constrained schedule -> finalize.
    The store is read once per call, so concurrent edits are not observed
    mid-generation.
    """

    def __init__(self, store: CardStore, rng: Shuffler | None = None):
        self.store = store
        self.rng = rng if rng is not None else make_rng(get_settings().random_seed)

    def generate_plan(self, constraints: PlanConstraints) -> GenerationResult:
        """
        Generate a plan for the given constraints.

        Raises:
            NoCandidatesError: If the filters leave no card to choose from.
        """
        with LoggingContext(plan_id=uuid.uuid4().hex):
            snapshot = self.store.list_cards()
            candidates = find_candidates(snapshot, constraints.filters)
            if not candidates:
                logger.warning(f"No candidates among {len(snapshot)} cards")
                raise NoCandidatesError()

            inventory = expand_inventory(candidates, self.rng)
            logger.info(
                f"Generating {constraints.number_of_meals} meals from "
                f"{len(candidates)} candidates ({len(inventory)} portions)"
            )

            raw = build_raw_schedule(
                inventory,
                constraints.number_of_meals,
                no_consecutive=constraints.no_consecutive,
                max_repeats_per_plan=constraints.max_repeats_per_plan,
            )
            ideas, notes = finalize_ideas(raw.entries)
            warnings = raw.warnings + notes

            for warning in warnings:
                logger.info(f"Plan warning: {warning}")
            logger.info(f"Plan ready: {len(raw.entries)} scheduled, {len(ideas)} ideas")

            return GenerationResult(
                plan=MealPlan(schedule=IdeaSchedule(cards=ideas)),
                warnings=warnings,
            )
