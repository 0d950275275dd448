"""API routes for meal plan generation."""

from fastapi import APIRouter, Depends, HTTPException, status

from mealz.dependencies import get_plan_generator
from mealz.logging_config import get_logger
from mealz.models import GenerationResult, PlanConstraints
from mealz.plan.generator import MealPlanGenerator, NoCandidatesError

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/meal-plans", tags=["meal-plans"])


@router.post("", response_model=GenerationResult)
def create_meal_plan(
    constraints: PlanConstraints,
    generator: MealPlanGenerator = Depends(get_plan_generator),
) -> GenerationResult:
    """
    Generate a randomized idea list from the stored cards.

    Constraint relaxations (running out of portions, unavoidable repeats) are
    reported in ``warnings``; only an empty candidate set is an error.
    """
    logger.info(
        f"Creating meal plan: meals={constraints.number_of_meals}, "
        f"no_consecutive={constraints.no_consecutive}, "
        f"max_repeats={constraints.max_repeats_per_plan}"
    )
    try:
        return generator.generate_plan(constraints)
    except NoCandidatesError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
