"""FastAPI dependencies giving routes access to the shared services."""

from fastapi import Request

from mealz.plan.generator import MealPlanGenerator
from mealz.store import CardStore


def get_card_store(request: Request) -> CardStore:
    """Card store created by the application lifespan."""
    return request.app.state.card_store


def get_plan_generator(request: Request) -> MealPlanGenerator:
    """Plan generator bound to the application's card store."""
    return request.app.state.plan_generator
