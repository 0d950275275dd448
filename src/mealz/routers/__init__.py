"""API routers for the mealz application."""

from mealz.routers.cards import router as cards_router
from mealz.routers.meal_plans import router as meal_plans_router

__all__ = [
    "cards_router",
    "meal_plans_router",
]
