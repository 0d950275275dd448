"""Mealz - meal cards and randomized meal plan ideas."""

__version__ = "0.1.0"
