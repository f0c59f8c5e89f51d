"""Meal event subscribers."""

from application.meal.event_handlers.meal_event_logger import MealEventLogger

__all__ = ["MealEventLogger"]
