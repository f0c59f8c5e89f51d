"""Meal domain services."""

from domain.meal.services.adherence import AdherenceSummary, summarize_adherence
from domain.meal.services.ledger import MealLedger

__all__ = ["AdherenceSummary", "MealLedger", "summarize_adherence"]
