"""Adherence aggregation over a session's meals."""

from dataclasses import dataclass
from typing import Iterable

from domain.meal.core.entities.meal import Meal


@dataclass(frozen=True)
class AdherenceSummary:
    """
    Diet adherence statistics.

    Attributes:
        total: Number of meals
        total_in_diet: Meals flagged in diet
        total_out_diet: Meals flagged out of diet
        best_sequence: Longest run of consecutive in-diet meals
    """

    total: int = 0
    total_in_diet: int = 0
    total_out_diet: int = 0
    best_sequence: int = 0


def summarize_adherence(meals: Iterable[Meal]) -> AdherenceSummary:
    """
    Compute adherence statistics in one pass.

    meals must be in creation order (as returned by MealLedger.list);
    the streak is defined over that order, not over meal dates.

    Examples:
        >>> flags = [True, True, False, True]
        >>> summarize_adherence(meals_with(flags)).best_sequence
        2
        >>> summarize_adherence([]).best_sequence
        0
    """
    total = 0
    in_diet = 0
    current_run = 0
    best = 0

    for meal in meals:
        total += 1
        if meal.in_diet:
            in_diet += 1
            current_run += 1
        else:
            if current_run > best:
                best = current_run
            current_run = 0

    # A run still open at the end of the scan is eligible too
    return AdherenceSummary(
        total=total,
        total_in_diet=in_diet,
        total_out_diet=total - in_diet,
        best_sequence=max(best, current_run),
    )
