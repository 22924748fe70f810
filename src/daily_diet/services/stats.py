"""Streak analytics over a user's meal history."""

from collections.abc import Iterable
from functools import reduce

from daily_diet.domain.meals import MealRecord
from daily_diet.domain.stats import DietMetrics, StreakState


def advance_streak(state: StreakState, is_on_diet: bool) -> StreakState:
    """Fold one meal into the streak state."""
    current = state.current + 1 if is_on_diet else 0
    return StreakState(current=current, best=max(state.best, current))


def best_streak(flags: Iterable[bool]) -> int:
    """Return the length of the longest run of True values."""
    return reduce(advance_streak, flags, StreakState()).best


def analyze_meals(meals: Iterable[MealRecord]) -> DietMetrics:
    """Compute totals and the best-ever on-diet streak.

    The streak is the global maximum over the whole history, so the order of
    ``meals`` only matters in that runs must be contiguous in it.
    """
    flags = [meal.is_on_diet for meal in meals]
    on_diet = sum(1 for flag in flags if flag)
    return DietMetrics(
        total_meals_registered=len(flags),
        total_meals_on_diet=on_diet,
        total_meals_off_diet=len(flags) - on_diet,
        best_sequence_of_meals_on_diet=best_streak(flags),
    )
