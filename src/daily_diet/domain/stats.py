"""Domain models for diet statistics."""

from dataclasses import dataclass


@dataclass(frozen=True)
class StreakState:
    """Running state of the on-diet streak fold."""

    current: int = 0
    best: int = 0


@dataclass(frozen=True)
class DietMetrics:
    """Aggregate statistics over a user's meal history."""

    total_meals_registered: int
    total_meals_on_diet: int
    total_meals_off_diet: int
    best_sequence_of_meals_on_diet: int
