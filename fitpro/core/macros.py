"""Macro Calculations - Pure functions for nutrition display math.

Totals always come from the server summary; these functions only derive
the numbers shown next to them. All functions are pure.
"""

from typing import Optional

from .models import Meal, NutritionDay, NutritionSummary


DEFAULT_CALORIE_GOAL = 2000


def calorie_budget(summary: Optional[NutritionSummary]) -> tuple[int, int, int]:
    """Return (eaten, burned, goal), using the default goal without a summary."""
    if summary is None:
        return 0, 0, DEFAULT_CALORIE_GOAL
    calories = summary.calories
    return calories.eaten, calories.burned, calories.goal


def calculate_calories_left(summary: Optional[NutritionSummary]) -> int:
    """Calories still available: (goal + burned) - eaten, never below zero."""
    eaten, burned, goal = calorie_budget(summary)
    return max(0, goal + burned - eaten)


def calculate_ring_progress(summary: Optional[NutritionSummary]) -> float:
    """Share of the day's calorie budget already eaten (0 for an empty budget).

    Not capped at 1.0 so overshooting stays visible.
    """
    eaten, burned, goal = calorie_budget(summary)
    budget = goal + burned
    if budget <= 0:
        return 0.0
    return eaten / budget


def calculate_macros_remaining(summary: NutritionSummary) -> dict[str, int]:
    """Grams left per macro; negative if over target."""
    macros = summary.macros
    return {
        "protein": macros.protein.target - macros.protein.grams,
        "carbs": macros.carbs.target - macros.carbs.grams,
        "fats": macros.fats.target - macros.fats.grams,
    }


def build_nutrition_day(summary: Optional[NutritionSummary], meals: list[Meal]) -> NutritionDay:
    """Bundle a summary and meals with their derived display numbers."""
    return NutritionDay(
        summary=summary,
        meals=meals,
        calories_left=calculate_calories_left(summary),
        ring_progress=calculate_ring_progress(summary),
    )
