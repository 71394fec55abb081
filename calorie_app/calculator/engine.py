"""Calorie and macro calculation — pure functions, no rounding.

Rounding is left to the presentation layer (see ``messages.round_display``).
"""

from __future__ import annotations

import math

from calorie_app.calculator.models import CalorieRange, FormData, Gender, Goal, Results

PROTEIN_KCAL_PER_G = 4.0
FAT_KCAL_PER_G = 9.0
CARB_KCAL_PER_G = 4.0

# kcal per kg of body weight: (min, max)
WEIGHT_BAND_FACTORS: dict[Goal, tuple[float, float]] = {
    Goal.lose: (22.0, 25.0),
    Goal.maintain: (26.0, 30.0),
    Goal.gain: (30.0, 35.0),
}

PROTEIN_G_PER_KG_GAIN = 2.5
PROTEIN_G_PER_KG_DEFAULT = 1.8
FAT_G_PER_KG = 1.0


class CalculationError(Exception):
    """Raised when inputs produce a non-finite result."""


def mifflin_st_jeor(gender: Gender, age: int, height: int, weight: int) -> float:
    """Mifflin–St Jeor BMR in kcal/day."""
    base = 10.0 * weight + 6.25 * height - 5.0 * age
    return base + 5.0 if gender == Gender.male else base - 161.0


def harris_benedict(gender: Gender, age: int, height: int, weight: int) -> float:
    """Revised Harris–Benedict BMR in kcal/day."""
    if gender == Gender.male:
        return 88.362 + 13.397 * weight + 4.799 * height - 5.677 * age
    return 447.593 + 9.247 * weight + 3.098 * height - 4.330 * age


def weight_based_range(weight: int, goal: Goal) -> CalorieRange:
    low, high = WEIGHT_BAND_FACTORS[goal]
    return CalorieRange(min=low * weight, max=high * weight)


def protein_grams(weight: int, goal: Goal) -> float:
    factor = PROTEIN_G_PER_KG_GAIN if goal == Goal.gain else PROTEIN_G_PER_KG_DEFAULT
    return factor * weight


def fat_grams(weight: int) -> float:
    return FAT_G_PER_KG * weight


def carb_grams(bmr: float, protein: float, fats: float) -> float:
    """Carbs fill whatever the BMR leaves after protein and fat calories.

    May be negative for extreme inputs; callers display it as-is.
    """
    return (bmr - (protein * PROTEIN_KCAL_PER_G + fats * FAT_KCAL_PER_G)) / CARB_KCAL_PER_G


def compute(data: FormData) -> Results:
    """Derive the full result set from one set of inputs."""
    mifflin = mifflin_st_jeor(data.gender, data.age, data.height, data.weight)
    harris = harris_benedict(data.gender, data.age, data.height, data.weight)
    protein = protein_grams(data.weight, data.goal)
    fats = fat_grams(data.weight)
    carbs = carb_grams(mifflin, protein, fats)

    values = (mifflin, harris, protein, fats, carbs)
    if not all(math.isfinite(v) for v in values):
        raise CalculationError(f"Non-finite result for inputs {data!r}")

    return Results(
        mifflin=mifflin,
        harris=harris,
        weight_based_range=weight_based_range(data.weight, data.goal),
        protein=protein,
        fats=fats,
        carbs=carbs,
    )
