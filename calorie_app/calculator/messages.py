"""User-facing Russian texts and display rounding."""

from __future__ import annotations

import math
from typing import Any

from calorie_app.calculator.models import Gender, Goal, Results, ResultsDisplay

GENDER_LABELS: dict[Gender, str] = {
    Gender.male: "мужской",
    Gender.female: "женский",
}

GOAL_LABELS: dict[Goal, str] = {
    Goal.lose: "снижение веса",
    Goal.maintain: "поддержание веса",
    Goal.gain: "набор массы",
}

CALCULATION_DONE = "Расчет выполнен!"
CALCULATION_FAILED = "Не удалось выполнить расчет. Проверьте введенные данные."


def round_display(value: float) -> int:
    """Nearest integer, halves rounded up (matches the UI's Math.round)."""
    return math.floor(value + 0.5)


def field_confirmation(field: str, value: Any) -> str:
    if field == "gender":
        return f"Пол установлен: {GENDER_LABELS[Gender(value)]}"
    if field == "age":
        return f"Возраст установлен: {value} лет"
    if field == "height":
        return f"Рост установлен: {value} см"
    if field == "weight":
        return f"Вес установлен: {value} кг"
    if field == "goal":
        return f"Цель установлена: {GOAL_LABELS[Goal(value)]}"
    raise KeyError(field)


def results_summary(results: Results) -> str:
    """Spoken summary relayed to the assistant after a calculation."""
    return (
        f"По формуле Миффлина-Сан Жеора: {round_display(results.mifflin)} ккал/день. "
        f"Белков: {round_display(results.protein)}г, Жиров: {round_display(results.fats)}г, "
        f"Углеводов: {round_display(results.carbs)}г."
    )


def results_display(results: Results | None) -> ResultsDisplay | None:
    if results is None:
        return None
    return ResultsDisplay(
        mifflin=round_display(results.mifflin),
        harris=round_display(results.harris),
        range_min=round_display(results.weight_based_range.min),
        range_max=round_display(results.weight_based_range.max),
        protein=round_display(results.protein),
        fats=round_display(results.fats),
        carbs=round_display(results.carbs),
    )
