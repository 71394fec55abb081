"""Tests for confirmation texts and display rounding."""

import pytest

from calorie_app.calculator.engine import compute
from calorie_app.calculator.messages import (
    field_confirmation,
    results_display,
    results_summary,
    round_display,
)
from calorie_app.calculator.models import FormData, Gender, Goal


class TestRoundDisplay:
    @pytest.mark.parametrize(
        "value,expected",
        [(127.125, 127), (79.25, 79), (1642.5, 1643), (2.5, 3), (-2.5, -2), (0.49, 0)],
    )
    def test_rounding(self, value, expected):
        assert round_display(value) == expected


class TestFieldConfirmation:
    def test_gender(self):
        assert field_confirmation("gender", Gender.female) == "Пол установлен: женский"

    def test_age(self):
        assert field_confirmation("age", 30) == "Возраст установлен: 30 лет"

    def test_height(self):
        assert field_confirmation("height", 180) == "Рост установлен: 180 см"

    def test_weight(self):
        assert field_confirmation("weight", 82) == "Вес установлен: 82 кг"

    @pytest.mark.parametrize(
        "goal,label",
        [(Goal.lose, "снижение веса"), (Goal.maintain, "поддержание веса"), (Goal.gain, "набор массы")],
    )
    def test_goal(self, goal, label):
        assert field_confirmation("goal", goal) == f"Цель установлена: {label}"

    def test_unknown_field(self):
        with pytest.raises(KeyError):
            field_confirmation("bmi", 1)


class TestResults:
    def test_summary_for_defaults(self):
        assert results_summary(compute(FormData())) == (
            "По формуле Миффлина-Сан Жеора: 1643 ккал/день. "
            "Белков: 126г, Жиров: 70г, Углеводов: 127г."
        )

    def test_display_none_without_results(self):
        assert results_display(None) is None

    def test_display_rounds_every_value(self):
        display = results_display(compute(FormData()))
        assert display.mifflin == 1643
        assert display.harris == 1700
        assert display.range_min == 1820
        assert display.range_max == 2100
        assert display.carbs == 127
