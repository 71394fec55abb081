"""Authoritative calculator state and the reducer that edits it.

FormState is the only holder of inputs and results. Both controllers read it
directly (no cached copies) and mutate it only through ``ActionDispatcher``.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from calorie_app.calculator.models import CalculatorState, FormData, Results

logger = logging.getLogger(__name__)

# set_* action type → FormData field
FIELD_BY_ACTION: dict[str, str] = {
    "set_gender": "gender",
    "set_age": "age",
    "set_height": "height",
    "set_weight": "weight",
    "set_goal": "goal",
}

ACTION_BY_FIELD: dict[str, str] = {field: action for action, field in FIELD_BY_ACTION.items()}


def apply_field(form_data: FormData, field: str, value: Any) -> FormData | None:
    """Return a copy of ``form_data`` with one field replaced.

    Returns None when ``value`` fails the field's type or range constraints.
    """
    candidate = form_data.model_dump()
    candidate[field] = value
    try:
        return FormData.model_validate(candidate)
    except ValidationError as exc:
        logger.debug("Rejected %s=%r: %s", field, value, exc.errors()[0]["msg"])
        return None


class FormState:
    def __init__(self, form_data: FormData | None = None) -> None:
        self._form_data = form_data or FormData()
        self._results: Results | None = None

    @property
    def form_data(self) -> FormData:
        return self._form_data

    @property
    def results(self) -> Results | None:
        return self._results

    def commit_form(self, form_data: FormData) -> None:
        self._form_data = form_data

    def commit_results(self, results: Results) -> None:
        self._results = results

    def snapshot(self) -> CalculatorState:
        return CalculatorState(form_data=self._form_data, results=self._results)
