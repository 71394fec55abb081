"""Calculator HTTP router — the form's adapter onto the dispatcher."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends

from calorie_app.calculator.models import Action, CalculatorView
from calorie_app.calculator.session import CalculatorSession, get_calculator

router = APIRouter(prefix="/calculator", tags=["calculator"])


# ---------------------------------------------------------------------------
# /calculator/state
# ---------------------------------------------------------------------------


@router.get("/state", response_model=CalculatorView)
async def get_state(
    calculator: CalculatorSession = Depends(get_calculator),
) -> CalculatorView:
    return calculator.view()


# ---------------------------------------------------------------------------
# Form edits & calculation
# ---------------------------------------------------------------------------


@router.put("/form", response_model=CalculatorView)
async def update_form(
    form_data: dict[str, Any] = Body(...),
    calculator: CalculatorSession = Depends(get_calculator),
) -> CalculatorView:
    calculator.on_form_change(form_data)
    return calculator.view()


@router.post("/calculate", response_model=CalculatorView)
async def calculate(
    calculator: CalculatorSession = Depends(get_calculator),
) -> CalculatorView:
    calculator.on_calculate()
    return calculator.view()


@router.post("/actions", response_model=CalculatorView)
async def dispatch_action(
    action: Action,
    calculator: CalculatorSession = Depends(get_calculator),
) -> CalculatorView:
    calculator.dispatch(action)
    return calculator.view()
