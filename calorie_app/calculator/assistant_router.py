"""Assistant HTTP router — snapshot pull and inbound runtime events."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from calorie_app.calculator.assistant_client import EVENT_NAMES
from calorie_app.calculator.models import AssistantEvent
from calorie_app.calculator.session import CalculatorSession, get_calculator

router = APIRouter(prefix="/assistant", tags=["assistant"])


@router.get("/state")
async def assistant_state(
    calculator: CalculatorSession = Depends(get_calculator),
) -> dict:
    return calculator.bridge.get_snapshot()


@router.post("/events/{event_name}")
async def assistant_event(
    event_name: str,
    event: AssistantEvent,
    calculator: CalculatorSession = Depends(get_calculator),
) -> dict[str, bool]:
    if event_name not in EVENT_NAMES:
        raise HTTPException(status_code=404, detail=f"Unknown assistant event: {event_name}")
    delivered = calculator.bridge.deliver(event_name, event.model_dump(exclude_none=True))
    return {"delivered": delivered}
