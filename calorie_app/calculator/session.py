"""Calculator session — wires state, feedback, dispatcher and assistant bridge."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Mapping

from fastapi import Request

from calorie_app.calculator.assistant_client import initialize_assistant
from calorie_app.calculator.bridge import AgentBridge
from calorie_app.calculator.dispatcher import CALCULATE, ActionDispatcher
from calorie_app.calculator.feedback import DEFAULT_TTL_SECONDS, FeedbackChannel
from calorie_app.calculator.messages import results_display
from calorie_app.calculator.models import Action, CalculatorView
from calorie_app.calculator.state import ACTION_BY_FIELD, FormState, apply_field
from calorie_app.config import Settings

logger = logging.getLogger(__name__)


class CalculatorSession:
    """The single calculator instance shared by the form and the assistant."""

    def __init__(
        self,
        *,
        feedback_ttl_seconds: float = DEFAULT_TTL_SECONDS,
        results_action_id: str = "results",
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self.state = FormState()
        self.feedback = FeedbackChannel(feedback_ttl_seconds, loop)
        self.bridge = AgentBridge(self.state, self.dispatch)
        self.dispatcher = ActionDispatcher(
            self.state,
            self.feedback,
            self.bridge,
            results_action_id=results_action_id,
        )

    def dispatch(self, action: Action | Mapping[str, Any]) -> None:
        self.dispatcher.dispatch(action)

    def on_form_change(self, form_data: Mapping[str, Any]) -> None:
        """Apply a whole form from the UI as one ``set_*`` action per changed field.

        Values are compared after conversion, so ``"25"`` for an age of 25
        counts as unchanged.
        """
        for field, action_type in ACTION_BY_FIELD.items():
            if field not in form_data:
                continue
            value = form_data[field]
            current = self.state.form_data
            converted = apply_field(current, field, value)
            if converted is not None and getattr(converted, field) == getattr(current, field):
                continue
            self.dispatch(Action(type=action_type, payload=value))

    def on_calculate(self) -> None:
        self.dispatch(Action(type=CALCULATE))

    def view(self) -> CalculatorView:
        return CalculatorView(
            form_data=self.state.form_data,
            results=self.state.results,
            feedback_message=self.feedback.message,
            display=results_display(self.state.results),
        )

    async def aclose(self) -> None:
        self.feedback.close()
        await self.bridge.aclose()


def create_session(settings: Settings) -> CalculatorSession:
    session = CalculatorSession(
        feedback_ttl_seconds=settings.feedback_ttl_seconds,
        results_action_id=settings.results_action_id,
    )
    if not session.bridge.attach(lambda: initialize_assistant(settings)):
        logger.info("Calculator running without assistant")
    return session


def get_calculator(request: Request) -> CalculatorSession:
    return request.app.state.calculator
