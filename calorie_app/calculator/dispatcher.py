"""Action dispatcher — the one validated path into FormState.

Every mutation, whether it comes from the form or from the assistant, is an
``Action``. Dispatches are serialized: an action dispatched while another is
being processed (for example from a confirmation callback) is queued and run
as a new top-level dispatch once the current one finishes.

Malformed ``set_*`` payloads are ignored without feedback or error.
"""

from __future__ import annotations

import logging
from collections import deque
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Mapping

from pydantic import ValidationError

from calorie_app.calculator import messages
from calorie_app.calculator.engine import compute
from calorie_app.calculator.models import Action, FormData, Results
from calorie_app.calculator.state import FIELD_BY_ACTION, FormState, apply_field

if TYPE_CHECKING:
    from calorie_app.calculator.bridge import AgentBridge
    from calorie_app.calculator.feedback import FeedbackChannel

logger = logging.getLogger(__name__)

CALCULATE = "calculate"

FEEDBACK_ACTION_ID = "feedback"
RESULTS_ACTION_ID = "results"
CALCULATION_ERROR_ACTION_ID = "calculation_error"


class DispatchPhase(str, Enum):
    idle = "idle"
    validating = "validating"
    applying = "applying"
    computing = "computing"
    rejecting = "rejecting"


class ActionDispatcher:
    def __init__(
        self,
        state: FormState,
        feedback: FeedbackChannel,
        bridge: AgentBridge | None = None,
        *,
        results_action_id: str = RESULTS_ACTION_ID,
        engine: Callable[[FormData], Results] = compute,
    ) -> None:
        self._state = state
        self._feedback = feedback
        self._bridge = bridge
        self._results_action_id = results_action_id
        self._engine = engine
        self._queue: deque[Action] = deque()
        self.phase = DispatchPhase.idle

    def dispatch(self, action: Action | Mapping[str, Any]) -> None:
        if not isinstance(action, Action):
            try:
                action = Action.model_validate(action)
            except ValidationError:
                logger.warning("Ignoring malformed action envelope: %r", action)
                return

        self._queue.append(action)
        if self.phase is not DispatchPhase.idle:
            logger.debug("Dispatch in progress, queued %s", action.type)
            return

        while self._queue:
            current = self._queue.popleft()
            try:
                self._process(current)
            except Exception:
                logger.exception("Error dispatching action %s", current.type)
            finally:
                self.phase = DispatchPhase.idle

    def _process(self, action: Action) -> None:
        self.phase = DispatchPhase.validating
        logger.debug("dispatch %s payload=%r", action.type, action.payload)

        if action.type == CALCULATE:
            self.phase = DispatchPhase.computing
            self._calculate()
            return

        field = FIELD_BY_ACTION.get(action.type)
        if field is None:
            self.phase = DispatchPhase.rejecting
            logger.warning("Unknown action type: %s", action.type)
            return

        updated = apply_field(self._state.form_data, field, action.payload)
        if updated is None:
            self.phase = DispatchPhase.rejecting
            return

        self.phase = DispatchPhase.applying
        self._state.commit_form(updated)
        self._confirm(messages.field_confirmation(field, getattr(updated, field)))

    def _calculate(self) -> None:
        try:
            results = self._engine(self._state.form_data)
        except Exception as exc:
            logger.error("Error calculating results: %s", exc, exc_info=True)
            self._feedback.show(messages.CALCULATION_FAILED)
            self._send(CALCULATION_ERROR_ACTION_ID, messages.CALCULATION_FAILED)
            return

        self._state.commit_results(results)
        self._send(self._results_action_id, messages.results_summary(results))
        self._feedback.show(messages.CALCULATION_DONE)

    def _confirm(self, text: str) -> None:
        self._feedback.show(text)
        self._send(FEEDBACK_ACTION_ID, text)

    def _send(self, action_id: str, value: str) -> None:
        if self._bridge is not None:
            self._bridge.send(action_id, value)
