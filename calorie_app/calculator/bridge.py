"""Adapter between the core and the conversational runtime.

Exposes the state snapshot, relays confirmations outward and forwards
inbound actions to the dispatcher. Every call into the runtime connection is
guarded here so the core never sees its failures.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

from pydantic import ValidationError

from calorie_app.calculator.assistant_client import AssistantClient
from calorie_app.calculator.models import (
    Action,
    ActionParameters,
    AssistantAppState,
    AssistantEvent,
    AssistantSendData,
    OutboundAction,
)
from calorie_app.calculator.state import FormState

logger = logging.getLogger(__name__)

ClientFactory = Callable[[], AssistantClient | None]


class AgentBridge:
    def __init__(self, state: FormState, dispatch: Callable[[Action], None]) -> None:
        self._state = state
        self._dispatch = dispatch
        self._client: AssistantClient | None = None

    @property
    def attached(self) -> bool:
        return self._client is not None

    @property
    def client(self) -> AssistantClient | None:
        return self._client

    def attach(self, factory: ClientFactory) -> bool:
        """Create the runtime connection and subscribe to its events.

        Any failure leaves the bridge detached; the core keeps working.
        """
        try:
            client = factory()
        except Exception as exc:
            logger.warning("Failed to initialize assistant: %s", exc)
            return False
        if client is None:
            return False

        try:
            client.on("data", self._on_data)
            client.on("start", self._on_start)
            client.on("command", self._on_command)
            client.on("error", self._on_error)
        except Exception as exc:
            logger.warning("Error setting up assistant: %s", exc)
            return False

        self._client = client
        logger.info("Assistant attached: %s", type(client).__name__)
        return True

    def get_snapshot(self) -> dict[str, Any]:
        snapshot = AssistantAppState(calculator_state=self._state.snapshot())
        return snapshot.model_dump(mode="json", by_alias=True)

    def deliver(self, event_name: str, event: Mapping[str, Any]) -> bool:
        """Push an inbound runtime notification through the connection."""
        if self._client is None:
            logger.debug("Assistant not attached, dropping %s event", event_name)
            return False
        try:
            self._client.deliver(event_name, dict(event))
        except Exception as exc:
            logger.warning("Error handling assistant %s event: %s", event_name, exc)
            return False
        return True

    def send(self, action_id: str, value: str) -> None:
        """Fire-and-forget confirmation to the runtime."""
        if self._client is None:
            logger.debug("Assistant not attached, skipping send of %s", action_id)
            return
        data = AssistantSendData(
            action=OutboundAction(action_id=action_id, parameters=ActionParameters(value=value))
        )
        try:
            self._client.send_data(data.model_dump(), self._on_reply)
        except Exception as exc:
            logger.warning("Error sending action to assistant: %s", exc)

    async def aclose(self) -> None:
        client, self._client = self._client, None
        if client is None:
            return
        try:
            await client.aclose()
        except Exception as exc:
            logger.warning("Error closing assistant connection: %s", exc)

    # -- inbound handlers ----------------------------------------------------

    def _on_data(self, raw: dict[str, Any]) -> None:
        event = self._parse(raw)
        if event is None:
            return
        if event.type == "character":
            logger.debug("assistant data: character %r", (event.character or {}).get("id"))
        elif event.type == "insets":
            logger.debug("assistant data: insets")
        elif event.action is not None:
            self._dispatch(event.action)
        else:
            logger.debug("assistant data: %r", raw)

    def _on_command(self, raw: dict[str, Any]) -> None:
        event = self._parse(raw)
        if event is not None and event.action is not None:
            self._dispatch(event.action)
        else:
            logger.debug("assistant command: %r", raw)

    def _on_start(self, raw: dict[str, Any]) -> None:
        logger.info("assistant start: %r", raw)
        if self._client is None:
            return
        try:
            logger.debug("assistant initial data: %r", self._client.get_initial_data())
        except Exception as exc:
            logger.warning("Could not get initial data: %s", exc)

    def _on_error(self, raw: dict[str, Any]) -> None:
        logger.warning("assistant error: %r", raw)

    def _on_reply(self, reply: dict[str, Any]) -> None:
        logger.debug("sendData onData: %s %r", reply.get("type"), reply.get("payload"))

    @staticmethod
    def _parse(raw: dict[str, Any]) -> AssistantEvent | None:
        try:
            return AssistantEvent.model_validate(raw)
        except ValidationError:
            logger.warning("Ignoring malformed assistant event: %r", raw)
            return None
