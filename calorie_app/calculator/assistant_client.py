"""Conversational runtime connection.

The runtime pulls state through ``GET /assistant/state`` and pushes
notifications through ``POST /assistant/events/{name}``; outbound
confirmations are POSTed to its webhook. ``AgentBridge`` is the only caller.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Protocol

import httpx

from calorie_app.config import Settings

logger = logging.getLogger(__name__)

EventHandler = Callable[[dict[str, Any]], None]
ReplyHandler = Callable[[dict[str, Any]], None]

EVENT_NAMES = ("command", "data", "start", "error")


class AssistantUnavailable(Exception):
    """The runtime connection cannot be used right now."""


class AssistantClient(Protocol):
    def on(self, event_name: str, handler: EventHandler) -> None: ...

    def deliver(self, event_name: str, event: dict[str, Any]) -> int: ...

    def send_data(self, data: dict[str, Any], on_data: ReplyHandler | None = None) -> None: ...

    def get_initial_data(self) -> dict[str, Any] | None: ...

    async def aclose(self) -> None: ...


class WebhookAssistantClient:
    """Runtime connection over plain HTTP.

    ``send_data`` never blocks the caller: the POST runs as a task on the
    current event loop and its reply is handed to ``on_data``.
    """

    def __init__(
        self,
        webhook_url: str,
        *,
        token: str | None = None,
        timeout_s: float = 5.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._url = webhook_url
        self._handlers: dict[str, list[EventHandler]] = {}
        self._initial_data: dict[str, Any] | None = None
        self._tasks: set[asyncio.Task[None]] = set()
        self._owns_http = http_client is None
        self._headers = {"Authorization": f"Bearer {token}"} if token else {}
        self._http = http_client or httpx.AsyncClient(timeout=httpx.Timeout(timeout_s))

    def on(self, event_name: str, handler: EventHandler) -> None:
        if event_name not in EVENT_NAMES:
            raise ValueError(f"Unknown assistant event: {event_name}")
        self._handlers.setdefault(event_name, []).append(handler)

    def deliver(self, event_name: str, event: dict[str, Any]) -> int:
        """Hand an inbound notification to registered handlers. Returns handler count."""
        if event_name == "start":
            self._initial_data = event.get("payload") or {}
        handlers = self._handlers.get(event_name, [])
        for handler in handlers:
            handler(event)
        return len(handlers)

    def get_initial_data(self) -> dict[str, Any] | None:
        return self._initial_data

    def send_data(self, data: dict[str, Any], on_data: ReplyHandler | None = None) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError as exc:
            raise AssistantUnavailable("no running event loop") from exc
        task = loop.create_task(self._post(data, on_data))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def flush(self) -> None:
        """Wait for every in-flight send to finish."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def aclose(self) -> None:
        for task in list(self._tasks):
            task.cancel()
        await self.flush()
        if self._owns_http:
            await self._http.aclose()

    async def _post(self, data: dict[str, Any], on_data: ReplyHandler | None) -> None:
        try:
            resp = await self._http.post(self._url, json=data, headers=self._headers)
            resp.raise_for_status()
        except httpx.HTTPError as exc:
            logger.warning("Assistant delivery failed: %s", exc)
            return

        if on_data is None:
            return
        try:
            reply = resp.json() if resp.content else {}
        except ValueError:
            reply = {}
        try:
            on_data(reply if isinstance(reply, dict) else {"payload": reply})
        except Exception:
            logger.exception("Assistant reply handler failed")


def initialize_assistant(settings: Settings) -> AssistantClient | None:
    """Build the runtime connection, or None when no assistant is configured."""
    if not settings.assistant_enabled:
        logger.info("Assistant disabled by configuration")
        return None
    if not settings.assistant_webhook_url:
        logger.info("No assistant webhook configured, running without assistant")
        return None
    return WebhookAssistantClient(
        settings.assistant_webhook_url,
        token=settings.assistant_token,
        timeout_s=settings.assistant_timeout_seconds,
    )
