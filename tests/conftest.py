"""Shared fixtures for the test suite."""

from __future__ import annotations

from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from calorie_app.calculator.session import CalculatorSession, get_calculator
from calorie_app.main import app


# ---------------------------------------------------------------------------
# Fake assistant runtime (no network needed)
# ---------------------------------------------------------------------------

class FakeAssistantClient:
    """In-memory stand-in for the runtime connection."""

    def __init__(self, initial_data: dict[str, Any] | None = None):
        self.handlers: dict[str, list] = {}
        self.sent: list[dict[str, Any]] = []
        self.initial_data = initial_data or {}
        self.closed = False

    def on(self, event_name, handler):
        self.handlers.setdefault(event_name, []).append(handler)

    def deliver(self, event_name, event):
        handlers = self.handlers.get(event_name, [])
        for handler in handlers:
            handler(event)
        return len(handlers)

    def send_data(self, data, on_data=None):
        self.sent.append(data)
        if on_data is not None:
            on_data({"type": "ack", "payload": None})

    def get_initial_data(self):
        return self.initial_data

    async def aclose(self):
        self.closed = True

    def sent_values(self, action_id: str) -> list[str]:
        return [
            d["action"]["parameters"]["value"]
            for d in self.sent
            if d["action"]["action_id"] == action_id
        ]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def calculator():
    """A calculator session with no assistant attached."""
    return CalculatorSession()


@pytest.fixture()
def fake_assistant():
    return FakeAssistantClient()


@pytest.fixture()
def assisted_calculator(calculator, fake_assistant):
    assert calculator.bridge.attach(lambda: fake_assistant)
    return calculator


@pytest.fixture()
def override_calculator(assisted_calculator):
    """Override the FastAPI dependency so no lifespan is needed."""
    app.dependency_overrides[get_calculator] = lambda: assisted_calculator
    yield assisted_calculator
    app.dependency_overrides.clear()


@pytest.fixture()
async def client(override_calculator):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
