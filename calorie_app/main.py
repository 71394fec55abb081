import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from calorie_app.calculator.assistant_router import router as assistant_router
from calorie_app.calculator.router import router as calculator_router
from calorie_app.calculator.session import create_session
from calorie_app.config import settings
from calorie_app.logging_config import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    configure_logging(settings)
    app.state.calculator = create_session(settings)
    logger.info("Calculator ready (environment=%s)", settings.environment)
    try:
        yield
    finally:
        await app.state.calculator.aclose()
        logger.info("Calculator shut down")


app = FastAPI(title="CalorieCalculator", version="0.1.0", lifespan=lifespan)
app.include_router(calculator_router)
app.include_router(assistant_router)


@app.get("/")
async def root() -> dict:
    return {
        "status": "ok",
        "docs": "/docs",
        "health": "/health",
        "calculator": {
            "state": "/calculator/state",
            "form": "/calculator/form",
            "calculate": "/calculator/calculate",
            "actions": "/calculator/actions",
        },
        "assistant": {
            "state": "/assistant/state",
            "events": "/assistant/events/{name}",
        },
    }


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
