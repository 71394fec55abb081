"""Calculator contracts — Pydantic v2 models.

Wire names follow the camelCase keys the rendering layer and the
conversational runtime expect (``formData``, ``weightBasedRange`` ...).
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Gender(str, Enum):
    male = "male"
    female = "female"


class Goal(str, Enum):
    lose = "lose"
    maintain = "maintain"
    gain = "gain"


class FormData(BaseModel):
    """Current calculator inputs. Immutable; every edit produces a new instance."""

    model_config = ConfigDict(frozen=True)

    gender: Gender = Gender.male
    age: int = Field(default=25, gt=0, le=120)
    height: int = Field(default=170, ge=50, le=250)  # cm
    weight: int = Field(default=70, ge=20, le=300)  # kg
    goal: Goal = Goal.maintain

    @field_validator("age", "height", "weight", mode="before")
    @classmethod
    def _reject_bool(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("boolean is not a number")
        return value


class CalorieRange(BaseModel):
    model_config = ConfigDict(frozen=True)

    min: float
    max: float


class Results(BaseModel):
    """Full-precision calculation output, replaced wholesale on every calculate."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    mifflin: float
    harris: float
    weight_based_range: CalorieRange = Field(alias="weightBasedRange")
    protein: float  # g/day
    fats: float  # g/day
    carbs: float  # g/day


class Action(BaseModel):
    """Inbound command envelope from either controller."""

    type: str
    payload: Any = None


class CalculatorState(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    form_data: FormData = Field(alias="formData")
    results: Results | None = None


class AssistantAppState(BaseModel):
    """Snapshot handed to the conversational runtime."""

    calculator_state: CalculatorState


class ActionParameters(BaseModel):
    value: str


class OutboundAction(BaseModel):
    action_id: str
    parameters: ActionParameters


class AssistantSendData(BaseModel):
    """Confirmation envelope sent to the conversational runtime."""

    action: OutboundAction


class AssistantEvent(BaseModel):
    """Inbound runtime notification. Unknown keys are kept."""

    model_config = ConfigDict(extra="allow")

    type: str | None = None
    action: Action | None = None
    character: dict[str, Any] | None = None
    insets: dict[str, Any] | None = None
    payload: Any = None


class ResultsDisplay(BaseModel):
    """Rounded values for the presentation layer."""

    mifflin: int
    harris: int
    range_min: int
    range_max: int
    protein: int
    fats: int
    carbs: int


class CalculatorView(BaseModel):
    """Everything the rendering layer reads."""

    model_config = ConfigDict(populate_by_name=True)

    form_data: FormData = Field(alias="formData")
    results: Results | None = None
    feedback_message: str | None = Field(default=None, alias="feedbackMessage")
    display: ResultsDisplay | None = None
