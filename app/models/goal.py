"""Pydantic models for user goals."""
from datetime import datetime
from typing import Literal, Optional

from pydantic import Field

from app.models.health_data import CamelModel

GoalType = Literal["weight", "steps", "sleep", "exercise", "water", "bloodPressure", "bloodSugar"]
GoalStatus = Literal["active", "completed", "abandoned"]


class GoalIn(CamelModel):
    type: GoalType
    target_value: float
    # Baseline for weight-like goals, latest progress for the others
    current_value: float = 0
    deadline: Optional[datetime] = None
    status: GoalStatus = "active"


class Goal(GoalIn):
    id: str
    user_id: str
    created_at: datetime


class GoalUpdate(CamelModel):
    target_value: Optional[float] = None
    current_value: Optional[float] = None
    deadline: Optional[datetime] = None
    status: Optional[GoalStatus] = None


class GoalProgress(CamelModel):
    goal: Goal
    progress: float = Field(..., ge=0, le=100)
    message: str
