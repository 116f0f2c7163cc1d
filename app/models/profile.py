"""Pydantic model for the per-user physiological profile.

One document per user; written by merge so partial updates keep the
fields they do not mention.
"""
from typing import List, Literal, Optional

from app.models.health_data import CamelModel

ActivityLevel = Literal["sedentary", "light", "moderate", "active", "very-active"]


class UserProfile(CamelModel):
    user_id: Optional[str] = None
    height: Optional[float] = None
    current_weight: Optional[float] = None
    target_weight: Optional[float] = None
    age: Optional[int] = None
    gender: Optional[Literal["male", "female", "other"]] = None
    activity_level: Optional[ActivityLevel] = None
    medical_conditions: Optional[List[str]] = None
