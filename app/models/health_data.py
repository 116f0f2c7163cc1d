"""Pydantic models for health metric records.

Stored documents use camelCase keys (``bloodPressureSystolic``,
``waterIntake``...) in both Firestore and the local fallback store, so
every model here serializes by alias.
"""
from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

MetricSource = Literal["manual", "google-fit", "fitbit", "apple-health"]

# Numeric readings a record may carry, by python attribute name
READING_FIELDS = (
    "blood_pressure_systolic",
    "blood_pressure_diastolic",
    "heart_rate",
    "weight",
    "blood_sugar",
    "sleep",
    "steps",
    "water_intake",
    "exercise",
    "calories",
    "mood",
)


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class HealthMetricIn(CamelModel):
    """A partial metric as submitted by the client or an importer."""

    date: Optional[datetime] = Field(None, description="Defaults to now")

    # Vitals
    blood_pressure_systolic: Optional[float] = None
    blood_pressure_diastolic: Optional[float] = None
    heart_rate: Optional[float] = None
    blood_sugar: Optional[float] = None

    # Body / lifestyle
    weight: Optional[float] = None
    sleep: Optional[float] = Field(None, ge=0, le=24)
    steps: Optional[int] = Field(None, ge=0)
    water_intake: Optional[float] = None
    exercise: Optional[float] = Field(None, description="Minutes of exercise")
    calories: Optional[float] = None
    mood: Optional[float] = None

    notes: Optional[str] = None
    source: Optional[MetricSource] = None


class HealthMetric(HealthMetricIn):
    id: str
    user_id: str
    date: datetime
