"""Transient analytics results: alerts, recommendations and window summaries.

None of these are persisted; they are recomputed from the metric list on
every read.
"""
from datetime import date, datetime
from typing import List, Literal, Optional

from app.models.health_data import CamelModel

Severity = Literal["critical", "warning", "info"]
Priority = Literal["high", "medium", "low"]


class Alert(CamelModel):
    id: str
    type: Severity
    metric: str
    message: str
    date: datetime
    read: bool = False


class Recommendation(CamelModel):
    id: str
    category: str
    title: str
    description: str
    priority: Priority


class Insights(CamelModel):
    alerts: List[Alert]
    recommendations: List[Recommendation]


class DailyAverages(CamelModel):
    day: str
    date: date
    steps: Optional[float] = None
    sleep: Optional[float] = None
    weight: Optional[float] = None
    heart_rate: Optional[float] = None


class WeeklySummary(CamelModel):
    week_start: date
    week_end: date
    days: List[DailyAverages]
    total_steps: float
    avg_sleep: float
    avg_heart_rate: float
    entries_logged: int


class WeekAverages(CamelModel):
    week: str
    start: date
    weight: Optional[float] = None
    blood_pressure: Optional[float] = None
    blood_sugar: Optional[float] = None
    sleep: Optional[float] = None
    steps: Optional[float] = None


class MonthlySummary(CamelModel):
    month_start: date
    month_end: date
    weeks: List[WeekAverages]
    avg_weight: float
    avg_bp: float
    avg_sleep: float
    entries_logged: int
