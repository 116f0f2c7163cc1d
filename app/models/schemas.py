from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, EmailStr

from app.models.health_data import CamelModel
from app.models.insights import Alert, Recommendation


class WearableSummary(CamelModel):
    total_steps: float
    avg_sleep: float
    avg_weight: float


class ReportRange(BaseModel):
    start: Optional[datetime] = None
    end: Optional[datetime] = None


class ReportRequest(BaseModel):
    to: Optional[EmailStr] = None
    summary: Optional[str] = None
    recommendations: List[Recommendation] = []
    anomalies: List[Alert] = []
    range: Optional[ReportRange] = None


class ImportResult(CamelModel):
    provider: str
    imported_count: int
