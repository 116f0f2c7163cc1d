"""Alerts, recommendations and dashboard window summaries.

Everything here is recomputed from the stored metrics on each request;
nothing is cached or persisted.
"""
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.api.deps import get_health_service, get_user_id
from app.models.insights import Insights, MonthlySummary, WeeklySummary
from app.services import time_utils
from app.services.health_service import HealthService

router = APIRouter(prefix="/insights", tags=["insights"])


@router.get("/", response_model=Insights)
def get_insights(
    uid: str = Depends(get_user_id),
    service: HealthService = Depends(get_health_service),
):
    return service.insights(uid)


@router.get("/weekly", response_model=WeeklySummary)
def get_weekly(
    week_start: Optional[date] = Query(None, description="Any day of the week; defaults to today"),
    uid: str = Depends(get_user_id),
    service: HealthService = Depends(get_health_service),
):
    return service.weekly(uid, week_start or time_utils.today_utc())


@router.get("/monthly", response_model=MonthlySummary)
def get_monthly(
    month_start: Optional[date] = Query(None, description="Any day of the month; defaults to today"),
    uid: str = Depends(get_user_id),
    service: HealthService = Depends(get_health_service),
):
    return service.monthly(uid, month_start or time_utils.today_utc())
