"""Health metric routes.

Users log partial vitals; every reading is optional. Records are never
edited in place, only created and deleted.
"""
from typing import List

from fastapi import APIRouter, Body, Depends

from app.api.deps import get_health_service, get_user_id
from app.models.health_data import HealthMetric, HealthMetricIn
from app.services.health_service import HealthService

router = APIRouter(prefix="/metrics", tags=["metrics"])


@router.post("/", status_code=201, response_model=HealthMetric, response_model_exclude_none=True)
def create_metric(
    payload: HealthMetricIn = Body(...),
    uid: str = Depends(get_user_id),
    service: HealthService = Depends(get_health_service),
):
    return service.save_record(uid, payload)


@router.get("/", response_model=List[HealthMetric], response_model_exclude_none=True)
def list_metrics(
    uid: str = Depends(get_user_id),
    service: HealthService = Depends(get_health_service),
):
    """Most recent first."""
    return service.list_records(uid)


@router.delete("/{metric_id}", status_code=204)
def delete_metric(
    metric_id: str,
    uid: str = Depends(get_user_id),
    service: HealthService = Depends(get_health_service),
):
    service.delete_record(uid, metric_id)


@router.post("/sample")
def seed_sample_metrics(
    uid: str = Depends(get_user_id),
    service: HealthService = Depends(get_health_service),
):
    """Backfill 30 days of sample data when the user has no metrics yet."""
    created = service.seed_sample_data(uid)
    return {"created": created}
