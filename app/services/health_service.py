"""Health-related business logic.

Stores and queries a user's metrics through the storage backend and
derives alerts, recommendations and window summaries from them on every
read.
"""
from datetime import date
from typing import List

from app.models.health_data import HealthMetric, HealthMetricIn
from app.models.insights import Insights, MonthlySummary, WeeklySummary
from app.services import time_utils
from app.services.anomaly_detector import detect_anomalies
from app.services.logger import log_debug
from app.services.recommendations import generate_recommendations
from app.services.sample_data import seed_sample_data
from app.services.storage import StorageBackend


def build_insights(metrics: List[HealthMetric]) -> Insights:
    alerts = detect_anomalies(metrics)
    recommendations = generate_recommendations(metrics, alerts)
    return Insights(alerts=alerts, recommendations=recommendations)


class HealthService:
    def __init__(self, storage: StorageBackend):
        self.storage = storage

    def save_record(self, user_id: str, metric: HealthMetricIn) -> HealthMetric:
        return self.storage.save_metric(user_id, metric)

    def list_records(self, user_id: str) -> List[HealthMetric]:
        return self.storage.list_metrics(user_id)

    def delete_record(self, user_id: str, metric_id: str) -> None:
        self.storage.delete_metric(user_id, metric_id)

    def seed_sample_data(self, user_id: str) -> int:
        return seed_sample_data(self.storage, user_id)

    def insights(self, user_id: str) -> Insights:
        metrics = self.list_records(user_id)
        result = build_insights(metrics)
        log_debug("insights", {
            "uid": user_id,
            "metrics": len(metrics),
            "alerts": [a.id for a in result.alerts],
            "recommendations": [r.id for r in result.recommendations],
        })
        return result

    def weekly(self, user_id: str, week_start: date) -> WeeklySummary:
        return time_utils.weekly_summary(self.list_records(user_id), week_start)

    def monthly(self, user_id: str, month_start: date) -> MonthlySummary:
        return time_utils.monthly_summary(self.list_records(user_id), month_start)
