"""Threshold and trend checks over a user's metric history.

Only the most recent record is compared against the reference ranges; the
trend check compares the mean systolic pressure of the latest seven
records with the seven before them.
"""
from __future__ import annotations

import time
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from app.models.health_data import HealthMetric
from app.models.insights import Alert

TREND_WINDOW = 7
TREND_THRESHOLD = 15


@dataclass(frozen=True)
class MetricRange:
    min: float
    max: float
    critical_min: float
    critical_max: float


# Illustrative adult reference ranges, not clinical guidance
METRIC_RANGES = {
    "blood_pressure_systolic": MetricRange(min=90, max=120, critical_min=70, critical_max=180),
    "blood_pressure_diastolic": MetricRange(min=60, max=80, critical_min=40, critical_max=120),
    "heart_rate": MetricRange(min=60, max=100, critical_min=40, critical_max=140),
    "blood_sugar": MetricRange(min=70, max=140, critical_min=50, critical_max=200),
}


def _alert_id(category: str) -> str:
    return f"alert-{category}-{int(time.time() * 1000)}-{uuid.uuid4().hex[:6]}"


def _fmt(value: float) -> str:
    return f"{value:g}"


def _reading(metric: HealthMetric, field: str) -> Optional[float]:
    # 0 counts as "not recorded"
    value = getattr(metric, field)
    return value if value else None


def calculate_average(metrics: Sequence[HealthMetric], field: str) -> Optional[float]:
    """Mean of ``field`` over the records that carry it, None when none do."""
    values = [getattr(m, field) for m in metrics if getattr(m, field) is not None]
    if not values:
        return None
    return sum(values) / len(values)


def _check_blood_pressure(latest: HealthMetric) -> Optional[Alert]:
    systolic = _reading(latest, "blood_pressure_systolic")
    diastolic = _reading(latest, "blood_pressure_diastolic")
    if systolic is None or diastolic is None:
        return None

    sys_range = METRIC_RANGES["blood_pressure_systolic"]
    dia_range = METRIC_RANGES["blood_pressure_diastolic"]
    reading = f"{_fmt(systolic)}/{_fmt(diastolic)} mmHg"

    if systolic > sys_range.critical_max or diastolic > dia_range.critical_max:
        severity, category = "critical", "bp"
        message = f"Critical: Blood pressure {reading} is dangerously high. Seek medical attention."
    elif systolic > sys_range.max or diastolic > dia_range.max:
        severity, category = "warning", "bp"
        message = f"Warning: Blood pressure {reading} is elevated. Consider consulting your doctor."
    elif systolic < sys_range.critical_min or diastolic < dia_range.critical_min:
        severity, category = "critical", "bp-low"
        message = f"Critical: Blood pressure {reading} is dangerously low. Seek medical attention."
    else:
        return None

    return Alert(
        id=_alert_id(category),
        type=severity,
        metric="Blood Pressure",
        message=message,
        date=latest.date,
    )


def _check_heart_rate(latest: HealthMetric) -> Optional[Alert]:
    hr = _reading(latest, "heart_rate")
    if hr is None:
        return None

    hr_range = METRIC_RANGES["heart_rate"]
    if hr > hr_range.critical_max or hr < hr_range.critical_min:
        severity = "critical"
        message = f"Critical: Heart rate {_fmt(hr)} bpm is outside safe range. Seek medical attention."
    elif hr > hr_range.max or hr < hr_range.min:
        severity = "warning"
        message = f"Warning: Heart rate {_fmt(hr)} bpm is unusual. Monitor closely."
    else:
        return None

    return Alert(id=_alert_id("hr"), type=severity, metric="Heart Rate", message=message, date=latest.date)


def _check_blood_sugar(latest: HealthMetric) -> Optional[Alert]:
    bs = _reading(latest, "blood_sugar")
    if bs is None:
        return None

    bs_range = METRIC_RANGES["blood_sugar"]
    if bs > bs_range.critical_max or bs < bs_range.critical_min:
        severity = "critical"
        message = f"Critical: Blood sugar {_fmt(bs)} mg/dL is at dangerous levels. Take immediate action."
    elif bs > bs_range.max:
        severity = "warning"
        message = f"Warning: Blood sugar {_fmt(bs)} mg/dL is elevated. Check your diet and medication."
    elif bs < bs_range.min:
        severity = "warning"
        message = f"Warning: Blood sugar {_fmt(bs)} mg/dL is low. Consider eating something."
    else:
        return None

    return Alert(id=_alert_id("bs"), type=severity, metric="Blood Sugar", message=message, date=latest.date)


def _check_bp_trend(metrics: Sequence[HealthMetric]) -> Optional[Alert]:
    if len(metrics) <= TREND_WINDOW:
        return None

    recent = calculate_average(metrics[:TREND_WINDOW], "blood_pressure_systolic")
    previous = calculate_average(metrics[TREND_WINDOW:2 * TREND_WINDOW], "blood_pressure_systolic")
    if not recent or not previous:
        return None
    if abs(recent - previous) <= TREND_THRESHOLD:
        return None

    return Alert(
        id=_alert_id("trend-bp"),
        type="info",
        metric="Blood Pressure Trend",
        message="Notice: Significant change in blood pressure trend detected over the past week.",
        date=datetime.now(timezone.utc),
    )


def detect_anomalies(metrics: Sequence[HealthMetric]) -> List[Alert]:
    """
    ``metrics`` must be ordered most recent first, as the stores return them.
    """
    if not metrics:
        return []

    latest = metrics[0]
    checks = (
        _check_blood_pressure(latest),
        _check_heart_rate(latest),
        _check_blood_sugar(latest),
        _check_bp_trend(metrics),
    )
    return [alert for alert in checks if alert is not None]
