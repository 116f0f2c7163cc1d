"""Conversions between stored documents and the in-memory models.

Firestore hands back timestamps as ``DatetimeWithNanoseconds`` (or a
protobuf ``Timestamp`` on some transports); the local fallback store keeps
ISO-8601 strings. Every ``*_from_document`` function here is total: missing
or oddly typed optional fields are dropped, never raised on. A record whose
required fields cannot be recovered comes back as ``None`` and callers skip
it.
"""
from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Any, Dict, Optional, get_args

from pydantic.alias_generators import to_camel

from app.models.goal import Goal, GoalIn, GoalStatus, GoalType, GoalUpdate
from app.models.health_data import READING_FIELDS, HealthMetric, HealthMetricIn, MetricSource
from app.models.profile import ActivityLevel, UserProfile

METRIC_SOURCES = set(get_args(MetricSource))
GOAL_TYPES = set(get_args(GoalType))
GOAL_STATUSES = set(get_args(GoalStatus))
ACTIVITY_LEVELS = set(get_args(ActivityLevel))
GENDERS = {"male", "female", "other"}

# python attribute -> stored key, e.g. heart_rate -> heartRate
READING_KEYS = {name: to_camel(name) for name in READING_FIELDS}


# -------------------------
# Scalars
# -------------------------
def ensure_aware(dt: datetime) -> datetime:
    """Naive datetimes are taken to be UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def to_datetime(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return ensure_aware(value)
    # protobuf Timestamp
    if hasattr(value, "ToDatetime"):
        try:
            return ensure_aware(value.ToDatetime())
        except (TypeError, ValueError, OverflowError):
            return None
    # Timestamp wrappers exposing .datetime
    inner = getattr(value, "datetime", None)
    if isinstance(inner, datetime):
        return ensure_aware(inner)
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return ensure_aware(datetime.fromisoformat(text))
        except ValueError:
            return None
    if isinstance(value, (int, float)):
        seconds = value / 1000.0 if abs(value) > 1e11 else value
        try:
            return datetime.fromtimestamp(seconds, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    return None


def to_number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def _clean_readings(data: Dict[str, Any]) -> Dict[str, Any]:
    readings: Dict[str, Any] = {}
    for name, key in READING_KEYS.items():
        number = to_number(data.get(key))
        if number is None:
            continue
        readings[name] = int(round(number)) if name == "steps" else number
    return readings


# -------------------------
# Metrics
# -------------------------
def metric_payload(user_id: str, metric: HealthMetricIn, now: Optional[datetime] = None) -> Dict[str, Any]:
    """Only the fields the caller actually set, plus owner and timestamp."""
    data = metric.model_dump(by_alias=True, exclude_unset=True)
    data["userId"] = user_id
    data["date"] = ensure_aware(metric.date or now or datetime.now(timezone.utc))
    return data


def metric_to_document(user_id: str, metric: HealthMetricIn, now: Optional[datetime] = None) -> Dict[str, Any]:
    # Firestore stores the datetime as its native Timestamp
    return metric_payload(user_id, metric, now)


def metric_to_local(
    metric_id: str, user_id: str, metric: HealthMetricIn, now: Optional[datetime] = None
) -> Dict[str, Any]:
    data = metric_payload(user_id, metric, now)
    data["date"] = data["date"].isoformat()
    return {"id": metric_id, **data}


def metric_from_document(doc_id: Any, data: Dict[str, Any], user_id: Optional[str] = None) -> Optional[HealthMetric]:
    if not isinstance(data, dict):
        return None
    when = to_datetime(data.get("date"))
    metric_id = doc_id if doc_id is not None else data.get("id")
    if when is None or metric_id is None:
        return None

    fields: Dict[str, Any] = _clean_readings(data)
    notes = data.get("notes")
    if notes is not None:
        fields["notes"] = str(notes)
    source = data.get("source")
    if source in METRIC_SOURCES:
        fields["source"] = source

    return HealthMetric(
        id=str(metric_id),
        user_id=str(data.get("userId") or user_id or ""),
        date=when,
        **fields,
    )


# -------------------------
# Goals
# -------------------------
def goal_to_document(user_id: str, goal: GoalIn, created_at: datetime) -> Dict[str, Any]:
    data = goal.model_dump(by_alias=True, exclude_unset=True)
    # Defaults are part of the record even when the caller left them out
    data.setdefault("currentValue", goal.current_value)
    data.setdefault("status", goal.status)
    if goal.deadline is not None:
        data["deadline"] = ensure_aware(goal.deadline)
    else:
        data.pop("deadline", None)
    data["userId"] = user_id
    data["createdAt"] = ensure_aware(created_at)
    return data


def goal_to_local(goal_id: str, user_id: str, goal: GoalIn, created_at: datetime) -> Dict[str, Any]:
    data = goal_to_document(user_id, goal, created_at)
    data["createdAt"] = data["createdAt"].isoformat()
    if "deadline" in data:
        data["deadline"] = data["deadline"].isoformat()
    return {"id": goal_id, **data}


def goal_update_to_document(updates: GoalUpdate) -> Dict[str, Any]:
    data = updates.model_dump(by_alias=True, exclude_unset=True)
    if data.get("deadline") is not None:
        data["deadline"] = ensure_aware(data["deadline"])
    return data


def goal_update_to_local(updates: GoalUpdate) -> Dict[str, Any]:
    data = goal_update_to_document(updates)
    if data.get("deadline") is not None:
        data["deadline"] = data["deadline"].isoformat()
    return data


def goal_from_document(doc_id: Any, data: Dict[str, Any], user_id: Optional[str] = None) -> Optional[Goal]:
    if not isinstance(data, dict):
        return None
    goal_type = data.get("type")
    created_at = to_datetime(data.get("createdAt"))
    goal_id = doc_id if doc_id is not None else data.get("id")
    if goal_type not in GOAL_TYPES or created_at is None or goal_id is None:
        return None

    status = data.get("status")
    return Goal(
        id=str(goal_id),
        user_id=str(data.get("userId") or user_id or ""),
        type=goal_type,
        target_value=to_number(data.get("targetValue")) or 0.0,
        current_value=to_number(data.get("currentValue")) or 0.0,
        deadline=to_datetime(data.get("deadline")),
        created_at=created_at,
        status=status if status in GOAL_STATUSES else "active",
    )


# -------------------------
# Profile
# -------------------------
def profile_to_document(user_id: str, profile: UserProfile) -> Dict[str, Any]:
    data = profile.model_dump(by_alias=True, exclude_unset=True)
    data["userId"] = user_id
    return data


def profile_from_document(data: Dict[str, Any], user_id: Optional[str] = None) -> Optional[UserProfile]:
    if not isinstance(data, dict):
        return None

    fields: Dict[str, Any] = {}
    for name in ("height", "current_weight", "target_weight"):
        number = to_number(data.get(to_camel(name)))
        if number is not None:
            fields[name] = number
    age = to_number(data.get("age"))
    if age is not None:
        fields["age"] = int(age)
    if data.get("gender") in GENDERS:
        fields["gender"] = data["gender"]
    if data.get("activityLevel") in ACTIVITY_LEVELS:
        fields["activity_level"] = data["activityLevel"]
    conditions = data.get("medicalConditions")
    if isinstance(conditions, str):
        conditions = [conditions]
    if isinstance(conditions, list):
        fields["medical_conditions"] = [str(c) for c in conditions if c is not None]

    return UserProfile(user_id=str(data.get("userId") or user_id or "") or None, **fields)
