"""
Mock wearable providers.

Each provider returns a fixed, hand-written seven-day payload after a short
artificial delay. There is no randomness and no real device connection.
"""
from __future__ import annotations

import asyncio
import csv
import io
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Literal, Optional

from app.core.config import settings
from app.core.exceptions import UnknownProviderError
from app.models.health_data import HealthMetricIn
from app.models.schemas import WearableSummary
from app.services.storage import StorageBackend

logger = logging.getLogger(__name__)

WearableProvider = Literal["google-fit", "fitbit", "apple-health"]

WEARABLE_PROVIDER_LABELS = {
    "google-fit": "Google Fit",
    "fitbit": "Fitbit",
    "apple-health": "Apple Health",
}

# (attribute, header)
CSV_COLUMNS = (
    ("date", "Date"),
    ("source", "Source"),
    ("steps", "Steps"),
    ("sleep", "Sleep (hrs)"),
    ("weight", "Weight (lbs)"),
    ("heart_rate", "Heart Rate (bpm)"),
    ("blood_pressure_systolic", "Systolic"),
    ("blood_pressure_diastolic", "Diastolic"),
    ("blood_sugar", "Blood Sugar"),
    ("exercise", "Exercise (mins)"),
    ("calories", "Calories"),
    ("water_intake", "Water Intake (oz)"),
    ("mood", "Mood"),
    ("notes", "Notes"),
)

_PAYLOAD_FIELDS = ("days_ago", "steps", "sleep", "weight", "heart_rate",
                   "blood_pressure_systolic", "blood_pressure_diastolic",
                   "exercise", "calories", "notes")


def _rows(*rows) -> List[Dict[str, Any]]:
    return [dict(zip(_PAYLOAD_FIELDS, row)) for row in rows]


SAMPLE_DATA: Dict[str, List[Dict[str, Any]]] = {
    "google-fit": _rows(
        (6, 10452, 7.1, 169.3, 68, 118, 76, 45, 2150, "Morning run with interval training."),
        (5, 9820, 6.8, 169.1, 70, 120, 78, 35, 2050, "Strength training and yoga cooldown."),
        (4, 12340, 7.6, 168.8, 65, 117, 75, 50, 2250, "Cycling commute and evening walk."),
        (3, 8734, 6.2, 168.9, 71, 121, 79, 25, 1980, None),
        (2, 11012, 7.8, 168.6, 66, 116, 74, 40, 2105, "Long hike day with hills."),
        (1, 9520, 6.9, 168.5, 69, 119, 77, 30, 2020, None),
        (0, 11480, 7.4, 168.2, 67, 118, 76, 55, 2200, "Tempo run with stretching routine."),
    ),
    "fitbit": _rows(
        (6, 12780, 7.4, 172.1, 64, 116, 73, 60, 2350, "Morning HIIT session and lunchtime walk."),
        (5, 11892, 6.5, 172, 66, 118, 74, 35, 2210, "Office day with evening spin class."),
        (4, 14234, 7.9, 171.6, 63, 115, 72, 70, 2450, "Long trail run with elevation gains."),
        (3, 10112, 6.1, 171.8, 67, 119, 75, 25, 2080, None),
        (2, 13405, 7.2, 171.2, 65, 117, 73, 55, 2285, "Rowing workout and yoga recovery."),
        (1, 9634, 6.8, 171, 68, 120, 76, 30, 2140, None),
        (0, 13988, 7.6, 170.9, 62, 114, 71, 65, 2380, "Brick workout ahead of triathlon prep."),
    ),
    "apple-health": _rows(
        (6, 9804, 7.9, 158.4, 59, 112, 70, 40, 1980, "Guided meditation and light jog."),
        (5, 10221, 8.1, 158.3, 58, 111, 69, 50, 2055, "Pilates session and evening walk."),
        (4, 11560, 7.4, 158.2, 60, 113, 70, 60, 2120, "Pool laps with interval sprints."),
        (3, 8720, 6.7, 158.4, 62, 115, 72, 30, 1885, None),
        (2, 12210, 7.6, 158, 57, 110, 68, 55, 2075, "Outdoor cycling with friends."),
        (1, 9350, 7.2, 157.9, 61, 112, 69, 35, 1940, None),
        (0, 12840, 7.8, 157.7, 58, 111, 68, 65, 2090, "Strength training and mindfulness cooldown."),
    ),
}


def build_payload(provider: str, now: Optional[datetime] = None) -> List[HealthMetricIn]:
    """Fresh copies of the provider's records, dated relative to ``now``."""
    if provider not in SAMPLE_DATA:
        raise UnknownProviderError(f"Unknown wearable provider: {provider}")
    now = now or datetime.now(timezone.utc)

    out = []
    for row in SAMPLE_DATA[provider]:
        fields = {k: v for k, v in row.items() if k != "days_ago" and v is not None}
        out.append(HealthMetricIn(date=now - timedelta(days=row["days_ago"]), source=provider, **fields))
    return out


async def fetch_sample_data(provider: str) -> List[HealthMetricIn]:
    await asyncio.sleep(settings.WEARABLE_FETCH_DELAY)
    return build_payload(provider)


async def fetch_google_fit_sample_data() -> List[HealthMetricIn]:
    return await fetch_sample_data("google-fit")


async def fetch_fitbit_sample_data() -> List[HealthMetricIn]:
    return await fetch_sample_data("fitbit")


async def fetch_apple_health_sample_data() -> List[HealthMetricIn]:
    return await fetch_sample_data("apple-health")


PROVIDER_FETCHERS = {
    "google-fit": fetch_google_fit_sample_data,
    "fitbit": fetch_fitbit_sample_data,
    "apple-health": fetch_apple_health_sample_data,
}


async def fetch_provider(provider: str) -> List[HealthMetricIn]:
    try:
        fetcher = PROVIDER_FETCHERS[provider]
    except KeyError:
        raise UnknownProviderError(f"Unknown wearable provider: {provider}") from None
    return await fetcher()


def summarize_wearable_data(metrics: List[HealthMetricIn]) -> WearableSummary:
    if not metrics:
        return WearableSummary(total_steps=0, avg_sleep=0, avg_weight=0)

    total_steps = sum(m.steps or 0 for m in metrics)
    avg_sleep = sum(m.sleep or 0 for m in metrics) / len(metrics)
    avg_weight = sum(m.weight or 0 for m in metrics) / len(metrics)
    return WearableSummary(
        total_steps=total_steps,
        avg_sleep=round(avg_sleep, 1),
        avg_weight=round(avg_weight, 1),
    )


def _csv_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, datetime):
        return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def wearable_metrics_to_csv(metrics: List[HealthMetricIn]) -> str:
    """
    Header plus one row per record, rows joined with "\\n" and no trailing
    newline. Cells containing a comma, quote or newline are quoted with
    inner quotes doubled.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n", quoting=csv.QUOTE_MINIMAL)
    writer.writerow([header for _, header in CSV_COLUMNS])
    for metric in metrics:
        writer.writerow([_csv_value(getattr(metric, attr)) for attr, _ in CSV_COLUMNS])
    return buffer.getvalue().removesuffix("\n")


async def import_wearable_data(storage: StorageBackend, user_id: str, provider: str) -> int:
    payload = await fetch_provider(provider)
    imported = 0
    for metric in payload:
        # save_metric blocks on network or file I/O
        await asyncio.to_thread(storage.save_metric, user_id, metric)
        imported += 1
    logger.info("Imported %d %s records for %s", imported, provider, user_id)
    return imported
