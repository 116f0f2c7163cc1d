"""Synthetic metric history for demos and first-run bootstrap."""
import logging
from datetime import datetime, timedelta, timezone
from typing import List, Optional

import numpy as np

from app.models.health_data import HealthMetricIn
from app.services.storage import StorageBackend

logger = logging.getLogger(__name__)

SAMPLE_DAYS = 30
# Days older than this get a systolic bump so the trend check has something to find
BP_SPIKE_AFTER_DAY = 20
BP_SPIKE = 15


def generate_sample_metrics(
    now: Optional[datetime] = None,
    rng: Optional[np.random.Generator] = None,
    days: int = SAMPLE_DAYS,
) -> List[HealthMetricIn]:
    """One record per day, newest first, counting back from ``now``."""
    now = now or datetime.now(timezone.utc)
    rng = rng or np.random.default_rng()

    out = []
    for i in range(days):
        variance = float(rng.uniform(-5, 5))
        trend = i * 0.1
        sleep = 7.5 + float(rng.uniform(-1, 1))

        fields = dict(
            date=now - timedelta(days=i),
            blood_pressure_systolic=round(118 + variance + (BP_SPIKE if i > BP_SPIKE_AFTER_DAY else 0)),
            blood_pressure_diastolic=round(78 + variance * 0.5),
            heart_rate=round(72 + variance),
            weight=round(170 - trend + variance * 0.3),
            blood_sugar=round(95 + variance * 1.5),
            sleep=round(max(4.0, min(10.0, sleep)), 1),
            steps=round(8500 + variance * 100),
            source="manual",
        )
        if i % 5 == 0:
            fields["notes"] = "Feeling good today"
        out.append(HealthMetricIn(**fields))
    return out


def seed_sample_data(
    storage: StorageBackend,
    user_id: str,
    now: Optional[datetime] = None,
    rng: Optional[np.random.Generator] = None,
) -> int:
    """
    Backfill a month of sample metrics, only when the user has none yet.
    Returns the number of records written.
    """
    if storage.list_metrics(user_id):
        logger.info("Sample data already exists for %s. Skipping generation.", user_id)
        return 0

    logger.info("Generating sample data for %s...", user_id)
    samples = generate_sample_metrics(now=now, rng=rng)
    for metric in samples:
        storage.save_metric(user_id, metric)
    logger.info("Sample data generation complete (%d records).", len(samples))
    return len(samples)
