"""Calendar windows and the weekly / monthly averages shown on the dashboard.

Weeks start on Sunday. Averages skip records that lack the field; a day or
week without any value reports None.
"""
from datetime import date, datetime, timedelta, timezone
from typing import List, Optional, Sequence, Tuple

import pandas as pd

from app.models.health_data import READING_FIELDS, HealthMetric
from app.models.insights import DailyAverages, MonthlySummary, WeekAverages, WeeklySummary


def start_of_week(day: date) -> date:
    # date.weekday(): Monday = 0 ... Sunday = 6
    return day - timedelta(days=(day.weekday() + 1) % 7)


def week_range(week_start: date) -> Tuple[date, date]:
    start = start_of_week(week_start)
    return start, start + timedelta(days=6)


def month_range(month_start: date) -> Tuple[date, date]:
    first = month_start.replace(day=1)
    next_first = (first + timedelta(days=32)).replace(day=1)
    return first, next_first - timedelta(days=1)


def weeks_of_month(month_start: date) -> List[date]:
    """Sunday-started weeks overlapping the month."""
    first, last = month_range(month_start)
    weeks = []
    current = start_of_week(first)
    while current <= last:
        weeks.append(current)
        current += timedelta(days=7)
    return weeks


def _frame(metrics: Sequence[HealthMetric], start: date, end: date) -> pd.DataFrame:
    """Metrics whose (UTC) calendar day falls in [start, end], one row each."""
    columns = ["day", *READING_FIELDS]
    rows = []
    for m in metrics:
        day = m.date.astimezone(timezone.utc).date()
        if start <= day <= end:
            rows.append({"day": day, **{f: getattr(m, f) for f in READING_FIELDS}})
    frame = pd.DataFrame(rows, columns=columns)
    for field in READING_FIELDS:
        frame[field] = pd.to_numeric(frame[field], errors="coerce")
    return frame


def _value(v) -> Optional[float]:
    return None if v is None or pd.isna(v) else float(v)


def _mean_of(values: List[Optional[float]]) -> float:
    present = [v for v in values if v]
    return sum(present) / len(present) if present else 0.0


def weekly_summary(metrics: Sequence[HealthMetric], week_start: date) -> WeeklySummary:
    start, end = week_range(week_start)
    frame = _frame(metrics, start, end)
    daily = frame.groupby("day")[list(READING_FIELDS)].mean() if not frame.empty else None

    days = []
    for offset in range(7):
        day = start + timedelta(days=offset)
        row = daily.loc[day] if daily is not None and day in daily.index else None
        days.append(
            DailyAverages(
                day=day.strftime("%a"),
                date=day,
                steps=_value(row["steps"]) if row is not None else None,
                sleep=_value(row["sleep"]) if row is not None else None,
                weight=_value(row["weight"]) if row is not None else None,
                heart_rate=_value(row["heart_rate"]) if row is not None else None,
            )
        )

    return WeeklySummary(
        week_start=start,
        week_end=end,
        days=days,
        total_steps=sum(d.steps or 0 for d in days),
        avg_sleep=_mean_of([d.sleep for d in days]),
        avg_heart_rate=_mean_of([d.heart_rate for d in days]),
        entries_logged=len(frame),
    )


def monthly_summary(metrics: Sequence[HealthMetric], month_start: date) -> MonthlySummary:
    first, last = month_range(month_start)
    frame = _frame(metrics, first, last)

    weeks = []
    for index, week in enumerate(weeks_of_month(first)):
        in_week = frame[(frame["day"] >= week) & (frame["day"] <= week + timedelta(days=6))]
        means = in_week[list(READING_FIELDS)].mean() if not in_week.empty else None

        def avg(field):
            return _value(means[field]) if means is not None else None

        weeks.append(
            WeekAverages(
                week=f"Week {index + 1}",
                start=week,
                weight=avg("weight"),
                blood_pressure=avg("blood_pressure_systolic"),
                blood_sugar=avg("blood_sugar"),
                sleep=avg("sleep"),
                steps=avg("steps"),
            )
        )

    return MonthlySummary(
        month_start=first,
        month_end=last,
        weeks=weeks,
        avg_weight=_mean_of([w.weight for w in weeks]),
        avg_bp=_mean_of([w.blood_pressure for w in weeks]),
        avg_sleep=_mean_of([w.sleep for w in weeks]),
        entries_logged=len(frame),
    )


def today_utc() -> date:
    return datetime.now(timezone.utc).date()

