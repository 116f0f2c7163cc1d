import unittest
from datetime import date, datetime, timezone

from app.models.health_data import HealthMetric
from app.services.time_utils import (
    month_range,
    monthly_summary,
    start_of_week,
    week_range,
    weekly_summary,
    weeks_of_month,
)


def metric(day, **readings):
    when = datetime(day.year, day.month, day.day, 12, 0, tzinfo=timezone.utc)
    return HealthMetric(id=f"m{day.isoformat()}", user_id="u1", date=when, **readings)


class TestWindows(unittest.TestCase):
    def test_week_starts_on_sunday(self):
        self.assertEqual(start_of_week(date(2026, 10, 19)), date(2026, 10, 18))
        self.assertEqual(start_of_week(date(2026, 10, 18)), date(2026, 10, 18))
        self.assertEqual(start_of_week(date(2026, 10, 24)), date(2026, 10, 18))

    def test_week_range(self):
        self.assertEqual(week_range(date(2026, 10, 21)), (date(2026, 10, 18), date(2026, 10, 24)))

    def test_month_range(self):
        self.assertEqual(month_range(date(2026, 2, 10)), (date(2026, 2, 1), date(2026, 2, 28)))
        self.assertEqual(month_range(date(2026, 12, 31)), (date(2026, 12, 1), date(2026, 12, 31)))

    def test_weeks_of_month(self):
        weeks = weeks_of_month(date(2026, 10, 1))
        self.assertEqual(weeks[0], date(2026, 9, 27))
        self.assertEqual(weeks[-1], date(2026, 10, 25))
        self.assertEqual(len(weeks), 5)


class TestWeeklySummary(unittest.TestCase):
    def test_daily_averages(self):
        metrics = [
            metric(date(2026, 10, 19), steps=8000, sleep=7),
            metric(date(2026, 10, 19), steps=10000),
            metric(date(2026, 10, 20), steps=6000, sleep=8, heart_rate=70),
            metric(date(2026, 10, 10), steps=99999),
        ]
        summary = weekly_summary(metrics, date(2026, 10, 21))

        self.assertEqual(summary.week_start, date(2026, 10, 18))
        self.assertEqual(len(summary.days), 7)
        self.assertEqual(summary.days[0].day, "Sun")
        self.assertIsNone(summary.days[0].steps)
        self.assertEqual(summary.days[1].steps, 9000)
        self.assertEqual(summary.days[1].sleep, 7)
        self.assertEqual(summary.days[2].heart_rate, 70)
        self.assertEqual(summary.total_steps, 15000)
        self.assertEqual(summary.avg_sleep, 7.5)
        self.assertEqual(summary.avg_heart_rate, 70)
        self.assertEqual(summary.entries_logged, 3)

    def test_empty_week(self):
        summary = weekly_summary([], date(2026, 10, 21))
        self.assertTrue(all(d.steps is None for d in summary.days))
        self.assertEqual(summary.total_steps, 0)
        self.assertEqual(summary.avg_sleep, 0)
        self.assertEqual(summary.entries_logged, 0)


class TestMonthlySummary(unittest.TestCase):
    def test_weekly_averages(self):
        metrics = [
            metric(date(2026, 9, 30), weight=200),
            metric(date(2026, 10, 2), weight=170),
            metric(date(2026, 10, 5), weight=168, blood_pressure_systolic=120),
            metric(date(2026, 10, 6), weight=166),
        ]
        summary = monthly_summary(metrics, date(2026, 10, 15))

        self.assertEqual(summary.month_start, date(2026, 10, 1))
        self.assertEqual(summary.month_end, date(2026, 10, 31))
        self.assertEqual([w.week for w in summary.weeks], [f"Week {i}" for i in range(1, 6)])
        self.assertEqual(summary.weeks[0].weight, 170)
        self.assertEqual(summary.weeks[1].weight, 167)
        self.assertEqual(summary.weeks[1].blood_pressure, 120)
        self.assertIsNone(summary.weeks[2].weight)
        self.assertEqual(summary.avg_weight, 168.5)
        self.assertEqual(summary.avg_bp, 120)
        self.assertEqual(summary.avg_sleep, 0)
        self.assertEqual(summary.entries_logged, 3)


if __name__ == "__main__":
    unittest.main()
