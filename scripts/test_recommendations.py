import unittest
from datetime import datetime, timedelta, timezone

from app.models.health_data import HealthMetric
from app.models.insights import Alert
from app.services.recommendations import generate_recommendations

NOW = datetime(2026, 10, 19, 8, 0, tzinfo=timezone.utc)

ALERT = Alert(id="alert-hr-1", type="warning", metric="Heart Rate", message="Warning", date=NOW)


def metric(days_ago=0, **readings):
    return HealthMetric(id=f"m{days_ago}", user_id="u1", date=NOW - timedelta(days=days_ago), **readings)


def ids(recs):
    return [r.id for r in recs]


class TestRecommendations(unittest.TestCase):
    def test_no_metrics_short_circuits(self):
        recs = generate_recommendations([], [ALERT])
        self.assertEqual(ids(recs), ["rec-start"])
        self.assertEqual(recs[0].priority, "high")

    def test_short_sleep(self):
        recs = generate_recommendations([metric(sleep=6.5)], [ALERT])
        sleep = [r for r in recs if r.id == "rec-sleep"]
        self.assertEqual(len(sleep), 1)
        self.assertEqual(sleep[0].priority, "high")

    def test_enough_sleep(self):
        self.assertNotIn("rec-sleep", ids(generate_recommendations([metric(sleep=7.5)], [ALERT])))

    def test_low_average_steps(self):
        history = [metric(i, steps=6000 if i % 2 else None) for i in range(7)]
        recs = generate_recommendations(history, [ALERT])
        self.assertEqual(ids(recs), ["rec-activity"])
        self.assertEqual(recs[0].priority, "medium")

    def test_steps_window_is_latest_seven(self):
        history = [metric(i, steps=9000) for i in range(7)] + [metric(i, steps=100) for i in range(7, 20)]
        self.assertNotIn("rec-activity", ids(generate_recommendations(history, [ALERT])))

    def test_weight_change(self):
        history = [metric(0, weight=180)] + [metric(i) for i in range(1, 6)] + [metric(6, weight=172)]
        recs = generate_recommendations(history, [ALERT])
        weight = [r for r in recs if r.id == "rec-weight"]
        self.assertEqual(len(weight), 1)
        self.assertIn("8.0 lb", weight[0].description)
        self.assertEqual(weight[0].priority, "medium")

    def test_weight_loss_reports_magnitude(self):
        history = [metric(0, weight=160)] + [metric(i, weight=166.5) for i in range(1, 7)]
        weight = [r for r in generate_recommendations(history, [ALERT]) if r.id == "rec-weight"]
        self.assertIn("6.5 lb", weight[0].description)

    def test_weight_needs_seven_records(self):
        history = [metric(0, weight=180)] + [metric(i, weight=170) for i in range(1, 6)]
        self.assertNotIn("rec-weight", ids(generate_recommendations(history, [ALERT])))

    def test_weight_needs_two_samples(self):
        history = [metric(0, weight=180)] + [metric(i) for i in range(1, 7)]
        self.assertNotIn("rec-weight", ids(generate_recommendations(history, [ALERT])))

    def test_weight_change_of_exactly_five(self):
        history = [metric(0, weight=175)] + [metric(i, weight=170) for i in range(1, 7)]
        self.assertNotIn("rec-weight", ids(generate_recommendations(history, [ALERT])))

    def test_wellness_without_alerts(self):
        recs = generate_recommendations([metric(sleep=8, steps=10000)], [])
        self.assertEqual(ids(recs), ["rec-wellness"])
        self.assertEqual(recs[0].priority, "low")

    def test_wellness_suppressed_by_alerts(self):
        self.assertEqual(generate_recommendations([metric(sleep=8, steps=10000)], [ALERT]), [])

    def test_rules_co_fire(self):
        recs = generate_recommendations([metric(sleep=5, steps=3000)], [])
        self.assertEqual(ids(recs), ["rec-sleep", "rec-activity", "rec-wellness"])


if __name__ == "__main__":
    unittest.main()
