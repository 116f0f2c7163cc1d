import tempfile
import unittest
from datetime import datetime, timedelta, timezone
from pathlib import Path

import numpy as np

from app.services.local_store import LocalBackend, LocalKeyValueStore
from app.services.sample_data import generate_sample_metrics, seed_sample_data

NOW = datetime(2026, 10, 19, 9, 0, tzinfo=timezone.utc)


class TestGenerateSampleMetrics(unittest.TestCase):
    def setUp(self):
        self.samples = generate_sample_metrics(now=NOW, rng=np.random.default_rng(7))

    def test_one_record_per_day_newest_first(self):
        self.assertEqual(len(self.samples), 30)
        self.assertEqual(self.samples[0].date, NOW)
        self.assertEqual(self.samples[-1].date, NOW - timedelta(days=29))

    def test_values_stay_in_bounds(self):
        for i, m in enumerate(self.samples):
            spike = 15 if i > 20 else 0
            self.assertTrue(113 + spike <= m.blood_pressure_systolic <= 123 + spike)
            self.assertTrue(4 <= m.sleep <= 10)
            self.assertEqual(m.sleep, round(m.sleep, 1))
            self.assertTrue(8000 <= m.steps <= 9000)
            self.assertEqual(m.source, "manual")

    def test_notes_every_fifth_day(self):
        noted = [i for i, m in enumerate(self.samples) if m.notes]
        self.assertEqual(noted, [0, 5, 10, 15, 20, 25])
        self.assertNotIn("notes", self.samples[1].model_dump(exclude_unset=True))

    def test_same_seed_same_data(self):
        again = generate_sample_metrics(now=NOW, rng=np.random.default_rng(7))
        self.assertEqual(again, self.samples)


class TestSeedSampleData(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.storage = LocalBackend(LocalKeyValueStore(Path(self._tmp.name) / "store.json"))

    def tearDown(self):
        self._tmp.cleanup()

    def test_seeds_only_once(self):
        self.assertEqual(seed_sample_data(self.storage, "u1", now=NOW), 30)
        self.assertEqual(seed_sample_data(self.storage, "u1", now=NOW), 0)
        self.assertEqual(len(self.storage.list_metrics("u1")), 30)

    def test_other_users_data_does_not_block_seeding(self):
        seed_sample_data(self.storage, "u1", now=NOW)
        self.assertEqual(seed_sample_data(self.storage, "u2", now=NOW), 30)


if __name__ == "__main__":
    unittest.main()
