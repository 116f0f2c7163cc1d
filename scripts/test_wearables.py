import asyncio
import csv
import io
import tempfile
import time
import unittest
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import patch

from app.core.config import settings
from app.core.exceptions import UnknownProviderError
from app.models.health_data import HealthMetricIn
from app.services import wearables
from app.services.local_store import LocalBackend, LocalKeyValueStore

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


class TestPayloads(unittest.TestCase):
    def test_google_fit_summary(self):
        summary = wearables.summarize_wearable_data(wearables.build_payload("google-fit", now=NOW))
        self.assertEqual(summary.total_steps, 73358)
        self.assertEqual(summary.avg_sleep, 7.1)
        self.assertEqual(summary.avg_weight, 168.8)

    def test_payload_is_dated_relative_to_now(self):
        payload = wearables.build_payload("fitbit", now=NOW)
        self.assertEqual(len(payload), 7)
        self.assertEqual(payload[-1].date, NOW)
        self.assertEqual((NOW - payload[0].date).days, 6)
        self.assertTrue(all(m.source == "fitbit" for m in payload))

    def test_payload_is_a_fresh_copy(self):
        first = wearables.build_payload("apple-health", now=NOW)
        first[0].steps = 1
        self.assertEqual(wearables.build_payload("apple-health", now=NOW)[0].steps, 9804)

    def test_unknown_provider(self):
        with self.assertRaises(UnknownProviderError):
            wearables.build_payload("garmin")

    def test_empty_summary(self):
        summary = wearables.summarize_wearable_data([])
        self.assertEqual((summary.total_steps, summary.avg_sleep, summary.avg_weight), (0, 0, 0))


class TestCsvExport(unittest.TestCase):
    def test_header_and_rows(self):
        text = wearables.wearable_metrics_to_csv(wearables.build_payload("google-fit", now=NOW))
        lines = text.split("\n")
        self.assertEqual(len(lines), 8)
        self.assertEqual(lines[0].split(",")[:4], ["Date", "Source", "Steps", "Sleep (hrs)"])
        self.assertTrue(lines[-1].startswith("2026-10-19T12:00:00.000Z,google-fit,11480,7.4,168.2,67,"))
        self.assertFalse(text.endswith("\n"))

    def test_cells_are_quoted_when_needed(self):
        metric = HealthMetricIn(date=NOW, steps=100, notes='Ran 5k, felt "great"\nthen rested')
        text = wearables.wearable_metrics_to_csv([metric])
        self.assertIn('"Ran 5k, felt ""great""\nthen rested"', text)

        [header, row] = list(csv.reader(io.StringIO(text)))
        self.assertEqual(row[header.index("Notes")], 'Ran 5k, felt "great"\nthen rested')
        self.assertEqual(row[header.index("Weight (lbs)")], "")

    def test_header_only(self):
        self.assertEqual(
            wearables.wearable_metrics_to_csv([]),
            ",".join(header for _, header in wearables.CSV_COLUMNS),
        )


class TestFetchAndImport(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.storage = LocalBackend(LocalKeyValueStore(Path(self._tmp.name) / "store.json"))
        self._delay = patch.object(settings, "WEARABLE_FETCH_DELAY", 0)
        self._delay.start()

    def tearDown(self):
        self._delay.stop()
        self._tmp.cleanup()

    async def test_fetchers(self):
        for provider, fetcher in wearables.PROVIDER_FETCHERS.items():
            payload = await fetcher()
            self.assertEqual(len(payload), 7)
            self.assertEqual(payload[0].source, provider)

    async def test_fetch_unknown_provider(self):
        with self.assertRaises(UnknownProviderError):
            await wearables.fetch_provider("garmin")

    async def test_import_saves_every_record(self):
        imported = await wearables.import_wearable_data(self.storage, "u1", "apple-health")
        self.assertEqual(imported, 7)
        stored = self.storage.list_metrics("u1")
        self.assertEqual(len(stored), 7)
        self.assertTrue(all(m.source == "apple-health" for m in stored))
        self.assertEqual(stored[0].steps, 12840)

    async def test_import_does_not_block_the_loop(self):
        save = self.storage.save_metric

        def slow_save(user_id, metric):
            time.sleep(0.1)
            return save(user_id, metric)

        gaps = []

        async def ticker():
            last = time.monotonic()
            while True:
                await asyncio.sleep(0.01)
                now = time.monotonic()
                gaps.append(now - last)
                last = now

        with patch.object(self.storage, "save_metric", side_effect=slow_save):
            tick = asyncio.create_task(ticker())
            imported = await wearables.import_wearable_data(self.storage, "u1", "fitbit")
            tick.cancel()

        self.assertEqual(imported, 7)
        self.assertEqual(len(self.storage.list_metrics("u1")), 7)
        self.assertGreater(len(gaps), 20)
        self.assertLess(max(gaps), 0.08)


if __name__ == "__main__":
    unittest.main()
