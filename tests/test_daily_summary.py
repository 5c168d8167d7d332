# -*- coding: utf-8 -*-

from __future__ import annotations

import shutil
import tempfile
import unittest
from datetime import date, datetime, timedelta, timezone
from pathlib import Path
from uuid import uuid4
from zoneinfo import ZoneInfo

from calorie_cam.docstore import MemoryDocumentStore, SQLiteDocumentStore
from calorie_cam.errors import AggregationError, StorageError
from calorie_cam.foods.catalog import FoodCatalog
from calorie_cam.foods.models import FoodSeed
from calorie_cam.meals.recording import MealRecorder
from calorie_cam.meals.storage import MealStore, meals_collection
from calorie_cam.meals.summary import DailyAggregator, day_bounds

from helpers import FailingStore

LISBON = ZoneInfo("Europe/Lisbon")
TODAY = date(2026, 10, 19)


def _at(hour: int, minute: int = 0, second: int = 0, micro: int = 0, day: date = TODAY) -> datetime:
    return datetime(day.year, day.month, day.day, hour, minute, second, micro, tzinfo=LISBON)


class _SummaryTestBase(unittest.TestCase):
    def make_store(self):
        return MemoryDocumentStore()

    def setUp(self) -> None:
        self.store = self.make_store()
        self.catalog = FoodCatalog(self.store)
        self.catalog.seed([FoodSeed(name="Bifana", calories=350), FoodSeed(name="Caldo Verde", calories=180)])
        self.meals = MealStore(self.store)
        self.aggregator = DailyAggregator(self.meals, self.catalog, LISBON)


class TestDayBounds(unittest.TestCase):
    def test_local_midnight_to_last_millisecond(self) -> None:
        start, end = day_bounds(TODAY, LISBON)
        self.assertEqual(start, _at(0))
        self.assertEqual(end, _at(23, 59, 59, 999000))

    def test_datetime_input_uses_local_calendar_day(self) -> None:
        # 23:30 UTC on the 19th is already the 20th in UTC+1 zones.
        start, _ = day_bounds(datetime(2026, 10, 19, 23, 30, tzinfo=timezone.utc), ZoneInfo("Europe/Paris"))
        self.assertEqual(start.date(), date(2026, 10, 20))


class TestDailySummary(_SummaryTestBase):
    def test_single_bifana_at_noon(self) -> None:
        meal_id = self.meals.append("u1", "bifana", _at(12))
        summary = self.aggregator.get_daily_summary("u1", TODAY)
        self.assertEqual(summary.total_calories, 350)
        self.assertEqual([m.id for m in summary.meals], [meal_id])
        self.assertEqual(summary.meals[0].calories, 350)
        self.assertEqual(summary.date, TODAY)

    def test_contribution_is_calories_times_quantity(self) -> None:
        for quantity in (0, 0.5, 1, 2.25, 3):
            with self.subTest(quantity=quantity):
                store = self.make_store()
                catalog = FoodCatalog(store)
                catalog.seed([FoodSeed(name="Bifana", calories=350)])
                meals = MealStore(store)
                meals.append("u1", "bifana", _at(9), quantity=quantity)
                summary = DailyAggregator(meals, catalog, LISBON).get_daily_summary("u1", TODAY)
                self.assertEqual(summary.total_calories, 350 * quantity)

    def test_no_meals_gives_zero_and_empty(self) -> None:
        summary = self.aggregator.get_daily_summary("u1", TODAY)
        self.assertEqual(summary.total_calories, 0)
        self.assertEqual(summary.meals, [])

    def test_unresolved_food_is_dropped_not_errored(self) -> None:
        self.meals.append("u1", "bifana", _at(8))
        self.meals.append("u1", "sushi", _at(9))
        summary = self.aggregator.get_daily_summary("u1", TODAY)
        self.assertEqual(summary.total_calories, 350)
        self.assertEqual([m.food_id for m in summary.meals], ["bifana"])

    def test_day_boundaries_inclusive_and_exclusive(self) -> None:
        self.meals.append("u1", "bifana", _at(0))
        self.meals.append("u1", "caldo-verde", _at(23, 59, 59, 999000))
        self.meals.append("u1", "bifana", _at(0, day=TODAY + timedelta(days=1)))
        self.meals.append("u1", "bifana", _at(23, 59, 59, 999000, day=TODAY - timedelta(days=1)))
        summary = self.aggregator.get_daily_summary("u1", TODAY)
        self.assertEqual(summary.total_calories, 350 + 180)
        self.assertEqual(len(summary.meals), 2)

    def test_meals_are_per_user(self) -> None:
        self.meals.append("u1", "bifana", _at(12))
        self.meals.append("u2", "bifana", _at(12))
        self.meals.append("u2", "caldo-verde", _at(13))
        self.assertEqual(self.aggregator.get_daily_summary("u1", TODAY).total_calories, 350)
        self.assertEqual(self.aggregator.get_daily_summary("u2", TODAY).total_calories, 530)

    def test_meals_ordered_by_timestamp(self) -> None:
        late = self.meals.append("u1", "bifana", _at(20))
        early = self.meals.append("u1", "caldo-verde", _at(7))
        summary = self.aggregator.get_daily_summary("u1", TODAY)
        self.assertEqual([m.id for m in summary.meals], [early, late])

    def test_read_time_calories_follow_catalog(self) -> None:
        self.meals.append("u1", "bifana", _at(12))
        self.catalog.seed([FoodSeed(name="Bifana", calories=400)])
        self.assertEqual(self.aggregator.get_daily_summary("u1", TODAY).total_calories, 400)

    def test_accented_display_name_resolves(self) -> None:
        self.catalog.seed([FoodSeed(name="Bacalhau à Brás", calories=175)])
        recorder = MealRecorder(self.catalog, self.meals, clock=lambda: _at(13))
        self.assertEqual(recorder.record_detected_food("u1", "BACALHAU  À BRÁS"), 175)
        summary = self.aggregator.get_daily_summary("u1", TODAY)
        self.assertEqual([m.food_id for m in summary.meals], ["bacalhau-à-brás"])
        self.assertEqual(summary.total_calories, 175)

    def test_naive_timestamp_rejected(self) -> None:
        with self.assertRaises(ValueError):
            self.meals.append("u1", "bifana", datetime(2026, 10, 19, 12))
        with self.assertRaises(ValueError):
            self.meals.append("u1", "bifana", _at(12), quantity=-1)


class TestDailySummarySQLite(TestDailySummary):
    def setUp(self) -> None:
        self._tmp = Path(tempfile.mkdtemp(prefix="calcam-summary-"))
        super().setUp()

    def tearDown(self) -> None:
        shutil.rmtree(self._tmp, ignore_errors=True)

    def make_store(self):
        return SQLiteDocumentStore(self._tmp / f"{uuid4().hex}.db")


class TestDailySummaryStorageFailure(_SummaryTestBase):
    def make_store(self):
        return FailingStore(fail_reads=True)

    def test_read_failure_raises_aggregation_error(self) -> None:
        with self.assertRaises(AggregationError):
            self.aggregator.get_daily_summary("u1", TODAY)


class TestMealRecorder(_SummaryTestBase):
    def setUp(self) -> None:
        super().setUp()
        self.recorder = MealRecorder(self.catalog, self.meals, clock=lambda: _at(12, 30))

    def test_hit_writes_one_serving_and_returns_calories(self) -> None:
        self.assertEqual(self.recorder.record_detected_food("u1", "Bifana"), 350)
        docs = self.store.list(meals_collection("u1"))
        self.assertEqual(len(docs), 1)
        self.assertEqual(docs[0].data["food_id"], "bifana")
        self.assertEqual(docs[0].data["quantity"], 1.0)
        self.assertEqual(self.aggregator.get_daily_summary("u1", TODAY).total_calories, 350)

    def test_miss_returns_none_and_writes_nothing(self) -> None:
        self.assertIsNone(self.recorder.record_detected_food("u1", "food photography"))
        self.assertEqual(self.store.list(meals_collection("u1")), [])

    def test_write_failure_propagates(self) -> None:
        recorder = MealRecorder(self.catalog, MealStore(FailingStore(fail_writes=True)))
        with self.assertRaises(StorageError):
            recorder.record_detected_food("u1", "Bifana")

    def test_manual_record_by_id_or_name(self) -> None:
        meal_id, food = self.recorder.record_food("u1", food_id="caldo-verde", quantity=2)
        self.assertTrue(meal_id)
        self.assertEqual(food.name, "Caldo Verde")
        _, food = self.recorder.record_food("u1", food_name="BIFANA")
        self.assertEqual(food.id, "bifana")
        self.assertEqual(self.aggregator.get_daily_summary("u1", TODAY).total_calories, 360 + 350)


if __name__ == "__main__":
    unittest.main()
