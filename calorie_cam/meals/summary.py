# -*- coding: utf-8 -*-
"""Meals — daily calorie aggregation (fresh read per request, no caching)."""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Dict, Optional, Tuple, Union

from ..errors import AggregationError, StorageError
from ..foods.catalog import FoodCatalog
from ..foods.models import Food
from .models import DailyCalorieSummary, Meal
from .storage import MealStore

logger = logging.getLogger(__name__)


def _as_local_date(day: Union[date, datetime], tz: tzinfo) -> date:
    if isinstance(day, datetime):
        if day.tzinfo is not None:
            day = day.astimezone(tz)
        return day.date()
    return day


def day_bounds(day: Union[date, datetime], tz: tzinfo) -> Tuple[datetime, datetime]:
    """Local midnight to 23:59:59.999 of the same calendar day, both inclusive."""
    local_day = _as_local_date(day, tz)
    start = datetime.combine(local_day, time.min, tzinfo=tz)
    end = datetime.combine(local_day + timedelta(days=1), time.min, tzinfo=tz) - timedelta(milliseconds=1)
    return start, end


class DailyAggregator:
    def __init__(self, meals: MealStore, catalog: FoodCatalog, tz: tzinfo) -> None:
        self.meals = meals
        self.catalog = catalog
        self.tz = tz

    def get_daily_summary(self, user_id: str, day: Union[date, datetime]) -> DailyCalorieSummary:
        start, end = day_bounds(day, self.tz)
        try:
            meals = self.meals.list_between(user_id, start, end)
        except StorageError as exc:
            logger.warning("daily summary read failed: user=%s day=%s: %s", user_id, start.date(), exc)
            raise AggregationError(f"Failed to load meals: {exc.message}") from exc

        foods: Dict[str, Optional[Food]] = {}
        total = 0.0
        resolved: list[Meal] = []
        for meal in meals:
            if meal.food_id not in foods:
                try:
                    foods[meal.food_id] = self.catalog.get(meal.food_id)
                except StorageError as exc:
                    raise AggregationError(f"Failed to load food {meal.food_id!r}: {exc.message}") from exc
            food = foods[meal.food_id]
            if food is None:
                logger.debug("meal %s references unknown food %s; skipped", meal.id, meal.food_id)
                continue
            calories = food.calories * meal.quantity
            total += calories
            resolved.append(meal.model_copy(update={"calories": calories}))

        return DailyCalorieSummary(date=start.date(), total_calories=total, meals=resolved)
