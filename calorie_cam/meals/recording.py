# -*- coding: utf-8 -*-
"""Meals — turn a detected label (or a manual pick) into a meal record."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Optional, Tuple

from ..errors import NoMatchError
from ..foods.catalog import FoodCatalog
from ..foods.models import Food
from .storage import MealStore

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class MealRecorder:
    def __init__(
        self,
        catalog: FoodCatalog,
        meals: MealStore,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self.catalog = catalog
        self.meals = meals
        self.clock = clock

    def record_detected_food(self, user_id: str, label: str) -> Optional[float]:
        """Log one serving of the food named by ``label``.

        Returns the calories added so callers can bump a locally held total
        without re-aggregating, or None when the label is not in the catalog
        (nothing is written in that case). StorageError propagates.
        """
        food = self.catalog.lookup_by_name(label)
        if food is None:
            logger.info("no catalog match for label %r", label)
            return None
        self.meals.append(user_id, food.id, self.clock(), quantity=1.0)
        return food.calories

    def record_food(
        self,
        user_id: str,
        *,
        food_id: Optional[str] = None,
        food_name: Optional[str] = None,
        quantity: float = 1.0,
        timestamp: Optional[datetime] = None,
        notes: Optional[str] = None,
    ) -> Tuple[str, Food]:
        food = self.catalog.get(food_id) if food_id else self.catalog.lookup_by_name(food_name or "")
        if food is None:
            raise NoMatchError(f"Unknown food: {food_id or food_name!r}")
        meal_id = self.meals.append(user_id, food.id, timestamp or self.clock(), quantity=quantity, notes=notes)
        return meal_id, food
