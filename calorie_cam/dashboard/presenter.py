# -*- coding: utf-8 -*-
"""Dashboard — presenter wiring aggregation and capture results to a render callback."""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable, List, Optional

from ..capture.session import CaptureOutcome, CaptureState
from ..errors import AggregationError, StorageError
from ..foods.catalog import FoodCatalog
from ..foods.models import Food
from ..meals.models import DailyCalorieSummary
from ..meals.summary import DailyAggregator
from .progress import ProgressRing, animate_progress
from .views import DashboardView, build_dashboard, build_ring

logger = logging.getLogger(__name__)

RenderCallback = Callable[[DashboardView], None]


class DashboardPresenter:
    """Holds the last rendered view and pushes every new one to ``on_render``.

    Aggregation failures render the zero/empty view; the client cannot tell
    them apart from a day without meals.
    """

    def __init__(
        self,
        aggregator: DailyAggregator,
        catalog: FoodCatalog,
        goal: float,
        on_render: Optional[RenderCallback] = None,
    ) -> None:
        self.aggregator = aggregator
        self.catalog = catalog
        self.goal = goal
        self.on_render = on_render
        self.view: Optional[DashboardView] = None
        self.animation: List[ProgressRing] = []

    def _render(self, view: DashboardView) -> DashboardView:
        previous = self.view.ring.progress if self.view else 0.0
        self.animation = animate_progress(previous, view.ring.progress)
        self.view = view
        if self.on_render:
            self.on_render(view)
        return view

    def refresh(self, user_id: str, day: date) -> DashboardView:
        try:
            summary = self.aggregator.get_daily_summary(user_id, day)
        except AggregationError as exc:
            logger.warning("dashboard falling back to empty summary: %s", exc)
            summary = DailyCalorieSummary(date=day)
        return self._render(build_dashboard(summary, self.goal, self._food_lookup))

    def _food_lookup(self, food_id: str) -> Optional[Food]:
        try:
            return self.catalog.get(food_id)
        except StorageError as exc:
            logger.warning("food %s unavailable for meal card: %s", food_id, exc)
            return None

    def apply_capture(self, outcome: CaptureOutcome) -> Optional[DashboardView]:
        """Add a matched capture's calories to the held total without re-aggregating."""
        if self.view is None or outcome.status is not CaptureState.matched or not outcome.calories_added:
            return self.view
        total = self.view.total_calories + outcome.calories_added
        view = self.view.model_copy(update={"total_calories": total, "ring": build_ring(total, self.goal)})
        return self._render(view)
