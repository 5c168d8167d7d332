# -*- coding: utf-8 -*-
"""Dashboard — API endpoints."""

from __future__ import annotations

from datetime import date, datetime

from fastapi import APIRouter, Depends, Query

from ..auth.security import get_current_user
from ..services import Services, get_services
from .presenter import DashboardPresenter
from .views import DashboardView

router = APIRouter(prefix="/api/dashboard", tags=["Dashboard"])


@router.get("", response_model=DashboardView, summary="Dashboard view for a day")
def dashboard(
    day: date | None = Query(default=None, alias="date", description="YYYY-MM-DD, defaults to today"),
    user: dict = Depends(get_current_user),
    services: Services = Depends(get_services),
):
    presenter = DashboardPresenter(services.aggregator, services.catalog, services.settings.daily_calorie_goal)
    return presenter.refresh(user["id"], day or datetime.now(services.tz).date())
