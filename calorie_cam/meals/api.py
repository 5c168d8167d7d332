# -*- coding: utf-8 -*-
"""Meals — API endpoints."""

from __future__ import annotations

from datetime import date, datetime

from fastapi import APIRouter, Depends, HTTPException, Query

from ..auth.security import get_current_user
from ..errors import AggregationError, NoMatchError, StorageError
from ..services import Services, get_services
from .models import DailyCalorieSummary, MealCreateRequest, MealCreateResponse, MealsResponse

router = APIRouter(prefix="/api/meals", tags=["Meals"])


def _resolve_day(services: Services, day: date | None) -> date:
    return day or datetime.now(services.tz).date()


@router.post("", response_model=MealCreateResponse, summary="Log a meal manually")
def create_meal(
    request: MealCreateRequest,
    user: dict = Depends(get_current_user),
    services: Services = Depends(get_services),
):
    eaten_at = request.eaten_at
    if eaten_at is not None and eaten_at.tzinfo is None:
        eaten_at = eaten_at.replace(tzinfo=services.tz)
    try:
        meal_id, food = services.recorder.record_food(
            user["id"],
            food_id=request.food_id,
            food_name=request.food_name,
            quantity=request.quantity,
            timestamp=eaten_at,
            notes=request.notes,
        )
    except NoMatchError as exc:
        raise HTTPException(status_code=404, detail=exc.message) from exc
    except StorageError as exc:
        raise HTTPException(status_code=exc.http_status, detail=f"Failed to save meal: {exc.message}") from exc

    return MealCreateResponse(meal_id=meal_id, food_id=food.id, calories=food.calories * request.quantity)


@router.get("/summary", response_model=DailyCalorieSummary, summary="Daily calorie summary")
def daily_summary(
    day: date | None = Query(default=None, alias="date", description="YYYY-MM-DD, defaults to today"),
    user: dict = Depends(get_current_user),
    services: Services = Depends(get_services),
):
    try:
        return services.aggregator.get_daily_summary(user["id"], _resolve_day(services, day))
    except AggregationError as exc:
        raise HTTPException(status_code=exc.http_status, detail=exc.message) from exc


@router.get("", response_model=MealsResponse, summary="List meals for a day")
def list_meals(
    day: date | None = Query(default=None, alias="date", description="YYYY-MM-DD, defaults to today"),
    user: dict = Depends(get_current_user),
    services: Services = Depends(get_services),
):
    try:
        summary = services.aggregator.get_daily_summary(user["id"], _resolve_day(services, day))
    except AggregationError as exc:
        raise HTTPException(status_code=exc.http_status, detail=exc.message) from exc
    return MealsResponse(date=summary.date, count=len(summary.meals), meals=summary.meals)
