# -*- coding: utf-8 -*-
"""Meals — Pydantic models."""

from __future__ import annotations

from datetime import date as date_type
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator


class Meal(BaseModel):
    id: str
    user_id: str
    food_id: str
    timestamp: datetime
    quantity: float = Field(1.0, ge=0)
    calories: Optional[float] = Field(None, ge=0, description="food.calories * quantity, resolved at read time")
    notes: Optional[str] = None


class DailyCalorieSummary(BaseModel):
    date: date_type
    total_calories: float = Field(0.0, ge=0)
    meals: List[Meal] = Field(default_factory=list)


class MealCreateRequest(BaseModel):
    food_id: Optional[str] = Field(None, min_length=1, description="Catalog id, e.g. 'bifana'")
    food_name: Optional[str] = Field(None, min_length=1, description="Display name, looked up case-insensitively")
    quantity: float = Field(1.0, ge=0)
    eaten_at: Optional[datetime] = Field(None, description="ISO8601 timestamp; defaults to now")
    notes: Optional[str] = Field(None, max_length=2000)

    @model_validator(mode="after")
    def _require_food(self) -> "MealCreateRequest":
        if not self.food_id and not self.food_name:
            raise ValueError("food_id or food_name is required")
        return self


class MealCreateResponse(BaseModel):
    meal_id: str
    food_id: str
    calories: float


class MealsResponse(BaseModel):
    date: date_type
    count: int
    meals: List[Meal]
