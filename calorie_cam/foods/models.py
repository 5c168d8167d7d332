# -*- coding: utf-8 -*-
"""Foods — Pydantic models."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class FoodSeed(BaseModel):
    name: str = Field(..., min_length=1, description="Display name, e.g. 'Bifana'")
    calories: float = Field(..., gt=0, description="kcal per serving")
    image_url: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    serving_size: Optional[str] = Field(None, description="Human-readable serving, e.g. '1 sandwich'")


class Food(FoodSeed):
    id: str = Field(..., description="Normalized name, e.g. 'pastel-de-nata'")


class FoodListResponse(BaseModel):
    count: int
    foods: List[Food]
