# -*- coding: utf-8 -*-
"""Foods — API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from ..errors import StorageError
from ..services import Services, get_services
from .models import Food, FoodListResponse

router = APIRouter(prefix="/api/foods", tags=["Foods"])


@router.get("", response_model=FoodListResponse, summary="List the food catalog")
def list_foods(services: Services = Depends(get_services)):
    try:
        foods = services.catalog.list_foods()
    except StorageError as exc:
        raise HTTPException(status_code=exc.http_status, detail=exc.message) from exc
    return FoodListResponse(count=len(foods), foods=foods)


@router.get("/lookup", response_model=Food, summary="Find a food by display name")
def lookup_food(
    name: str = Query(..., min_length=1, description="Display name, case-insensitive"),
    services: Services = Depends(get_services),
):
    food = services.catalog.lookup_by_name(name)
    if not food:
        raise HTTPException(status_code=404, detail=f"No food named {name!r}")
    return food


@router.get("/{food_id}", response_model=Food, summary="Get a food by id")
def get_food(food_id: str, services: Services = Depends(get_services)):
    food = services.catalog.get(food_id)
    if not food:
        raise HTTPException(status_code=404, detail="Food not found")
    return food
