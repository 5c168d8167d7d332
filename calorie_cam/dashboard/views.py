# -*- coding: utf-8 -*-
"""Dashboard — view models handed to the client for rendering."""

from __future__ import annotations

from datetime import date as date_type
from datetime import datetime
from typing import Callable, List, Optional

from pydantic import BaseModel

from ..foods.models import Food
from ..meals.models import DailyCalorieSummary
from .progress import CIRCLE_LENGTH, CIRCLE_RADIUS, STROKE_WIDTH, ProgressRing

CAMERA_ROUTE = "/camera"


class RingView(BaseModel):
    progress: float
    sweep_angle: float
    stroke_dashoffset: float
    stroke: str
    circle_length: float = CIRCLE_LENGTH
    radius: float = CIRCLE_RADIUS
    stroke_width: float = STROKE_WIDTH
    calories_text: str
    goal_text: str


class MealCard(BaseModel):
    meal_id: str
    name: str
    calories: float
    calories_text: str
    image_url: Optional[str] = None
    timestamp: datetime


class EmptyState(BaseModel):
    message: str = "No meals logged today"
    action_label: str = "Scan your first meal"
    action_target: str = CAMERA_ROUTE


class DashboardView(BaseModel):
    date: date_type
    date_label: str
    total_calories: float
    goal: float
    ring: RingView
    meals: List[MealCard]
    empty_state: Optional[EmptyState] = None
    add_meal_target: str = CAMERA_ROUTE
    fab_target: str = CAMERA_ROUTE


def format_number(value: float) -> str:
    return f"{round(value, 1):g}"


def format_date_label(day: date_type) -> str:
    return f"{day:%A}, {day:%B} {day.day}"


def build_ring(total_calories: float, goal: float) -> RingView:
    ring = ProgressRing.from_calories(total_calories, goal)
    return RingView(
        progress=ring.progress,
        sweep_angle=ring.sweep_angle,
        stroke_dashoffset=ring.stroke_dashoffset,
        stroke=ring.stroke,
        calories_text=str(round(total_calories)),
        goal_text=f"Daily Goal: {format_number(goal)} calories",
    )


def build_dashboard(
    summary: DailyCalorieSummary,
    goal: float,
    food_lookup: Callable[[str], Optional[Food]] | None = None,
) -> DashboardView:
    cards: List[MealCard] = []
    for meal in summary.meals:
        food = food_lookup(meal.food_id) if food_lookup else None
        calories = meal.calories or 0.0
        cards.append(
            MealCard(
                meal_id=meal.id,
                name=food.name if food else meal.food_id,
                calories=calories,
                calories_text=f"{format_number(calories)} cal",
                image_url=food.image_url if food else None,
                timestamp=meal.timestamp,
            )
        )

    return DashboardView(
        date=summary.date,
        date_label=format_date_label(summary.date),
        total_calories=summary.total_calories,
        goal=goal,
        ring=build_ring(summary.total_calories, goal),
        meals=cards,
        empty_state=None if cards else EmptyState(),
    )
