# -*- coding: utf-8 -*-
"""Dashboard — circular calorie progress ring geometry, colour and animation."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Sequence

CIRCLE_LENGTH = 600.0
CIRCLE_RADIUS = CIRCLE_LENGTH / (2 * math.pi)
STROKE_WIDTH = 20.0
ANIMATION_MS = 1500

# Hue shift breakpoints: progress -> degrees subtracted from green (120).
PROGRESS_BREAKPOINTS: Sequence[float] = (0.0, 0.5, 0.75, 1.0)
HUE_SHIFTS: Sequence[float] = (0.0, 120.0, 240.0, 360.0)


def interpolate(value: float, input_range: Sequence[float], output_range: Sequence[float]) -> float:
    """Piecewise-linear map; values outside the input range extend the edge segment."""
    if len(input_range) != len(output_range) or len(input_range) < 2:
        raise ValueError("input_range and output_range must have the same length (>= 2)")
    idx = len(input_range) - 2
    for i in range(len(input_range) - 1):
        if value <= input_range[i + 1]:
            idx = i
            break
    x0, x1 = input_range[idx], input_range[idx + 1]
    y0, y1 = output_range[idx], output_range[idx + 1]
    if x1 == x0:
        return y0
    return y0 + (value - x0) * (y1 - y0) / (x1 - x0)


def ease_in_out_quad(t: float) -> float:
    t = min(max(t, 0.0), 1.0)
    if t < 0.5:
        return 2 * t * t
    return 1 - ((2 - 2 * t) ** 2) / 2


@dataclass(frozen=True)
class ProgressRing:
    progress: float
    sweep_angle: float
    stroke_dashoffset: float
    hue: float

    @property
    def stroke(self) -> str:
        return f"hsl({self.hue:g}, 70%, 50%)"

    @classmethod
    def from_progress(cls, progress: float) -> "ProgressRing":
        clamped = min(max(progress, 0.0), 1.0)
        shift = interpolate(progress, PROGRESS_BREAKPOINTS, HUE_SHIFTS)
        return cls(
            progress=progress,
            sweep_angle=round(360.0 * clamped, 3),
            stroke_dashoffset=round(CIRCLE_LENGTH * (1 - clamped), 3),
            hue=round((120.0 - shift) % 360.0, 1),
        )

    @classmethod
    def from_calories(cls, current: float, goal: float) -> "ProgressRing":
        if goal <= 0:
            raise ValueError("Daily calorie goal must be positive")
        return cls.from_progress(max(current, 0.0) / goal)


def animate_progress(
    start: float,
    end: float,
    duration_ms: int = ANIMATION_MS,
    fps: int = 60,
) -> List[ProgressRing]:
    """Frames of an ease-in-out transition from ``start`` to ``end`` progress."""
    count = max(1, round(duration_ms * fps / 1000))
    return [
        ProgressRing.from_progress(start + (end - start) * ease_in_out_quad(i / count))
        for i in range(1, count + 1)
    ]
