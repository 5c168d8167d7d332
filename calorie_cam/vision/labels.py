# -*- coding: utf-8 -*-
"""Vision — pick the label that names the food."""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from .models import LabelAnnotation

FOOD_KEYWORDS: Sequence[str] = ("food", "dish", "meal")


def select_food_label(
    labels: Iterable[LabelAnnotation | str],
    keywords: Sequence[str] = FOOD_KEYWORDS,
) -> Optional[str]:
    """First label (in API rank order) whose text contains a food keyword."""
    for label in labels:
        text = label if isinstance(label, str) else label.description
        lowered = text.lower()
        if any(k in lowered for k in keywords):
            return text
    return None
