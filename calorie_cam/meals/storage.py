# -*- coding: utf-8 -*-
"""Meals — per-user append-only meal records on the document store."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from ..docstore import Document, DocumentStore, Filter, collection_path
from .models import Meal

logger = logging.getLogger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def meals_collection(user_id: str) -> str:
    return collection_path("users", user_id, "meals")


def to_epoch_ms(ts: datetime) -> int:
    if ts.tzinfo is None:
        raise ValueError("Meal timestamps must be timezone-aware")
    return (ts - _EPOCH) // timedelta(milliseconds=1)


def _meal_from_doc(user_id: str, doc: Document) -> Meal:
    data = doc.data
    return Meal(
        id=doc.id,
        user_id=data.get("user_id") or user_id,
        food_id=data["food_id"],
        timestamp=datetime.fromisoformat(data["timestamp"]),
        quantity=float(data.get("quantity", 1.0)),
        notes=data.get("notes"),
    )


class MealStore:
    """No update or delete is exposed; records are only ever appended."""

    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    def append(
        self,
        user_id: str,
        food_id: str,
        timestamp: datetime,
        quantity: float = 1.0,
        notes: Optional[str] = None,
    ) -> str:
        if quantity < 0:
            raise ValueError("quantity must be >= 0")
        data = {
            "user_id": user_id,
            "food_id": food_id,
            "timestamp": timestamp.isoformat(),
            "timestamp_ms": to_epoch_ms(timestamp),
            "quantity": float(quantity),
            "notes": notes,
        }
        meal_id = self.store.add(meals_collection(user_id), data)
        logger.info("meal recorded: user=%s food=%s meal=%s", user_id, food_id, meal_id)
        return meal_id

    def list_between(self, user_id: str, start: datetime, end: datetime) -> List[Meal]:
        """Meals with start <= timestamp <= end, oldest first."""
        docs = self.store.query(
            meals_collection(user_id),
            [
                Filter("timestamp_ms", ">=", to_epoch_ms(start)),
                Filter("timestamp_ms", "<=", to_epoch_ms(end)),
            ],
            order_by="timestamp_ms",
        )
        return [_meal_from_doc(user_id, d) for d in docs]
