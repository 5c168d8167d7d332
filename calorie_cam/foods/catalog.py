# -*- coding: utf-8 -*-
"""Foods — catalog store (seeded, upserted by normalized name)."""

from __future__ import annotations

import logging
import re
from typing import Iterable, List, Optional

from ..docstore import Document, DocumentStore, Filter
from .models import Food, FoodSeed

logger = logging.getLogger(__name__)

FOODS_COLLECTION = "foods"

_WS_RE = re.compile(r"\s+")


def normalize_food_id(name: str) -> str:
    """Catalog identity: lower-case, whitespace runs collapsed to a single hyphen."""
    food_id = _WS_RE.sub("-", (name or "").strip().lower())
    if not food_id:
        raise ValueError("Food name must not be empty")
    return food_id


def search_name(name: str) -> str:
    return _WS_RE.sub(" ", (name or "").strip().lower())


def _food_from_doc(doc: Document) -> Food:
    data = {k: v for k, v in doc.data.items() if k != "search_name"}
    return Food.model_validate({**data, "id": doc.id})


class FoodCatalog:
    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    def seed(self, foods: Iterable[FoodSeed]) -> None:
        count = 0
        for seed in foods:
            food_id = normalize_food_id(seed.name)
            data = seed.model_dump()
            data["search_name"] = search_name(seed.name)
            self.store.set(FOODS_COLLECTION, food_id, data)
            count += 1
        logger.info("food catalog seeded: %s entries", count)

    def lookup_by_name(self, name: str) -> Optional[Food]:
        """Case-normalized match against display names; None when nothing matches."""
        key = search_name(name)
        if not key:
            return None
        docs = self.store.query(FOODS_COLLECTION, [Filter("search_name", "==", key)], limit=1)
        if not docs:
            return None
        return _food_from_doc(docs[0])

    def get(self, food_id: str) -> Optional[Food]:
        doc = self.store.get(FOODS_COLLECTION, food_id)
        return _food_from_doc(doc) if doc else None

    def list_foods(self) -> List[Food]:
        return [_food_from_doc(d) for d in self.store.query(FOODS_COLLECTION, order_by="name")]
