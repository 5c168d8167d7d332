# -*- coding: utf-8 -*-
"""Service wiring — every component gets its store handle at construction."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import tzinfo
from zoneinfo import ZoneInfo

from fastapi import Request

from .auth.events import SIGNED_OUT, AuthEvent, AuthEvents
from .auth.storage import AccountStore
from .capture.session import CaptureSession, CaptureSessionRegistry, LabelDetector
from .config import Settings
from .docstore import DocumentStore, MemoryDocumentStore, SQLiteDocumentStore
from .foods.catalog import FoodCatalog
from .meals.recording import MealRecorder
from .meals.storage import MealStore
from .meals.summary import DailyAggregator
from .vision.client import LabelDetectionClient, resolve_vision_settings


@dataclass
class Services:
    settings: Settings
    tz: tzinfo
    store: DocumentStore
    accounts: AccountStore
    auth_events: AuthEvents
    catalog: FoodCatalog
    meals: MealStore
    aggregator: DailyAggregator
    recorder: MealRecorder
    detector: LabelDetector
    captures: CaptureSessionRegistry


def open_store(cfg: Settings) -> DocumentStore:
    if cfg.store_backend == "memory":
        return MemoryDocumentStore()
    if cfg.store_backend == "sqlite":
        return SQLiteDocumentStore(cfg.db_path)
    raise ValueError(f"Unknown CALCAM_STORE backend: {cfg.store_backend!r}")


def build_services(
    cfg: Settings,
    store: DocumentStore | None = None,
    detector: LabelDetector | None = None,
) -> Services:
    store = store or open_store(cfg)
    tz = ZoneInfo(cfg.timezone)
    catalog = FoodCatalog(store)
    meals = MealStore(store)
    recorder = MealRecorder(catalog, meals)
    detector = detector or LabelDetectionClient(resolve_vision_settings(cfg))

    def new_session(user_id: str) -> CaptureSession:
        return CaptureSession(user_id, detector, recorder, max_width=cfg.image_max_width)

    captures = CaptureSessionRegistry(new_session)
    auth_events = AuthEvents()

    def drop_capture_session(event: AuthEvent) -> None:
        if event.kind == SIGNED_OUT:
            captures.discard(event.user_id)

    auth_events.subscribe(drop_capture_session)

    return Services(
        settings=cfg,
        tz=tz,
        store=store,
        accounts=AccountStore(store),
        auth_events=auth_events,
        catalog=catalog,
        meals=meals,
        aggregator=DailyAggregator(meals, catalog, tz),
        recorder=recorder,
        detector=detector,
        captures=captures,
    )


def get_services(request: Request) -> Services:
    return request.app.state.services
