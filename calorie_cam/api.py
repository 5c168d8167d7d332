# -*- coding: utf-8 -*-
"""
Calorie Cam API

Food photo capture, catalog lookup, meal logging and daily calorie dashboard.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .auth.api import router as auth_router
from .auth.security import get_current_user_from_request
from .capture.api import router as capture_router
from .capture.session import LabelDetector
from .config import Settings, settings
from .dashboard.api import router as dashboard_router
from .docstore import DocumentStore
from .foods.api import router as foods_router
from .foods.seed_data import DEFAULT_FOODS
from .meals.api import router as meals_router
from .services import build_services

logger = logging.getLogger(__name__)

_AUTH_EXEMPT_PREFIXES = (
    "/api/auth/anonymous",
    "/api/docs",
    "/api/redoc",
    "/api/openapi.json",
)


def create_app(
    cfg: Settings | None = None,
    *,
    store: DocumentStore | None = None,
    detector: LabelDetector | None = None,
    seed_catalog: bool = True,
) -> FastAPI:
    cfg = cfg or settings
    services = build_services(cfg, store=store, detector=detector)
    if seed_catalog:
        # Idempotent: foods are upserted by normalized name.
        services.catalog.seed(DEFAULT_FOODS)

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        yield
        logger.info("calorie cam shutting down; closing %s", type(services.store).__name__)
        services.store.close()

    app = FastAPI(
        title="Calorie Cam",
        description="Snap a meal, detect the food, track daily calories",
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
        lifespan=lifespan,
    )
    app.state.services = services

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def _auth_gate(request: Request, call_next):
        path = request.url.path
        if path.startswith("/api") and path != "/api/health" and not any(path.startswith(p) for p in _AUTH_EXEMPT_PREFIXES):
            try:
                request.state.user = get_current_user_from_request(request)
            except HTTPException as exc:
                return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})
        return await call_next(request)

    app.include_router(auth_router)
    app.include_router(foods_router)
    app.include_router(meals_router)
    app.include_router(capture_router)
    app.include_router(dashboard_router)

    @app.get("/api/health")
    def health() -> dict:
        return {"ok": True}

    logger.info("calorie cam app created (store=%s)", type(services.store).__name__)
    return app
