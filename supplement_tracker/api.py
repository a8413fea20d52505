# -*- coding: utf-8 -*-
"""
Supplement Tracker API

Supplement roster, water and consumption logs, adherence history, streaks,
achievements, dosage suggestions and data export.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .achievements.api import router as achievements_router
from .adherence.api import router as adherence_router
from .config import settings
from .dosage.api import router as dosage_router
from .export.api import router as export_router
from .identity import get_current_user
from .records.api import router as records_router

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Supplement Tracker",
    description="Supplement adherence, hydration history, streaks and achievements",
    version=__version__,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


_IDENTITY_EXEMPT_PREFIXES = (
    "/api/health",
    "/api/docs",
    "/api/redoc",
    "/api/openapi.json",
)


@app.middleware("http")
async def _identity_gate(request: Request, call_next):
    path = request.url.path
    if path.startswith("/api") and not any(path.startswith(p) for p in _IDENTITY_EXEMPT_PREFIXES):
        try:
            request.state.user = get_current_user(request)
        except HTTPException as exc:
            return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})
    return await call_next(request)


app.include_router(records_router)
app.include_router(adherence_router)
app.include_router(achievements_router)
app.include_router(dosage_router)
app.include_router(export_router)


@app.get("/api/health")
def health() -> dict:
    return {"ok": True, "version": __version__}


def run() -> None:
    """Console entry point (used by pyproject [project.scripts])."""
    import uvicorn

    logger.info("Starting Supplement Tracker on %s:%s", settings.host, settings.port)
    uvicorn.run("supplement_tracker.api:app", host=settings.host, port=settings.port, reload=False)
