"""FastAPI service for the calendar engine."""
from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from calendar_engine import WEIGHTS_VERSION

from .dependencies import get_settings
from .routers import layout_router, scheduling_router

logger = logging.getLogger(__name__)


app = FastAPI(
    title="Calendar Engine API",
    version="0.1.0",
    description="Lane layout, conflict detection and slot scheduling for calendar views.",
)

ALLOWED_ORIGINS = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    get_settings().allowed_frontend or "",
]
origins = [origin for origin in ALLOWED_ORIGINS if origin]

if origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.include_router(layout_router, prefix="/layout", tags=["layout"])
app.include_router(scheduling_router, prefix="/scheduling", tags=["scheduling"])


@app.get("/health")
def health_check() -> dict:
    """Health check endpoint with engine configuration."""
    settings = get_settings()
    return {
        "status": "ok",
        "environment": settings.environment,
        "defaultTimeZone": settings.default_time_zone,
        "weightsVersion": WEIGHTS_VERSION,
    }
