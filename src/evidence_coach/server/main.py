"""
Evidence Coach FastAPI server main entrypoint.
Handles CORS, error handling, health checks and API routers.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import UTC, datetime

import psutil
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..catalog import compiled_evidence, default_snapshot
from ..config import SETTINGS
from ..logging_setup import setup_logging
from .routes.exercises import router as r_exercises
from .routes.program import router as r_program
from .routes.templates import router as r_templates

MEMORY_DEGRADED_PERCENT = 90


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    setup_logging()
    try:
        compiled = compiled_evidence()
        logging.info(
            "Evidence catalogue ready: %d templates, %d rules",
            len(compiled.templates),
            len(compiled.rules_by_id),
        )
    except Exception as e:
        logging.exception("Failed to compile evidence catalogue: %s", e)
        raise

    yield

    logging.info("FastAPI server shutdown completed")


app = FastAPI(
    title="Evidence Coach API",
    description="Evidence-informed training program recommendation and personalization",
    version=__import__("evidence_coach").__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=SETTINGS.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(Exception)
async def global_exc_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Global exception handler: log and return a generic error response.
    """
    logging.exception("Unhandled error in %s: %s", request.url, exc)
    return JSONResponse(
        {"ok": False, "error": "internal_error", "message": "Internal server error"},
        status_code=500,
    )


@app.get("/healthz")
async def healthz() -> dict:
    """
    Health check endpoint: catalogue size and process memory.
    """
    checked_at = datetime.now(UTC).isoformat()
    try:
        compiled = compiled_evidence()
        snapshot_version = default_snapshot().version
        rss_mb = psutil.Process().memory_info().rss / 1024 / 1024
        system_memory = psutil.virtual_memory().percent
    except Exception as e:
        logging.exception("Health check failed: %s", e)
        return {"ok": False, "status": "error", "checked_at": checked_at, "error": str(e)}

    is_healthy = bool(compiled.templates) and system_memory < MEMORY_DEGRADED_PERCENT
    return {
        "ok": is_healthy,
        "status": "healthy" if is_healthy else "degraded",
        "checked_at": checked_at,
        "catalogue": {
            "snapshot": snapshot_version,
            "templates": len(compiled.templates),
            "rules": len(compiled.rules_by_id),
        },
        "process": {
            "rss_mb": round(rss_mb, 1),
            "system_memory_percent": round(system_memory, 1),
        },
    }


@app.get("/")
async def root() -> dict:
    """
    Root endpoint with API information.
    """
    return {
        "ok": True,
        "name": "Evidence Coach API",
        "version": app.version,
        "description": "Program template compilation and personalization",
    }


# Routers for API endpoints
app.include_router(r_templates, prefix="/api/v1", tags=["templates"])
app.include_router(r_program, prefix="/api/v1", tags=["program"])
app.include_router(r_exercises, prefix="/api/v1", tags=["exercises"])
