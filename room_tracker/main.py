import os
from contextlib import asynccontextmanager
from datetime import datetime, timezone

import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from room_tracker import __version__
from room_tracker.api import auth_router, rooms
from room_tracker.config.settings import get_settings
from room_tracker.middleware.error_handler import (
    app_error_handler,
    general_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from room_tracker.middleware.request_id import RequestIdMiddleware
from room_tracker.utils.exceptions import AppError, ConfigurationError
from room_tracker.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Fail fast outside development when Supabase is not configured."""
    if settings.environment == "development":
        logger.info("Room Tracker API is ready", docs="http://localhost:8000/docs")
    elif not settings.supabase_url or not settings.supabase_anon_key:
        raise ConfigurationError("SUPABASE_URL and SUPABASE_ANON_KEY are required")
    yield


app = FastAPI(
    lifespan=lifespan,
    title="Room Tracker API",
    description="Track completion of categorized training rooms",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

settings = get_settings()
# Wildcard CORS is a development convenience only
resolved_origins = settings.cors_origins
if settings.environment != "development":
    if not resolved_origins or (isinstance(resolved_origins, list) and "*" in resolved_origins):
        resolved_origins = []

app.add_middleware(
    CORSMiddleware,
    allow_origins=resolved_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_logging()
app.add_middleware(RequestIdMiddleware)

app.add_exception_handler(AppError, app_error_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, general_exception_handler)


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring"""
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": __version__,
        "environment": settings.environment,
    }


@app.get("/api/health")
async def api_health():
    return {
        "status": "healthy",
        "service": settings.app_name,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


app.include_router(auth_router, prefix="/api/auth", tags=["Authentication"])
app.include_router(rooms.router, tags=["Rooms"])


def run() -> None:
    uvicorn.run(
        "room_tracker.main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", 8000)),
        reload=settings.environment == "development",
    )


if __name__ == "__main__":
    run()
