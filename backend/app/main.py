"""
FastAPI application entry point.
"""

import asyncio
import logging
from contextlib import asynccontextmanager, suppress

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.config import settings
from app.database import SessionLocal, init_db
from app.api.router import api_router
from app.models.ai_settings import apply_saved_ai_settings
from app.services.scheduler import rollover_loop


logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()

    db = SessionLocal()
    try:
        if apply_saved_ai_settings(db, settings):
            logger.info(f"Loaded saved AI settings (provider: {settings.ai_provider})")
    finally:
        db.close()

    task = None
    if settings.rollover_enabled:
        task = asyncio.create_task(rollover_loop(settings.rollover_interval_seconds))
        logger.info(f"Rollover scheduled every {settings.rollover_interval_seconds}s")

    yield

    if task is not None:
        task.cancel()
        with suppress(asyncio.CancelledError):
            await task


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version="1.0.0",
    description="Local-first subscription tracker with renewal reminders and AI-assisted entry",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.frontend_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API router
app.include_router(api_router, prefix="/api/v1")


@app.get("/")
def read_root():
    """Root endpoint."""
    return {
        "name": settings.app_name,
        "version": "1.0.0",
        "status": "running"
    }


@app.get("/api/v1/health")
def health_check():
    """Health check endpoint."""
    return {
        "status": "ok",
        "app_name": settings.app_name
    }


def run():
    """Console entry point."""
    import uvicorn

    uvicorn.run("app.main:app", host=settings.api_host, port=settings.api_port)
