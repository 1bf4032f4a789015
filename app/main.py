"""
Main application entry point for the PickResults Backend API.

This module initializes the FastAPI application with middleware and routers,
and creates the database tables on startup. Scheduled syncing runs separately
in the Celery beat/worker processes (see app.workers).
"""

import uvicorn
from fastapi import FastAPI

from app.api import games, health, picks, sync
from app.core.config import settings
from app.core.logger import setup_logger
from app.core.middleware import setup_all_middleware
from app.db.init_db import init_db

logger = setup_logger("app.main")

API_VERSION = "0.1.0"

# Initialize FastAPI app with metadata
app = FastAPI(
    title="PickResults API",
    description="Syncs live game results and grades sports picks",
    version=API_VERSION,
)

setup_all_middleware(app)

app.include_router(health.router, prefix="/api/v1")
app.include_router(sync.router, prefix="/api/v1")
app.include_router(games.router, prefix="/api/v1")
app.include_router(picks.router, prefix="/api/v1")


@app.on_event("startup")
def on_startup() -> None:
    logger.info(f"Starting PickResults API ({settings.APP_ENV})")
    init_db()


# Root endpoint for basic health check
@app.get("/")
async def root():
    """
    Root endpoint providing a simple health check and API information.

    Returns:
        dict: Basic API information including status and version.
    """
    return {
        "status": "online",
        "api": "PickResults Backend API",
        "version": API_VERSION
    }


if __name__ == "__main__":
    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=settings.DEBUG)
