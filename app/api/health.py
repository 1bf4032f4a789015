"""
@file: health.py
@description:
Provides a health check endpoint reporting whether the service is up and
whether its database answers.

@dependencies:
- FastAPI APIRouter for route definitions.
- sqlalchemy: For the database ping.
- app.core.logger: For component-specific logging

@notes:
- The endpoint always answers 200 while the process is alive; a failed
  database ping is reported in the body as "degraded".
"""

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from app.core.config import Settings, get_settings
from app.core.logger import setup_logger
from app.db.session import engine

# Create a component-specific logger
logger = setup_logger("app.api.health")

router = APIRouter()


@router.get("/health", tags=["Health"])
async def health_check(settings: Settings = Depends(get_settings)):
    """
    Health Check Endpoint

    Returns:
        dict: Service status, environment, and database status.
    """
    logger.debug("Health check requested")
    database = "ok"
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.warning(f"Database ping failed: {str(e)}")
        database = "unavailable"

    return {
        "status": "OK" if database == "ok" else "DEGRADED",
        "message": "Health check successful",
        "environment": settings.APP_ENV,
        "database": database,
    }
