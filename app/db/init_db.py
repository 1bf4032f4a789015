"""
Database initialization script.

This script creates the picks table (and its indexes) when setting up the
application for the first time.

Usage:
    $ python -m app.db.init_db
"""

from app.db.base import Base
from app.db import models  # noqa: F401  registers the Pick model on Base.metadata
from app.db.session import engine
from app.core.logger import setup_logger

logger = setup_logger("app.db.init_db")


def init_db(bind=None) -> None:
    """Initialize the database by creating all tables."""
    Base.metadata.create_all(bind=bind or engine)
    logger.info("Database initialized successfully")


if __name__ == "__main__":
    init_db()
