"""
Database Session Management Module.

This module handles the creation and management of database connections and sessions
using SQLAlchemy. It provides utilities for connecting to the pick database,
creating sessions, and managing database transactions.

Key features:
- Database engine configuration (PostgreSQL in production, SQLite for local runs)
- Session maker setup

Usage:
- PickStore takes SessionLocal as its session factory; each call opens its own session
- Tests build their own engine and factory with create_db_engine/create_session_factory
"""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from app.core.config import settings


def create_db_engine(database_url: str, **kwargs) -> Engine:
    """
    Create an engine for the given URL with pool settings suited to its dialect.

    SQLite connections are shared with executor threads, so same-thread
    checking is turned off for them.
    """
    if database_url.startswith("sqlite"):
        connect_args = kwargs.pop("connect_args", {})
        connect_args.setdefault("check_same_thread", False)
        return create_engine(database_url, connect_args=connect_args, **kwargs)

    return create_engine(
        database_url,
        pool_pre_ping=True,  # Check connection before using it
        pool_size=10,
        max_overflow=20,
        pool_recycle=300,    # Recycle connections every 5 minutes
        echo=settings.APP_ENV == "development" and settings.DEBUG,
        **kwargs,
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    """Create a sessionmaker bound to the given engine."""
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


engine = create_db_engine(settings.DATABASE_URL)

# Create a sessionmaker for creating database sessions
SessionLocal = create_session_factory(engine)
