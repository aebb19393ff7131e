"""
Database initialization helpers.
"""

from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

import core.config as config
from core.models import Base


class DB:
    """Database state holder (avoids global scoping issues)."""

    engine = None
    SessionLocal = None


def open_session():
    if DB.SessionLocal is None:
        raise RuntimeError("Database not initialized - SessionLocal is None")
    return DB.SessionLocal()


def init_db() -> None:
    """Initialize database connection and create tables."""
    config.validate_and_prepare_config()

    config.logger.info("Connecting to database...")
    engine_kwargs = {"pool_pre_ping": True}
    if config.DB_BACKEND == "sqlite":
        engine_kwargs["connect_args"] = {"check_same_thread": False}
    DB.engine = create_engine(config.DATABASE_URL, **engine_kwargs)
    DB.SessionLocal = sessionmaker(bind=DB.engine)

    if config.AUTO_CREATE_TABLES:
        config.logger.info("Ensuring tables exist...")
        Base.metadata.create_all(DB.engine)
    else:
        config.logger.info("Skipping table creation")

    config.logger.info("Database initialized")


def dispose_db() -> None:
    if DB.engine is not None:
        DB.engine.dispose()
    DB.engine = None
    DB.SessionLocal = None
