"""
Health and dependency endpoints.
"""

from __future__ import annotations

import os

from fastapi import APIRouter, HTTPException
from sqlalchemy import inspect, text
from sqlalchemy.exc import SQLAlchemyError

import core.config as config
from core.db import DB
from core.models import Base


router = APIRouter()


def _check_db_health() -> dict:
    if DB.engine is None:
        return {"ok": False, "error": "db_not_initialized"}

    try:
        with DB.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
            existing_tables = set(inspect(conn).get_table_names())
    except SQLAlchemyError as exc:
        return {"ok": False, "error": str(exc)}

    missing_tables = sorted(set(Base.metadata.tables) - existing_tables)
    return {
        "ok": not missing_tables,
        "backend": config.DB_BACKEND_EFFECTIVE,
        "missing_tables": missing_tables,
    }


@router.get("/health")
def health():
    """Health check endpoint."""
    db_health = _check_db_health()
    if not db_health.get("ok"):
        raise HTTPException(status_code=503, detail={"database": db_health})

    return {
        "status": "healthy",
        "service": config.SERVICE_NAME,
        "version": config.SERVICE_VERSION,
        "instance_id": os.environ.get("FACTGATE_INSTANCE_ID", "factgate-1"),
        "database": db_health,
    }
