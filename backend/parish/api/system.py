# parish/api/system.py
"""Ops endpoints: liveness with a database round-trip, and build info."""
from __future__ import annotations

import logging
import os
from datetime import datetime
from zoneinfo import ZoneInfo

from fastapi import APIRouter
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from parish.db import engine

router = APIRouter(tags=["ops"])
logger = logging.getLogger(__name__)

APP_NAME = "Parish Registry Backend"
APP_VERSION = "0.1.0"
DEFAULT_TZ = "Africa/Kigali"


def _local_tz() -> str:
    return os.getenv("TZ", DEFAULT_TZ)


@router.get("/health")
def health():
    database = {"dialect": engine.dialect.name, "reachable": True}
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.warning("Health check could not reach the database: %s", e)
        database["reachable"] = False

    return {
        "status": "ok" if database["reachable"] else "degraded",
        "database": database,
        "localTime": datetime.now(ZoneInfo(_local_tz())).strftime("%Y-%m-%d %H:%M:%S"),
        "timezone": _local_tz(),
    }


@router.get("/version")
def version():
    return {"app": APP_NAME, "version": APP_VERSION, "dialect": engine.dialect.name}
