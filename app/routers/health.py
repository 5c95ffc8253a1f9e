# =============================================================================
# app/routers/health.py - Liveness & Readiness
# =============================================================================
# /health answers without touching Supabase. /health/ready reads the tables
# the public form and the admin login depend on.
# =============================================================================

import logging
from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel

from app.config import settings
from lib.supabase_client import SupabaseClient, SupabaseClientError
from recordset import list_kinds

logger = logging.getLogger(__name__)

router = APIRouter()

VERSION = "1.0.0"

# Tables checked by /health/ready
READINESS_TABLES = ("student_applications", "admin_users")


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    environment: str
    version: str
    record_kinds: list[str]


class ReadinessResponse(BaseModel):
    """Per-table result is "ok" or the error message."""
    status: str
    tables: dict[str, str]
    timestamp: str


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Liveness check; never touches Supabase."""
    return HealthResponse(
        status="healthy",
        timestamp=_utc_now(),
        environment=settings.ENVIRONMENT,
        version=VERSION,
        record_kinds=list_kinds(),
    )


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check():
    """
    Readiness check.

    Status is "ready" when every table can be counted, otherwise "degraded".
    """
    tables = {}
    for table in READINESS_TABLES:
        try:
            SupabaseClient.count(table)
            tables[table] = "ok"
        except SupabaseClientError as e:
            logger.warning(f"Readiness check failed on {table}: {e}")
            tables[table] = e.message[:80]

    ready = all(result == "ok" for result in tables.values())
    return ReadinessResponse(
        status="ready" if ready else "degraded",
        tables=tables,
        timestamp=_utc_now(),
    )
