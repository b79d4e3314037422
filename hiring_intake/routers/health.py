"""Health check endpoint.

Returns service status including database connectivity and whether the
language model is configured.
"""

import logging
from typing import Any

from fastapi import APIRouter
from starlette.responses import JSONResponse

from hiring_intake.core.config import settings
from hiring_intake.db.supabase import ping_database

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
async def health_check() -> Any:
    """Return 200 when the database answers, 503 otherwise.

    An unconfigured language model does not make the service unhealthy:
    intake still persists the extracted text without a profile or score.
    """
    db_status = "connected" if ping_database() else "disconnected"

    payload: dict[str, str | None] = {
        "status": "ok" if db_status == "connected" else "degraded",
        "database": db_status,
        "language_model": "configured" if settings.LLM_API_KEY else "not_configured",
        "model": settings.LLM_MODEL,
    }

    if db_status != "connected":
        return JSONResponse(status_code=503, content=payload)

    return payload
