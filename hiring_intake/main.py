"""FastAPI application entry point.

Configures CORS, structured logging, lifespan events and router
registration.
"""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hiring_intake.core.config import settings
from hiring_intake.core.logging import setup_logging
from hiring_intake.routers import health, intake, stages

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(application: FastAPI) -> AsyncIterator[None]:
    """Application lifespan: startup and shutdown hooks."""
    setup_logging()
    logger.info(
        "Application starting up",
        extra={"llm_configured": bool(settings.LLM_API_KEY)},
    )
    yield
    logger.info("Application shutting down")


app = FastAPI(
    title="Hiring Intake API",
    description="Resume intake, job fit scoring and candidate stage transitions",
    version="0.1.0",
    lifespan=lifespan,
)

# ---------------------------------------------------------------------------
# CORS Configuration
# ---------------------------------------------------------------------------
_raw_origins = settings.ALLOWED_ORIGINS.strip()
if _raw_origins == "*":
    _allowed_origins: list[str] = ["*"]
else:
    _allowed_origins = [o.strip() for o in _raw_origins.split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=_allowed_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------------------------------------------------------
# Router Registration
# ---------------------------------------------------------------------------
app.include_router(health.router, tags=["Health"])
app.include_router(intake.router, prefix="/api/v1/candidates", tags=["Intake"])
app.include_router(stages.router, prefix="/api/v1", tags=["Stages"])
