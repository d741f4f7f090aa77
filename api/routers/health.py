# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-07
# Updated: 2026-10-18
# Description: health.py
# -----------------------------------------------------------------------------
import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Query

import settings
from api.schemas.health import HealthResponse, DeepHealthResponse
from api.dependencies import get_health_service
from config.Config import Config
from services.TabHealthService import TabHealthService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


# Liveness only: answers even when the database or provider config is missing.
@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    return HealthResponse(
        status="ok",
        service=settings.SERVICE_NAME,
        version=settings.SERVICE_VERSION,
        timestamp=datetime.now(timezone.utc),
        auth=Config.auth_mode_from_env(),
    )


@router.get("/deep", response_model=DeepHealthResponse)
def deep_health_check(
    svc: TabHealthService = Depends(get_health_service),
    run_embedding: bool = Query(True, description="Run the billable embedding check"),
) -> DeepHealthResponse:
    logger.info("GET /health/deep called (run_embedding=%s)", run_embedding)
    result = svc.deep_health(run_embedding=run_embedding)
    logger.info("GET /health/deep completed: %s", result.status)
    return result
