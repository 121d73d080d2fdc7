"""
SampleWeb Backend - Health Check Route
======================================

What:  Liveness endpoint for monitoring and container health probes.
How:   Reports version, uptime, and whether the template root exists.
       A missing template root marks the service "degraded": it still
       answers, but every render will fail with template_not_found.
"""

import logging
import time
from pathlib import Path

from fastapi import APIRouter

from sampleweb import __version__
from sampleweb.config import settings
from sampleweb.schemas.health import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check() -> HealthResponse:
    templates_status = "available"
    overall = "healthy"

    if not Path(settings.templates_dir).is_dir():
        templates_status = "missing"
        overall = "degraded"
        logger.warning("Health check: template root missing: %s", settings.templates_dir)

    return HealthResponse(
        status=overall,
        version=__version__,
        templates=templates_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
