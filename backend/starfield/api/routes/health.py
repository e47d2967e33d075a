"""Health Probe — liveness endpoint with the current star count.

Invariants:
    - GET /health always returns 200 {"ok": true, "stars": <count>} while the process is up
    - Count comes from the fail-open load: an unreadable store reports 0, not 503
"""

import logging

from fastapi import APIRouter, Depends, status

from starfield.api.dependencies import get_star_service
from starfield.schemas.star import HealthOut
from starfield.services.star_service import StarService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthOut, status_code=status.HTTP_200_OK)
async def health_check(service: StarService = Depends(get_star_service)):
    """Basic liveness check."""
    return HealthOut(ok=True, stars=await service.count_stars())
