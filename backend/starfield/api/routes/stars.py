"""Star Routes — the /api/stars CRUD contract consumed by the browser client.

Invariants:
    - POST → 201 with the stored star (generated id included)
    - PUT/DELETE on an unknown id → 404 {"error": "Star not found"}
    - DELETE → 200 {"ok": true}
    - Storage failures → 500 {"error": ...}, via the global StarfieldError handler

Design Decisions:
    - Routes hold no rules: parse body, call StarService, return its dict
    - No response_model on star endpoints: extra client fields must pass through
    - Missing body treated as {} (the browser client always sends one)
    - PUT bodies never fail on id/position/timestamp: they are ignored anyway
"""

import logging

from fastapi import APIRouter, Depends, status

from starfield.api.dependencies import get_star_service
from starfield.schemas.star import (
    DeleteResult, StarOut, StarPayload, StarUpdatePayload,
)
from starfield.services.star_service import StarService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/stars", tags=["stars"])


def _record(body: StarPayload | StarUpdatePayload | None) -> dict:
    return body.to_record() if body is not None else {}


@router.get("", responses={200: {"model": list[StarOut]}})
async def list_stars(service: StarService = Depends(get_star_service)):
    """All stars in insertion order."""
    return await service.list_stars()


@router.post(
    "", status_code=status.HTTP_201_CREATED,
    responses={201: {"model": StarOut}},
)
async def create_star(
    body: StarPayload | None = None,
    service: StarService = Depends(get_star_service),
):
    """Add a star; the id is generated when absent."""
    return await service.create_star(_record(body))


@router.put("/{star_id}", responses={200: {"model": StarOut}})
async def update_star(
    star_id: str,
    body: StarUpdatePayload | None = None,
    service: StarService = Depends(get_star_service),
):
    """Update signs and extras; id and position stay, timestamp becomes now."""
    return await service.update_star(star_id, _record(body))


@router.delete("/{star_id}", response_model=DeleteResult)
async def delete_star(
    star_id: str, service: StarService = Depends(get_star_service),
):
    await service.delete_star(star_id)
    return DeleteResult(ok=True)
