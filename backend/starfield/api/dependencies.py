"""API Dependencies — FastAPI providers for objects built in the lifespan.

Invariants:
    - The StarService lives on app.state, created once at startup
    - Tests swap it through app.dependency_overrides[get_star_service]
"""

from fastapi import Request

from starfield.services.star_service import StarService


def get_star_service(request: Request) -> StarService:
    """FastAPI dependency for the process-wide StarService."""
    service = getattr(request.app.state, "star_service", None)
    if service is None:
        raise RuntimeError("Star service not initialized")
    return service
