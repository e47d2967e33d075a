"""Star Schemas — Pydantic models for the /api/stars request and response bodies.

Invariants:
    - Every field is optional: create and update both take a partial star
    - StarUpdatePayload never rejects a body for its id/position/timestamp;
      those keys are dropped before the service sees them
    - Unknown keys are kept (extra="allow") and stored as sent
    - On create, position (when present) has numeric x/y/z plus any extra keys — shape checked here, not in core
    - to_record() only includes keys the client actually sent

Design Decisions:
    - int | float coordinates: integers echo back as integers, like the browser sent them
    - camelCase field names: they are the wire format, no alias layer
"""

from typing import Any

from pydantic import BaseModel, ConfigDict

from starfield.core.domain_types import ID_FIELD, POSITION_FIELD, TIMESTAMP_FIELD

PROTECTED_UPDATE_FIELDS: tuple[str, ...] = (ID_FIELD, POSITION_FIELD, TIMESTAMP_FIELD)


class StarPosition(BaseModel):
    """A point in the starfield cube; extra keys are kept."""
    model_config = ConfigDict(extra="allow")

    x: int | float
    y: int | float
    z: int | float


class StarPayload(BaseModel):
    """Partial star sent by the browser for create or update."""
    model_config = ConfigDict(extra="allow")

    id: str | None = None
    sunSign: str | None = None
    moonSign: str | None = None
    risingSign: str | None = None
    position: StarPosition | None = None
    timestamp: int | None = None

    def to_record(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class StarUpdatePayload(BaseModel):
    """Partial star sent for an update.

    id, position and timestamp are accepted in any shape and dropped: the
    update keeps the stored id and position and stamps its own time.
    """
    model_config = ConfigDict(extra="allow")

    id: Any = None
    sunSign: str | None = None
    moonSign: str | None = None
    risingSign: str | None = None
    position: Any = None
    timestamp: Any = None

    def to_record(self) -> dict[str, Any]:
        return self.model_dump(
            exclude_unset=True, exclude=set(PROTECTED_UPDATE_FIELDS),
        )


class StarOut(BaseModel):
    """Documented response shape (OpenAPI only — responses are not filtered)."""
    model_config = ConfigDict(extra="allow")

    id: str
    sunSign: str | None = None
    moonSign: str | None = None
    risingSign: str | None = None
    position: StarPosition | None = None
    timestamp: int | None = None


class DeleteResult(BaseModel):
    ok: bool = True


class HealthOut(BaseModel):
    ok: bool = True
    stars: int
