"""StarRow ORM — one row per star in the database-backed collection.

Invariants:
    - ordinal is the insertion order; load_all sorts by it
    - payload holds the full star JSON object, extra client fields included
    - star_id mirrors payload["id"] for lookups; NULL for legacy records without one

Design Decisions:
    - JSON payload over one column per field: stars are schemaless beyond
      id/position/timestamp and must round-trip unknown keys
    - No unique constraint on star_id: uniqueness is enforced by the service,
      and legacy rows may share a NULL id
"""

from sqlalchemy import JSON, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from starfield.db.base import Base


class StarRow(Base):
    """A persisted star record."""
    __tablename__ = "stars"

    ordinal: Mapped[int] = mapped_column(Integer, primary_key=True)
    star_id: Mapped[str | None] = mapped_column(
        String(255), nullable=True, index=True,
    )
    payload: Mapped[dict] = mapped_column(JSON, nullable=False)
