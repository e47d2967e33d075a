"""Database Store — the star collection as ordered rows in a SQL table.

Invariants:
    - save_all replaces every row inside one transaction: commit or full rollback
    - load_all returns payloads ordered by ordinal and never raises
    - Every SQLAlchemy failure on the write path surfaces as StorageError

Design Decisions:
    - Delete-and-reinsert over diffing: the collection is saved as one unit,
      same contract as the JSON file store
"""

import logging

from sqlalchemy import delete, select

from starfield.core.domain_types import ID_FIELD, StarRecord
from starfield.core.errors import StorageError
from starfield.infrastructure.database import DatabaseSessionManager
from starfield.models.star import StarRow

logger = logging.getLogger(__name__)


class DatabaseStarStore:
    """Star store backed by the `stars` table."""

    def __init__(self, manager: DatabaseSessionManager):
        self.manager = manager

    async def initialize(self) -> None:
        await self.manager.create_schema()

    async def load_all(self) -> list[StarRecord]:
        try:
            async with self.manager.session() as db:
                result = await db.execute(
                    select(StarRow.payload).order_by(StarRow.ordinal),
                )
                return [dict(p) for p in result.scalars().all() if isinstance(p, dict)]
        except StorageError as e:
            logger.warning(
                f"Star table unreadable, serving empty collection: {e.message}",
                extra={"backend": "database"},
            )
            return []

    async def save_all(self, stars: list[StarRecord]) -> None:
        async with self.manager.session() as db:
            await db.execute(delete(StarRow))
            db.add_all(
                StarRow(ordinal=i, star_id=_id_or_none(s), payload=s)
                for i, s in enumerate(stars)
            )
            await db.commit()


def _id_or_none(record: StarRecord) -> str | None:
    value = record.get(ID_FIELD)
    return value if isinstance(value, str) and value else None
