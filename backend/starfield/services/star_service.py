"""Star Service — identity and field-preservation rules on top of a StarStore.

Invariants:
    - Every call loads the collection fresh; the service keeps no star state
    - Mutations run load → core rule → save to completion before returning,
      so a response always reflects committed state
    - With serialize_writes, at most one mutation is in flight (asyncio.Lock):
      no lost updates between concurrent create/update/delete
    - list_stars never waits on the mutation gate; it may read the state from
      before an in-flight write commits
    - NotFound paths never write

Design Decisions:
    - Impureim sandwich: IO here, decisions in core/star_rules.py
    - StorageError from the store is tagged with an operation-specific public
      message and re-raised; the API layer only maps error → status
    - Any id holder may update/delete: ownership lives client-side
"""

import asyncio
import logging
import random
import time
from contextlib import nullcontext
from typing import Callable

from starfield.core import star_rules
from starfield.core.domain_types import ID_FIELD, StarRecord
from starfield.core.errors import (
    ErrorContext, StarConflictError, StarNotFoundError, StorageError,
)
from starfield.core.repository_protocols import StarStore
from starfield.core.star_rules import StarRules

logger = logging.getLogger(__name__)

Clock = Callable[[], int]


def epoch_millis() -> int:
    return time.time_ns() // 1_000_000


class StarService:
    """Create/list/update/delete stars with stable identity."""

    def __init__(
        self,
        store: StarStore,
        rules: StarRules | None = None,
        clock: Clock = epoch_millis,
        rng: random.Random | None = None,
        id_suffix_factory: star_rules.IdSuffixFactory | None = None,
        serialize_writes: bool = True,
    ):
        self.store = store
        self.rules = rules or StarRules()
        self.clock = clock
        self.rng = rng or random.Random()
        self._id_suffix_factory = id_suffix_factory
        self._serialize_writes = serialize_writes
        self._write_lock = asyncio.Lock()

    # ─── Reads ───────────────────────────────────────────────────

    async def list_stars(self) -> list[StarRecord]:
        return await self.store.load_all()

    async def count_stars(self) -> int:
        return len(await self.store.load_all())

    # ─── Mutations ───────────────────────────────────────────────

    async def create_star(self, data: StarRecord) -> StarRecord:
        """Store a new star, generating its id when the caller sent none."""
        async with self._mutation():
            stars = await self.store.load_all()
            star_id = self._resolve_new_id(data, stars)
            record = star_rules.apply_create_defaults(
                data, star_id, self.clock(), self.rules.position_bound, self.rng,
            )
            self.rules.validate(record)
            stars.append(record)
            await self._persist(stars, "create", "Failed to save star", star_id)
        logger.info(
            f"New star added. Total: {len(stars)}",
            extra={"star_id": star_id, "star_count": len(stars)},
        )
        return record

    async def update_star(self, star_id: str, data: StarRecord) -> StarRecord:
        """Overlay data on the star, keeping its id and position."""
        async with self._mutation():
            stars = await self.store.load_all()
            index = star_rules.find_star_index(stars, star_id)
            if index is None:
                raise StarNotFoundError(star_id, ErrorContext(operation="update"))
            record = star_rules.merge_update(stars[index], data, self.clock())
            self.rules.validate(record)
            stars = star_rules.replace_at(stars, index, record)
            await self._persist(stars, "update", "Failed to update star", star_id)
        logger.info("Star updated", extra={"star_id": star_id})
        return record

    async def delete_star(self, star_id: str) -> None:
        """Remove the star addressed by star_id (legacy timestamp ids included)."""
        async with self._mutation():
            stars = await self.store.load_all()
            remaining = star_rules.remove_matching(
                stars, star_id, self.rules.legacy_timestamp_ids,
            )
            if len(remaining) == len(stars):
                raise StarNotFoundError(star_id, ErrorContext(operation="delete"))
            await self._persist(remaining, "delete", "Failed to delete star", star_id)
        logger.info(
            "Star deleted",
            extra={"star_id": star_id, "star_count": len(remaining)},
        )

    # ─── Helpers ─────────────────────────────────────────────────

    def _mutation(self):
        if self._serialize_writes:
            return self._write_lock
        return nullcontext()

    def _resolve_new_id(self, data: StarRecord, stars: list[StarRecord]) -> str:
        existing = star_rules.live_identities(stars, self.rules.legacy_timestamp_ids)
        if star_rules.has_id(data):
            if data[ID_FIELD] in existing:
                raise StarConflictError(data[ID_FIELD], ErrorContext(operation="create"))
            return data[ID_FIELD]
        kwargs = {}
        if self._id_suffix_factory is not None:
            kwargs["suffix_factory"] = self._id_suffix_factory
        star_id = star_rules.generate_star_id(existing, self.clock(), **kwargs)
        if star_id is None:
            raise StorageError(
                "could not generate a unique star id", "create",
                context=ErrorContext(operation="create"),
            )
        return star_id

    async def _persist(
        self, stars: list[StarRecord], operation: str, public_message: str, star_id: str,
    ) -> None:
        try:
            await self.store.save_all(stars)
        except StorageError as e:
            logger.error(
                f"Error persisting star ({operation}): {e.message}",
                extra={"star_id": star_id, "error_code": e.code, "operation": operation},
            )
            e.public_message = public_message
            e.context.star_id = star_id
            raise
