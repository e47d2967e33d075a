"""In-Memory Store — process-local star collection for tests and throwaway runs.

Invariants:
    - load_all/save_all deep-copy: callers never alias the stored collection
    - fail_saves=True makes save_all raise StorageError without changing state
    - latency (seconds) is awaited between reading and returning, so tests can
      force load/mutate/save interleavings

Design Decisions:
    - Same async contract as the file and database stores: the service cannot
      tell them apart
"""

import asyncio
import copy

from starfield.core.domain_types import StarRecord
from starfield.core.errors import StorageError


class InMemoryStarStore:
    """Star store that keeps the collection in a list."""

    def __init__(
        self, initial: list[StarRecord] | None = None, latency: float = 0.0,
    ):
        self._stars: list[StarRecord] = copy.deepcopy(initial or [])
        self.latency = latency
        self.fail_saves = False
        self.save_count = 0

    async def initialize(self) -> None:
        return None

    async def load_all(self) -> list[StarRecord]:
        snapshot = copy.deepcopy(self._stars)
        if self.latency:
            await asyncio.sleep(self.latency)
        return snapshot

    async def save_all(self, stars: list[StarRecord]) -> None:
        if self.latency:
            await asyncio.sleep(self.latency)
        if self.fail_saves:
            raise StorageError("simulated write failure", "save")
        self._stars = copy.deepcopy(stars)
        self.save_count += 1

    @property
    def stars(self) -> list[StarRecord]:
        """Current committed collection (copy)."""
        return copy.deepcopy(self._stars)
