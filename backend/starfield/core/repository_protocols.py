"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - The collection is loaded and saved as one unit, never partially
    - load_all never raises; save_all raises StorageError and leaves prior data intact

Design Decisions:
    - Protocol over ABC: structural subtyping, file/memory/database stores
      share no base class
    - Async in Protocol: every implementation may do IO
"""

from typing import Protocol

from starfield.core.domain_types import StarRecord


class StarStore(Protocol):
    """Contract for whole-collection star persistence — implemented by shell."""

    async def initialize(self) -> None:
        """Create an empty collection if no backing storage exists yet."""
        ...

    async def load_all(self) -> list[StarRecord]:
        """Full collection in insertion order; empty on missing/unreadable storage."""
        ...

    async def save_all(self, stars: list[StarRecord]) -> None:
        """Atomically replace the collection; raise StorageError on failure."""
        ...
