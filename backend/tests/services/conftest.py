"""Service test fixtures — StarService over the in-memory store.

Invariants:
    - Every test gets a fresh InMemoryStarStore
    - Clock is a FakeClock; ids use a counter suffix so they are predictable
"""

import itertools
import random

import pytest

from starfield.infrastructure.memory_store import InMemoryStarStore
from starfield.services.star_service import StarService


@pytest.fixture
def store() -> InMemoryStarStore:
    return InMemoryStarStore()


@pytest.fixture
def service(store, clock) -> StarService:
    counter = itertools.count(1)
    return StarService(
        store,
        clock=clock,
        rng=random.Random(0),
        id_suffix_factory=lambda: f"{next(counter):04d}",
    )
