"""Star Service Concurrency — the mutation gate prevents lost updates.

Invariants:
    - Concurrent creates all land in the collection
    - Concurrent updates to different fields of one star all survive
    - Without the gate, the same interleaving loses writes (documents the race)
    - Reads are not blocked by an in-flight write

Design Decisions:
    - InMemoryStarStore(latency=...) sleeps between load and save so asyncio
      interleaves the load/mutate/save sequences deterministically
"""

import asyncio

from starfield.infrastructure.memory_store import InMemoryStarStore
from starfield.services.star_service import StarService
from star_factories import make_star


async def test_concurrent_creates_are_all_kept():
    store = InMemoryStarStore(latency=0.005)
    service = StarService(store)
    created = await asyncio.gather(*(service.create_star(make_star()) for _ in range(10)))
    assert len(store.stars) == 10
    assert {s["id"] for s in store.stars} == {s["id"] for s in created}


async def test_concurrent_updates_are_not_lost():
    store = InMemoryStarStore([{"id": "star:1", **make_star()}], latency=0.005)
    service = StarService(store)
    await asyncio.gather(
        service.update_star("star:1", {"sunSign": "Aries"}),
        service.update_star("star:1", {"moonSign": "Virgo"}),
        service.update_star("star:1", {"risingSign": "Gemini"}),
    )
    star = store.stars[0]
    assert (star["sunSign"], star["moonSign"], star["risingSign"]) == ("Aries", "Virgo", "Gemini")


async def test_create_and_delete_interleave_safely():
    store = InMemoryStarStore([{"id": "star:old", **make_star()}], latency=0.005)
    service = StarService(store)
    new, _ = await asyncio.gather(
        service.create_star(make_star()),
        service.delete_star("star:old"),
    )
    assert [s["id"] for s in store.stars] == [new["id"]]


async def test_without_gate_concurrent_updates_can_be_lost():
    store = InMemoryStarStore([{"id": "star:1", **make_star()}], latency=0.005)
    service = StarService(store, serialize_writes=False)
    await asyncio.gather(
        service.update_star("star:1", {"sunSign": "Aries"}),
        service.update_star("star:1", {"moonSign": "Virgo"}),
    )
    star = store.stars[0]
    # Last save wins: exactly one of the two changes survives
    assert (star["sunSign"] == "Aries") != (star["moonSign"] == "Virgo")


async def test_list_does_not_wait_for_writes():
    store = InMemoryStarStore([{"id": "star:1", **make_star()}], latency=0.05)
    service = StarService(store)
    write = asyncio.create_task(service.update_star("star:1", {"sunSign": "Aries"}))
    await asyncio.sleep(0)
    assert service._write_lock.locked()
    stars = await service.list_stars()
    assert stars[0]["id"] == "star:1"
    await write
