"""Stars API — verifies the /api/stars HTTP contract end to end.

Invariants:
    - POST 201 with generated id; PUT 200 keeps id/position; DELETE 200 {"ok": true}
    - Unknown ids → 404 {"error": "Star not found"}
    - Storage failures → 500 {"error": ...} and nothing committed
    - Malformed create bodies → 400 with details; PUT ignores id/position/timestamp in any shape
    - Stored ids win over legacy timestamp ids on delete; colliding creates → 409
"""

import logging

from star_factories import make_star


async def test_full_lifecycle_scenario(client, clock):
    res = await client.post("/api/stars", json=make_star())
    assert res.status_code == 201
    created = res.json()
    star_id = created["id"]
    assert star_id
    assert created["sunSign"] == "Leo"
    assert created["moonSign"] == "Pisces"
    assert created["risingSign"] == "Libra"
    assert created["position"] == {"x": 1, "y": 2, "z": 3}
    assert created["timestamp"] == 1000

    clock.advance(1)
    res = await client.put(
        f"/api/stars/{star_id}",
        json={"sunSign": "Aries", "position": {"x": 99, "y": 99, "z": 99}},
    )
    assert res.status_code == 200
    updated = res.json()
    assert updated["sunSign"] == "Aries"
    assert updated["position"] == {"x": 1, "y": 2, "z": 3}
    assert updated["id"] == star_id
    assert updated["timestamp"] > 1000

    res = await client.delete(f"/api/stars/{star_id}")
    assert res.status_code == 200
    assert res.json() == {"ok": True}

    res = await client.get("/api/stars")
    assert star_id not in {s["id"] for s in res.json()}

    res = await client.delete(f"/api/stars/{star_id}")
    assert res.status_code == 404
    assert res.json() == {"error": "Star not found"}


async def test_list_empty(client):
    res = await client.get("/api/stars")
    assert res.status_code == 200
    assert res.json() == []


async def test_list_returns_insertion_order(client):
    for sign in ("Aries", "Taurus", "Gemini"):
        await client.post("/api/stars", json=make_star(sunSign=sign))
    res = await client.get("/api/stars")
    assert [s["sunSign"] for s in res.json()] == ["Aries", "Taurus", "Gemini"]


async def test_create_echoes_extra_fields(client):
    res = await client.post("/api/stars", json=make_star(nickname="Nova"))
    assert res.json()["nickname"] == "Nova"


async def test_create_keeps_extra_position_keys(client):
    position = {"x": 1, "y": 2, "z": 3, "w": 4}
    res = await client.post("/api/stars", json=make_star(position=position))
    assert res.status_code == 201
    assert res.json()["position"] == position
    listed = (await client.get("/api/stars")).json()
    assert listed[0]["position"] == position


async def test_create_with_empty_body_generates_star(client):
    res = await client.post("/api/stars")
    assert res.status_code == 201
    body = res.json()
    assert body["id"].startswith("star:")
    assert set(body["position"]) == {"x", "y", "z"}


async def test_create_duplicate_id_conflicts(client):
    await client.post("/api/stars", json=make_star(id="star:mine"))
    res = await client.post("/api/stars", json=make_star(id="star:mine"))
    assert res.status_code == 409
    assert res.json() == {"error": "Star already exists"}


async def test_create_rejects_malformed_position(client):
    res = await client.post("/api/stars", json=make_star(position={"x": "far"}))
    assert res.status_code == 400
    body = res.json()
    assert body["error"] == "Invalid request data"
    assert body["details"]


async def test_create_rejects_non_object_body(client):
    res = await client.post("/api/stars", json=[1, 2, 3])
    assert res.status_code == 400


async def test_update_unknown_id_returns_404(client, store):
    await client.post("/api/stars", json=make_star())
    before = store.stars
    res = await client.put("/api/stars/star:nope", json={"sunSign": "Aries"})
    assert res.status_code == 404
    assert res.json() == {"error": "Star not found"}
    assert store.stars == before


async def test_update_ignores_client_timestamp_and_id(client, clock):
    created = (await client.post("/api/stars", json=make_star())).json()
    clock.advance(50)
    res = await client.put(
        f"/api/stars/{created['id']}", json={"id": "star:other", "timestamp": 5},
    )
    assert res.json()["id"] == created["id"]
    assert res.json()["timestamp"] == clock.now


async def test_update_ignores_malformed_position(client):
    created = (await client.post("/api/stars", json=make_star())).json()
    res = await client.put(
        f"/api/stars/{created['id']}",
        json={"sunSign": "Aries", "position": [9, 9, 9]},
    )
    assert res.status_code == 200
    assert res.json()["sunSign"] == "Aries"
    assert res.json()["position"] == {"x": 1, "y": 2, "z": 3}


async def test_update_ignores_non_integer_timestamp_and_id(client, clock):
    created = (await client.post("/api/stars", json=make_star())).json()
    res = await client.put(
        f"/api/stars/{created['id']}",
        json={"id": 7, "timestamp": "soon", "moonSign": "Virgo"},
    )
    assert res.status_code == 200
    assert res.json()["id"] == created["id"]
    assert res.json()["timestamp"] == clock.now
    assert res.json()["moonSign"] == "Virgo"


async def test_update_after_far_future_create_uses_current_time(client, clock):
    created = (await client.post("/api/stars", json=make_star(timestamp=10**15))).json()
    res = await client.put(f"/api/stars/{created['id']}", json={"sunSign": "Aries"})
    assert res.json()["timestamp"] == clock.now


async def test_create_storage_failure_returns_500(client, store):
    store.fail_saves = True
    res = await client.post("/api/stars", json=make_star())
    assert res.status_code == 500
    assert res.json() == {"error": "Failed to save star"}
    assert store.stars == []


async def test_update_storage_failure_returns_500(client, store):
    created = (await client.post("/api/stars", json=make_star())).json()
    store.fail_saves = True
    res = await client.put(f"/api/stars/{created['id']}", json={"sunSign": "Aries"})
    assert res.status_code == 500
    assert res.json() == {"error": "Failed to update star"}


async def test_delete_legacy_star_by_timestamp_id(client, store):
    store._stars = [{"timestamp": 1234, "sunSign": "Leo"}]
    res = await client.delete("/api/stars/star:1234")
    assert res.status_code == 200
    assert store.stars == []


async def test_delete_stored_id_leaves_legacy_record_with_same_timestamp(client, store):
    await client.post("/api/stars", json=make_star(id="star:1000"))
    legacy = {"timestamp": 1000, "sunSign": "Leo"}
    store._stars.append(legacy)
    res = await client.delete("/api/stars/star:1000")
    assert res.status_code == 200
    assert store.stars == [legacy]


async def test_create_with_id_of_legacy_star_conflicts(client, store):
    store._stars = [{"timestamp": 1234, "sunSign": "Leo"}]
    res = await client.post("/api/stars", json=make_star(id="star:1234"))
    assert res.status_code == 409
    assert len(store.stars) == 1


async def test_not_found_logs_warning_with_category(client, caplog):
    with caplog.at_level(logging.WARNING, logger="starfield.api.error_handlers"):
        await client.delete("/api/stars/star:nope")
    record = next(r for r in caplog.records if r.name == "starfield.api.error_handlers")
    assert record.levelno == logging.WARNING
    assert record.error_category == "resource_not_found"
    assert record.operation == "delete"


async def test_storage_failure_logs_error(client, store, caplog):
    store.fail_saves = True
    with caplog.at_level(logging.WARNING, logger="starfield.api.error_handlers"):
        await client.post("/api/stars", json=make_star())
    record = next(r for r in caplog.records if r.name == "starfield.api.error_handlers")
    assert record.levelno == logging.ERROR
    assert record.error_category == "storage"


async def test_cors_allows_any_origin(client):
    res = await client.options(
        "/api/stars",
        headers={
            "Origin": "http://localhost:5173",
            "Access-Control-Request-Method": "POST",
        },
    )
    assert res.status_code == 200
    assert res.headers["access-control-allow-origin"] in ("*", "http://localhost:5173")
