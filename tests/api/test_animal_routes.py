"""Animal Routes — verifies /vacas CRUD over HTTP with the public wire names.

Tests:
    - POST → 201 with _id and cowState=true; GET /vacas/{id} returns the same record
    - PUT replaces, PATCH changes only the fields sent
    - DELETE soft-deletes: hidden from /vacas/{id}, listed in /vacas/desactivadas
    - Malformed id → 400, unknown id → 404, duplicate diio → 409
    - Query filters diio / genre on active and deactivated listings; invalid genre → 400,
      blank values ignored
    - diio beyond the stored integer range → 400 on create, patch and filter
    - dateBirthday is returned in UTC
"""

from uuid import uuid4

import pytest

from gestion_bovina.core.domain_types import DIIO_MAX


async def _create(client, headers, payload) -> dict:
    res = await client.post("/vacas", json=payload, headers=headers)
    assert res.status_code == 201, res.text
    return res.json()


async def test_create_returns_wire_record(client, auth_headers, wire_animal):
    body = await _create(client, auth_headers, wire_animal(sick="Cojera"))
    assert body["_id"]
    assert body["diio"] == 345671
    assert body["dateBirthday"].startswith("2022-05-11")
    assert body["genre"] == "F"
    assert body["race"] == "Negra"
    assert body["location"] == "Talca"
    assert body["sick"] == "Cojera"
    assert body["cowState"] is True


async def test_get_by_id_matches_created(client, auth_headers, wire_animal):
    created = await _create(client, auth_headers, wire_animal())
    res = await client.get(f"/vacas/{created['_id']}", headers=auth_headers)
    assert res.status_code == 200
    assert res.json() == created


async def test_create_ignores_cow_state_in_body(client, auth_headers, wire_animal):
    body = await _create(client, auth_headers, wire_animal(cowState=False))
    assert body["cowState"] is True


async def test_create_duplicate_diio_is_409(client, auth_headers, wire_animal):
    await _create(client, auth_headers, wire_animal())
    res = await client.post("/vacas", json=wire_animal(), headers=auth_headers)
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "CONFLICT"


async def test_create_validation_errors_are_400(client, auth_headers, wire_animal):
    for payload in (
        wire_animal(diio=0),
        wire_animal(genre="X"),
        wire_animal(race="   "),
        wire_animal(sick="x" * 151),
        {"diio": 1},
    ):
        res = await client.post("/vacas", json=payload, headers=auth_headers)
        assert res.status_code == 400, payload
        assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_create_requires_auth(client, wire_animal):
    res = await client.post("/vacas", json=wire_animal())
    assert res.status_code == 401


async def test_get_malformed_id_is_400(client, auth_headers):
    res = await client.get("/vacas/123abc", headers=auth_headers)
    assert res.status_code == 400
    assert res.json()["error"]["message"] == "The ID '123abc' is not valid"


async def test_get_unknown_id_is_404(client, auth_headers):
    res = await client.get(f"/vacas/{uuid4()}", headers=auth_headers)
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


async def test_patch_changes_only_sent_fields(client, auth_headers, wire_animal):
    created = await _create(client, auth_headers, wire_animal(sick="Fiebre"))
    res = await client.patch(
        f"/vacas/{created['_id']}", json={"location": "Osorno"}, headers=auth_headers,
    )
    assert res.status_code == 200
    assert res.json() == {**created, "location": "Osorno"}


async def test_patch_can_clear_sick(client, auth_headers, wire_animal):
    created = await _create(client, auth_headers, wire_animal(sick="Fiebre"))
    res = await client.patch(
        f"/vacas/{created['_id']}", json={"sick": None}, headers=auth_headers,
    )
    assert res.status_code == 200
    assert res.json()["sick"] is None


async def test_patch_null_required_field_is_400(client, auth_headers, wire_animal):
    created = await _create(client, auth_headers, wire_animal())
    res = await client.patch(
        f"/vacas/{created['_id']}", json={"race": None}, headers=auth_headers,
    )
    assert res.status_code == 400


async def test_patch_cannot_reactivate(client, auth_headers, wire_animal):
    created = await _create(client, auth_headers, wire_animal())
    await client.delete(f"/vacas/{created['_id']}", headers=auth_headers)
    res = await client.patch(
        f"/vacas/{created['_id']}", json={"cowState": True}, headers=auth_headers,
    )
    assert res.status_code == 404


async def test_patch_to_taken_diio_is_409(client, auth_headers, wire_animal):
    await _create(client, auth_headers, wire_animal(diio=1))
    second = await _create(client, auth_headers, wire_animal(diio=2))
    res = await client.patch(
        f"/vacas/{second['_id']}", json={"diio": 1}, headers=auth_headers,
    )
    assert res.status_code == 409


async def test_put_replaces_fields(client, auth_headers, wire_animal):
    created = await _create(client, auth_headers, wire_animal(sick="Fiebre"))
    replacement = wire_animal(
        race="Hereford", location="Chillán", genre="M", sick=None,
    )
    res = await client.put(
        f"/vacas/{created['_id']}", json=replacement, headers=auth_headers,
    )
    assert res.status_code == 200
    body = res.json()
    assert body["_id"] == created["_id"]
    assert body["race"] == "Hereford"
    assert body["location"] == "Chillán"
    assert body["genre"] == "M"
    assert body["sick"] is None
    assert body["cowState"] is True


async def test_put_requires_full_body(client, auth_headers, wire_animal):
    created = await _create(client, auth_headers, wire_animal())
    res = await client.put(
        f"/vacas/{created['_id']}", json={"location": "Chillán"}, headers=auth_headers,
    )
    assert res.status_code == 400


async def test_delete_soft_deletes(client, auth_headers, wire_animal):
    created = await _create(client, auth_headers, wire_animal())

    res = await client.delete(f"/vacas/{created['_id']}", headers=auth_headers)
    assert res.status_code == 200
    body = res.json()
    assert body["message"] == f"Animal with ID '{created['_id']}' deactivated"
    assert body["vaca"]["cowState"] is False

    res = await client.get(f"/vacas/{created['_id']}", headers=auth_headers)
    assert res.status_code == 404

    res = await client.get("/vacas/desactivadas", headers=auth_headers)
    assert res.status_code == 200
    assert [a["_id"] for a in res.json()] == [created["_id"]]

    res = await client.get("/vacas/all", headers=auth_headers)
    assert [a["cowState"] for a in res.json()] == [False]


async def test_delete_twice_is_404(client, auth_headers, wire_animal):
    created = await _create(client, auth_headers, wire_animal())
    await client.delete(f"/vacas/{created['_id']}", headers=auth_headers)
    res = await client.delete(f"/vacas/{created['_id']}", headers=auth_headers)
    assert res.status_code == 404


async def test_delete_malformed_id_is_400(client, auth_headers):
    res = await client.delete("/vacas/not-an-id", headers=auth_headers)
    assert res.status_code == 400


async def test_diio_stays_reserved_after_delete(client, auth_headers, wire_animal):
    created = await _create(client, auth_headers, wire_animal())
    await client.delete(f"/vacas/{created['_id']}", headers=auth_headers)
    res = await client.post("/vacas", json=wire_animal(), headers=auth_headers)
    assert res.status_code == 409


async def test_desactivadas_empty_is_404(client, auth_headers, wire_animal):
    await _create(client, auth_headers, wire_animal())
    res = await client.get("/vacas/desactivadas", headers=auth_headers)
    assert res.status_code == 404
    assert res.json()["error"]["message"] == "No deactivated animals"


async def test_all_empty_is_200(client, auth_headers):
    res = await client.get("/vacas/all", headers=auth_headers)
    assert res.status_code == 200
    assert res.json() == []


async def test_list_filters(client, auth_headers, wire_animal):
    await _create(client, auth_headers, wire_animal(diio=1, genre="F"))
    await _create(client, auth_headers, wire_animal(diio=2, genre="M"))
    await _create(client, auth_headers, wire_animal(diio=3, genre="F"))

    res = await client.get("/vacas", params={"genre": "F"}, headers=auth_headers)
    assert sorted(a["diio"] for a in res.json()) == [1, 3]

    res = await client.get("/vacas", params={"diio": 2}, headers=auth_headers)
    assert [a["diio"] for a in res.json()] == [2]

    res = await client.get(
        "/vacas", params={"diio": 2, "genre": "F"}, headers=auth_headers,
    )
    assert res.status_code == 404


async def test_list_invalid_filter_is_400(client, auth_headers):
    res = await client.get("/vacas", params={"genre": "X"}, headers=auth_headers)
    assert res.status_code == 400
    res = await client.get("/vacas", params={"diio": "abc"}, headers=auth_headers)
    assert res.status_code == 400


async def test_unmatched_route_is_404_envelope(client):
    res = await client.get("/no-such-route")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "ROUTE_NOT_FOUND"


async def test_desactivadas_filters(client, auth_headers, wire_animal):
    for diio, genre in ((1, "F"), (2, "M"), (3, "F")):
        created = await _create(client, auth_headers, wire_animal(diio=diio, genre=genre))
        await client.delete(f"/vacas/{created['_id']}", headers=auth_headers)
    await _create(client, auth_headers, wire_animal(diio=4, genre="F"))

    res = await client.get(
        "/vacas/desactivadas", params={"genre": "F"}, headers=auth_headers,
    )
    assert sorted(a["diio"] for a in res.json()) == [1, 3]

    res = await client.get(
        "/vacas/desactivadas", params={"diio": 2}, headers=auth_headers,
    )
    assert [a["diio"] for a in res.json()] == [2]

    res = await client.get(
        "/vacas/desactivadas", params={"diio": 4}, headers=auth_headers,
    )
    assert res.status_code == 404


async def test_blank_filters_are_ignored(client, auth_headers, wire_animal):
    await _create(client, auth_headers, wire_animal(diio=1, genre="F"))
    await _create(client, auth_headers, wire_animal(diio=2, genre="M"))
    res = await client.get(
        "/vacas", params={"diio": "", "genre": ""}, headers=auth_headers,
    )
    assert res.status_code == 200
    assert sorted(a["diio"] for a in res.json()) == [1, 2]


@pytest.mark.parametrize("diio", [DIIO_MAX + 1, 2**63])
async def test_create_oversized_diio_is_400(client, auth_headers, wire_animal, diio):
    res = await client.post("/vacas", json=wire_animal(diio=diio), headers=auth_headers)
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_create_accepts_largest_diio(client, auth_headers, wire_animal):
    body = await _create(client, auth_headers, wire_animal(diio=DIIO_MAX))
    assert body["diio"] == DIIO_MAX


@pytest.mark.parametrize("diio", [DIIO_MAX + 1, 2**63])
async def test_patch_oversized_diio_is_400(client, auth_headers, wire_animal, diio):
    created = await _create(client, auth_headers, wire_animal())
    res = await client.patch(
        f"/vacas/{created['_id']}", json={"diio": diio}, headers=auth_headers,
    )
    assert res.status_code == 400


@pytest.mark.parametrize("path", ["/vacas", "/vacas/desactivadas"])
async def test_filter_oversized_diio_is_400(client, auth_headers, path):
    res = await client.get(path, params={"diio": 2**63}, headers=auth_headers)
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_naive_birth_date_is_returned_as_utc(client, auth_headers, wire_animal):
    created = await _create(
        client, auth_headers, wire_animal(dateBirthday="2022-05-11T00:00:00"),
    )
    assert created["dateBirthday"] == "2022-05-11T00:00:00Z"
    res = await client.get(f"/vacas/{created['_id']}", headers=auth_headers)
    assert res.json()["dateBirthday"] == "2022-05-11T00:00:00Z"
