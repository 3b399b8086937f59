"""End-to-end tests for the ship endpoints over an in-memory database."""

from __future__ import annotations

from datetime import date

import pytest

from spacefleet.modules.ship.timestamps import date_to_epoch_millis

YEAR_3000 = date_to_epoch_millis(date(3000, 1, 1))


def _payload(**overrides) -> dict:
    body = {
        "name": "Orion",
        "planet": "Mars",
        "shipType": "MERCHANT",
        "prodDate": YEAR_3000,
        "speed": 0.5,
        "crewSize": 100,
    }
    body.update(overrides)
    return body


async def _create(client, **overrides) -> dict:
    response = await client.post("/rest/ships", json=_payload(**overrides))
    assert response.status_code == 200, response.text
    return response.json()


class TestCreate:
    @pytest.mark.asyncio
    async def test_create_returns_stored_ship(self, async_client):
        ship = await _create(async_client, speed=0.555, rating=7.5, id=77)

        assert ship["id"] > 0
        assert ship["id"] != 77
        assert ship["name"] == "Orion"
        assert ship["shipType"] == "MERCHANT"
        assert ship["prodDate"] == YEAR_3000
        assert ship["isUsed"] is False
        assert ship["speed"] == 0.55
        assert ship["crewSize"] == 100
        assert ship["rating"] == -0.02

    @pytest.mark.asyncio
    async def test_create_invalid_field_is_bad_request(self, async_client):
        response = await async_client.post("/rest/ships", json=_payload(crewSize=0))

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "BAD_REQUEST"
        assert error["details"][0]["field"] == "crewSize"

    @pytest.mark.asyncio
    async def test_create_missing_field_is_bad_request(self, async_client):
        body = _payload()
        del body["planet"]

        response = await async_client.post("/rest/ships", json=body)

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_create_wrong_json_type_is_bad_request(self, async_client):
        response = await async_client.post("/rest/ships", json=_payload(crewSize="lots"))

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "BAD_REQUEST"


class TestRead:
    @pytest.mark.asyncio
    async def test_get_by_id(self, async_client):
        created = await _create(async_client)

        response = await async_client.get(f"/rest/ships/{created['id']}")

        assert response.status_code == 200
        assert response.json() == created

    @pytest.mark.asyncio
    async def test_get_missing_is_not_found(self, async_client):
        response = await async_client.get("/rest/ships/999", headers={"X-Request-ID": "req-42"})

        assert response.status_code == 404
        error = response.json()["error"]
        assert error["code"] == "NOT_FOUND"
        assert error["requestId"] == "req-42"
        assert response.headers["X-Request-ID"] == "req-42"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("ship_id", ["0", "-1", "abc", "1.5", "9" * 25])
    async def test_get_malformed_id_is_bad_request(self, async_client, ship_id):
        response = await async_client.get(f"/rest/ships/{ship_id}")

        assert response.status_code == 400


class TestList:
    @pytest.mark.asyncio
    async def test_default_paging(self, async_client):
        for index in range(4):
            await _create(async_client, name=f"Ship {index}")

        response = await async_client.get("/rest/ships")

        assert response.status_code == 200
        ships = response.json()
        assert [ship["name"] for ship in ships] == ["Ship 0", "Ship 1", "Ship 2"]
        assert response.headers["X-Total-Count"] == "4"

    @pytest.mark.asyncio
    async def test_filters_and_count(self, async_client):
        await _create(async_client, name="Slow", speed=0.2)
        await _create(async_client, name="Mid", speed=0.55)
        await _create(async_client, name="Edge", speed=0.6)
        await _create(async_client, name="Fast", speed=0.9)

        params = {"minSpeed": "0.5", "maxSpeed": "0.6", "order": "SPEED"}
        response = await async_client.get("/rest/ships", params=params)
        count = await async_client.get("/rest/ships/count", params=params)

        assert [ship["name"] for ship in response.json()] == ["Mid", "Edge"]
        assert count.status_code == 200
        assert count.json() == 2

    @pytest.mark.asyncio
    async def test_invalid_filter_is_bad_request(self, async_client):
        response = await async_client.get("/rest/ships", params={"shipType": "YACHT"})
        assert response.status_code == 400

        response = await async_client.get("/rest/ships/count", params={"minCrewSize": "many"})
        assert response.status_code == 400

    @pytest.mark.asyncio
    @pytest.mark.parametrize("key", ["minCrewSize", "pageSize", "after"])
    async def test_oversized_integer_filter_is_bad_request(self, async_client, key):
        response = await async_client.get("/rest/ships", params={key: "9" * 25})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "BAD_REQUEST"


class TestUpdate:
    @pytest.mark.asyncio
    async def test_partial_update(self, async_client):
        created = await _create(async_client)

        response = await async_client.post(
            f"/rest/ships/{created['id']}", json={"isUsed": True, "planet": "Titan"},
        )

        assert response.status_code == 200
        ship = response.json()
        assert ship["planet"] == "Titan"
        assert ship["name"] == "Orion"
        assert ship["isUsed"] is True
        assert ship["rating"] == -0.01

    @pytest.mark.asyncio
    async def test_empty_update_keeps_fields(self, async_client):
        created = await _create(async_client)

        response = await async_client.post(f"/rest/ships/{created['id']}", json={})

        assert response.status_code == 200
        assert response.json() == created

    @pytest.mark.asyncio
    async def test_invalid_update_is_not_applied(self, async_client):
        created = await _create(async_client)

        response = await async_client.post(
            f"/rest/ships/{created['id']}", json={"name": "Vega", "speed": 2.0},
        )
        current = await async_client.get(f"/rest/ships/{created['id']}")

        assert response.status_code == 400
        assert current.json()["name"] == "Orion"

    @pytest.mark.asyncio
    async def test_update_missing_ship(self, async_client):
        response = await async_client.post("/rest/ships/321", json={"name": "Vega"})
        assert response.status_code == 404


class TestDelete:
    @pytest.mark.asyncio
    async def test_delete_then_not_found(self, async_client):
        created = await _create(async_client)

        first = await async_client.delete(f"/rest/ships/{created['id']}")
        second = await async_client.delete(f"/rest/ships/{created['id']}")

        assert first.status_code == 200
        assert first.json() == {"status": "Ok"}
        assert second.status_code == 404
        assert second.json()["error"]["code"] == "NOT_FOUND"

    @pytest.mark.asyncio
    async def test_delete_non_positive_id(self, async_client):
        response = await async_client.delete("/rest/ships/0")
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_delete_id_beyond_bigint_is_bad_request(self, async_client):
        response = await async_client.delete(f"/rest/ships/{'9' * 25}")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "BAD_REQUEST"


@pytest.mark.asyncio
async def test_health(async_client):
    response = await async_client.get("/health")
    assert response.json() == {"status": "ok"}
