"""Follow, block, like, comment and notification endpoints."""

from tests.helpers import signup


async def _coordinate(client, headers):
    response = await client.post(
        "/api/v1/coordinates", json={"season": 2, "tpo": 1}, headers=headers
    )
    assert response.status_code == 201, response.text
    return response.json()["id"]


async def test_follow_flow(client):
    hana, hana_headers = await signup(client, "hana")
    ken, ken_headers = await signup(client, "ken")

    response = await client.post(f"/api/v1/follow/{ken}", headers=hana_headers)
    assert response.status_code == 201

    again = await client.post(f"/api/v1/follow/{ken}", headers=hana_headers)
    assert again.status_code == 400
    assert again.json()["error"]["code"] == "CONFLICT"

    status = await client.get(f"/api/v1/follow/status/{ken}", headers=hana_headers)
    assert status.json() == {"user_id": ken, "is_following": True}

    followers = await client.get("/api/v1/follow/followers", headers=ken_headers)
    assert [u["id"] for u in followers.json()["data"]] == [hana]
    assert followers.json()["pagination"]["total"] == 1

    response = await client.delete(f"/api/v1/follow/{ken}", headers=hana_headers)
    assert response.status_code == 200
    response = await client.delete(f"/api/v1/follow/{ken}", headers=hana_headers)
    assert response.status_code == 404


async def test_follow_errors(client):
    hana, hana_headers = await signup(client, "hana")

    response = await client.post(f"/api/v1/follow/{hana}", headers=hana_headers)
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_OPERATION"

    response = await client.post("/api/v1/follow/999", headers=hana_headers)
    assert response.status_code == 404


async def test_block_prevents_follow_and_comment(client):
    hana, hana_headers = await signup(client, "hana")
    ken, ken_headers = await signup(client, "ken")
    coordinate_id = await _coordinate(client, ken_headers)

    response = await client.post(f"/api/v1/blocks/{hana}", headers=ken_headers)
    assert response.status_code == 201

    response = await client.post(f"/api/v1/follow/{ken}", headers=hana_headers)
    assert response.status_code == 403
    assert response.json()["error"]["code"] == "FORBIDDEN"

    response = await client.post(
        "/api/v1/comments",
        json={"coordinate_id": coordinate_id, "comment": "nice"},
        headers=hana_headers,
    )
    assert response.status_code == 403

    blocked = await client.get("/api/v1/blocks", headers=ken_headers)
    assert [u["id"] for u in blocked.json()] == [hana]

    response = await client.delete(f"/api/v1/blocks/{hana}", headers=ken_headers)
    assert response.status_code == 200
    status = await client.get(f"/api/v1/blocks/status/{hana}", headers=ken_headers)
    assert status.json() == {"user_id": hana, "is_blocked": False}


async def test_like_endpoints(client):
    _, hana_headers = await signup(client, "hana")
    _, ken_headers = await signup(client, "ken")
    coordinate_id = await _coordinate(client, ken_headers)
    url = f"/api/v1/coordinates/{coordinate_id}/like"

    response = await client.post(url, headers=hana_headers)
    assert response.status_code == 201
    assert response.json() == {"coordinate_id": coordinate_id, "is_liked": True, "like_count": 1}

    assert (await client.post(url, headers=hana_headers)).status_code == 400

    detail = await client.get(f"/api/v1/coordinates/{coordinate_id}", headers=hana_headers)
    assert detail.json()["is_liked"] is True
    anonymous = await client.get(f"/api/v1/coordinates/{coordinate_id}")
    assert anonymous.json()["is_liked"] is False
    assert anonymous.json()["like_count"] == 1

    response = await client.delete(url, headers=hana_headers)
    assert response.json()["like_count"] == 0
    assert (await client.delete(url, headers=hana_headers)).status_code == 404
    assert (await client.post("/api/v1/coordinates/999/like", headers=hana_headers)).status_code == 404


async def test_comment_lifecycle(client):
    _, hana_headers = await signup(client, "hana")
    _, ken_headers = await signup(client, "ken")
    coordinate_id = await _coordinate(client, ken_headers)

    response = await client.post(
        "/api/v1/comments",
        json={"coordinate_id": coordinate_id, "comment": "love the coat"},
        headers=hana_headers,
    )
    assert response.status_code == 201
    comment_id = response.json()["id"]

    response = await client.put(
        f"/api/v1/comments/{comment_id}", json={"comment": "edited"}, headers=ken_headers
    )
    assert response.status_code == 403

    response = await client.put(
        f"/api/v1/comments/{comment_id}", json={"comment": "edited"}, headers=hana_headers
    )
    assert response.json()["comment"] == "edited"

    listing = await client.get(f"/api/v1/coordinates/{coordinate_id}/comments")
    assert [c["comment"] for c in listing.json()["data"]] == ["edited"]

    response = await client.delete(f"/api/v1/comments/{comment_id}", headers=hana_headers)
    assert response.status_code == 200


async def test_notifications(client):
    hana, hana_headers = await signup(client, "hana")
    _, ken_headers = await signup(client, "ken")
    ken_coordinate = await _coordinate(client, ken_headers)
    await client.post(f"/api/v1/follow/{hana}", headers=ken_headers)
    hana_coordinate = await _coordinate(client, hana_headers)
    await client.post(f"/api/v1/coordinates/{hana_coordinate}/like", headers=ken_headers)
    # liking your own coordinate does not notify anyone
    await client.post(f"/api/v1/coordinates/{ken_coordinate}/like", headers=ken_headers)

    inbox = (await client.get("/api/v1/notifications", headers=hana_headers)).json()
    assert [n["action"] for n in inbox["data"]] == ["like", "follow"]
    assert inbox["pagination"]["total"] == 2
    assert inbox["unread_count"] == 2

    first = inbox["data"][0]["id"]
    response = await client.put(f"/api/v1/notifications/{first}/read", headers=hana_headers)
    assert response.json()["checked"] is True
    response = await client.put(f"/api/v1/notifications/{first}/read", headers=ken_headers)
    assert response.status_code == 403

    count = await client.get("/api/v1/notifications/unread/count", headers=hana_headers)
    assert count.json() == {"unread_count": 1}

    response = await client.put("/api/v1/notifications/read_all", headers=hana_headers)
    assert response.json()["updated"] == 1
    unread = await client.get("/api/v1/notifications/unread", headers=hana_headers)
    assert unread.json() == []

    inbox = (await client.get("/api/v1/notifications", headers=hana_headers)).json()
    assert inbox["pagination"]["total"] == 2
    assert inbox["unread_count"] == 0
