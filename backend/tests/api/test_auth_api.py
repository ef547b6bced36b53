"""Authentication endpoints and token handling."""

from tests.helpers import PASSWORD, auth_headers, signup


async def test_signup_login_me(client):
    user_id, headers = await signup(client, "hana")

    response = await client.post(
        "/api/v1/auth/login",
        json={"email": "hana@example.com", "password": PASSWORD},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["user"]["id"] == user_id
    assert "password_hash" not in body["user"]

    me = await client.get("/api/v1/auth/me", headers=headers)
    assert me.status_code == 200
    assert me.json()["email"] == "hana@example.com"


async def test_signup_duplicate_email_is_400(client):
    await signup(client, "hana")
    response = await client.post(
        "/api/v1/auth/signup",
        json={"name": "again", "email": "hana@example.com", "password": PASSWORD},
    )
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "CONFLICT"


async def test_bad_credentials_are_401(client):
    await signup(client, "hana")
    response = await client.post(
        "/api/v1/auth/login",
        json={"email": "hana@example.com", "password": "not-the-password"},
    )
    assert response.status_code == 401
    assert response.json()["error"]["code"] == "AUTHENTICATION_ERROR"


async def test_protected_routes_need_a_valid_token(client):
    assert (await client.get("/api/v1/auth/me")).status_code == 401
    assert (await client.get("/api/v1/items")).status_code == 401

    garbage = {"Authorization": "Bearer not.a.token"}
    response = await client.get("/api/v1/notifications", headers=garbage)
    assert response.status_code == 401
    assert response.json()["error"]["code"] == "AUTHENTICATION_ERROR"


async def test_token_for_deleted_user(client):
    response = await client.get("/api/v1/users/me", headers=auth_headers(424242))
    assert response.status_code == 404


async def test_refresh_and_logout(client):
    _, headers = await signup(client, "hana")
    token = headers["Authorization"].split()[1]

    response = await client.post("/api/v1/auth/refresh", json={"token": token}, headers=headers)
    assert response.status_code == 200
    assert response.json()["access_token"]

    response = await client.post("/api/v1/auth/logout", headers=headers)
    assert response.json() == {"message": "Logged out", "success": True}


async def test_password_change_and_reset_request(client):
    _, headers = await signup(client, "hana")

    response = await client.put(
        "/api/v1/users/password",
        json={"old_password": "wrong-one", "new_password": "new-password"},
        headers=headers,
    )
    assert response.status_code == 400

    response = await client.put(
        "/api/v1/users/password",
        json={"old_password": PASSWORD, "new_password": "new-password"},
        headers=headers,
    )
    assert response.status_code == 200

    response = await client.post(
        "/api/v1/users/password/reset", json={"email": "hana@example.com"}
    )
    assert response.status_code == 200
    assert "token" not in response.json()

    response = await client.put(
        "/api/v1/users/password/reset",
        json={"token": "forged", "new_password": "whatever1"},
    )
    assert response.status_code == 400


async def test_users_can_only_edit_themselves(client):
    hana, hana_headers = await signup(client, "hana")
    ken, _ = await signup(client, "ken")

    response = await client.put(
        f"/api/v1/users/{ken}", json={"name": "hacked"}, headers=hana_headers
    )
    assert response.status_code == 403
    assert response.json()["error"]["code"] == "FORBIDDEN"

    response = await client.put(
        f"/api/v1/users/{hana}", json={"name": "Hana"}, headers=hana_headers
    )
    assert response.status_code == 200
    assert response.json()["name"] == "Hana"

    response = await client.delete(f"/api/v1/users/{hana}", headers=hana_headers)
    assert response.status_code == 200
    assert (await client.get(f"/api/v1/users/{hana}")).status_code == 404
