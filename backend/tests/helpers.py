"""Helpers shared by test modules (fixtures live in conftest.py)."""

import os

from httpx import AsyncClient

from src.shared.utils.security import SecurityUtils

PASSWORD = "password123"


def auth_headers(user_id: int, email: str = "someone@example.com") -> dict:
    token = SecurityUtils.create_access_token(
        data={"user_id": user_id, "email": email},
        secret_key=os.environ["SECRET_KEY"],
    )
    return {"Authorization": f"Bearer {token}"}


async def signup(client: AsyncClient, name: str) -> tuple[int, dict]:
    """Register `name` through the API; returns (user_id, auth headers)."""
    response = await client.post(
        "/api/v1/auth/signup",
        json={"name": name, "email": f"{name}@example.com", "password": PASSWORD},
    )
    assert response.status_code == 201, response.text
    body = response.json()
    return body["user"]["id"], {"Authorization": f"Bearer {body['access_token']}"}
