import pytest
from httpx import AsyncClient

from tests.utils.responses import error_code


@pytest.mark.asyncio
async def test_successful_signup(client: AsyncClient):
    response = await client.post(
        "/api/signup",
        json={"username": "Carol", "email": "Carol@Example.com", "password": "CarolPass123!"},
    )

    assert response.status_code == 201
    data = response.json()
    assert data["user"]["username"] == "carol"
    assert data["user"]["email"] == "carol@example.com"
    assert data["auth_header"].startswith("Basic ")

    me = await client.get("/api/sessions/my", headers={"Authorization": data["auth_header"]})
    assert me.status_code == 200

    login = await client.post(
        "/api/login", json={"username": "carol", "password": "CarolPass123!"}
    )
    assert login.status_code == 200


@pytest.mark.asyncio
async def test_signup_conflicts(client: AsyncClient, create_user):
    await create_user("alice")

    same_username = await client.post(
        "/api/signup",
        json={"username": "alice", "email": "new@example.com", "password": "CarolPass123!"},
    )
    same_email = await client.post(
        "/api/signup",
        json={"username": "newbie", "email": "user@example.com", "password": "CarolPass123!"},
    )

    assert same_username.status_code == 409
    assert error_code(same_username) == "USERNAME_TAKEN"
    assert same_email.status_code == 409
    assert error_code(same_email) == "EMAIL_TAKEN"


@pytest.mark.asyncio
async def test_signup_rejects_password_over_bcrypt_limit(client: AsyncClient):
    response = await client.post(
        "/api/signup",
        json={"username": "carol", "email": "carol@example.com", "password": "p" * 73},
    )

    assert response.status_code == 422
