import pytest
from httpx import AsyncClient


def payload(**overrides):
    data = {
        "name": "Jane Doe",
        "email": "jane@example.com",
        "password": "SecurePass123!",
        "password_confirmation": "SecurePass123!",
    }
    data.update(overrides)
    return data


@pytest.mark.asyncio
async def test_successful_registration(client: AsyncClient):
    """Register

    Given no account exists for the email
    When I register with a strong password
    Then the account is created and a bearer token is returned
    And the password hash is never exposed
    """
    response = await client.post("/api/auth/register", json=payload())

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["errors"] == {}

    data = body["data"]
    assert data["user"]["email"] == "jane@example.com"
    assert data["user"]["name"] == "Jane Doe"
    assert "password_hash" not in data["user"]
    assert data["token_type"] == "Bearer"
    assert "|" in data["token"]

    me = await client.get(
        "/api/auth/me", headers={"Authorization": f"Bearer {data['token']}"}
    )
    assert me.status_code == 200
    assert me.json()["data"]["user"]["id"] == data["user"]["id"]


@pytest.mark.asyncio
async def test_duplicate_email_conflicts(client: AsyncClient):
    """Registering twice with the same email fails; exactly one account exists"""
    first = await client.post("/api/auth/register", json=payload())
    second = await client.post("/api/auth/register", json=payload(name="Impostor"))

    assert first.status_code == 201
    assert second.status_code == 409
    body = second.json()
    assert body["success"] is False
    assert body["data"] is None
    assert "email" in body["errors"]

    login = await client.post(
        "/api/auth/login", json={"email": "jane@example.com", "password": "SecurePass123!"}
    )
    assert login.json()["data"]["user"]["name"] == "Jane Doe"


@pytest.mark.asyncio
async def test_email_case_variant_is_the_same_account(client: AsyncClient):
    """Addresses differing only in case belong to one account"""
    first = await client.post("/api/auth/register", json=payload())
    second = await client.post(
        "/api/auth/register", json=payload(name="Impostor", email="JANE@Example.com")
    )

    assert first.status_code == 201
    assert second.status_code == 409
    assert "email" in second.json()["errors"]

    login = await client.post(
        "/api/auth/login", json={"email": "Jane@EXAMPLE.com", "password": "SecurePass123!"}
    )
    assert login.status_code == 200
    assert login.json()["data"]["user"]["email"] == "jane@example.com"


@pytest.mark.asyncio
async def test_weak_password_is_rejected(client: AsyncClient):
    response = await client.post(
        "/api/auth/register",
        json=payload(password="password", password_confirmation="password"),
    )

    assert response.status_code == 422
    errors = response.json()["errors"]
    assert "password" in errors
    assert len(errors["password"]) >= 2


@pytest.mark.asyncio
async def test_password_confirmation_must_match(client: AsyncClient):
    response = await client.post(
        "/api/auth/register", json=payload(password_confirmation="SecurePass124!")
    )

    assert response.status_code == 422
    body = response.json()
    assert body["success"] is False
    assert body["errors"]["password_confirmation"] == [
        "The password confirmation does not match."
    ]


@pytest.mark.asyncio
async def test_invalid_email_is_rejected(client: AsyncClient):
    response = await client.post("/api/auth/register", json=payload(email="not-an-email"))

    assert response.status_code == 422
    assert "email" in response.json()["errors"]
