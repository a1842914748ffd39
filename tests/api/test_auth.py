import pytest
from httpx import AsyncClient

from tests.conftest import PASSWORD


@pytest.mark.asyncio
async def test_register_returns_token_and_profile_redirect(api_client: AsyncClient):
    resp = await api_client.post("/api/auth/register", json={
        "email": "new@talentlink.io", "password": PASSWORD,
        "first_name": "New", "last_name": "User", "role": "mentor",
    })
    assert resp.status_code == 201
    data = resp.json()
    assert data["is_new_user"] is True
    assert data["role"] == "mentor"
    assert data["redirect_path"] == "/profile/complete?role=mentor"
    assert data["access_token"]


@pytest.mark.asyncio
async def test_duplicate_registration(api_client: AsyncClient, register_user):
    user = await register_user("user")
    resp = await api_client.post("/api/auth/register", json={
        "email": user["email"], "password": PASSWORD,
        "first_name": "X", "last_name": "Y", "role": "user",
    })
    assert resp.status_code == 400
    assert resp.json()["code"] == "validation_error"


@pytest.mark.asyncio
async def test_login(api_client: AsyncClient, register_user):
    user = await register_user("organization")
    resp = await api_client.post("/api/auth/login", json={
        "email": user["email"], "password": PASSWORD, "role": "organization",
    })
    assert resp.status_code == 200
    assert resp.json()["uid"] == user["uid"]
    assert resp.json()["redirect_path"] == "/profile/complete?role=organization"


@pytest.mark.asyncio
async def test_login_through_wrong_portal(api_client: AsyncClient, register_user):
    user = await register_user("mentor")
    resp = await api_client.post("/api/auth/login", json={
        "email": user["email"], "password": PASSWORD, "role": "user",
    })
    assert resp.status_code == 403
    assert resp.json()["detail"] == (
        "You are registered as a Mentor. Please use the Mentor login portal instead."
    )


@pytest.mark.asyncio
async def test_login_with_bad_password(api_client: AsyncClient, register_user):
    user = await register_user("user")
    resp = await api_client.post("/api/auth/login", json={
        "email": user["email"], "password": "wrong-password", "role": "user",
    })
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_me(api_client: AsyncClient, register_user):
    user = await register_user("user", first_name="Ada", last_name="Lovelace")
    resp = await api_client.get("/api/auth/me", headers=user["headers"])
    assert resp.status_code == 200
    data = resp.json()
    assert data["uid"] == user["uid"]
    assert data["display_name"] == "Ada Lovelace"
    assert data["profile"]["skills"] == []
    assert "password_hash" not in data


@pytest.mark.asyncio
async def test_me_requires_token(api_client: AsyncClient):
    assert (await api_client.get("/api/auth/me")).status_code == 401
    resp = await api_client.get("/api/auth/me", headers={"Authorization": "Bearer garbage"})
    assert resp.status_code == 401
