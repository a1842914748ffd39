import uuid

import mongomock
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from talentlink.db import mongodb
from talentlink.main import app
from talentlink.services import mentor_service

PASSWORD = "secret123"


@pytest.fixture(autouse=True)
def mongo_db(monkeypatch):
    """Every test gets a fresh in-memory database."""
    client = mongomock.MongoClient()
    db = client["talentlink_test"]
    monkeypatch.setattr(mongodb, "_client", client)
    monkeypatch.setattr(mongodb, "_db", db)
    mongodb.init_mongo_indexes()
    mentor_service.clear_mentor_cache()
    try:
        yield db
    finally:
        mentor_service.clear_mentor_cache()


@pytest_asyncio.fixture
async def api_client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


@pytest.fixture
def register_user(api_client):
    """
    Register an account through the API.

    Returns {"uid", "email", "role", "headers"} where headers carry the
    bearer token.
    """
    async def _register(role: str, first_name: str = "Ada", last_name: str = "Lovelace", email: str = None) -> dict:
        email = email or f"{role}-{uuid.uuid4().hex[:8]}@talentlink.io"
        resp = await api_client.post("/api/auth/register", json={
            "email": email,
            "password": PASSWORD,
            "first_name": first_name,
            "last_name": last_name,
            "role": role,
        })
        assert resp.status_code == 201, resp.text
        data = resp.json()
        return {
            "uid": data["uid"],
            "email": email,
            "role": role,
            "headers": {"Authorization": f"Bearer {data['access_token']}"},
        }

    return _register
