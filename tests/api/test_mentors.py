import pytest
from httpx import AsyncClient

LINKEDIN = "https://www.linkedin.com/in/grace"


async def complete_mentor(api_client, headers, **extra):
    payload = {
        "expertise": "Python, Leadership",
        "mentorship_areas": "career",
        "experience": "10y",
        "bio": "Compilers",
        "availability": "weekly",
        **extra,
    }
    resp = await api_client.put("/api/profile", headers=headers, json=payload)
    assert resp.status_code == 200, resp.text
    return resp.json()


@pytest.mark.asyncio
async def test_complete_mentor_without_linkedin_stays_hidden(api_client: AsyncClient, register_user):
    mentor = await register_user("mentor")
    profile = await complete_mentor(api_client, mentor["headers"])
    assert profile["completion_status"]["completion_percentage"] == 100

    resp = await api_client.get("/api/mentors")
    assert resp.json()["mentors"] == []

    requirements = await api_client.get("/api/mentors/me/requirements", headers=mentor["headers"])
    assert requirements.status_code == 200
    data = requirements.json()
    assert data["requirements"]["is_eligible"] is False
    assert data["message"]["type"] == "warning"
    assert data["message"]["actions"][0]["urgent"] is False


@pytest.mark.asyncio
async def test_mentor_with_linkedin_is_listed(api_client: AsyncClient, register_user):
    mentor = await register_user("mentor", first_name="Grace", last_name="Hopper")
    await complete_mentor(api_client, mentor["headers"], linkedin_url=LINKEDIN)

    listing = (await api_client.get("/api/mentors")).json()
    assert listing["total"] == 1
    assert listing["mentors"][0]["name"] == "Grace Hopper"
    assert listing["mentors"][0]["linkedin_url"] == LINKEDIN

    detail = await api_client.get(f"/api/mentors/{mentor['uid']}")
    assert detail.status_code == 200
    assert detail.json()["expertise"] == ["Python", "Leadership"]

    found = (await api_client.get("/api/mentors/search", params={"expertise": "Leadership"})).json()
    assert [item["id"] for item in found] == [mentor["uid"]]

    requirements = (await api_client.get("/api/mentors/me/requirements", headers=mentor["headers"])).json()
    assert requirements["message"]["type"] == "success"
    assert requirements["requirements"]["mentor"]["name"] == "Grace Hopper"


@pytest.mark.asyncio
async def test_new_mentor_requirement_is_urgent(api_client: AsyncClient, register_user):
    mentor = await register_user("mentor")
    data = (await api_client.get("/api/mentors/me/requirements", headers=mentor["headers"])).json()
    assert data["requirements"]["completion_percentage"] == 38
    assert data["message"]["actions"] == [{
        "key": "linkedin_url",
        "label": "LinkedIn profile",
        "description": "Add a valid LinkedIn profile URL (must include linkedin.com)",
        "urgent": True,
    }]


@pytest.mark.asyncio
async def test_requirements_are_for_mentors_only(api_client: AsyncClient, register_user):
    user = await register_user("user")
    resp = await api_client.get("/api/mentors/me/requirements", headers=user["headers"])
    assert resp.status_code == 403
    assert resp.json()["code"] == "invalid_role"


@pytest.mark.asyncio
async def test_non_mentor_lookup_is_404(api_client: AsyncClient, register_user):
    user = await register_user("user")
    assert (await api_client.get(f"/api/mentors/{user['uid']}")).status_code == 404


@pytest.mark.asyncio
async def test_listing_is_cached_until_cache_is_cleared(api_client: AsyncClient, register_user):
    first = await register_user("mentor")
    await complete_mentor(api_client, first["headers"], linkedin_url=LINKEDIN)
    assert (await api_client.get("/api/mentors")).json()["total"] == 1

    second = await register_user("mentor")
    await complete_mentor(api_client, second["headers"], linkedin_url="https://linkedin.com/in/second")
    assert (await api_client.get("/api/mentors")).json()["total"] == 1

    cleared = await api_client.delete("/api/mentors/cache", headers=second["headers"])
    assert cleared.status_code == 200
    assert (await api_client.get("/api/mentors")).json()["total"] == 2


@pytest.mark.asyncio
async def test_stats(api_client: AsyncClient, register_user):
    mentor = await register_user("mentor")
    await complete_mentor(api_client, mentor["headers"], linkedin_url=LINKEDIN)
    await register_user("mentor")

    stats = (await api_client.get("/api/mentors/stats")).json()
    assert stats == {"total_mentors": 2, "qualified_mentors": 1, "qualification_rate": 50}
