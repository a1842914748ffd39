import pytest
from httpx import AsyncClient

JOB = {
    "title": "Backend Engineer",
    "company": "Acme",
    "description": "Build APIs",
    "requirements": "Python, MongoDB",
    "location": "Berlin",
    "work_mode": "Remote",
}


async def post_job(api_client, headers, **overrides):
    resp = await api_client.post("/api/jobs", headers=headers, json={**JOB, **overrides})
    assert resp.status_code == 201, resp.text
    return resp.json()


@pytest.mark.asyncio
async def test_create_job_applies_defaults(api_client: AsyncClient, register_user):
    org = await register_user("organization")
    job = await post_job(api_client, org["headers"])

    assert job["organization_id"] == org["uid"]
    assert job["job_type"] == "Full-time"
    assert job["work_mode"] == "Remote"
    assert job["is_active"] is True
    assert job["views"] == 0 and job["applications_count"] == 0


@pytest.mark.asyncio
async def test_missing_required_fields(api_client: AsyncClient, register_user):
    org = await register_user("organization")
    resp = await api_client.post("/api/jobs", headers=org["headers"], json={**JOB, "requirements": "  "})
    assert resp.status_code == 400
    assert resp.json()["detail"] == (
        "Missing required fields: title, company, description, and requirements are required"
    )


@pytest.mark.asyncio
async def test_only_organizations_post_jobs(api_client: AsyncClient, register_user):
    user = await register_user("user")
    resp = await api_client.post("/api/jobs", headers=user["headers"], json=JOB)
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_list_filters_search_and_pagination(api_client: AsyncClient, register_user):
    org = await register_user("organization")
    await post_job(api_client, org["headers"], title="Data Analyst", work_mode="On-site")
    await post_job(api_client, org["headers"], title="Python Developer")
    await post_job(api_client, org["headers"], title="Designer", requirements="Figma")

    remote = (await api_client.get("/api/jobs", params={"work_mode": "Remote"})).json()
    assert remote["total"] == 2

    found = (await api_client.get("/api/jobs", params={"search": "python"})).json()
    assert {job["title"] for job in found["jobs"]} == {"Data Analyst", "Python Developer"}

    page = (await api_client.get("/api/jobs", params={"page": 2, "page_size": 2})).json()
    assert page["total"] == 3
    assert len(page["jobs"]) == 1


@pytest.mark.asyncio
async def test_get_job_counts_views(api_client: AsyncClient, register_user, mongo_db):
    org = await register_user("organization")
    job = await post_job(api_client, org["headers"])

    resp = await api_client.get(f"/api/jobs/{job['id']}")
    assert resp.status_code == 200
    await api_client.get(f"/api/jobs/{job['id']}")

    stats = (await api_client.get("/api/jobs/stats", headers=org["headers"])).json()
    assert stats["total_views"] == 2
    assert stats["total_jobs"] == 1


@pytest.mark.asyncio
async def test_unknown_job_is_404(api_client: AsyncClient):
    assert (await api_client.get("/api/jobs/5f0000000000000000000000")).status_code == 404
    assert (await api_client.get("/api/jobs/not-an-id")).status_code == 404


@pytest.mark.asyncio
async def test_update_by_owner_only(api_client: AsyncClient, register_user):
    owner = await register_user("organization")
    other = await register_user("organization")
    job = await post_job(api_client, owner["headers"])

    denied = await api_client.put(f"/api/jobs/{job['id']}", headers=other["headers"], json={"salary": "1"})
    assert denied.status_code == 403
    assert denied.json()["detail"] == "Unauthorized: You can only update your own job postings"

    updated = await api_client.put(f"/api/jobs/{job['id']}", headers=owner["headers"], json={"salary": "90k"})
    assert updated.status_code == 200
    assert updated.json()["salary"] == "90k"
    assert updated.json()["title"] == JOB["title"]


@pytest.mark.asyncio
async def test_soft_delete(api_client: AsyncClient, register_user, mongo_db):
    org = await register_user("organization")
    job = await post_job(api_client, org["headers"])

    resp = await api_client.delete(f"/api/jobs/{job['id']}", headers=org["headers"])
    assert resp.status_code == 200

    assert (await api_client.get("/api/jobs")).json()["total"] == 0
    assert mongo_db["jobs"].count_documents({}) == 1

    mine = (await api_client.get("/api/jobs/mine", headers=org["headers"])).json()
    assert mine[0]["is_active"] is False

    stats = (await api_client.get("/api/jobs/stats", headers=org["headers"])).json()
    assert stats["total_jobs"] == 1 and stats["active_jobs"] == 0

    resp = await api_client.get(f"/api/jobs/{job['id']}")
    assert resp.status_code == 404
    assert mongo_db["jobs"].find_one()["views"] == 0
