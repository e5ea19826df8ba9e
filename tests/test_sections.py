"""Tests for skills, experience, education and certificates."""
import pytest
from httpx import AsyncClient


# ---------------------------------------------------------------------------
# Skills
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_skill_level_defaults_and_legacy_proficiency(client: AsyncClient, auth_headers):
    resp = await client.post("/api/skills", json={"name": "Go", "category": "Programming"}, headers=auth_headers)
    assert resp.status_code == 201
    assert resp.json()["skill"]["level"] == 50

    resp = await client.post(
        "/api/skills",
        json={"name": "Rust", "category": "Programming", "proficiency": 70},
        headers=auth_headers,
    )
    assert resp.json()["skill"]["level"] == 70


@pytest.mark.asyncio
async def test_skill_explicit_zero_level_is_kept(client: AsyncClient, auth_headers):
    resp = await client.post(
        "/api/skills",
        json={"name": "Cobol", "category": "Programming", "level": 0, "proficiency": 40},
        headers=auth_headers,
    )
    assert resp.status_code == 201
    assert resp.json()["skill"]["level"] == 0


@pytest.mark.asyncio
async def test_skill_level_out_of_range(client: AsyncClient, auth_headers):
    resp = await client.post(
        "/api/skills", json={"name": "X", "category": "Y", "level": 101}, headers=auth_headers
    )
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_skills_ordering_and_category_filter(client: AsyncClient, auth_headers):
    for body in (
        {"name": "Docker", "category": "Tools", "level": 80, "order": 1},
        {"name": "SQL", "category": "Programming", "level": 60, "order": 1},
        {"name": "Python", "category": "Programming", "level": 90, "order": 1},
        {"name": "R", "category": "Programming", "level": 99, "order": 2},
    ):
        resp = await client.post("/api/skills", json=body, headers=auth_headers)
        assert resp.status_code == 201

    resp = await client.get("/api/skills")
    assert [s["name"] for s in resp.json()["skills"]] == ["Python", "SQL", "R", "Docker"]

    resp = await client.get("/api/skills", params={"category": "tools"})
    assert [s["name"] for s in resp.json()["skills"]] == ["Docker"]


@pytest.mark.asyncio
async def test_skill_update_and_delete(client: AsyncClient, auth_headers):
    resp = await client.post("/api/skills", json={"name": "Go", "category": "Programming"}, headers=auth_headers)
    skill_id = resp.json()["skill"]["id"]

    resp = await client.put(f"/api/skills/{skill_id}", json={"proficiency": 65}, headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json()["skill"]["level"] == 65
    assert resp.json()["skill"]["name"] == "Go"

    resp = await client.delete(f"/api/skills/{skill_id}", headers=auth_headers)
    assert resp.json()["message"] == "Skill deleted successfully"

    resp = await client.put(f"/api/skills/{skill_id}", json={"level": 1}, headers=auth_headers)
    assert resp.status_code == 404


# ---------------------------------------------------------------------------
# Experience / education
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_experience_current_first(client: AsyncClient, auth_headers):
    old = {
        "title": "Analyst", "company": "Old Co",
        "startDate": "2018-01-01T00:00:00Z", "endDate": "2020-01-01T00:00:00Z",
    }
    now = {"title": "Lead", "company": "New Co", "startDate": "2021-01-01T00:00:00Z", "current": True}
    for body in (old, now):
        resp = await client.post("/api/experience", json=body, headers=auth_headers)
        assert resp.status_code == 201

    resp = await client.get("/api/experience")
    assert [e["company"] for e in resp.json()["experience"]] == ["New Co", "Old Co"]


@pytest.mark.asyncio
async def test_experience_requires_start_date(client: AsyncClient, auth_headers):
    resp = await client.post("/api/experience", json={"title": "A", "company": "B"}, headers=auth_headers)
    assert resp.status_code == 400
    assert "startDate" in resp.json()["message"]


@pytest.mark.asyncio
async def test_experience_update_can_clear_end_date(client: AsyncClient, auth_headers):
    resp = await client.post(
        "/api/experience",
        json={"title": "A", "company": "B", "startDate": "2019-01-01T00:00:00Z", "endDate": "2020-01-01T00:00:00Z"},
        headers=auth_headers,
    )
    exp_id = resp.json()["experience"]["id"]

    resp = await client.put(
        f"/api/experience/{exp_id}", json={"endDate": None, "current": True}, headers=auth_headers
    )
    assert resp.status_code == 200
    assert resp.json()["experience"]["endDate"] is None
    assert resp.json()["experience"]["current"] is True


@pytest.mark.asyncio
async def test_education_crud(client: AsyncClient, auth_headers):
    resp = await client.post(
        "/api/education",
        json={"institution": "State University", "degree": "BSc", "field": "Statistics",
              "startDate": "2014-09-01T00:00:00Z", "endDate": "2018-06-01T00:00:00Z"},
        headers=auth_headers,
    )
    assert resp.status_code == 201
    edu_id = resp.json()["education"]["id"]

    resp = await client.get("/api/education")
    assert resp.json()["education"][0]["field"] == "Statistics"

    resp = await client.put(f"/api/education/{edu_id}", json={"degree": "MSc"}, headers=auth_headers)
    assert resp.json()["education"]["degree"] == "MSc"

    resp = await client.delete(f"/api/education/{edu_id}", headers=auth_headers)
    assert resp.status_code == 200
    resp = await client.get("/api/education")
    assert resp.json()["education"] == []


# ---------------------------------------------------------------------------
# Certificates
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_certificate_defaults_issue_date(client: AsyncClient, auth_headers):
    resp = await client.post("/api/certificates", json={"name": "Cloud", "issuer": "AWS"}, headers=auth_headers)
    assert resp.status_code == 201
    assert resp.json()["certificate"]["issueDate"]


@pytest.mark.asyncio
async def test_certificates_newest_first_and_clearable(client: AsyncClient, auth_headers):
    await client.post(
        "/api/certificates",
        json={"name": "Older", "issuer": "X", "issueDate": "2020-01-01T00:00:00Z"},
        headers=auth_headers,
    )
    resp = await client.post(
        "/api/certificates",
        json={"name": "Newer", "issuer": "Y", "issueDate": "2023-01-01T00:00:00Z", "credentialId": "ABC"},
        headers=auth_headers,
    )
    cert_id = resp.json()["certificate"]["id"]

    resp = await client.get("/api/certificates")
    assert [c["name"] for c in resp.json()["certificates"]] == ["Newer", "Older"]

    resp = await client.put(
        f"/api/certificates/{cert_id}", json={"credentialId": None, "name": None}, headers=auth_headers
    )
    cert = resp.json()["certificate"]
    assert cert["credentialId"] is None
    assert cert["name"] == "Newer"
