"""Tests for comments, likes, feedback, contact and visitor tracking."""
import pytest
from httpx import AsyncClient

from tests.conftest import create_post, create_project


# ---------------------------------------------------------------------------
# Comments
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_comment_needs_a_target(client: AsyncClient):
    resp = await client.post("/api/comments", json={"content": "Hello"})
    assert resp.status_code == 400
    assert resp.json()["message"] == "Project ID or Post ID is required"


@pytest.mark.asyncio
async def test_comment_on_missing_project(client: AsyncClient):
    resp = await client.post("/api/comments", json={"content": "Hello", "projectId": "nope"})
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_comment_author_defaults_to_anonymous(client: AsyncClient, auth_headers):
    project = await create_project(client, auth_headers)
    resp = await client.post(
        "/api/comments", json={"content": "Great work", "author": "   ", "projectId": project["id"]}
    )
    assert resp.status_code == 201
    comment = resp.json()["comment"]
    assert comment["author"] == "Anonymous"
    assert comment["project"] == {"title": project["title"], "slug": project["slug"]}
    assert comment["post"] is None


@pytest.mark.asyncio
async def test_comment_filters_and_counts(client: AsyncClient, auth_headers):
    project = await create_project(client, auth_headers)
    post = await create_post(client, auth_headers)
    await client.post("/api/comments", json={"content": "On project", "author": "Sam", "projectId": project["id"]})
    await client.post("/api/comments", json={"content": "On post", "postId": post["id"]})

    resp = await client.get("/api/comments", params={"projectId": project["id"]})
    assert [c["content"] for c in resp.json()["comments"]] == ["On project"]

    resp = await client.get("/api/comments", params={"postId": post["id"]})
    comments = resp.json()["comments"]
    assert [c["content"] for c in comments] == ["On post"]
    assert comments[0]["post"]["slug"] == "hello-world"

    resp = await client.get("/api/comments")
    assert len(resp.json()["comments"]) == 2

    resp = await client.get(f"/api/projects/{project['id']}")
    assert resp.json()["project"]["commentCount"] == 1


@pytest.mark.asyncio
async def test_comment_delete_requires_auth(client: AsyncClient, auth_headers):
    post = await create_post(client, auth_headers)
    resp = await client.post("/api/comments", json={"content": "Spam", "postId": post["id"]})
    comment_id = resp.json()["comment"]["id"]

    resp = await client.delete(f"/api/comments/{comment_id}")
    assert resp.status_code == 401

    resp = await client.delete(f"/api/comments/{comment_id}", headers=auth_headers)
    assert resp.status_code == 200


# ---------------------------------------------------------------------------
# Likes
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_like_and_unlike_project(client: AsyncClient, auth_headers):
    project = await create_project(client, auth_headers)

    resp = await client.post("/api/likes", json={"type": "project", "id": project["id"]})
    assert resp.status_code == 200
    assert resp.json()["likes"] == 1

    resp = await client.post("/api/likes", json={"type": "project", "id": project["id"], "action": "like"})
    assert resp.json()["likes"] == 2

    resp = await client.post("/api/likes", json={"type": "project", "id": project["id"], "action": "unlike"})
    assert resp.json()["likes"] == 1


@pytest.mark.asyncio
async def test_unlike_never_goes_negative(client: AsyncClient, auth_headers):
    post = await create_post(client, auth_headers)
    resp = await client.post("/api/likes", json={"type": "post", "id": post["id"], "action": "unlike"})
    assert resp.status_code == 200
    assert resp.json()["likes"] == 0


@pytest.mark.asyncio
async def test_like_unknown_target(client: AsyncClient):
    resp = await client.post("/api/likes", json={"type": "post", "id": "missing"})
    assert resp.status_code == 404
    assert resp.json()["message"] == "Post not found"

    resp = await client.post("/api/likes", json={"type": "video", "id": "x"})
    assert resp.status_code == 400


# ---------------------------------------------------------------------------
# Feedback / contact
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_feedback_submit_list_delete(client: AsyncClient, auth_headers):
    resp = await client.post("/api/feedback", json={"message": "Love the site", "rating": 5})
    assert resp.status_code == 201
    feedback_id = resp.json()["feedback"]["id"]

    resp = await client.get("/api/feedback")
    assert [f["message"] for f in resp.json()["feedback"]] == ["Love the site"]

    resp = await client.delete(f"/api/feedback/{feedback_id}")
    assert resp.status_code == 401
    resp = await client.delete(f"/api/feedback/{feedback_id}", headers=auth_headers)
    assert resp.status_code == 200


@pytest.mark.asyncio
async def test_feedback_rating_bounds(client: AsyncClient):
    resp = await client.post("/api/feedback", json={"message": "Hmm", "rating": 9})
    assert resp.status_code == 400


CONTACT = {
    "name": "Jordan",
    "email": "jordan@example.com",
    "subject": "Project inquiry",
    "message": "Can we talk?",
    "budget": "$5k",
}


@pytest.mark.asyncio
async def test_contact_sends_mail(client: AsyncClient, mailer):
    resp = await client.post("/api/contact", json=CONTACT)
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "message": "Email sent successfully"}
    assert len(mailer.sent) == 1
    assert mailer.sent[0].subject == "Project inquiry"


@pytest.mark.asyncio
async def test_contact_validation(client: AsyncClient, mailer):
    resp = await client.post("/api/contact", json={**CONTACT, "email": "not-an-email"})
    assert resp.status_code == 400
    assert mailer.sent == []


@pytest.mark.asyncio
async def test_contact_mail_failure(client: AsyncClient, mailer):
    mailer.fail = True
    resp = await client.post("/api/contact", json=CONTACT)
    assert resp.status_code == 500
    assert resp.json()["message"] == "Failed to send email"


# ---------------------------------------------------------------------------
# Visitors / dashboard
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_record_visit_uses_forwarded_ip(client: AsyncClient):
    resp = await client.post(
        "/api/visitors",
        json={"path": "/blog", "referrer": "https://news.example.com"},
        headers={"X-Forwarded-For": "203.0.113.7, 10.0.0.1", "User-Agent": "pytest-agent"},
    )
    assert resp.status_code == 201
    visitor = resp.json()["visitor"]
    assert visitor["ipAddress"] == "203.0.113.7"
    assert visitor["userAgent"] == "pytest-agent"


@pytest.mark.asyncio
async def test_visitor_list_is_admin_only(client: AsyncClient, auth_headers):
    await client.post("/api/visitors", json={"path": "/"})

    resp = await client.get("/api/visitors")
    assert resp.status_code == 401

    resp = await client.get("/api/visitors", headers=auth_headers)
    assert resp.status_code == 200
    assert [v["path"] for v in resp.json()["visitors"]] == ["/"]


@pytest.mark.asyncio
async def test_dashboard_stats(client: AsyncClient, auth_headers):
    await create_project(client, auth_headers, featured=True)
    await create_post(client, auth_headers)
    await create_post(client, auth_headers, title="Draft", published=False)
    await client.post("/api/visitors", json={"path": "/"})
    await client.post("/api/feedback", json={"message": "Nice"})

    resp = await client.get("/api/admin/stats", headers=auth_headers)
    assert resp.status_code == 200
    data = resp.json()
    assert data["stats"]["totalProjects"] == 1
    assert data["stats"]["featuredProjects"] == 1
    assert data["stats"]["totalPosts"] == 2
    assert data["stats"]["publishedPosts"] == 1
    assert data["stats"]["totalVisitors"] == 1
    assert data["stats"]["feedback"] == 1

    days = data["recentVisitors"]
    assert len(days) == 7
    assert days[-1]["count"] == 1
    assert sum(d["count"] for d in days) == 1


@pytest.mark.asyncio
async def test_dashboard_requires_auth(client: AsyncClient):
    resp = await client.get("/api/admin/stats")
    assert resp.status_code == 401
