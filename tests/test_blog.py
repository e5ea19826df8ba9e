"""Tests for /api/blog: slugs, publish filter, view counting."""
import re

import pytest
from httpx import AsyncClient

from tests.conftest import create_post


@pytest.mark.asyncio
async def test_create_post_derives_slug(client: AsyncClient, auth_headers):
    post = await create_post(client, auth_headers)
    assert post["slug"] == "hello-world"
    assert post["views"] == 0
    assert post["published"] is True


@pytest.mark.asyncio
async def test_explicit_slug_collision_is_400(client: AsyncClient, auth_headers):
    await create_post(client, auth_headers, slug="taken")
    resp = await client.post(
        "/api/blog", json={"title": "Other", "slug": "taken"}, headers=auth_headers
    )
    assert resp.status_code == 400
    assert resp.json()["message"] == "Slug already exists"


@pytest.mark.asyncio
async def test_derived_slug_collision_gets_suffix(client: AsyncClient, auth_headers):
    await create_post(client, auth_headers)
    second = await create_post(client, auth_headers)
    assert re.fullmatch(r"hello-world-\d{13}", second["slug"])


@pytest.mark.asyncio
async def test_published_filter(client: AsyncClient, auth_headers):
    await create_post(client, auth_headers, title="Live")
    await create_post(client, auth_headers, title="Draft", published=False)

    resp = await client.get("/api/blog", params={"published": "true"})
    assert [p["title"] for p in resp.json()["posts"]] == ["Live"]

    resp = await client.get("/api/blog", params={"published": "false"})
    assert [p["title"] for p in resp.json()["posts"]] == ["Draft"]

    resp = await client.get("/api/blog")
    assert len(resp.json()["posts"]) == 2


@pytest.mark.asyncio
async def test_slug_read_counts_views(client: AsyncClient, auth_headers):
    post = await create_post(client, auth_headers)

    resp = await client.get("/api/blog/slug/hello-world")
    assert resp.json()["post"]["views"] == 1
    resp = await client.get("/api/blog/slug/hello-world")
    assert resp.json()["post"]["views"] == 2

    # Reading by id (admin edit view) does not count
    resp = await client.get(f"/api/blog/{post['id']}")
    assert resp.json()["post"]["views"] == 2


@pytest.mark.asyncio
async def test_partial_update(client: AsyncClient, auth_headers):
    post = await create_post(client, auth_headers)

    resp = await client.put(
        f"/api/blog/{post['id']}", json={"published": False}, headers=auth_headers
    )
    assert resp.status_code == 200
    updated = resp.json()["post"]
    assert updated["published"] is False
    assert updated["title"] == "Hello World"
    assert updated["slug"] == "hello-world"

    resp = await client.put(
        f"/api/blog/{post['id']}", json={"title": "Brand New Title"}, headers=auth_headers
    )
    assert resp.json()["post"]["slug"] == "brand-new-title"


@pytest.mark.asyncio
async def test_update_to_taken_slug(client: AsyncClient, auth_headers):
    await create_post(client, auth_headers, title="One")
    two = await create_post(client, auth_headers, title="Two")

    resp = await client.put(f"/api/blog/{two['id']}", json={"slug": "one"}, headers=auth_headers)
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_delete_post(client: AsyncClient, auth_headers):
    post = await create_post(client, auth_headers)
    resp = await client.delete(f"/api/blog/{post['id']}", headers=auth_headers)
    assert resp.status_code == 200

    resp = await client.delete(f"/api/blog/{post['id']}", headers=auth_headers)
    assert resp.status_code == 404
    assert resp.json()["message"] == "Post not found"
