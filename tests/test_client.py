"""Tests for the async API client, like toggling, visit tracking and the content store."""
import json

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport

from app.client.api import APIError, PortfolioClient
from app.client.likes import LikeToggle, VisitTracker, liked_key
from app.client.storage import LocalStorage
from app.client.store import ContentStore
from app.main import app
from app.seed_data import DEMO_PROJECTS, DEMO_SKILLS
from tests.conftest import ADMIN_EMAIL, ADMIN_PASSWORD, PROJECT_PAYLOAD


def mock_client(handler) -> PortfolioClient:
    return PortfolioClient(base_url="http://api.test", transport=httpx.MockTransport(handler))


@pytest_asyncio.fixture
async def sdk(client):
    """PortfolioClient talking to the app in-process (DB overrides come from ``client``)."""
    async with PortfolioClient(base_url="http://test", transport=ASGITransport(app=app)) as api:
        yield api


# ---------------------------------------------------------------------------
# PortfolioClient against the app
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_login_then_create_and_like(sdk: PortfolioClient, admin_user):
    user = await sdk.login(ADMIN_EMAIL, ADMIN_PASSWORD)
    assert user["email"] == ADMIN_EMAIL
    assert sdk.token

    project = await sdk.create_project(PROJECT_PAYLOAD)
    assert project["slug"] == "my-cool-project"

    assert await sdk.like("project", project["id"]) == 1
    assert await sdk.like("project", project["id"], "unlike") == 0

    projects = await sdk.list_projects(featured=False)
    assert [p["id"] for p in projects] == [project["id"]]


@pytest.mark.asyncio
async def test_error_envelope_becomes_api_error(sdk: PortfolioClient):
    with pytest.raises(APIError) as excinfo:
        await sdk.get_project_by_slug("missing")
    assert excinfo.value.status == 404
    assert excinfo.value.message == "Project not found"


@pytest.mark.asyncio
async def test_generic_section_helpers(sdk: PortfolioClient, admin_user):
    await sdk.login(ADMIN_EMAIL, ADMIN_PASSWORD)
    skill = await sdk.create("skills", "skill", {"name": "Go", "category": "Programming", "level": 70})
    updated = await sdk.update("skills", "skill", skill["id"], {"level": 75})
    assert updated["level"] == 75

    await sdk.delete("skills", skill["id"])
    assert await sdk.list_skills() == []


def test_params_drop_none_and_lowercase_bools():
    assert PortfolioClient._params(featured=True, limit=None, category="Tools") == {
        "featured": "true",
        "category": "Tools",
    }


@pytest.mark.asyncio
async def test_transport_failure_is_status_zero():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    async with mock_client(handler) as api:
        with pytest.raises(APIError) as excinfo:
            await api.get_profile()
    assert excinfo.value.status == 0


# ---------------------------------------------------------------------------
# LikeToggle / VisitTracker
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_like_toggle_success_persists_flag(tmp_path):
    calls = []

    def handler(request):
        calls.append(json.loads(request.content))
        return httpx.Response(200, json={"success": True, "likes": 4})

    storage = LocalStorage(str(tmp_path / "storage.json"))
    async with mock_client(handler) as api:
        toggle = LikeToggle(api, storage, "post", "p1", initial_likes=3)
        assert await toggle.toggle() is True
        assert toggle.liked is True
        assert toggle.likes == 4
        assert calls[-1] == {"type": "post", "id": "p1", "action": "like"}

        # Flag survives a reload from disk
        reloaded = LocalStorage(str(tmp_path / "storage.json"))
        assert reloaded.get_item(liked_key("post", "p1")) == "true"

        await toggle.toggle()
        assert toggle.liked is False
        assert toggle.likes == 3
        assert calls[-1]["action"] == "unlike"
        assert liked_key("post", "p1") not in storage


@pytest.mark.asyncio
async def test_like_toggle_reverts_on_failure():
    def handler(request):
        return httpx.Response(500, json={"success": False, "message": "Internal server error"})

    storage = LocalStorage()
    async with mock_client(handler) as api:
        toggle = LikeToggle(api, storage, "project", "42", initial_likes=7)
        await toggle.toggle()

    assert toggle.liked is False
    assert toggle.likes == 7
    assert storage.get_item(liked_key("project", "42")) is None
    assert toggle.loading is False


@pytest.mark.asyncio
async def test_unlike_from_zero_stays_at_zero():
    storage = LocalStorage()
    storage.set_item(liked_key("post", "p1"), "true")

    async with mock_client(lambda request: httpx.Response(200, json={"success": True, "likes": 0})) as api:
        toggle = LikeToggle(api, storage, "post", "p1", initial_likes=0)
        assert toggle.liked is True
        await toggle.toggle()

    assert toggle.likes == 0
    assert toggle.liked is False


@pytest.mark.asyncio
async def test_toggle_ignored_while_loading():
    async with mock_client(lambda request: httpx.Response(200, json={"likes": 1})) as api:
        toggle = LikeToggle(api, LocalStorage(), "post", "p1")
        toggle.loading = True
        assert await toggle.toggle() is False
        assert toggle.likes == 0


@pytest.mark.asyncio
async def test_visit_tracked_once_per_path():
    paths = []

    def handler(request):
        paths.append(json.loads(request.content)["path"])
        return httpx.Response(201, json={"success": True, "visitor": {}})

    storage = LocalStorage()
    async with mock_client(handler) as api:
        tracker = VisitTracker(api, storage)
        assert await tracker.track("/blog") is True
        assert await tracker.track("/blog") is False
        assert await tracker.track("/about") is True

    assert paths == ["/blog", "/about"]


@pytest.mark.asyncio
async def test_failed_visit_is_retried_later():
    responses = iter([
        httpx.Response(500, json={"message": "down"}),
        httpx.Response(201, json={}),
        httpx.Response(201, json={"success": True, "visitor": {"path": "/"}}),
    ])

    storage = LocalStorage()
    async with mock_client(lambda request: next(responses)) as api:
        tracker = VisitTracker(api, storage)
        assert await tracker.track("/") is False
        # A 2xx without the visitor envelope does not count as recorded
        assert await tracker.track("/") is False
        assert storage.get_item(VisitTracker.visited_key("/")) is None
        assert await tracker.track("/") is True


@pytest.mark.asyncio
async def test_success_without_envelope_key_is_api_error():
    async with mock_client(lambda request: httpx.Response(200, json={"success": True})) as api:
        with pytest.raises(APIError) as excinfo:
            await api.list_projects()
    assert excinfo.value.status == 200
    assert excinfo.value.message == "Malformed response"


@pytest.mark.asyncio
async def test_like_toggle_reverts_on_malformed_success():
    storage = LocalStorage()
    async with mock_client(lambda request: httpx.Response(200, json={"success": True})) as api:
        toggle = LikeToggle(api, storage, "post", "p9", initial_likes=2)
        await toggle.toggle()

    assert toggle.liked is False
    assert toggle.likes == 2
    assert storage.get_item(liked_key("post", "p9")) is None


# ---------------------------------------------------------------------------
# ContentStore
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_store_falls_back_to_demo_content():
    async with mock_client(lambda request: httpx.Response(503, json={"message": "maintenance"})) as api:
        store = ContentStore(api)
        await store.fetch_projects()
        await store.fetch_skills()

    assert store.projects == DEMO_PROJECTS
    assert store.skills == DEMO_SKILLS
    assert store.error is None
    assert store.loading is False
    assert store.featured_projects == [p for p in DEMO_PROJECTS if p.get("featured")]


@pytest.mark.asyncio
async def test_store_uses_api_data():
    remote = [{"id": "abc", "title": "Remote", "featured": True}]
    async with mock_client(lambda request: httpx.Response(200, json={"success": True, "projects": remote})) as api:
        store = ContentStore(api)
        await store.fetch_projects()

    assert store.projects == remote
    assert store.featured_projects == remote


def test_store_add_project_is_local_only():
    store = ContentStore(client=None)
    before = len(store.projects)
    added = store.add_project({"title": "Scratch"})
    assert len(store.projects) == before + 1
    assert added["id"].isdigit()
