"""
Async HTTP client for the portfolio API.

Wraps ``httpx.AsyncClient``; every call unwraps the ``{success, ...}``
envelope and raises ``APIError`` for non-2xx responses, transport failures
and 2xx bodies missing the expected envelope key.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import httpx

from app.config import settings

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Non-2xx response (or transport failure, ``status == 0``) from the API."""

    def __init__(self, status: int, message: str):
        super().__init__(f"{status}: {message}")
        self.status = status
        self.message = message


class PortfolioClient:
    """
    One method per endpoint group.

    ``login()`` keeps the returned token and sends it as a bearer header on
    every later call.  Pass ``transport`` to run against an ASGI app or a
    mock transport in tests.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 10.0,
    ) -> None:
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self.token = token
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout, connect=5.0),
            transport=transport,
        )

    async def __aenter__(self) -> "PortfolioClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    async def _request(
        self,
        method: str,
        path: str,
        expect: Tuple[str, ...] = (),
        **kwargs,
    ) -> Dict[str, Any]:
        """Send one request; ``expect`` names envelope keys a 2xx body must carry."""
        headers = kwargs.pop("headers", {})
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        try:
            response = await self._client.request(method, path, headers=headers, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise APIError(0, str(exc)) from exc

        try:
            data = response.json()
        except ValueError:
            data = {}

        if response.is_error:
            message = data.get("message") if isinstance(data, dict) else None
            raise APIError(response.status_code, message or response.reason_phrase)

        missing = [key for key in expect if not isinstance(data, dict) or key not in data]
        if missing:
            logger.warning("%s %s returned no %s", method, path, ", ".join(missing))
            raise APIError(response.status_code, "Malformed response")
        return data

    async def _fetch(self, method: str, path: str, key: str, **kwargs) -> Any:
        return (await self._request(method, path, expect=(key,), **kwargs))[key]

    @staticmethod
    def _params(**params) -> Dict[str, Any]:
        """Drop ``None`` values; booleans go out as ``true``/``false``."""
        out = {}
        for key, value in params.items():
            if value is None:
                continue
            out[key] = str(value).lower() if isinstance(value, bool) else value
        return out

    # ------------------------------------------------------------------
    # Auth
    # ------------------------------------------------------------------

    async def login(self, email: str, password: str) -> Dict[str, Any]:
        body = {"email": email, "password": password}
        data = await self._request("POST", "/api/auth/login", expect=("token", "user"), json=body)
        self.token = data["token"]
        return data["user"]

    async def logout(self) -> None:
        await self._request("POST", "/api/auth/logout")
        self.token = None

    async def me(self) -> Dict[str, Any]:
        return await self._fetch("GET", "/api/auth/me", key="user")

    async def change_password(self, current_password: str, new_password: str) -> None:
        await self._request(
            "POST",
            "/api/auth/change-password",
            json={"currentPassword": current_password, "newPassword": new_password},
        )

    # ------------------------------------------------------------------
    # Profile
    # ------------------------------------------------------------------

    async def get_profile(self) -> Dict[str, Any]:
        return await self._fetch("GET", "/api/profile", key="profile")

    async def update_profile(self, changes: Dict[str, Any]) -> Dict[str, Any]:
        return await self._fetch("PUT", "/api/profile", json=changes, key="profile")

    # ------------------------------------------------------------------
    # Projects / blog
    # ------------------------------------------------------------------

    async def list_projects(self, featured: Optional[bool] = None, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        return await self._fetch("GET", "/api/projects", key="projects", params=self._params(featured=featured, limit=limit))

    async def get_project(self, project_id: str) -> Dict[str, Any]:
        return await self._fetch("GET", f"/api/projects/{project_id}", key="project")

    async def get_project_by_slug(self, slug: str) -> Dict[str, Any]:
        return await self._fetch("GET", f"/api/projects/slug/{slug}", key="project")

    async def create_project(self, project: Dict[str, Any]) -> Dict[str, Any]:
        return await self._fetch("POST", "/api/projects", json=project, key="project")

    async def update_project(self, project_id: str, project: Dict[str, Any]) -> Dict[str, Any]:
        return await self._fetch("PUT", f"/api/projects/{project_id}", json=project, key="project")

    async def delete_project(self, project_id: str) -> None:
        await self._request("DELETE", f"/api/projects/{project_id}")

    async def list_posts(self, published: Optional[bool] = None) -> List[Dict[str, Any]]:
        return await self._fetch("GET", "/api/blog", key="posts", params=self._params(published=published))

    async def get_post(self, post_id: str) -> Dict[str, Any]:
        return await self._fetch("GET", f"/api/blog/{post_id}", key="post")

    async def get_post_by_slug(self, slug: str) -> Dict[str, Any]:
        return await self._fetch("GET", f"/api/blog/slug/{slug}", key="post")

    async def create_post(self, post: Dict[str, Any]) -> Dict[str, Any]:
        return await self._fetch("POST", "/api/blog", json=post, key="post")

    async def update_post(self, post_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        return await self._fetch("PUT", f"/api/blog/{post_id}", json=changes, key="post")

    async def delete_post(self, post_id: str) -> None:
        await self._request("DELETE", f"/api/blog/{post_id}")

    # ------------------------------------------------------------------
    # Résumé sections
    # ------------------------------------------------------------------

    async def list_skills(self, category: Optional[str] = None) -> List[Dict[str, Any]]:
        return await self._fetch("GET", "/api/skills", key="skills", params=self._params(category=category))

    async def list_experience(self) -> List[Dict[str, Any]]:
        return await self._fetch("GET", "/api/experience", key="experience")

    async def list_education(self) -> List[Dict[str, Any]]:
        return await self._fetch("GET", "/api/education", key="education")

    async def list_certificates(self) -> List[Dict[str, Any]]:
        return await self._fetch("GET", "/api/certificates", key="certificates")

    async def create(self, resource: str, key: str, body: Dict[str, Any]) -> Dict[str, Any]:
        """Generic create for ``skills``, ``experience``, ``education``, ``certificates``."""
        return await self._fetch("POST", f"/api/{resource}", key=key, json=body)

    async def update(self, resource: str, key: str, record_id: str, body: Dict[str, Any]) -> Dict[str, Any]:
        return await self._fetch("PUT", f"/api/{resource}/{record_id}", key=key, json=body)

    async def delete(self, resource: str, record_id: str) -> None:
        await self._request("DELETE", f"/api/{resource}/{record_id}")

    # ------------------------------------------------------------------
    # Visitor interactions
    # ------------------------------------------------------------------

    async def list_comments(self, project_id: Optional[str] = None, post_id: Optional[str] = None) -> List[Dict[str, Any]]:
        params = self._params(projectId=project_id, postId=post_id)
        return await self._fetch("GET", "/api/comments", params=params, key="comments")

    async def add_comment(
        self,
        content: str,
        author: Optional[str] = None,
        project_id: Optional[str] = None,
        post_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        body = {"content": content, "author": author, "projectId": project_id, "postId": post_id}
        return await self._fetch("POST", "/api/comments", json=body, key="comment")

    async def delete_comment(self, comment_id: str) -> None:
        await self._request("DELETE", f"/api/comments/{comment_id}")

    async def like(self, target_type: str, target_id: str, action: str = "like") -> int:
        body = {"type": target_type, "id": target_id, "action": action}
        return await self._fetch("POST", "/api/likes", key="likes", json=body)

    async def submit_feedback(self, message: str, email: Optional[str] = None, rating: int = 0) -> Dict[str, Any]:
        body = {"message": message, "email": email, "rating": rating}
        return await self._fetch("POST", "/api/feedback", json=body, key="feedback")

    async def send_contact(self, form: Dict[str, Any]) -> str:
        return await self._fetch("POST", "/api/contact", key="message", json=form)

    async def record_visit(self, path: str, referrer: Optional[str] = None) -> Dict[str, Any]:
        body = {"path": path, "referrer": referrer}
        return await self._fetch("POST", "/api/visitors", json=body, key="visitor")

    # ------------------------------------------------------------------
    # Admin
    # ------------------------------------------------------------------

    async def upload(self, filename: str, content: bytes, content_type: str) -> Dict[str, Any]:
        files = {"file": (filename, content, content_type)}
        data = await self._request("POST", "/api/upload", expect=("url", "publicId"), files=files)
        return {"url": data["url"], "publicId": data["publicId"]}

    async def stats(self) -> Dict[str, Any]:
        data = await self._request("GET", "/api/admin/stats", expect=("stats", "recentVisitors"))
        return {"stats": data["stats"], "recentVisitors": data["recentVisitors"]}
