"""Tests for POST /api/upload."""
import os

import pytest
from httpx import AsyncClient

from app.config import settings

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


@pytest.mark.asyncio
async def test_upload_requires_auth(client: AsyncClient):
    resp = await client.post("/api/upload", files={"file": ("a.png", PNG_BYTES, "image/png")})
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_upload_image(client: AsyncClient, auth_headers, upload_dir):
    resp = await client.post(
        "/api/upload",
        files={"image": ("Cover Photo.PNG", PNG_BYTES, "image/png")},
        headers=auth_headers,
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["publicId"].endswith(".png")
    assert data["url"] == f"{settings.UPLOAD_URL_PREFIX}/{data['publicId']}"
    assert os.path.exists(os.path.join(upload_dir, data["publicId"]))


@pytest.mark.asyncio
async def test_upload_resume_pdf(client: AsyncClient, auth_headers):
    resp = await client.post(
        "/api/upload",
        files={"resume": ("cv.pdf", b"%PDF-1.4 test", "application/pdf")},
        headers=auth_headers,
    )
    assert resp.status_code == 200


@pytest.mark.asyncio
async def test_upload_rejects_other_types(client: AsyncClient, auth_headers):
    resp = await client.post(
        "/api/upload",
        files={"file": ("notes.txt", b"hello", "text/plain")},
        headers=auth_headers,
    )
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_upload_without_file(client: AsyncClient, auth_headers):
    resp = await client.post("/api/upload", data={"other": "x"}, headers=auth_headers)
    assert resp.status_code == 400
    assert resp.json()["message"] == "No file provided"


@pytest.mark.asyncio
async def test_upload_too_large(client: AsyncClient, auth_headers, monkeypatch, upload_dir):
    monkeypatch.setattr(settings, "MAX_UPLOAD_SIZE", 10)
    resp = await client.post(
        "/api/upload",
        files={"file": ("big.png", PNG_BYTES, "image/png")},
        headers=auth_headers,
    )
    assert resp.status_code == 413
    assert os.listdir(upload_dir) == []
