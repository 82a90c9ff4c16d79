"""Tests for the object store adapters."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from careerpage.config import Settings
from careerpage.errors import StoreError
from careerpage.services.object_store import (
    HttpObjectStore,
    LocalObjectStore,
    build_object_store,
)


def _mock_client(response=None, side_effect=None):
    mock_client = AsyncMock()
    mock_client.post = AsyncMock(return_value=response, side_effect=side_effect)
    mock_client.delete = AsyncMock(return_value=response, side_effect=side_effect)
    mock_client.__aenter__ = AsyncMock(return_value=mock_client)
    mock_client.__aexit__ = AsyncMock(return_value=None)
    return mock_client


class TestLocalObjectStore:
    """Tests for the data-directory backed store."""

    @pytest.mark.asyncio
    async def test_put_and_remove(self, tmp_path):
        store = LocalObjectStore("http://localhost:8000/uploads/", root=str(tmp_path))
        url = await store.put("company-logos", "a_1.png", b"\x89PNG", "image/png")

        assert url == "http://localhost:8000/uploads/company-logos/a_1.png"
        assert (tmp_path / "company-logos" / "a_1.png").read_bytes() == b"\x89PNG"

        await store.remove("company-logos", "a_1.png")
        assert not (tmp_path / "company-logos" / "a_1.png").exists()

    @pytest.mark.asyncio
    async def test_relative_root_lives_under_data_root(self, tmp_path, monkeypatch):
        from careerpage.config import settings

        monkeypatch.setattr(settings, "data_root", str(tmp_path))
        store = LocalObjectStore("http://localhost:8000/uploads")
        await store.put("videos", "intro.mp4", b"data", "video/mp4")

        assert store.path("videos", "intro.mp4") == tmp_path / "uploads" / "videos" / "intro.mp4"
        assert (tmp_path / "uploads" / "videos" / "intro.mp4").read_bytes() == b"data"

    @pytest.mark.asyncio
    async def test_remove_missing_object(self, tmp_path):
        store = LocalObjectStore("http://localhost:8000/uploads", root=str(tmp_path))
        await store.remove("videos", "gone.mp4")

    def test_key_from_url(self):
        store = LocalObjectStore("http://localhost:8000/uploads")
        url = "http://localhost:8000/uploads/company-logos/a_1.png"
        assert store.key_from_url("company-logos", url) == "a_1.png"
        assert store.key_from_url("company-banners", url) is None


class TestHttpObjectStore:
    """Tests for the HTTP object storage client."""

    @pytest.fixture
    def store(self):
        return HttpObjectStore("https://storage.example.com/", "secret")

    @pytest.mark.asyncio
    async def test_put(self, store):
        response = MagicMock()
        response.raise_for_status = MagicMock()
        with patch("httpx.AsyncClient") as mock_client_class:
            mock_client = _mock_client(response)
            mock_client_class.return_value = mock_client

            url = await store.put("videos", "v_1.mp4", b"data", "video/mp4")

        assert url == "https://storage.example.com/object/public/videos/v_1.mp4"
        args, kwargs = mock_client.post.call_args
        assert args[0] == "https://storage.example.com/object/videos/v_1.mp4"
        assert kwargs["headers"] == {
            "Authorization": "Bearer secret",
            "Content-Type": "video/mp4",
        }

    @pytest.mark.asyncio
    async def test_put_rejected(self, store):
        request = httpx.Request("POST", "https://storage.example.com/object/videos/v_1.mp4")
        response = MagicMock()
        response.raise_for_status = MagicMock(
            side_effect=httpx.HTTPStatusError(
                "Forbidden", request=request, response=httpx.Response(403, request=request)
            )
        )
        with patch("httpx.AsyncClient") as mock_client_class:
            mock_client_class.return_value = _mock_client(response)
            with pytest.raises(StoreError, match="HTTP 403"):
                await store.put("videos", "v_1.mp4", b"data", "video/mp4")

    @pytest.mark.asyncio
    async def test_put_unreachable_is_not_retried(self, store):
        with patch("httpx.AsyncClient") as mock_client_class:
            mock_client = _mock_client(side_effect=httpx.ConnectError("refused"))
            mock_client_class.return_value = mock_client
            with pytest.raises(StoreError, match="unreachable"):
                await store.put("videos", "v_1.mp4", b"data", "video/mp4")
        assert mock_client.post.call_count == 1

    def test_key_from_url(self, store):
        url = "https://storage.example.com/object/public/company-logos/a_1.png"
        assert store.key_from_url("company-logos", url) == "a_1.png"
        assert store.key_from_url("videos", url) is None


class TestBuildObjectStore:
    """Tests for backend selection."""

    def test_local_by_default(self):
        store = build_object_store(Settings(_env_file=None, storage_backend="local"))
        assert isinstance(store, LocalObjectStore)

    def test_http_backend(self):
        store = build_object_store(
            Settings(
                _env_file=None,
                storage_backend="http",
                storage_api_url="https://storage.example.com",
            )
        )
        assert isinstance(store, HttpObjectStore)

    def test_http_backend_requires_url(self):
        with pytest.raises(ValueError, match="STORAGE_API_URL"):
            build_object_store(Settings(_env_file=None, storage_backend="http"))
