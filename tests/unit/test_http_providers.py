"""Unit tests for the live httpx providers with a mocked AsyncClient."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock

import httpx
import pytest

from shelterpost.models.post import PostRequest
from shelterpost.providers.categories import HttpCategoryProvider
from shelterpost.providers.platform_http import PlatformHttpClient, unwrap_record
from shelterpost.providers.posts import HttpPostProvider
from shelterpost.utils.errors import BackendError, ProviderUnavailableError

BASE_URL = "https://api.example.org/api/"


def _response(status: int = 200, body: Any = None, method: str = "GET", content: bytes | None = None) -> httpx.Response:
    request = httpx.Request(method, "https://api.example.org/api/x")
    if content is not None:
        return httpx.Response(status, content=content, request=request)
    return httpx.Response(status, json=body, request=request)


def _client(*responses: Any) -> AsyncMock:
    mock_client = AsyncMock()
    mock_client.request = AsyncMock(side_effect=list(responses))
    return mock_client


def _platform(mock_client: AsyncMock) -> PlatformHttpClient:
    return PlatformHttpClient(
        http_client=mock_client,
        base_url=BASE_URL,
        headers={"Authorization": "Bearer t0ken"},
        timeout=5.0,
    )


# ─── PlatformHttpClient ───────────────────────────────────────────

class TestPlatformHttpClient:
    @pytest.mark.asyncio
    async def test_builds_url_and_headers(self):
        mock_client = _client(_response(body={"ok": True}))
        body = await _platform(mock_client).request_json("GET", "/admin/posts", provider_name="t")

        assert body == {"ok": True}
        args, kwargs = mock_client.request.await_args
        assert args == ("GET", "https://api.example.org/api/admin/posts")
        assert kwargs["headers"]["Authorization"] == "Bearer t0ken"
        assert kwargs["timeout"] == 5.0

    @pytest.mark.asyncio
    async def test_status_error_becomes_backend_error(self):
        mock_client = _client(_response(status=500, body={"error": "x"}))
        with pytest.raises(BackendError) as exc_info:
            await _platform(mock_client).request_json("PUT", "/admin/posts/1/approve", provider_name="http_posts")
        assert exc_info.value.status_code == 500
        assert exc_info.value.provider_name == "http_posts"

    @pytest.mark.asyncio
    async def test_connect_error_is_unavailable(self):
        mock_client = AsyncMock()
        mock_client.request = AsyncMock(side_effect=httpx.ConnectError("refused"))
        with pytest.raises(ProviderUnavailableError):
            await _platform(mock_client).request_json("GET", "/admin/posts", provider_name="t")

    @pytest.mark.asyncio
    async def test_timeout_is_unavailable(self):
        mock_client = AsyncMock()
        mock_client.request = AsyncMock(side_effect=httpx.ReadTimeout("slow"))
        with pytest.raises(ProviderUnavailableError) as exc_info:
            await _platform(mock_client).request_json("GET", "/admin/posts", provider_name="t")
        assert exc_info.value.status_code is None

    @pytest.mark.asyncio
    async def test_empty_body(self):
        mock_client = _client(_response(content=b""))
        assert await _platform(mock_client).request_json("PUT", "/x", provider_name="t") == {}

    @pytest.mark.asyncio
    async def test_non_json_body(self):
        mock_client = _client(_response(content=b"<html>oops</html>"))
        with pytest.raises(BackendError):
            await _platform(mock_client).request_json("GET", "/x", provider_name="t")

    def test_unwrap_record(self):
        assert unwrap_record({"data": {"id": 1}}) == {"id": 1}
        assert unwrap_record({"id": 2}) == {"id": 2}
        assert unwrap_record([1, 2]) == {}


# ─── HttpPostProvider ─────────────────────────────────────────────

class TestHttpPostProvider:
    @pytest.mark.asyncio
    async def test_list_posts(self):
        mock_client = _client(_response(body={"content": [{"id": 1}]}))
        provider = HttpPostProvider(_platform(mock_client))

        body = await provider.list_posts(0, 10)

        assert body == {"content": [{"id": 1}]}
        _, kwargs = mock_client.request.await_args
        assert kwargs["params"] == {"page": 0, "size": 10}

    @pytest.mark.asyncio
    async def test_list_posts_bare_list(self):
        provider = HttpPostProvider(_platform(_client(_response(body=[{"id": 1}]))))
        assert await provider.list_posts(0, 10) == [{"id": 1}]

    @pytest.mark.asyncio
    async def test_approve_sends_message(self):
        mock_client = _client(_response(body={"data": {"id": "5", "view": 1}}, method="PUT"))
        provider = HttpPostProvider(_platform(mock_client))

        record = await provider.approve_post("5", "Looks great")

        assert record == {"id": "5", "view": 1}
        args, kwargs = mock_client.request.await_args
        assert args == ("PUT", "https://api.example.org/api/admin/posts/5/approve")
        assert kwargs["json"] == {"message": "Looks great"}

    @pytest.mark.asyncio
    async def test_reject_path_and_id_quoting(self):
        mock_client = _client(_response(body={}, method="PUT"))
        provider = HttpPostProvider(_platform(mock_client))

        await provider.reject_post("a/b", "No")

        args, _ = mock_client.request.await_args
        assert args[1].endswith("/admin/posts/a%2Fb/reject")

    @pytest.mark.asyncio
    async def test_reject_failure(self):
        provider = HttpPostProvider(_platform(_client(_response(status=403, body={}, method="PUT"))))
        with pytest.raises(BackendError) as exc_info:
            await provider.reject_post("5", "No")
        assert exc_info.value.status_code == 403

    @pytest.mark.asyncio
    async def test_create_post_payload(self):
        mock_client = _client(_response(body={"id": "77"}, method="POST"))
        provider = HttpPostProvider(_platform(mock_client))
        request = PostRequest(
            topic="T", html_content="<p>h</p>", delta_content="{}", category_id="2", thumbnail="u",
        )

        record = await provider.create_post(request)

        assert record == {"id": "77"}
        args, kwargs = mock_client.request.await_args
        assert args[1].endswith("/post/create")
        assert kwargs["json"]["categoryId"] == "2"
        assert kwargs["json"]["htmlContent"] == "<p>h</p>"

    def test_provider_name(self):
        assert HttpPostProvider(_platform(AsyncMock())).get_provider_name() == "http_posts"


# ─── HttpCategoryProvider ─────────────────────────────────────────

class TestHttpCategoryProvider:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [
        [{"id": 1, "name": "Rescue"}],
        {"data": [{"id": 1, "name": "Rescue"}]},
        {"listData": [{"id": 1, "name": "Rescue"}]},
    ])
    async def test_list_shapes(self, body):
        mock_client = _client(_response(body=body))
        provider = HttpCategoryProvider(_platform(mock_client))

        assert await provider.list_categories() == [{"id": 1, "name": "Rescue"}]
        args, _ = mock_client.request.await_args
        assert args == ("GET", "https://api.example.org/api/categoryBlog/get")

    @pytest.mark.asyncio
    async def test_unknown_shape_is_empty(self):
        provider = HttpCategoryProvider(_platform(_client(_response(body={"weird": 1}))))
        assert await provider.list_categories() == []

    @pytest.mark.asyncio
    async def test_create_category(self):
        mock_client = _client(_response(body={"data": {"id": 6, "name": "Events"}}, method="POST"))
        provider = HttpCategoryProvider(_platform(mock_client))

        record = await provider.create_category("Events")

        assert record == {"id": 6, "name": "Events"}
        args, kwargs = mock_client.request.await_args
        assert args == ("POST", "https://api.example.org/api/categoryBlog")
        assert kwargs["json"] == {"name": "Events"}
