"""Live post provider implementing IPostBackend over the platform REST API.

Endpoints:
    GET  /admin/posts?page&size        - moderation listing
    PUT  /admin/posts/{id}/approve     - body {message}
    PUT  /admin/posts/{id}/reject      - body {message}
    POST /post/create                  - body PostRequest (camelCase)
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

import structlog

from shelterpost.interfaces.post_backend import IPostBackend
from shelterpost.models.post import PostRequest
from shelterpost.providers.platform_http import PlatformHttpClient, unwrap_record

logger = structlog.get_logger(logger_name=__name__)


class HttpPostProvider(IPostBackend):
    """Post endpoints backed by :class:`PlatformHttpClient`."""

    def __init__(self, client: PlatformHttpClient) -> None:
        self._client = client

    # ------------------------------------------------------------------
    # IPostBackend implementation
    # ------------------------------------------------------------------

    async def list_posts(self, page: int, size: int) -> Mapping[str, Any] | list[Any]:
        body = await self._client.request_json(
            "GET",
            "/admin/posts",
            params={"page": page, "size": size},
            provider_name=self.get_provider_name(),
        )
        logger.debug("posts_page_fetched", page=page, size=size)
        return body if isinstance(body, (Mapping, list)) else {}

    async def approve_post(self, post_id: str, message: str) -> Mapping[str, Any]:
        return await self._decide(post_id, "approve", message)

    async def reject_post(self, post_id: str, message: str) -> Mapping[str, Any]:
        return await self._decide(post_id, "reject", message)

    async def create_post(self, request: PostRequest) -> Mapping[str, Any]:
        body = await self._client.request_json(
            "POST",
            "/post/create",
            json=request.to_payload(),
            provider_name=self.get_provider_name(),
        )
        return unwrap_record(body)

    def get_provider_name(self) -> str:
        return "http_posts"

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    async def _decide(self, post_id: str, verb: str, message: str) -> Mapping[str, Any]:
        body = await self._client.request_json(
            "PUT",
            f"/admin/posts/{quote(post_id, safe='')}/{verb}",
            json={"message": message},
            provider_name=self.get_provider_name(),
        )
        logger.info("post_decision_sent", post_id=post_id, decision=verb)
        return unwrap_record(body)
