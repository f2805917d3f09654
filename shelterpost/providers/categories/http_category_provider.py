"""Live category provider implementing ICategoryBackend.

Endpoints:
    GET  /categoryBlog/get   - all categories
    POST /categoryBlog       - body {name}
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import structlog

from shelterpost.interfaces.category_backend import ICategoryBackend
from shelterpost.providers.platform_http import PlatformHttpClient, unwrap_record

logger = structlog.get_logger(logger_name=__name__)


class HttpCategoryProvider(ICategoryBackend):
    """Category endpoints backed by :class:`PlatformHttpClient`."""

    def __init__(self, client: PlatformHttpClient) -> None:
        self._client = client

    async def list_categories(self) -> list[Mapping[str, Any]]:
        body = await self._client.request_json(
            "GET",
            "/categoryBlog/get",
            provider_name=self.get_provider_name(),
        )
        # Bare array is the documented shape; wrapped lists show up on some
        # deployments of the platform.
        if isinstance(body, Mapping):
            for key in ("data", "listData", "content"):
                if isinstance(body.get(key), list):
                    body = body[key]
                    break
            else:
                body = []
        records = [r for r in body if isinstance(r, Mapping)]
        logger.debug("categories_fetched", count=len(records))
        return records

    async def create_category(self, name: str) -> Mapping[str, Any]:
        body = await self._client.request_json(
            "POST",
            "/categoryBlog",
            json={"name": name},
            provider_name=self.get_provider_name(),
        )
        return unwrap_record(body)

    def get_provider_name(self) -> str:
        return "http_categories"
