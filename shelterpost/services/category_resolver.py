"""Category cache and selection parsing for the post creation form."""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from typing import Any

import structlog

from shelterpost.interfaces.category_backend import ICategoryBackend
from shelterpost.models.category import (
    CREATE_NEW_CATEGORY_SENTINEL,
    CategorySelection,
    CreateNewCategory,
    ExistingCategory,
)
from shelterpost.models.post import CategoryBlog
from shelterpost.utils.errors import FieldValidationError
from shelterpost.utils.logging import get_logger


class CategoryResolver:
    """Lazily fetched, cached category list plus inline category creation.

    The list is fetched on first use and kept for the life of the session.
    An empty cache counts as "not loaded" and is fetched again next time.
    """

    def __init__(self, backend: ICategoryBackend) -> None:
        self._backend = backend
        self._categories: list[CategoryBlog] = []
        self._lock = asyncio.Lock()
        self._logger: structlog.BoundLogger = get_logger(__name__)

    @property
    def categories(self) -> tuple[CategoryBlog, ...]:
        return tuple(self._categories)

    async def ensure_categories(self) -> tuple[CategoryBlog, ...]:
        """Return the cached categories, fetching them if the cache is empty.

        Concurrent callers wait on the same fetch instead of issuing their own.
        """
        if self._categories:
            return self.categories
        async with self._lock:
            if not self._categories:
                records = await self._backend.list_categories()
                self._categories = [
                    _to_category(record) for record in records if isinstance(record, Mapping)
                ]
                self._logger.info(
                    "categories_loaded",
                    count=len(self._categories),
                    provider=self._backend.get_provider_name(),
                )
        return self.categories

    async def create_category(self, name: str) -> CategoryBlog:
        """Create a category on the backend and add it to the cache.

        Raises
        ------
        FieldValidationError
            Keyed on ``category_name`` when *name* is blank; no request is sent.
        BackendError
            If the backend rejects the request.
        """
        cleaned = name.strip()
        if not cleaned:
            self._logger.info("category_validation_failed", field="category_name")
            raise FieldValidationError({"category_name": "Category name is required"})

        record = await self._backend.create_category(cleaned)
        category = _to_category(record)
        if not category.name:
            category = category.model_copy(update={"name": cleaned})
        self._categories.append(category)
        self._logger.info("category_created", category_id=category.id, name=category.name)
        return category

    def find(self, category_id: str) -> CategoryBlog | None:
        for category in self._categories:
            if category.id == category_id:
                return category
        return None

    @staticmethod
    def parse_selection(raw: str | None) -> CategorySelection | None:
        """Translate a dropdown value into a selection.

        ``""``/``None`` means nothing is selected and yields ``None``; the
        create-new sentinel yields :class:`CreateNewCategory`.
        """
        if raw is None:
            return None
        value = raw.strip()
        if not value:
            return None
        if value == CREATE_NEW_CATEGORY_SENTINEL:
            return CreateNewCategory()
        return ExistingCategory(category_id=value)


def _to_category(record: Mapping[str, Any]) -> CategoryBlog:
    category_id = record.get("id")
    name = record.get("name")
    return CategoryBlog(
        id="" if category_id is None else str(category_id),
        name="" if name is None else str(name),
    )
