"""In-memory category provider implementing ICategoryBackend."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import structlog

from shelterpost.interfaces.category_backend import ICategoryBackend
from shelterpost.utils.errors import BackendError

logger = structlog.get_logger(logger_name=__name__)

_SEED_CATEGORIES: list[dict[str, str]] = [
    {"id": "1", "name": "Rescue Stories"},
    {"id": "2", "name": "Adoption Events"},
    {"id": "3", "name": "Volunteer Programs"},
    {"id": "4", "name": "Health Tips"},
    {"id": "5", "name": "Success Stories"},
]


class StubCategoryProvider(ICategoryBackend):
    """Seeded in-memory category backend with one-shot failure injection."""

    def __init__(self, categories: list[Mapping[str, Any]] | None = None) -> None:
        source = _SEED_CATEGORIES if categories is None else categories
        self._categories: list[dict[str, Any]] = [dict(c) for c in source]
        self._pending_failures: set[str] = set()
        self.list_calls = 0
        self.create_calls = 0

    def fail_next(self, operation: str) -> None:
        """Make the next ``list_categories`` or ``create_category`` call fail once."""
        self._pending_failures.add(operation)

    async def list_categories(self) -> list[Mapping[str, Any]]:
        self.list_calls += 1
        self._maybe_fail("list_categories")
        return [dict(c) for c in self._categories]

    async def create_category(self, name: str) -> Mapping[str, Any]:
        self.create_calls += 1
        self._maybe_fail("create_category")
        next_id = max((int(c["id"]) for c in self._categories if str(c["id"]).isdigit()), default=0) + 1
        record = {"id": str(next_id), "name": name}
        self._categories.append(record)
        logger.info("stub_category_created", category_id=record["id"], name=name)
        return dict(record)

    def get_provider_name(self) -> str:
        return "stub_categories"

    def _maybe_fail(self, operation: str) -> None:
        if operation in self._pending_failures:
            self._pending_failures.discard(operation)
            raise BackendError(
                message=f"Simulated failure for {operation}",
                provider_name=self.get_provider_name(),
                status_code=503,
            )
