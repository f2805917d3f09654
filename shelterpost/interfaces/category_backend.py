"""Abstract base class for blog category endpoints."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any


class ICategoryBackend(ABC):
    """Contract for listing and creating blog categories."""

    @abstractmethod
    async def list_categories(self) -> list[Mapping[str, Any]]:
        """Return every category as raw ``{id, name}`` records."""

    @abstractmethod
    async def create_category(self, name: str) -> Mapping[str, Any]:
        """Create a category called *name* and return the created record."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this provider."""
