"""Abstract base class for the shelter platform's post endpoints.

Defines the contract the dashboard uses to list, approve, reject and create
posts.  Implementations return the platform's *raw* JSON shapes; turning
them into canonical ``Post`` models is the mapper's job, not the
provider's.  Concrete adapters live in ``shelterpost/providers/posts/``:

    HttpPostProvider  - live httpx client against the platform API
    StubPostProvider  - in-memory sample data for tests and offline demos
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from shelterpost.models.post import PostRequest


class IPostBackend(ABC):
    """Contract for post moderation and creation endpoints.

    All operations are async.  Any failure (non-2xx status, transport
    error) must be raised as :class:`~shelterpost.utils.errors.BackendError`
    so callers never have to know which HTTP library is underneath.
    """

    @abstractmethod
    async def list_posts(self, page: int, size: int) -> Mapping[str, Any] | list[Any]:
        """Fetch one page of posts for moderation.

        Parameters
        ----------
        page:
            Zero-based page index.
        size:
            Page size.

        Returns
        -------
        Mapping or list
            The page envelope as returned by the platform.  The record list
            may sit under ``content`` or ``listData``.
        """

    @abstractmethod
    async def approve_post(self, post_id: str, message: str) -> Mapping[str, Any]:
        """Approve *post_id*, sending *message* to its author.

        Returns
        -------
        Mapping
            The updated raw post record.
        """

    @abstractmethod
    async def reject_post(self, post_id: str, message: str) -> Mapping[str, Any]:
        """Reject *post_id*, sending *message* to its author.

        Returns
        -------
        Mapping
            The updated raw post record.
        """

    @abstractmethod
    async def create_post(self, request: PostRequest) -> Mapping[str, Any]:
        """Create a post from *request*.

        Returns
        -------
        Mapping
            The created raw post record (possibly empty if the platform
            echoes nothing back).
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this provider."""
