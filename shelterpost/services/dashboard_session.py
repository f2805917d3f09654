"""One reviewer's dashboard: store, moderation, categories and creation wired together."""

from __future__ import annotations

from uuid import uuid4

import structlog

from shelterpost.interfaces.category_backend import ICategoryBackend
from shelterpost.interfaces.post_backend import IPostBackend
from shelterpost.models.post import Post, PostStats, StatusFilter
from shelterpost.services.category_resolver import CategoryResolver
from shelterpost.services.moderation_controller import ModerationController
from shelterpost.services.post_creation import PostCreationFlow
from shelterpost.services.post_manager import PostManager
from shelterpost.utils.logging import bind_session_context, get_logger


class DashboardSession:
    """Composition root for a single dashboard session.

    All collaborators share one :class:`PostManager`, so a moderation or
    creation result is visible to the list, the filters and the stats
    immediately.
    """

    def __init__(
        self,
        post_backend: IPostBackend,
        category_backend: ICategoryBackend,
        page_size: int = 10,
        author_id: str = "current-shelter-id",
        session_id: str | None = None,
    ) -> None:
        self.session_id = session_id or uuid4().hex[:12]
        self.store = PostManager(post_backend, page_size=page_size)
        self.moderation = ModerationController(self.store, post_backend)
        self.categories = CategoryResolver(category_backend)
        self.creation = PostCreationFlow(self.store, post_backend, self.categories, author_id)
        self._logger: structlog.BoundLogger = get_logger(__name__)

    async def mount(self) -> tuple[Post, ...]:
        """Load the first page of posts."""
        bind_session_context(self.session_id)
        posts = await self.store.load()
        self._logger.info("dashboard_mounted", post_count=len(posts))
        return posts

    def visible_posts(
        self,
        query: str = "",
        status_filter: StatusFilter | str = StatusFilter.ALL,
    ) -> list[Post]:
        return self.store.filter(query, status_filter)

    def stats(self) -> PostStats:
        return self.store.stats()

    async def dispose(self) -> None:
        """Tear down; backend calls still pending will not touch the store."""
        self.store.close()
        self._logger.info("dashboard_disposed", in_flight=self.moderation.in_flight)
