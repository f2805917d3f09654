"""Session store holding the authoritative post collection for one dashboard.

# ─── OWNERSHIP RULES ─────────────────────────────────────────────────
#
#   PostManager ◄── load()            (dashboard mount)
#               ◄── mark_approved()   (ModerationController, after success)
#               ◄── remove()          (ModerationController, after success)
#               ◄── prepend()         (PostCreationFlow, after success)
#
# Nothing else writes to the collection.  Every mutation happens after the
# awaited backend call has resolved, so the visible list never reflects an
# unconfirmed action.  Once close() has been called (the dashboard was torn
# down) late resolutions are dropped instead of applied.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import structlog

from shelterpost.interfaces.post_backend import IPostBackend
from shelterpost.models.post import Post, PostStats, StatusFilter
from shelterpost.services.post_mapper import CanonicalPostMapper
from shelterpost.services.search_filter import filter_posts
from shelterpost.utils.errors import PostNotFoundError
from shelterpost.utils.logging import get_logger


class PostManager:
    """Ordered, in-memory post collection for the current dashboard session.

    Parameters
    ----------
    backend:
        Source of the initial post page.
    mapper:
        Normaliser for raw records; a default mapper is used when omitted.
    page_size:
        Size of the single page fetched on :meth:`load`.
    """

    def __init__(
        self,
        backend: IPostBackend,
        mapper: CanonicalPostMapper | None = None,
        page_size: int = 10,
    ) -> None:
        self._backend = backend
        self._mapper = mapper or CanonicalPostMapper()
        self._page_size = page_size
        self._posts: list[Post] = []
        self._loaded = False
        self._closed = False
        self._logger: structlog.BoundLogger = get_logger(__name__)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    async def load(self, page: int = 0, size: int | None = None) -> tuple[Post, ...]:
        """Fetch one page of posts and replace the collection.

        Raises
        ------
        BackendError
            If the listing call fails; the collection is left unchanged.
        """
        size = size or self._page_size
        envelope = await self._backend.list_posts(page, size)
        posts = self._mapper.map_page(envelope)

        if self._closed:
            self._logger.info("posts_load_ignored_after_close", count=len(posts))
            return self.posts

        self._posts = posts
        self._loaded = True
        self._logger.info(
            "posts_loaded",
            page=page,
            size=size,
            count=len(posts),
            provider=self._backend.get_provider_name(),
        )
        return self.posts

    # ------------------------------------------------------------------
    # Read API
    # ------------------------------------------------------------------

    @property
    def posts(self) -> tuple[Post, ...]:
        return tuple(self._posts)

    @property
    def loaded(self) -> bool:
        return self._loaded

    @property
    def closed(self) -> bool:
        return self._closed

    def __len__(self) -> int:
        return len(self._posts)

    def __contains__(self, post_id: object) -> bool:
        return any(post.id == post_id for post in self._posts)

    def get(self, post_id: str) -> Post:
        """Return the post with *post_id*.

        Raises
        ------
        PostNotFoundError
            If no such post is in the collection.
        """
        for post in self._posts:
            if post.id == post_id:
                return post
        raise PostNotFoundError(post_id)

    def filter(
        self,
        query: str = "",
        status_filter: StatusFilter | str = StatusFilter.ALL,
    ) -> list[Post]:
        return filter_posts(self._posts, query, status_filter)

    def stats(self) -> PostStats:
        """Counters for the header cards: total, approved, pending, total views."""
        approved = sum(1 for post in self._posts if post.is_approved)
        return PostStats(
            total=len(self._posts),
            approved=approved,
            pending=len(self._posts) - approved,
            total_views=sum(post.view for post in self._posts),
        )

    # ------------------------------------------------------------------
    # Mutation API (controller / creation flow only)
    # ------------------------------------------------------------------

    def mark_approved(self, post_id: str) -> Post | None:
        """Replace *post_id* in place with its approved copy.

        Returns the updated post, or ``None`` if the store is closed or the
        post is no longer present.
        """
        if self._closed:
            self._logger.info("approve_ignored_after_close", post_id=post_id)
            return None
        for index, post in enumerate(self._posts):
            if post.id == post_id:
                updated = post.approved()
                self._posts[index] = updated
                self._logger.info("post_marked_approved", post_id=post_id, view=updated.view)
                return updated
        self._logger.warning("approve_target_missing", post_id=post_id)
        return None

    def remove(self, post_id: str) -> Post | None:
        """Forget *post_id*; returns the removed post or ``None``."""
        if self._closed:
            self._logger.info("remove_ignored_after_close", post_id=post_id)
            return None
        for index, post in enumerate(self._posts):
            if post.id == post_id:
                del self._posts[index]
                self._logger.info("post_removed", post_id=post_id, remaining=len(self._posts))
                return post
        self._logger.warning("remove_target_missing", post_id=post_id)
        return None

    def prepend(self, post: Post) -> bool:
        """Insert a newly created post at the top of the list."""
        if self._closed:
            self._logger.info("prepend_ignored_after_close", post_id=post.id)
            return False
        self._posts.insert(0, post)
        self._logger.info("post_prepended", post_id=post.id, total=len(self._posts))
        return True

    def close(self) -> None:
        """Mark the session disposed; later mutations are ignored."""
        self._closed = True
        self._logger.debug("post_manager_closed", count=len(self._posts))
