"""In-memory post provider implementing IPostBackend.

Serves a seeded set of raw shelter post records so the dashboard can run
without the platform (offline demos, ``POST_BACKEND=stub``) and so tests can
drive the services against realistic payloads.  The seed deliberately mixes
record shapes (nested ``categoryBlog`` vs flat ``category_id``/
``category_name``, missing ``view``/``author_id``) the way the platform does.

Failures are injected with :meth:`StubPostProvider.fail_next`, which makes
the next call to the named operation raise ``BackendError`` once.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

import structlog

from shelterpost.interfaces.post_backend import IPostBackend
from shelterpost.models.post import PostRequest
from shelterpost.utils.errors import BackendError

logger = structlog.get_logger(logger_name=__name__)

_SEED_POSTS: list[dict[str, Any]] = [
    {
        "id": "1",
        "topic": "Help Us Save Abandoned Puppies - Urgent Medical Care Needed",
        "htmlContent": "<p>We recently rescued several abandoned puppies who need urgent medical care.</p>",
        "deltaContent": '{"ops":[{"insert":"We recently rescued several abandoned puppies..."}]}',
        "categoryBlog": {"id": "1", "name": "Rescue Stories"},
        "thumbnail": "https://images.pexels.com/photos/1108099/pexels-photo-1108099.jpeg",
        "view": 245,
        "stamp": "2024-01-15T10:00:00Z",
        "author_id": "shelter123",
    },
    {
        "id": "2",
        "topic": "Cat Adoption Event This Weekend",
        "htmlContent": "<p>Join us this weekend for our special cat adoption event!</p>",
        "deltaContent": '{"ops":[{"insert":"Join us this weekend for our special cat adoption event..."}]}',
        "category_id": "2",
        "category_name": "Adoption Events",
        "thumbnail": "https://images.pexels.com/photos/45201/kitty-cat-kitten-pet-45201.jpeg",
        "view": 189,
        "stamp": "2024-01-10T14:30:00Z",
        "author_id": "shelter456",
    },
    {
        "id": "3",
        "topic": "New Volunteer Training Program Starting Next Month",
        "htmlContent": "<p>We are starting a new volunteer training program next month.</p>",
        "deltaContent": '{"ops":[{"insert":"We are starting a new volunteer training program..."}]}',
        "categoryBlog": {"id": "3", "name": "Volunteer Programs"},
        "thumbnail": "https://images.pexels.com/photos/1851164/pexels-photo-1851164.jpeg",
        "view": 0,
        "stamp": "2024-01-08T09:15:00Z",
        "author_id": "shelter789",
    },
    {
        "id": "4",
        "topic": "Pet Health Tips for Winter Season",
        "htmlContent": "<p>Winter is coming and it's important to keep your pets healthy.</p>",
        "deltaContent": '{"ops":[{"insert":"Winter is coming..."}]}',
        "category_id": "4",
        "category_name": "Health Tips",
        "thumbnail": "https://images.pexels.com/photos/551628/pexels-photo-551628.jpeg",
        "stamp": "2024-01-05T16:45:00Z",
    },
    {
        "id": "5",
        "topic": "Success Story: Max Finds His Forever Home",
        "htmlContent": "<p>Max, a German Shepherd, found his perfect family after months of waiting.</p>",
        "deltaContent": '{"ops":[{"insert":"We are thrilled to share the heartwarming story of Max..."}]}',
        "categoryBlog": {"id": "5", "name": "Success Stories"},
        "thumbnail": "https://images.pexels.com/photos/333083/pexels-photo-333083.jpeg",
        "view": 428,
        "stamp": "2024-01-03T11:20:00Z",
        "author_id": "shelter456",
    },
]


class StubPostProvider(IPostBackend):
    """Seeded in-memory post backend.

    Parameters
    ----------
    records:
        Raw records to serve; defaults to a copy of the built-in seed.
    envelope_key:
        Key the listing is wrapped under (``"content"`` or ``"listData"``).
    """

    def __init__(
        self,
        records: list[Mapping[str, Any]] | None = None,
        envelope_key: str = "content",
    ) -> None:
        source = _SEED_POSTS if records is None else records
        self._records: list[dict[str, Any]] = [dict(copy.deepcopy(r)) for r in source]
        self._envelope_key = envelope_key
        self._pending_failures: set[str] = set()
        # (operation, post_id or None, payload) for assertions in tests.
        self.calls: list[tuple[str, str | None, Any]] = []

    def fail_next(self, operation: str) -> None:
        """Make the next call to *operation* (e.g. ``"approve_post"``) fail once."""
        self._pending_failures.add(operation)

    # ------------------------------------------------------------------
    # IPostBackend implementation
    # ------------------------------------------------------------------

    async def list_posts(self, page: int, size: int) -> Mapping[str, Any]:
        self._record_call("list_posts", None, {"page": page, "size": size})
        start = page * size
        window = [copy.deepcopy(r) for r in self._records[start:start + size]]
        return {
            self._envelope_key: window,
            "pageNumber": page,
            "totalElements": len(self._records),
            "totalPages": max(1, -(-len(self._records) // size)),
        }

    async def approve_post(self, post_id: str, message: str) -> Mapping[str, Any]:
        self._record_call("approve_post", post_id, message)
        record = self._find(post_id)
        if not record.get("view"):
            record["view"] = 1
        logger.info("stub_post_approved", post_id=post_id)
        return copy.deepcopy(record)

    async def reject_post(self, post_id: str, message: str) -> Mapping[str, Any]:
        self._record_call("reject_post", post_id, message)
        record = self._find(post_id)
        self._records.remove(record)
        logger.info("stub_post_rejected", post_id=post_id)
        return copy.deepcopy(record)

    async def create_post(self, request: PostRequest) -> Mapping[str, Any]:
        self._record_call("create_post", None, request.to_payload())
        record = {
            "id": uuid4().hex,
            "topic": request.topic,
            "htmlContent": request.html_content,
            "deltaContent": request.delta_content,
            "category_id": request.category_id,
            "thumbnail": request.thumbnail,
            "view": 0,
            "stamp": datetime.now(tz=timezone.utc).isoformat(),  # noqa: UP017
        }
        self._records.insert(0, record)
        return copy.deepcopy(record)

    def get_provider_name(self) -> str:
        return "stub_posts"

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _record_call(self, operation: str, post_id: str | None, payload: Any) -> None:
        self.calls.append((operation, post_id, payload))
        if operation in self._pending_failures:
            self._pending_failures.discard(operation)
            raise BackendError(
                message=f"Simulated failure for {operation}",
                provider_name=self.get_provider_name(),
                status_code=503,
            )

    def _find(self, post_id: str) -> dict[str, Any]:
        for record in self._records:
            if str(record.get("id")) == post_id:
                return record
        raise BackendError(
            message=f"Post not found: {post_id}",
            provider_name=self.get_provider_name(),
            status_code=404,
        )
