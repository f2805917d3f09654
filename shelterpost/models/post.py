"""Canonical post models for the moderation dashboard.

# ─── ARCHITECTURE ROLE ───────────────────────────────────────────────
#
# Layer: Models (bottom of the dependency graph - no imports from upper layers).
#
# ``Post`` is the single internal representation every backend record is
# normalised into (see services/post_mapper.py).  All models are frozen
# Pydantic v2 models; the approve transition produces a new instance via
# ``model_copy(update={...})``.
#
# Publication status:
#   The shelter platform encodes "approved" as ``view > 0`` and "pending"
#   as ``view == 0``; there is no status field on the wire.  Internally the
#   status is an explicit ``PublicationStatus`` derived once, at the
#   boundary, and ``view`` is carried as a plain counter.  ``to_wire()``
#   translates back to the legacy record so external behaviour is unchanged.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class PublicationStatus(str, Enum):  # noqa: UP042
    """Two-state publication status of a shelter post."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"

    @classmethod
    def from_view(cls, view: int) -> PublicationStatus:
        """Translate the legacy ``view`` counter into an explicit status."""
        return cls.APPROVED if view > 0 else cls.PENDING


class StatusFilter(str, Enum):  # noqa: UP042
    """Status filter choices offered by the dashboard's filter dropdown."""

    ALL = "all"
    APPROVED = "approved"
    PENDING = "pending"


class CategoryBlog(BaseModel):
    """A blog category a post is filed under."""

    model_config = ConfigDict(frozen=True)

    id: str = ""
    name: str = ""


class Post(BaseModel):
    """A fully-normalised shelter post.

    Every field is populated after normalisation; missing upstream values
    are defaulted rather than left as ``None``.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default="", description="Opaque identifier, unique within a session.")
    topic: str = Field(default="", description="Display title.")
    html_content: str = Field(default="", description="Rich content; rendered as-is.")
    delta_content: str = Field(default="", description="Serialised editor operations, opaque.")
    stamp: str = Field(default="", description="ISO-8601 submission/publication timestamp.")
    view: int = Field(default=0, ge=0, description="View counter carried from the wire.")
    thumbnail: str = Field(default="", description="Thumbnail URL or data URL.")
    author_id: str = Field(default="", description="Submitting shelter/user id.")
    category_blog: CategoryBlog = Field(default_factory=CategoryBlog)
    status: PublicationStatus = PublicationStatus.PENDING

    @model_validator(mode="before")
    @classmethod
    def _derive_status(cls, data: Any) -> Any:
        # Status is derived from the counter unless given explicitly.
        if isinstance(data, dict) and "status" not in data:
            view = data.get("view", 0)
            if isinstance(view, int):
                data = {**data, "status": PublicationStatus.from_view(view)}
        return data

    @property
    def is_approved(self) -> bool:
        return self.status == PublicationStatus.APPROVED

    @property
    def is_pending(self) -> bool:
        return self.status == PublicationStatus.PENDING

    def approved(self) -> Post:
        """Return a copy marked approved.

        A pending post's counter moves from 0 to the sentinel 1; a counter
        that is already positive is kept as-is.  No other field changes.
        """
        return self.model_copy(
            update={"status": PublicationStatus.APPROVED, "view": max(self.view, 1)}
        )

    def to_wire(self) -> dict[str, Any]:
        """Serialise to the platform's legacy record shape."""
        return {
            "id": self.id,
            "topic": self.topic,
            "htmlContent": self.html_content,
            "deltaContent": self.delta_content,
            "stamp": self.stamp,
            "view": self.view,
            "thumbnail": self.thumbnail,
            "author_id": self.author_id,
            "categoryBlog": {"id": self.category_blog.id, "name": self.category_blog.name},
        }


class PostRequest(BaseModel):
    """Creation payload for ``POST /post/create``.

    Python-side field names are snake_case; ``to_payload()`` emits the
    camelCase keys the platform expects.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    topic: str
    html_content: str = Field(alias="htmlContent")
    delta_content: str = Field(alias="deltaContent")
    category_id: str = Field(alias="categoryId", min_length=1)
    thumbnail: str

    def to_payload(self) -> dict[str, str]:
        return self.model_dump(by_alias=True)


class PostStats(BaseModel):
    """Aggregate counters shown in the dashboard header cards."""

    model_config = ConfigDict(frozen=True)

    total: int = 0
    approved: int = 0
    pending: int = 0
    total_views: int = 0
