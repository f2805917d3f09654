"""Request and response schemas for the dashboard API.

# ─── ARCHITECTURE ROLE ───────────────────────────────────────────────
#
# Layer: API (Pydantic v2 schemas for request validation and response
#        serialization).
#
# These are separate from the domain models in shelterpost/models: domain
# models carry session state, the schemas are the HTTP contract.  Post and
# category payloads reuse the snake_case field names of the domain models.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from shelterpost.models.moderation import (
    ApprovalSurface,
    DashboardSurface,
    DetailSurface,
    ModerationAction,
    ModerationNotice,
    ModerationOutcome,
    ModerationPhase,
)
from shelterpost.models.post import CategoryBlog, Post, PublicationStatus


# ─── Request schemas ──────────────────────────────────────────────────

class ChooseActionRequest(BaseModel):
    """Open the confirmation surface for a post."""

    model_config = ConfigDict(frozen=True)

    post_id: str = Field(min_length=1)
    action: ModerationAction


class ConfirmActionRequest(BaseModel):
    """Confirm the pending action; omit ``message`` for the quick action."""

    model_config = ConfigDict(frozen=True)

    message: str | None = Field(default=None, max_length=2000)


class CreateCategoryRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    # Blank names are rejected by the resolver so the error is field-keyed.
    name: str = Field(max_length=200)


class CategorySelectionRequest(BaseModel):
    """Raw dropdown value, including the create-new sentinel."""

    model_config = ConfigDict(frozen=True)

    value: str = ""


class SubmitDraftRequest(BaseModel):
    """Creation form contents submitted in one request."""

    model_config = ConfigDict(frozen=True)

    topic: str = ""
    html_content: str = ""
    delta_content: str = ""
    category_id: str | None = Field(
        default=None,
        description="Overrides the current category selection when given.",
    )
    thumbnail_url: str = ""


# ─── Response schemas ─────────────────────────────────────────────────

class CategoryResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str

    @classmethod
    def from_category(cls, category: CategoryBlog) -> CategoryResponse:
        return cls(id=category.id, name=category.name)


class PostResponse(BaseModel):
    """A single normalised post."""

    model_config = ConfigDict(frozen=True)

    id: str
    topic: str
    html_content: str
    delta_content: str
    stamp: str
    view: int
    thumbnail: str
    author_id: str
    category: CategoryResponse
    status: PublicationStatus

    @classmethod
    def from_post(cls, post: Post) -> PostResponse:
        return cls(
            id=post.id,
            topic=post.topic,
            html_content=post.html_content,
            delta_content=post.delta_content,
            stamp=post.stamp,
            view=post.view,
            thumbnail=post.thumbnail,
            author_id=post.author_id,
            category=CategoryResponse.from_category(post.category_blog),
            status=post.status,
        )


class PostListResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    posts: list[PostResponse]
    visible: int
    total: int


class StatsResponse(BaseModel):
    """Header card counters."""

    model_config = ConfigDict(frozen=True)

    total: int
    approved: int
    pending: int
    total_views: int


class NoticeResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    action: ModerationAction
    post_id: str
    text: str

    @classmethod
    def from_notice(cls, notice: ModerationNotice | None) -> NoticeResponse | None:
        if notice is None:
            return None
        return cls(action=notice.action, post_id=notice.post_id, text=notice.text)


class ModerationStateResponse(BaseModel):
    """Current moderation phase plus the open surface, flattened for clients."""

    model_config = ConfigDict(frozen=True)

    phase: ModerationPhase
    surface: str
    post_id: str | None = None
    post_title: str | None = None
    action: ModerationAction | None = None
    controls_enabled: bool
    notice: NoticeResponse | None = None

    @classmethod
    def build(
        cls,
        phase: ModerationPhase,
        surface: DashboardSurface,
        controls_enabled: bool,
        notice: ModerationNotice | None,
    ) -> ModerationStateResponse:
        post_id = post_title = None
        action = None
        if isinstance(surface, (DetailSurface, ApprovalSurface)):
            post_id = surface.post.id
            post_title = surface.post.topic
        if isinstance(surface, ApprovalSurface):
            action = surface.action
        return cls(
            phase=phase,
            surface=surface.kind,
            post_id=post_id,
            post_title=post_title,
            action=action,
            controls_enabled=controls_enabled,
            notice=NoticeResponse.from_notice(notice),
        )


class OutcomeResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    action: ModerationAction
    post_id: str
    succeeded: bool
    message: str
    notice: NoticeResponse | None = None

    @classmethod
    def from_outcome(cls, outcome: ModerationOutcome) -> OutcomeResponse:
        return cls(
            action=outcome.action,
            post_id=outcome.post_id,
            succeeded=outcome.succeeded,
            message=outcome.message,
            notice=NoticeResponse.from_notice(outcome.notice),
        )


class DraftResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    category_id: str
    creating_category: bool
    has_thumbnail: bool = False
    errors: dict[str, str] = Field(default_factory=dict)


class CreationResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    post: PostResponse | None = None
    errors: dict[str, str] = Field(default_factory=dict)


class HealthResponse(BaseModel):
    """Application health check response."""

    status: str
    version: str
    backend: str
    posts_loaded: bool


class ErrorResponse(BaseModel):
    """Standard error response body."""

    error: str
    detail: str | None = None
    errors: dict[str, str] | None = None
