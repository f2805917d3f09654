"""shelterpost domain models - re-exports all public model classes.

Submodules by concern:
    - post.py        - canonical Post, CategoryBlog, PostRequest, status enums, stats
    - category.py    - tagged category selection for the creation form
    - moderation.py  - moderation phases, dashboard surfaces, notices, outcomes
    - draft.py       - creation-form draft, thumbnail uploads, creation results
"""

from __future__ import annotations

from shelterpost.models.category import (
    CREATE_NEW_CATEGORY_SENTINEL,
    CategorySelection,
    CreateNewCategory,
    ExistingCategory,
)
from shelterpost.models.draft import CreationResult, PostDraft, ThumbnailUpload
from shelterpost.models.moderation import (
    ApprovalSurface,
    ClosedSurface,
    CreatingSurface,
    DashboardSurface,
    DetailSurface,
    ModerationAction,
    ModerationNotice,
    ModerationOutcome,
    ModerationPhase,
)
from shelterpost.models.post import (
    CategoryBlog,
    Post,
    PostRequest,
    PostStats,
    PublicationStatus,
    StatusFilter,
)

__all__ = [
    "CREATE_NEW_CATEGORY_SENTINEL",
    "ApprovalSurface",
    "CategoryBlog",
    "CategorySelection",
    "ClosedSurface",
    "CreateNewCategory",
    "CreatingSurface",
    "CreationResult",
    "DashboardSurface",
    "DetailSurface",
    "ExistingCategory",
    "ModerationAction",
    "ModerationNotice",
    "ModerationOutcome",
    "ModerationPhase",
    "Post",
    "PostDraft",
    "PostRequest",
    "PostStats",
    "PublicationStatus",
    "StatusFilter",
    "ThumbnailUpload",
]
