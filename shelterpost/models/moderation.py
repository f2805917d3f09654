"""Moderation state-machine models.

# ─── ARCHITECTURE ROLE ───────────────────────────────────────────────
#
# Layer: Models.
#
# Two independent pieces of state drive the reviewer's screen:
#
#   ModerationPhase - where the single approve/reject action is:
#
#     IDLE → ACTION_CHOSEN → AWAITING_CONFIRMATION → IN_FLIGHT ─┬→ RESOLVED → IDLE
#                                                               └→ FAILED   → IDLE
#
#   DashboardSurface - which overlay is open.  Exactly one of
#     Closed | Detail(post) | Approval(post, action) | Creating
#   so "detail and approval open at once" cannot be represented.
#
# Both are owned by services/moderation_controller.py.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from shelterpost.models.post import Post


class ModerationAction(str, Enum):  # noqa: UP042
    """The two decisions a reviewer can take on a post."""

    APPROVE = "approve"
    REJECT = "reject"

    @property
    def default_message(self) -> str:
        """Message sent with a quick action (no authored message)."""
        if self is ModerationAction.APPROVE:
            return "Post has been approved and is now visible to users."
        return "Post has been rejected and will not be published."

    @property
    def past_tense(self) -> str:
        return "approved" if self is ModerationAction.APPROVE else "rejected"


class ModerationPhase(str, Enum):  # noqa: UP042
    """Phases of a single moderation action."""

    IDLE = "IDLE"
    ACTION_CHOSEN = "ACTION_CHOSEN"
    AWAITING_CONFIRMATION = "AWAITING_CONFIRMATION"
    IN_FLIGHT = "IN_FLIGHT"
    RESOLVED = "RESOLVED"
    FAILED = "FAILED"


# ─── Surfaces ────────────────────────────────────────────────────────

class ClosedSurface(BaseModel):
    """No overlay open; the reviewer sees the post grid."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["closed"] = "closed"


class DetailSurface(BaseModel):
    """Full-content view of one post."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["detail"] = "detail"
    post: Post


class ApprovalSurface(BaseModel):
    """Confirmation dialog for an approve/reject decision.

    ``from_detail`` records whether the dialog was opened from the detail
    view, so cancelling returns the reviewer there instead of to the grid.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["approval"] = "approval"
    post: Post
    action: ModerationAction
    from_detail: bool = False

    @property
    def post_title(self) -> str:
        return self.post.topic


class CreatingSurface(BaseModel):
    """The post creation form."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["creating"] = "creating"


DashboardSurface = Annotated[
    Union[ClosedSurface, DetailSurface, ApprovalSurface, CreatingSurface],  # noqa: UP007
    Field(discriminator="kind"),
]


# ─── Results ─────────────────────────────────────────────────────────

class ModerationNotice(BaseModel):
    """User-visible notice raised when a moderation call fails."""

    model_config = ConfigDict(frozen=True)

    action: ModerationAction
    post_id: str
    text: str
    detail: str = ""
    raised_at: datetime = Field(
        default_factory=lambda: datetime.now(tz=timezone.utc)  # noqa: UP017
    )


class ModerationOutcome(BaseModel):
    """Result of one confirmed moderation action."""

    model_config = ConfigDict(frozen=True)

    action: ModerationAction
    post_id: str
    succeeded: bool
    message: str = Field(description="Message sent to the author with the action.")
    notice: ModerationNotice | None = None
