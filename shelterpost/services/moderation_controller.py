"""Moderation controller - drives approve/reject from choice to confirmed result.

# ─── HOW A MODERATION ACTION FLOWS ───────────────────────────────────
#
#   choose_action(post, APPROVE)
#       IDLE → ACTION_CHOSEN → AWAITING_CONFIRMATION
#       surface := Approval(post, APPROVE)           (no network yet)
#
#   confirm(message=None)                             (quick action)
#   confirm(message="Great post!")                    (authored message)
#       AWAITING_CONFIRMATION → IN_FLIGHT             (controls disabled)
#       exactly one backend call
#         ├─ success → store updated → RESOLVED → IDLE, surface closed
#         └─ failure → store untouched, notice raised → FAILED → IDLE,
#                      surface left open so the reviewer can retry
#
# Only one action may be IN_FLIGHT; anything that would start or replace an
# action while one is in flight raises ModerationInProgressError.  The store
# is never touched before the backend has answered.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

import structlog

from shelterpost.interfaces.post_backend import IPostBackend
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
from shelterpost.services.post_manager import PostManager
from shelterpost.utils.errors import (
    ModerationInProgressError,
    ModerationStateError,
    PostAlreadyApprovedError,
    PostNotFoundError,
    ShelterPostError,
)
from shelterpost.utils.logging import get_logger

_ALLOWED_TRANSITIONS: dict[ModerationPhase, frozenset[ModerationPhase]] = {
    ModerationPhase.IDLE: frozenset({ModerationPhase.ACTION_CHOSEN}),
    ModerationPhase.ACTION_CHOSEN: frozenset(
        {ModerationPhase.AWAITING_CONFIRMATION, ModerationPhase.IDLE}
    ),
    # ACTION_CHOSEN again when the reviewer switches approve <-> reject.
    ModerationPhase.AWAITING_CONFIRMATION: frozenset(
        {ModerationPhase.IN_FLIGHT, ModerationPhase.ACTION_CHOSEN, ModerationPhase.IDLE}
    ),
    ModerationPhase.IN_FLIGHT: frozenset({ModerationPhase.RESOLVED, ModerationPhase.FAILED}),
    ModerationPhase.RESOLVED: frozenset({ModerationPhase.IDLE}),
    ModerationPhase.FAILED: frozenset({ModerationPhase.IDLE}),
}


class ModerationController:
    """Owns the moderation phase and the dashboard's single open surface.

    Parameters
    ----------
    store:
        The session's :class:`PostManager`; mutated only after success.
    backend:
        Post backend used for the approve/reject calls.
    """

    def __init__(self, store: PostManager, backend: IPostBackend) -> None:
        self._store = store
        self._backend = backend
        self._phase = ModerationPhase.IDLE
        self._surface: DashboardSurface = ClosedSurface()
        self._notice: ModerationNotice | None = None
        self._logger: structlog.BoundLogger = get_logger(__name__)

    # ------------------------------------------------------------------
    # State accessors
    # ------------------------------------------------------------------

    @property
    def phase(self) -> ModerationPhase:
        return self._phase

    @property
    def surface(self) -> DashboardSurface:
        return self._surface

    @property
    def notice(self) -> ModerationNotice | None:
        return self._notice

    @property
    def in_flight(self) -> bool:
        return self._phase == ModerationPhase.IN_FLIGHT

    @property
    def controls_enabled(self) -> bool:
        """False while a request is in flight; the UI disables its triggers."""
        return not self.in_flight

    # ------------------------------------------------------------------
    # Surface changes
    # ------------------------------------------------------------------

    def open_detail(self, post_id: str) -> DetailSurface:
        """Show the full content of *post_id*, replacing any open surface."""
        self._ensure_not_in_flight()
        post = self._store.get(post_id)
        self._abandon_pending_action()
        self._surface = DetailSurface(post=post)
        self._logger.debug("surface_opened", surface="detail", post_id=post_id)
        return self._surface

    def open_creation(self) -> CreatingSurface:
        self._ensure_not_in_flight()
        self._abandon_pending_action()
        self._surface = CreatingSurface()
        self._logger.debug("surface_opened", surface="creating")
        return self._surface

    def close(self) -> None:
        """Close whatever surface is open and drop any unconfirmed action."""
        self._ensure_not_in_flight()
        self._abandon_pending_action()
        self._surface = ClosedSurface()

    def dismiss_notice(self) -> None:
        self._notice = None

    # ------------------------------------------------------------------
    # Moderation actions
    # ------------------------------------------------------------------

    def choose_action(self, post_id: str, action: ModerationAction | str) -> ApprovalSurface:
        """Open the confirmation surface for *action* on *post_id*.

        No network call is made.  Choosing again while awaiting
        confirmation switches the pending action.

        Raises
        ------
        ModerationInProgressError
            If another action is in flight.
        PostNotFoundError
            If *post_id* is not in the session store.
        PostAlreadyApprovedError
            If *action* is approve and the post is already published.
        """
        self._ensure_not_in_flight()
        action = ModerationAction(action)
        post = self._store.get(post_id)
        if action is ModerationAction.APPROVE and post.is_approved:
            raise PostAlreadyApprovedError(post_id)

        current = self._surface
        if isinstance(current, ApprovalSurface):
            from_detail = current.from_detail and current.post.id == post_id
        else:
            from_detail = isinstance(current, DetailSurface) and current.post.id == post_id

        self._transition(ModerationPhase.ACTION_CHOSEN, post_id=post_id, action=action.value)
        self._surface = ApprovalSurface(post=post, action=action, from_detail=from_detail)
        self._transition(ModerationPhase.AWAITING_CONFIRMATION, post_id=post_id, action=action.value)
        return self._surface

    def cancel(self) -> None:
        """Dismiss the confirmation surface without calling the backend.

        Returns to the detail view when the action was chosen from it,
        otherwise closes the surface.
        """
        self._ensure_not_in_flight()
        surface = self._surface
        if not isinstance(surface, ApprovalSurface):
            return
        self._abandon_pending_action()
        if surface.from_detail and surface.post.id in self._store:
            self._surface = DetailSurface(post=self._store.get(surface.post.id))
        else:
            self._surface = ClosedSurface()
        self._logger.debug("moderation_cancelled", post_id=surface.post.id, action=surface.action.value)

    async def confirm(self, message: str | None = None) -> ModerationOutcome:
        """Confirm the pending action and send it to the backend.

        An empty or missing *message* sends the action's default text
        (quick action); otherwise *message* is sent verbatim.

        Raises
        ------
        ModerationInProgressError
            If an action is already in flight.
        ModerationStateError
            If no action is awaiting confirmation.
        """
        self._ensure_not_in_flight()
        surface = self._surface
        if not isinstance(surface, ApprovalSurface):
            raise ModerationStateError("No moderation action is awaiting confirmation")

        if self._phase == ModerationPhase.IDLE:
            # Retry after a failure: the surface stayed open, re-arm it.
            self._transition(ModerationPhase.ACTION_CHOSEN, post_id=surface.post.id, retry=True)
            self._transition(ModerationPhase.AWAITING_CONFIRMATION, post_id=surface.post.id)

        action = surface.action
        post_id = surface.post.id
        text = message if message else action.default_message

        self._transition(ModerationPhase.IN_FLIGHT, post_id=post_id, action=action.value)
        self._notice = None
        try:
            response = await self._send(action, post_id, text)
        except ShelterPostError as exc:
            return self._fail(surface, text, exc)
        except BaseException:
            # Unexpected errors and cancellation still release the controller.
            self._transition(ModerationPhase.FAILED, post_id=post_id, action=action.value)
            self._transition(ModerationPhase.IDLE)
            raise

        if action is ModerationAction.APPROVE:
            self._store.mark_approved(post_id)
        else:
            self._store.remove(post_id)

        self._transition(ModerationPhase.RESOLVED, post_id=post_id, action=action.value)
        self._surface = ClosedSurface()
        self._transition(ModerationPhase.IDLE)
        self._logger.info(
            "moderation_action_succeeded",
            post_id=post_id,
            action=action.value,
            quick_action=not message,
            response_keys=sorted(response.keys()) if isinstance(response, Mapping) else [],
        )
        return ModerationOutcome(action=action, post_id=post_id, succeeded=True, message=text)

    async def approve_many(
        self, post_ids: Iterable[str], message: str | None = None
    ) -> list[ModerationOutcome]:
        """Approve several posts one at a time through the normal single-flight path."""
        return await self._run_many(post_ids, ModerationAction.APPROVE, message)

    async def reject_many(
        self, post_ids: Iterable[str], message: str | None = None
    ) -> list[ModerationOutcome]:
        """Reject several posts one at a time through the normal single-flight path."""
        return await self._run_many(post_ids, ModerationAction.REJECT, message)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    async def _send(self, action: ModerationAction, post_id: str, text: str) -> Mapping[str, Any]:
        if action is ModerationAction.APPROVE:
            return await self._backend.approve_post(post_id, text)
        return await self._backend.reject_post(post_id, text)

    def _fail(self, surface: ApprovalSurface, text: str, exc: ShelterPostError) -> ModerationOutcome:
        action = surface.action
        post_id = surface.post.id
        self._transition(ModerationPhase.FAILED, post_id=post_id, action=action.value)
        self._notice = ModerationNotice(
            action=action,
            post_id=post_id,
            text=f'Failed to {action.value} post "{surface.post_title}". Please try again.',
            detail=str(exc),
        )
        self._logger.error(
            "moderation_action_failed",
            post_id=post_id,
            action=action.value,
            error=str(exc),
            provider=exc.provider_name,
        )
        self._transition(ModerationPhase.IDLE)
        return ModerationOutcome(
            action=action,
            post_id=post_id,
            succeeded=False,
            message=text,
            notice=self._notice,
        )

    async def _run_many(
        self,
        post_ids: Iterable[str],
        action: ModerationAction,
        message: str | None,
    ) -> list[ModerationOutcome]:
        outcomes: list[ModerationOutcome] = []
        for post_id in post_ids:
            try:
                self.choose_action(post_id, action)
            except (PostNotFoundError, PostAlreadyApprovedError) as exc:
                reason = "not found" if isinstance(exc, PostNotFoundError) else "already approved"
                self._logger.warning("bulk_moderation_skipped", post_id=post_id, action=action.value, reason=reason)
                notice = ModerationNotice(
                    action=action,
                    post_id=post_id,
                    text=f"Failed to {action.value} post {post_id}: {reason}.",
                    detail=str(exc),
                )
                outcomes.append(
                    ModerationOutcome(
                        action=action,
                        post_id=post_id,
                        succeeded=False,
                        message=message or action.default_message,
                        notice=notice,
                    )
                )
                continue
            outcomes.append(await self.confirm(message))

        # A failed last item leaves its surface open; bulk runs end closed.
        if isinstance(self._surface, ApprovalSurface):
            self.close()
        self._logger.info(
            "bulk_moderation_finished",
            action=action.value,
            total=len(outcomes),
            succeeded=sum(1 for o in outcomes if o.succeeded),
        )
        return outcomes

    def _ensure_not_in_flight(self) -> None:
        if self.in_flight:
            self._logger.warning("moderation_rejected_in_flight", phase=self._phase.value)
            raise ModerationInProgressError()

    def _abandon_pending_action(self) -> None:
        if self._phase in (ModerationPhase.ACTION_CHOSEN, ModerationPhase.AWAITING_CONFIRMATION):
            self._transition(ModerationPhase.IDLE, abandoned=True)

    def _transition(self, target: ModerationPhase, **context: Any) -> None:
        if target not in _ALLOWED_TRANSITIONS[self._phase]:
            raise ModerationStateError(
                f"Cannot move from {self._phase.value} to {target.value}"
            )
        self._logger.debug(
            "moderation_phase_changed",
            from_phase=self._phase.value,
            to_phase=target.value,
            **context,
        )
        self._phase = target
