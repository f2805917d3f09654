"""FastAPI routes for the moderation dashboard.

Thin HTTP surface over one :class:`DashboardSession`.  The session is built
at startup (see ``main.py``) and read from ``app.state``; the route handlers
only translate between schemas and service calls.  Domain errors are left
to ``ErrorHandlingMiddleware``.

# ─── API ROUTE MAP ───────────────────────────────────────────────────
#
# Endpoint                              Method  Description
# ─────────────────────────────────────────────────────────────────────
# /api/v1/posts                         GET     Filtered post list
# /api/v1/posts/stats                   GET     Header card counters
# /api/v1/posts/{post_id}               GET     Single post
# /api/v1/posts/{post_id}/detail        POST    Open the detail surface
# /api/v1/moderation/state              GET     Phase, surface, notice
# /api/v1/moderation/actions            POST    Choose approve / reject
# /api/v1/moderation/confirm            POST    Confirm (quick or authored)
# /api/v1/moderation/cancel             POST    Dismiss confirmation
# /api/v1/moderation/close              POST    Close the open surface
# /api/v1/categories                    GET     Cached category list
# /api/v1/categories                    POST    Create category inline
# /api/v1/drafts/open                   POST    Open the creation form
# /api/v1/drafts/category-selection     POST    Apply a dropdown value
# /api/v1/drafts/thumbnail              POST    Upload a thumbnail image
# /api/v1/drafts/thumbnail              DELETE  Remove the thumbnail
# /api/v1/drafts/submit                 POST    Validate and create a post
# /api/v1/health                        GET     Health check
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, UploadFile

from shelterpost.api.schemas import (
    CategoryResponse,
    CategorySelectionRequest,
    ChooseActionRequest,
    ConfirmActionRequest,
    CreateCategoryRequest,
    CreationResponse,
    DraftResponse,
    HealthResponse,
    ModerationStateResponse,
    OutcomeResponse,
    PostListResponse,
    PostResponse,
    StatsResponse,
    SubmitDraftRequest,
)
from shelterpost.models.draft import ThumbnailUpload
from shelterpost.models.post import StatusFilter
from shelterpost.services.dashboard_session import DashboardSession
from shelterpost.services.post_creation import GENERAL_CREATE_ERROR

logger = structlog.get_logger(logger_name=__name__)

router = APIRouter(prefix="/api/v1")

_VERSION = "0.1.0"


# ── Session accessor ──────────────────────────────────────────────────
def _get_session(request: Request) -> DashboardSession:
    """Retrieve the dashboard session from app state; 503 if not mounted."""
    session = getattr(request.app.state, "dashboard_session", None)
    if session is None:
        raise HTTPException(status_code=503, detail="Dashboard session unavailable")
    return session


SessionDep = Annotated[DashboardSession, Depends(_get_session)]


def _moderation_state(session: DashboardSession) -> ModerationStateResponse:
    moderation = session.moderation
    return ModerationStateResponse.build(
        phase=moderation.phase,
        surface=moderation.surface,
        controls_enabled=moderation.controls_enabled,
        notice=moderation.notice,
    )


def _draft_state(session: DashboardSession) -> DraftResponse:
    draft = session.creation.draft
    return DraftResponse(
        category_id=draft.category_id,
        creating_category=draft.creating_category,
        has_thumbnail=bool(draft.thumbnail),
        errors=session.creation.errors,
    )


# ── Posts ─────────────────────────────────────────────────────────────
@router.get("/posts", response_model=PostListResponse, tags=["posts"])
async def list_posts(
    session: SessionDep,
    query: Annotated[str, Query(max_length=200)] = "",
    status: StatusFilter = StatusFilter.ALL,
) -> PostListResponse:
    """Posts matching the search text and status filter, in list order."""
    posts = session.visible_posts(query, status)
    return PostListResponse(
        posts=[PostResponse.from_post(p) for p in posts],
        visible=len(posts),
        total=len(session.store),
    )


@router.get("/posts/stats", response_model=StatsResponse, tags=["posts"])
async def post_stats(session: SessionDep) -> StatsResponse:
    stats = session.stats()
    return StatsResponse(**stats.model_dump())


@router.get("/posts/{post_id}", response_model=PostResponse, tags=["posts"])
async def get_post(post_id: str, session: SessionDep) -> PostResponse:
    return PostResponse.from_post(session.store.get(post_id))


@router.post("/posts/{post_id}/detail", response_model=ModerationStateResponse, tags=["posts"])
async def open_post_detail(post_id: str, session: SessionDep) -> ModerationStateResponse:
    session.moderation.open_detail(post_id)
    return _moderation_state(session)


# ── Moderation ────────────────────────────────────────────────────────
@router.get("/moderation/state", response_model=ModerationStateResponse, tags=["moderation"])
async def moderation_state(session: SessionDep) -> ModerationStateResponse:
    return _moderation_state(session)


@router.post("/moderation/actions", response_model=ModerationStateResponse, tags=["moderation"])
async def choose_action(body: ChooseActionRequest, session: SessionDep) -> ModerationStateResponse:
    """Open the confirmation surface.  No backend call is made."""
    session.moderation.choose_action(body.post_id, body.action)
    return _moderation_state(session)


@router.post("/moderation/confirm", response_model=OutcomeResponse, tags=["moderation"])
async def confirm_action(
    body: ConfirmActionRequest,
    session: SessionDep,
    response: Response,
) -> OutcomeResponse:
    """Send the pending action.  A backend failure answers 502 with the notice."""
    outcome = await session.moderation.confirm(body.message)
    if not outcome.succeeded:
        response.status_code = 502
    return OutcomeResponse.from_outcome(outcome)


@router.post("/moderation/cancel", response_model=ModerationStateResponse, tags=["moderation"])
async def cancel_action(session: SessionDep) -> ModerationStateResponse:
    session.moderation.cancel()
    return _moderation_state(session)


@router.post("/moderation/close", response_model=ModerationStateResponse, tags=["moderation"])
async def close_surface(session: SessionDep) -> ModerationStateResponse:
    session.moderation.close()
    session.moderation.dismiss_notice()
    return _moderation_state(session)


# ── Categories ────────────────────────────────────────────────────────
@router.get("/categories", response_model=list[CategoryResponse], tags=["categories"])
async def list_categories(session: SessionDep) -> list[CategoryResponse]:
    categories = await session.categories.ensure_categories()
    return [CategoryResponse.from_category(c) for c in categories]


@router.post(
    "/categories",
    response_model=CategoryResponse,
    status_code=201,
    tags=["categories"],
)
async def create_category(body: CreateCategoryRequest, session: SessionDep) -> CategoryResponse:
    """Create a category and select it in the current draft."""
    category = await session.creation.create_category(body.name)
    return CategoryResponse.from_category(category)


# ── Drafts ────────────────────────────────────────────────────────────
@router.post("/drafts/open", response_model=DraftResponse, tags=["drafts"])
async def open_draft(session: SessionDep) -> DraftResponse:
    session.moderation.open_creation()
    await session.creation.open()
    return _draft_state(session)


@router.post("/drafts/category-selection", response_model=DraftResponse, tags=["drafts"])
async def select_category(body: CategorySelectionRequest, session: SessionDep) -> DraftResponse:
    session.creation.select_category(body.value)
    return _draft_state(session)


@router.post("/drafts/thumbnail", response_model=DraftResponse, tags=["drafts"])
async def upload_thumbnail(file: UploadFile, session: SessionDep) -> DraftResponse:
    """Attach an uploaded image as the draft thumbnail (422 if it is not one)."""
    data = await file.read()
    session.creation.attach_thumbnail(ThumbnailUpload(filename=file.filename or "", data=data))
    return _draft_state(session)


@router.delete("/drafts/thumbnail", response_model=DraftResponse, tags=["drafts"])
async def remove_thumbnail(session: SessionDep) -> DraftResponse:
    session.creation.remove_thumbnail()
    return _draft_state(session)


@router.post("/drafts/submit", response_model=CreationResponse, tags=["drafts"])
async def submit_draft(
    body: SubmitDraftRequest,
    session: SessionDep,
    response: Response,
) -> CreationResponse:
    """Apply the form fields to the draft and submit it.

    Answers 422 with field-keyed errors when validation fails, 502 when the
    backend rejects the request, and 201 with the new post otherwise.
    """
    creation = session.creation
    creation.update(
        topic=body.topic,
        html_content=body.html_content,
        delta_content=body.delta_content,
        thumbnail_url=body.thumbnail_url,
    )
    if body.category_id is not None:
        creation.select_category(body.category_id)

    result = await creation.submit()
    if result.succeeded:
        response.status_code = 201
        if not session.moderation.in_flight:
            session.moderation.close()
        return CreationResponse(post=PostResponse.from_post(result.post))

    response.status_code = 502 if result.errors.get("general") == GENERAL_CREATE_ERROR else 422
    logger.info("draft_submit_rejected", status=response.status_code, fields=sorted(result.errors))
    return CreationResponse(errors=result.errors)


# ── Health ────────────────────────────────────────────────────────────
@router.get("/health", response_model=HealthResponse, tags=["health"])
async def health_check(request: Request) -> HealthResponse:
    session: DashboardSession | None = getattr(request.app.state, "dashboard_session", None)
    backend = getattr(request.app.state, "post_backend_name", "unknown")
    return HealthResponse(
        status="healthy" if session is not None else "starting",
        version=_VERSION,
        backend=backend,
        posts_loaded=bool(session and session.store.loaded),
    )
