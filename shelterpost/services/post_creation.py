"""Post creation flow - form draft, validation and submission.

# ─── FLOW ────────────────────────────────────────────────────────────
#
#   open()                 categories fetched lazily (cached by resolver)
#   update(topic=...)      edits the draft, clears that field's error
#   select_category(...)   ExistingCategory  -> draft.category_id
#                          CreateNewCategory -> category sub-flow opened
#   create_category(name)  POST /categoryBlog, new category auto-selected
#   attach_thumbnail(...)  uploaded image -> data: URL preview
#   submit()               validate -> POST /post/create -> prepend to store
#
# Validation failures never reach the network.  A failed create keeps the
# draft so the user can resubmit; a successful one resets it.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

import structlog

from shelterpost.interfaces.post_backend import IPostBackend
from shelterpost.models.category import CategorySelection, CreateNewCategory, ExistingCategory
from shelterpost.models.draft import CreationResult, PostDraft, ThumbnailUpload
from shelterpost.models.post import CategoryBlog, Post, PostRequest, PublicationStatus
from shelterpost.services.category_resolver import CategoryResolver
from shelterpost.services.post_manager import PostManager
from shelterpost.utils.errors import BackendError, FieldValidationError, ShelterPostError
from shelterpost.utils.logging import get_logger
from shelterpost.utils.thumbnails import to_data_url

GENERAL_CREATE_ERROR = "Failed to create post. Please try again."
GENERAL_CATEGORIES_ERROR = "Failed to load categories. Please try again."

# Draft attribute -> form field key used in the errors dict.
_ERROR_KEYS: dict[str, str] = {
    "topic": "topic",
    "html_content": "htmlContent",
    "delta_content": "deltaContent",
    "category_id": "categoryId",
    "thumbnail_url": "thumbnail",
}
_EDITABLE_FIELDS = frozenset({"topic", "html_content", "delta_content", "thumbnail_url"})

_TAG_RE = re.compile(r"<[^>]*>")
_EMBED_RE = re.compile(r"<(?:img|iframe|video|audio)\b", re.IGNORECASE)


class PostCreationFlow:
    """Owns the creation-form draft for one dashboard session.

    Parameters
    ----------
    store:
        Session store; the created post is prepended on success.
    backend:
        Post backend used for ``create_post``.
    resolver:
        Category cache shared with the rest of the session.
    author_id:
        Author recorded on the local post when the backend does not echo one.
    """

    def __init__(
        self,
        store: PostManager,
        backend: IPostBackend,
        resolver: CategoryResolver,
        author_id: str = "current-shelter-id",
    ) -> None:
        self._store = store
        self._backend = backend
        self._resolver = resolver
        self._author_id = author_id
        self._draft = PostDraft()
        self._errors: dict[str, str] = {}
        self._logger: structlog.BoundLogger = get_logger(__name__)

    @property
    def draft(self) -> PostDraft:
        return self._draft

    @property
    def errors(self) -> dict[str, str]:
        return dict(self._errors)

    @property
    def categories(self) -> tuple[CategoryBlog, ...]:
        return self._resolver.categories

    # ------------------------------------------------------------------
    # Form lifecycle
    # ------------------------------------------------------------------

    async def open(self) -> PostDraft:
        """Prepare the form: make sure categories are loaded.

        A category fetch failure is reported under ``general`` and the form
        stays usable; the next ``open`` fetches again and clears that
        message once the fetch succeeds.
        """
        try:
            await self._resolver.ensure_categories()
        except BackendError as exc:
            self._errors["general"] = GENERAL_CATEGORIES_ERROR
            self._logger.warning("categories_unavailable", error=str(exc))
        else:
            if self._errors.get("general") == GENERAL_CATEGORIES_ERROR:
                del self._errors["general"]
        return self._draft

    def discard(self) -> None:
        """Throw the draft away (form closed without submitting)."""
        self._draft = PostDraft()
        self._errors = {}

    def update(self, **fields: str) -> PostDraft:
        """Set plain draft fields (topic, html_content, delta_content, thumbnail_url)."""
        unknown = set(fields) - _EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"Unknown draft fields: {', '.join(sorted(unknown))}")
        self._draft = self._draft.model_copy(update=fields)
        for name in fields:
            self._errors.pop(_ERROR_KEYS[name], None)
        return self._draft

    # ------------------------------------------------------------------
    # Category selection
    # ------------------------------------------------------------------

    def select_category(self, selection: CategorySelection | str | None) -> PostDraft:
        """Apply a dropdown choice.

        Raw form strings are parsed first, so the create-new sentinel opens
        the category sub-flow and is never stored as ``category_id``.
        """
        if isinstance(selection, str) or selection is None:
            selection = self._resolver.parse_selection(selection)

        if isinstance(selection, CreateNewCategory):
            self._draft = self._draft.model_copy(update={"creating_category": True})
            self._logger.debug("category_subflow_opened")
        elif isinstance(selection, ExistingCategory):
            self._draft = self._draft.model_copy(
                update={"category_id": selection.category_id, "creating_category": False}
            )
            self._errors.pop("categoryId", None)
        else:
            self._draft = self._draft.model_copy(
                update={"category_id": "", "creating_category": False}
            )
        return self._draft

    def cancel_category_creation(self) -> PostDraft:
        self._draft = self._draft.model_copy(update={"creating_category": False})
        self._errors.pop("category_name", None)
        return self._draft

    async def create_category(self, name: str) -> CategoryBlog:
        """Create a category inline and select it.

        Raises
        ------
        FieldValidationError
            If *name* is blank (also recorded under ``category_name``).
        BackendError
            If the backend call fails; the sub-flow stays open.
        """
        try:
            category = await self._resolver.create_category(name)
        except FieldValidationError as exc:
            self._errors.update(exc.errors)
            raise
        self._errors.pop("category_name", None)
        self.select_category(ExistingCategory(category_id=category.id))
        return category

    # ------------------------------------------------------------------
    # Thumbnail
    # ------------------------------------------------------------------

    def attach_thumbnail(self, upload: ThumbnailUpload) -> PostDraft:
        """Turn an uploaded image into a ``data:`` URL preview on the draft."""
        try:
            preview = to_data_url(upload.data)
        except FieldValidationError as exc:
            self._errors.update(exc.errors)
            self._logger.info("thumbnail_rejected", filename=upload.filename, errors=exc.errors)
            raise
        self._draft = self._draft.model_copy(update={"thumbnail_preview": preview})
        self._errors.pop("thumbnail", None)
        self._logger.debug("thumbnail_attached", filename=upload.filename, size=len(upload.data))
        return self._draft

    def remove_thumbnail(self) -> PostDraft:
        self._draft = self._draft.model_copy(update={"thumbnail_preview": "", "thumbnail_url": ""})
        return self._draft

    # ------------------------------------------------------------------
    # Validation and submission
    # ------------------------------------------------------------------

    def validate(self) -> dict[str, str]:
        """Return field-keyed messages for everything wrong with the draft."""
        draft = self._draft
        errors: dict[str, str] = {}
        if not draft.topic.strip():
            errors["topic"] = "Title is required"
        if not _has_content(draft.html_content):
            errors["htmlContent"] = "Content is required"
        if not draft.category_id:
            errors["categoryId"] = "Please select a category"
        elif self._resolver.categories and self._resolver.find(draft.category_id) is None:
            errors["categoryId"] = "Please select a valid category"
        if not draft.thumbnail.strip():
            errors["thumbnail"] = "Thumbnail is required"
        return errors

    async def submit(self) -> CreationResult:
        """Validate and create the post.

        Invalid drafts return their errors without a network call.  A
        backend failure returns ``{"general": ...}`` and keeps the draft.
        """
        errors = self.validate()
        if errors:
            self._errors = errors
            self._logger.info("post_validation_failed", fields=sorted(errors))
            return CreationResult(errors=errors)

        draft = self._draft
        request = PostRequest(
            topic=draft.topic.strip(),
            html_content=draft.html_content,
            delta_content=draft.delta_content or default_delta(draft.html_content),
            category_id=draft.category_id,
            thumbnail=draft.thumbnail.strip(),
        )

        try:
            response = await self._backend.create_post(request)
        except ShelterPostError as exc:
            self._errors = {"general": GENERAL_CREATE_ERROR}
            self._logger.error(
                "post_create_failed",
                error=str(exc),
                provider=exc.provider_name,
            )
            return CreationResult(errors=self.errors)

        post = self._local_post(request, response)
        self._store.prepend(post)
        self._draft = PostDraft()
        self._errors = {}
        self._logger.info("post_created", post_id=post.id, category_id=post.category_blog.id)
        return CreationResult(post=post)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _local_post(self, request: PostRequest, response: Mapping[str, Any]) -> Post:
        """Build the pending post shown at the top of the list after creation."""
        category = self._resolver.find(request.category_id) or CategoryBlog(id=request.category_id)
        post_id = response.get("id")
        author_id = response.get("author_id") or response.get("authorId") or self._author_id
        return Post(
            id=uuid4().hex if post_id in (None, "") else str(post_id),
            topic=request.topic,
            html_content=request.html_content,
            delta_content=request.delta_content,
            stamp=datetime.now(tz=timezone.utc).isoformat(),  # noqa: UP017
            view=0,
            thumbnail=request.thumbnail,
            author_id=str(author_id),
            category_blog=category,
            status=PublicationStatus.PENDING,
        )


def default_delta(html_content: str) -> str:
    """Minimal editor document holding *html_content* as a single insert."""
    return json.dumps({"ops": [{"insert": html_content}]})


def _has_content(html_content: str) -> bool:
    # An "empty" rich-text editor still emits markup such as <p><br></p>.
    # Embedded media counts as content even with no text around it.
    if _EMBED_RE.search(html_content):
        return True
    text = _TAG_RE.sub("", html_content).replace("&nbsp;", " ")
    return bool(text.strip())
