"""Post creation draft models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from shelterpost.models.post import Post


class ThumbnailUpload(BaseModel):
    """An image file picked in the creation form."""

    model_config = ConfigDict(frozen=True)

    filename: str = ""
    data: bytes


class PostDraft(BaseModel):
    """In-progress contents of the creation form.

    ``category_id`` only ever holds a real category id (or ``""``); the
    "create new category" intent is tracked separately in
    ``creating_category``.
    """

    model_config = ConfigDict(frozen=True)

    topic: str = ""
    html_content: str = ""
    delta_content: str = ""
    category_id: str = ""
    thumbnail_url: str = ""
    thumbnail_preview: str = Field(default="", description="data: URL built from an uploaded file.")
    creating_category: bool = False

    @property
    def thumbnail(self) -> str:
        """The thumbnail to submit: an uploaded preview wins over a typed URL."""
        return self.thumbnail_preview or self.thumbnail_url


class CreationResult(BaseModel):
    """Outcome of submitting the creation form.

    ``errors`` is keyed by form field (``topic``, ``htmlContent``,
    ``categoryId``, ``thumbnail``) or ``general`` for a backend failure.
    """

    model_config = ConfigDict(frozen=True)

    post: Post | None = None
    errors: dict[str, str] = Field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        return self.post is not None and not self.errors
