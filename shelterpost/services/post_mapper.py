"""Canonical post mapper - reconciles platform record shapes into ``Post``.

# ─── SHAPES HANDLED ──────────────────────────────────────────────────
#
# Page envelope (GET /admin/posts):
#     {"content": [...]}   → preferred
#     {"listData": [...]}  → fallback
#     [...]                → bare list (older list endpoints)
#     anything else        → no records
#
# Record:
#     categoryBlog {id, name}          → used when present
#     category_id / category_name      → synthesised into a CategoryBlog
#     view missing / bad / negative    → 0 (pending)
#     author_id missing                → ""
#     numeric ids                      → stringified
#
# Missing fields are defaulted, never treated as errors.  The mapper is a
# pure function of its input: mapping the same record twice yields equal
# ``Post`` values.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

import structlog

from shelterpost.models.post import CategoryBlog, Post, PublicationStatus

logger = structlog.get_logger(logger_name=__name__)

_ENVELOPE_KEYS = ("content", "listData")


class CanonicalPostMapper:
    """Normalises raw platform post records into canonical :class:`Post` models."""

    def map_record(self, raw: Mapping[str, Any]) -> Post:
        """Map one raw record (any supported shape) to a fully-populated ``Post``."""
        view = _coerce_view(raw.get("view"))
        return Post(
            id=_text(raw, "id"),
            topic=_text(raw, "topic"),
            html_content=_text(raw, "htmlContent", "html_content"),
            delta_content=_text(raw, "deltaContent", "delta_content"),
            stamp=_text(raw, "stamp"),
            view=view,
            thumbnail=_text(raw, "thumbnail"),
            author_id=_text(raw, "author_id", "authorId"),
            category_blog=self._map_category(raw),
            status=PublicationStatus.from_view(view),
        )

    def extract_records(self, envelope: Any) -> list[Mapping[str, Any]]:
        """Return the record list from a page envelope.

        ``content`` is tried first, then ``listData``; a bare list is taken
        as-is.  Non-mapping entries are dropped.
        """
        records: Any = []
        if isinstance(envelope, Mapping):
            for key in _ENVELOPE_KEYS:
                value = envelope.get(key)
                if value is not None:
                    records = value
                    break
        elif isinstance(envelope, Sequence) and not isinstance(envelope, (str, bytes)):
            records = envelope

        if not isinstance(records, Sequence) or isinstance(records, (str, bytes)):
            logger.warning("post_envelope_unrecognised", records_type=type(records).__name__)
            return []

        kept = [r for r in records if isinstance(r, Mapping)]
        if len(kept) != len(records):
            logger.warning("post_records_skipped", skipped=len(records) - len(kept))
        return kept

    def map_page(self, envelope: Any) -> list[Post]:
        """Extract and map every record in a page envelope, preserving order."""
        return [self.map_record(raw) for raw in self.extract_records(envelope)]

    @staticmethod
    def _map_category(raw: Mapping[str, Any]) -> CategoryBlog:
        nested = raw.get("categoryBlog")
        if nested is None:
            nested = raw.get("category_blog")
        if isinstance(nested, Mapping):
            return CategoryBlog(id=_text(nested, "id"), name=_text(nested, "name"))
        return CategoryBlog(
            id=_text(raw, "category_id", "categoryId"),
            name=_text(raw, "category_name", "categoryName"),
        )


def _text(raw: Mapping[str, Any], *keys: str) -> str:
    """First non-null value among *keys*, as a string; ``""`` if none."""
    for key in keys:
        value = raw.get(key)
        if value is not None:
            return value if isinstance(value, str) else str(value)
    return ""


def _coerce_view(value: Any) -> int:
    if value is None or isinstance(value, bool):
        return 0
    try:
        view = int(value)
    except (TypeError, ValueError):
        return 0
    return max(view, 0)
