"""Unit tests for shelterpost domain models."""

from __future__ import annotations

import pytest
from pydantic import TypeAdapter, ValidationError

from shelterpost.models.category import (
    CREATE_NEW_CATEGORY_SENTINEL,
    CategorySelection,
    CreateNewCategory,
    ExistingCategory,
)
from shelterpost.models.draft import CreationResult, PostDraft
from shelterpost.models.moderation import (
    ApprovalSurface,
    DashboardSurface,
    DetailSurface,
    ModerationAction,
)
from shelterpost.models.post import Post, PostRequest, PublicationStatus, StatusFilter


# ─── Post ─────────────────────────────────────────────────────────

class TestPost:
    def test_status_derived_from_view(self, post_factory):
        assert post_factory(view=0).status == PublicationStatus.PENDING
        assert post_factory(view=3).status == PublicationStatus.APPROVED

    def test_explicit_status_wins(self, post_factory):
        post = post_factory(view=0, status=PublicationStatus.APPROVED)
        assert post.is_approved

    def test_negative_view_rejected(self):
        with pytest.raises(ValidationError):
            Post(id="x", view=-1)

    def test_frozen(self, pending_post):
        with pytest.raises(ValidationError):
            pending_post.topic = "changed"

    def test_approved_sets_view_to_one_for_pending(self, pending_post):
        approved = pending_post.approved()
        assert approved.view == 1
        assert approved.is_approved
        assert pending_post.is_pending

    def test_approved_changes_nothing_else(self, pending_post):
        approved = pending_post.approved()
        before = pending_post.model_dump(exclude={"view", "status"})
        after = approved.model_dump(exclude={"view", "status"})
        assert before == after

    def test_approved_keeps_positive_view(self, approved_post):
        assert approved_post.approved().view == 428

    def test_to_wire_uses_legacy_keys(self, pending_post):
        wire = pending_post.to_wire()
        assert wire["htmlContent"] == pending_post.html_content
        assert wire["categoryBlog"] == {"id": "2", "name": "Adoption Events"}
        assert wire["view"] == 0
        assert "status" not in wire


# ─── PostRequest ──────────────────────────────────────────────────

class TestPostRequest:
    def test_payload_is_camel_case(self):
        request = PostRequest(
            topic="Title",
            html_content="<p>x</p>",
            delta_content="{}",
            category_id="3",
            thumbnail="https://example.org/t.jpg",
        )
        assert request.to_payload() == {
            "topic": "Title",
            "htmlContent": "<p>x</p>",
            "deltaContent": "{}",
            "categoryId": "3",
            "thumbnail": "https://example.org/t.jpg",
        }

    def test_accepts_aliases(self):
        request = PostRequest(
            topic="T", htmlContent="h", deltaContent="d", categoryId="1", thumbnail="t",
        )
        assert request.category_id == "1"

    def test_empty_category_rejected(self):
        with pytest.raises(ValidationError):
            PostRequest(topic="T", html_content="h", delta_content="d", category_id="", thumbnail="t")


# ─── Category selection ───────────────────────────────────────────

class TestCategorySelection:
    def test_sentinel_is_not_a_category_id(self):
        with pytest.raises(ValidationError):
            ExistingCategory(category_id=CREATE_NEW_CATEGORY_SENTINEL)

    def test_discriminated_union(self):
        adapter = TypeAdapter(CategorySelection)
        assert isinstance(adapter.validate_python({"kind": "create_new"}), CreateNewCategory)
        existing = adapter.validate_python({"kind": "existing", "category_id": "4"})
        assert existing == ExistingCategory(category_id="4")


# ─── Moderation models ────────────────────────────────────────────

class TestModerationModels:
    def test_default_messages(self):
        assert ModerationAction.APPROVE.default_message == (
            "Post has been approved and is now visible to users."
        )
        assert ModerationAction.REJECT.default_message == (
            "Post has been rejected and will not be published."
        )

    def test_surface_union_round_trip(self, pending_post):
        adapter = TypeAdapter(DashboardSurface)
        surface = ApprovalSurface(post=pending_post, action=ModerationAction.REJECT)
        parsed = adapter.validate_python(surface.model_dump())
        assert isinstance(parsed, ApprovalSurface)
        assert parsed.post_title == pending_post.topic

    def test_detail_surface_kind(self, pending_post):
        assert DetailSurface(post=pending_post).kind == "detail"


# ─── Drafts ───────────────────────────────────────────────────────

class TestDraft:
    def test_preview_wins_over_url(self):
        draft = PostDraft(thumbnail_url="https://x/y.jpg", thumbnail_preview="data:image/png;base64,AA")
        assert draft.thumbnail.startswith("data:")

    def test_creation_result_succeeded(self, pending_post):
        assert CreationResult(post=pending_post).succeeded
        assert not CreationResult(errors={"topic": "Title is required"}).succeeded


def test_status_filter_values():
    assert {f.value for f in StatusFilter} == {"all", "approved", "pending"}
