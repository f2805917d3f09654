"""End-to-end dashboard flows over the stub backends.

Each test mounts a real DashboardSession (mapper, store, controller,
resolver, creation flow) and drives it the way a reviewer would.
"""

from __future__ import annotations

import pytest

from shelterpost.models.draft import ThumbnailUpload
from shelterpost.models.moderation import ClosedSurface, ModerationAction
from shelterpost.models.post import StatusFilter


class TestModerationFlow:
    @pytest.mark.asyncio
    async def test_mount_normalises_mixed_records(self, session):
        posts = await session.mount()
        by_id = {p.id: p for p in posts}
        assert by_id["2"].category_blog.name == "Adoption Events"
        assert by_id["4"].view == 0
        assert by_id["4"].author_id == ""
        assert session.stats().pending == 2

    @pytest.mark.asyncio
    async def test_approve_pending_post(self, session, stub_posts):
        await session.mount()
        session.moderation.open_detail("3")
        session.moderation.choose_action("3", ModerationAction.APPROVE)

        outcome = await session.moderation.confirm()

        assert outcome.succeeded
        assert session.store.get("3").view == 1
        assert [p.id for p in session.visible_posts(status_filter=StatusFilter.PENDING)] == ["4"]
        assert session.stats().approved == 4
        assert stub_posts.calls[-1] == (
            "approve_post", "3", "Post has been approved and is now visible to users."
        )

    @pytest.mark.asyncio
    async def test_reject_with_message(self, session, stub_posts):
        await session.mount()
        session.moderation.choose_action("4", "reject")
        await session.moderation.confirm("Please add a photo and resubmit.")

        assert "4" not in session.store
        assert session.stats().total == 4
        assert stub_posts.calls[-1] == ("reject_post", "4", "Please add a photo and resubmit.")

    @pytest.mark.asyncio
    async def test_failed_approval_then_retry(self, session, stub_posts):
        await session.mount()
        stub_posts.fail_next("approve_post")
        session.moderation.choose_action("3", ModerationAction.APPROVE)

        failed = await session.moderation.confirm()
        assert not failed.succeeded
        assert session.store.get("3").is_pending
        assert session.moderation.notice is not None

        retried = await session.moderation.confirm()
        assert retried.succeeded
        assert session.store.get("3").is_approved
        assert isinstance(session.moderation.surface, ClosedSurface)

    @pytest.mark.asyncio
    async def test_search_across_fields(self, session):
        await session.mount()
        assert [p.id for p in session.visible_posts("SHELTER456")] == ["2", "5"]
        assert [p.id for p in session.visible_posts("health tips")] == ["4"]
        assert session.visible_posts("  ") == list(session.store.posts)


class TestCreationFlow:
    @pytest.mark.asyncio
    async def test_create_post_with_new_category(self, session, stub_categories, png_bytes):
        await session.mount()
        session.moderation.open_creation()
        await session.creation.open()
        session.creation.update(topic="Foster Families Needed", html_content="<p>Can you help?</p>")
        session.creation.select_category("__create_new_category__")
        category = await session.creation.create_category("Foster Care")
        session.creation.attach_thumbnail(ThumbnailUpload(filename="foster.png", data=png_bytes))

        result = await session.creation.submit()

        assert result.succeeded
        assert category.id == "6"
        first = session.store.posts[0]
        assert first.topic == "Foster Families Needed"
        assert first.category_blog.name == "Foster Care"
        assert first.is_pending
        assert first.author_id == "shelter-test"
        assert stub_categories.list_calls == 1

    @pytest.mark.asyncio
    async def test_create_failure_keeps_list(self, session, stub_posts):
        await session.mount()
        await session.creation.open()
        session.creation.update(
            topic="Adopt a Senior Dog",
            html_content="<p>Seniors need love too.</p>",
            thumbnail_url="https://example.org/senior.jpg",
        )
        session.creation.select_category("1")
        stub_posts.fail_next("create_post")

        result = await session.creation.submit()

        assert result.errors == {"general": "Failed to create post. Please try again."}
        assert len(session.store) == 5


class TestDispose:
    @pytest.mark.asyncio
    async def test_dispose_blocks_later_updates(self, session):
        await session.mount()
        session.moderation.choose_action("3", ModerationAction.APPROVE)
        await session.dispose()
        await session.moderation.confirm()
        assert session.store.get("3").is_pending
