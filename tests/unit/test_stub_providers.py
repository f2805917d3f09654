"""Unit tests for the in-memory stub providers."""

from __future__ import annotations

import pytest

from shelterpost.models.post import PostRequest
from shelterpost.providers.posts import StubPostProvider
from shelterpost.services.post_mapper import CanonicalPostMapper
from shelterpost.utils.errors import BackendError


class TestStubPostProvider:
    @pytest.mark.asyncio
    async def test_seed_mixes_record_shapes(self, stub_posts):
        page = await stub_posts.list_posts(0, 10)
        records = page["content"]
        assert any("categoryBlog" in r for r in records)
        assert any("category_id" in r for r in records)
        assert any("view" not in r for r in records)
        assert page["totalElements"] == 5

    @pytest.mark.asyncio
    async def test_pagination(self, stub_posts):
        page = await stub_posts.list_posts(1, 2)
        assert [r["id"] for r in page["content"]] == ["3", "4"]
        assert page["totalPages"] == 3

    @pytest.mark.asyncio
    async def test_list_data_envelope(self):
        provider = StubPostProvider(envelope_key="listData")
        page = await provider.list_posts(0, 10)
        assert len(CanonicalPostMapper().map_page(page)) == 5

    @pytest.mark.asyncio
    async def test_approve_sets_view(self, stub_posts):
        record = await stub_posts.approve_post("3", "ok")
        assert record["view"] == 1
        assert stub_posts.calls[-1] == ("approve_post", "3", "ok")

    @pytest.mark.asyncio
    async def test_reject_removes(self, stub_posts):
        await stub_posts.reject_post("3", "no")
        page = await stub_posts.list_posts(0, 10)
        assert "3" not in [r["id"] for r in page["content"]]

    @pytest.mark.asyncio
    async def test_unknown_id(self, stub_posts):
        with pytest.raises(BackendError) as exc_info:
            await stub_posts.approve_post("999", "ok")
        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_fail_next_is_one_shot(self, stub_posts):
        stub_posts.fail_next("approve_post")
        with pytest.raises(BackendError):
            await stub_posts.approve_post("3", "ok")
        assert (await stub_posts.approve_post("3", "ok"))["view"] == 1

    @pytest.mark.asyncio
    async def test_create_inserts_pending_record(self, stub_posts):
        request = PostRequest(
            topic="New", html_content="<p>n</p>", delta_content="{}", category_id="1", thumbnail="t",
        )
        record = await stub_posts.create_post(request)
        page = await stub_posts.list_posts(0, 10)
        assert page["content"][0]["id"] == record["id"]
        assert record["view"] == 0

    def test_seed_is_copied_per_instance(self):
        first = StubPostProvider()
        second = StubPostProvider()
        first._records[0]["topic"] = "changed"
        assert second._records[0]["topic"] != "changed"


class TestStubCategoryProvider:
    @pytest.mark.asyncio
    async def test_list_and_create(self, stub_categories):
        categories = await stub_categories.list_categories()
        assert len(categories) == 5
        created = await stub_categories.create_category("Fundraising")
        assert created == {"id": "6", "name": "Fundraising"}
        assert stub_categories.create_calls == 1

    @pytest.mark.asyncio
    async def test_fail_next(self, stub_categories):
        stub_categories.fail_next("create_category")
        with pytest.raises(BackendError):
            await stub_categories.create_category("X")
        assert stub_categories.get_provider_name() == "stub_categories"
