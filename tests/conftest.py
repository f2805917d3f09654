"""Shared pytest fixtures for the shelterpost test suite."""

from __future__ import annotations

import io
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from PIL import Image

from shelterpost.models.post import CategoryBlog, Post
from shelterpost.providers.categories import StubCategoryProvider
from shelterpost.providers.posts import StubPostProvider
from shelterpost.services.dashboard_session import DashboardSession

# ---------------------------------------------------------------------------
# Raw platform records
# ---------------------------------------------------------------------------


@pytest.fixture
def nested_category_record() -> dict[str, Any]:
    """A record using the nested ``categoryBlog`` shape, already approved."""
    return {
        "id": "101",
        "topic": "Help Us Save Abandoned Puppies",
        "htmlContent": "<p>Several puppies need urgent care.</p>",
        "deltaContent": '{"ops":[{"insert":"Several puppies need urgent care."}]}',
        "categoryBlog": {"id": "1", "name": "Rescue Stories"},
        "thumbnail": "https://example.org/puppies.jpg",
        "view": 245,
        "stamp": "2024-01-15T10:00:00Z",
        "author_id": "shelter123",
    }


@pytest.fixture
def flat_category_record() -> dict[str, Any]:
    """A pending record using flat ``category_id``/``category_name`` fields."""
    return {
        "id": 102,
        "topic": "Pet Health Tips for Winter",
        "htmlContent": "<p>Keep your pets warm.</p>",
        "deltaContent": "",
        "category_id": "4",
        "category_name": "Health Tips",
        "thumbnail": "https://example.org/winter.jpg",
        "stamp": "2024-01-05T16:45:00Z",
    }


# ---------------------------------------------------------------------------
# Domain objects
# ---------------------------------------------------------------------------


def make_post(**overrides: Any) -> Post:
    """Build a canonical post with sensible defaults."""
    fields: dict[str, Any] = {
        "id": "p1",
        "topic": "Cat Adoption Event",
        "html_content": "<p>Adopt a cat this weekend.</p>",
        "delta_content": "",
        "stamp": "2024-01-10T14:30:00Z",
        "view": 0,
        "thumbnail": "https://example.org/cat.jpg",
        "author_id": "shelter456",
        "category_blog": CategoryBlog(id="2", name="Adoption Events"),
    }
    fields.update(overrides)
    return Post(**fields)


@pytest.fixture
def post_factory():
    return make_post


@pytest.fixture
def pending_post() -> Post:
    return make_post()


@pytest.fixture
def approved_post() -> Post:
    return make_post(id="p2", topic="Success Story: Max", view=428)


# ---------------------------------------------------------------------------
# Backends
# ---------------------------------------------------------------------------


@pytest.fixture
def stub_posts() -> StubPostProvider:
    """In-memory post backend seeded with the five sample shelter posts."""
    return StubPostProvider()


@pytest.fixture
def stub_categories() -> StubCategoryProvider:
    return StubCategoryProvider()


@pytest.fixture
def mock_post_backend() -> MagicMock:
    """A fully mocked ``IPostBackend``; listing returns an empty page."""
    backend = MagicMock()
    backend.list_posts = AsyncMock(return_value={"content": []})
    backend.approve_post = AsyncMock(return_value={})
    backend.reject_post = AsyncMock(return_value={})
    backend.create_post = AsyncMock(return_value={"id": "new-1"})
    backend.get_provider_name.return_value = "mock_posts"
    return backend


@pytest.fixture
def mock_category_backend() -> MagicMock:
    backend = MagicMock()
    backend.list_categories = AsyncMock(return_value=[
        {"id": "1", "name": "Rescue Stories"},
        {"id": "2", "name": "Adoption Events"},
    ])
    backend.create_category = AsyncMock(return_value={"id": "9", "name": "Fundraising"})
    backend.get_provider_name.return_value = "mock_categories"
    return backend


@pytest.fixture
def session(stub_posts, stub_categories) -> DashboardSession:
    """Dashboard session over the stub backends (not yet mounted)."""
    return DashboardSession(
        post_backend=stub_posts,
        category_backend=stub_categories,
        page_size=10,
        author_id="shelter-test",
        session_id="test-session",
    )


# ---------------------------------------------------------------------------
# Images
# ---------------------------------------------------------------------------


def _image_bytes(fmt: str, size: tuple[int, int] = (8, 8)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, color=(200, 120, 40)).save(buf, format=fmt)
    return buf.getvalue()


@pytest.fixture
def png_bytes() -> bytes:
    return _image_bytes("PNG")


@pytest.fixture
def jpeg_bytes() -> bytes:
    return _image_bytes("JPEG")


@pytest.fixture
def bmp_bytes() -> bytes:
    """An image Pillow can read but the dashboard does not accept."""
    return _image_bytes("BMP")
