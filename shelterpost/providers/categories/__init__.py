"""Category backend providers."""

from shelterpost.providers.categories.http_category_provider import HttpCategoryProvider
from shelterpost.providers.categories.stub_category_provider import StubCategoryProvider

__all__ = ["HttpCategoryProvider", "StubCategoryProvider"]
