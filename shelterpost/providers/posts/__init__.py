"""Post backend providers.

HttpPostProvider talks to the shelter platform; StubPostProvider serves
seeded records from memory for tests and offline demos.
"""

from shelterpost.providers.posts.http_post_provider import HttpPostProvider
from shelterpost.providers.posts.stub_post_provider import StubPostProvider

__all__ = ["HttpPostProvider", "StubPostProvider"]
