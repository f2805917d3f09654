"""Search and status filtering over the in-memory post collection.

Pure functions, no I/O.  A post is kept when it matches the text query
**and** the status filter; input order is preserved.
"""

from __future__ import annotations

from collections.abc import Iterable

from shelterpost.models.post import Post, PublicationStatus, StatusFilter


def matches_query(post: Post, query: str) -> bool:
    """Case-insensitive substring match on title, category name or author id.

    An empty (or whitespace-only) query matches every post.
    """
    needle = query.strip().casefold()
    if not needle:
        return True
    return any(
        needle in field.casefold()
        for field in (post.topic, post.category_blog.name, post.author_id)
    )


def matches_status(post: Post, status_filter: StatusFilter | str) -> bool:
    """Return True when *post* passes the dashboard status filter."""
    status_filter = StatusFilter(status_filter)
    if status_filter is StatusFilter.ALL:
        return True
    if status_filter is StatusFilter.APPROVED:
        return post.status == PublicationStatus.APPROVED
    return post.status == PublicationStatus.PENDING


def filter_posts(
    posts: Iterable[Post],
    query: str = "",
    status_filter: StatusFilter | str = StatusFilter.ALL,
) -> list[Post]:
    """Return the posts matching both *query* and *status_filter*, in input order."""
    status_filter = StatusFilter(status_filter)
    return [
        post for post in posts
        if matches_query(post, query) and matches_status(post, status_filter)
    ]
