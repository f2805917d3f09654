"""Dashboard services.

- **post_mapper** -- raw platform records to canonical ``Post``.
- **search_filter** -- text and status filtering.
- **post_manager** -- the session's authoritative post collection.
- **moderation_controller** -- approve/reject state machine.
- **category_resolver** -- cached categories and selection parsing.
- **post_creation** -- creation form draft, validation and submit.
- **dashboard_session** -- wires the above together for one reviewer.
"""

from shelterpost.services.category_resolver import CategoryResolver
from shelterpost.services.dashboard_session import DashboardSession
from shelterpost.services.moderation_controller import ModerationController
from shelterpost.services.post_creation import PostCreationFlow
from shelterpost.services.post_manager import PostManager
from shelterpost.services.post_mapper import CanonicalPostMapper
from shelterpost.services.search_filter import filter_posts, matches_query, matches_status

__all__ = [
    "CanonicalPostMapper",
    "CategoryResolver",
    "DashboardSession",
    "ModerationController",
    "PostCreationFlow",
    "PostManager",
    "filter_posts",
    "matches_query",
    "matches_status",
]
