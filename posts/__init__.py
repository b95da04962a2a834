"""Post storage stand-in and the post workflow service."""

from .service import (
    GLOBAL_FEED_POST_LIMIT,
    URGENCY_UNAVAILABLE_NOTICE,
    EngagementResult,
    PostCreationResult,
    PostService,
)
from .store import InMemoryPostStore, new_post_id

__all__ = [
    "GLOBAL_FEED_POST_LIMIT",
    "URGENCY_UNAVAILABLE_NOTICE",
    "EngagementResult",
    "InMemoryPostStore",
    "PostCreationResult",
    "PostService",
    "new_post_id",
]
