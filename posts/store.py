"""In-memory post store standing in for the persistence layer."""

from __future__ import annotations

from datetime import datetime, timezone
from threading import Lock
from typing import Dict, List, Optional, Set
from uuid import uuid4

from core import Post, PostStatus


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_post_id() -> str:
    return f"post_{_utcnow().strftime('%Y%m%d_%H%M%S')}_{uuid4().hex[:8]}"


class InMemoryPostStore:
    """Thread-safe post store. Reads return deep copies."""

    def __init__(self) -> None:
        self._posts: Dict[str, Post] = {}
        # post id -> user ids, one record per (post, user)
        self._upvoters: Dict[str, Set[str]] = {}
        self._volunteers: Dict[str, Set[str]] = {}
        self._lock = Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._posts)

    def add(self, post: Post) -> Post:
        with self._lock:
            self._posts[post.id] = post.model_copy(deep=True)
            return post.model_copy(deep=True)

    def get(self, post_id: str) -> Optional[Post]:
        with self._lock:
            post = self._posts.get(post_id)
            return post.model_copy(deep=True) if post else None

    def list_recent(self, limit: int = 50) -> List[Post]:
        """Most recent ``limit`` posts by creation time, newest first."""
        with self._lock:
            posts = sorted(self._posts.values(), key=lambda p: p.created_at, reverse=True)
            return [post.model_copy(deep=True) for post in posts[: max(0, int(limit))]]

    def _update(self, post_id: str, **changes) -> Optional[Post]:
        with self._lock:
            post = self._posts.get(post_id)
            if not post:
                return None
            updated = post.model_copy(update=changes)
            self._posts[post_id] = updated
            return updated.model_copy(deep=True)

    def has_upvoted(self, post_id: str, user_id: str) -> bool:
        with self._lock:
            return user_id in self._upvoters.get(post_id, set())

    def has_volunteered(self, post_id: str, user_id: str) -> bool:
        with self._lock:
            return user_id in self._volunteers.get(post_id, set())

    def toggle_upvote(self, post_id: str, user_id: str) -> Optional[Post]:
        """Add or withdraw one user's upvote. Counts never drop below zero."""
        with self._lock:
            post = self._posts.get(post_id)
            if not post:
                return None
            voters = self._upvoters.setdefault(post_id, set())
            if user_id in voters:
                voters.discard(user_id)
                post.upvotes = max(0, post.upvotes - 1)
            else:
                voters.add(user_id)
                post.upvotes = max(0, post.upvotes) + 1
            return post.model_copy(deep=True)

    def toggle_volunteer(self, post_id: str, user_id: str) -> Optional[Post]:
        """Add or withdraw one volunteer and keep ``status`` in step with the count.

        Volunteering replaces the same user's upvote. A resolved post keeps its status.
        """
        with self._lock:
            post = self._posts.get(post_id)
            if not post:
                return None
            volunteers = self._volunteers.setdefault(post_id, set())
            if user_id in volunteers:
                volunteers.discard(user_id)
                post.volunteers = max(0, post.volunteers - 1)
            else:
                volunteers.add(user_id)
                post.volunteers = max(0, post.volunteers) + 1
                voters = self._upvoters.get(post_id, set())
                if user_id in voters:
                    voters.discard(user_id)
                    post.upvotes = max(0, post.upvotes - 1)

            if post.status != PostStatus.RESOLVED:
                post.status = PostStatus.IN_PROGRESS if post.volunteers > 0 else PostStatus.OPEN
            return post.model_copy(deep=True)

    def update_status(
        self,
        post_id: str,
        status: PostStatus,
        *,
        resolved_by: Optional[str] = None,
    ) -> Optional[Post]:
        if status == PostStatus.RESOLVED:
            return self._update(post_id, status=status, resolved_by=resolved_by, resolved_at=_utcnow())
        return self._update(post_id, status=status)
