"""Post workflow: creation with one-shot urgency classification, feed reads, engagement."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
import logging
from typing import Optional, Union

from core import FeedResult, GeoPoint, IssueReport, Post, PostStatus, SortMode
from intelligence.classifier import UrgencyClassifierProtocol
from ranking import DEFAULT_RADIUS_KM, assemble, parse_sort_mode
from utils.exceptions import ClassificationError, PostNotFoundError

from .store import InMemoryPostStore, new_post_id


logger = logging.getLogger(__name__)

URGENCY_UNAVAILABLE_NOTICE = "Could not assess urgency; the post was created without a priority level."
GLOBAL_FEED_POST_LIMIT = 50


@dataclass
class PostCreationResult:
    """Created post plus an optional non-fatal notice for the author."""

    post: Post
    notice: Optional[str] = None

    @property
    def classified(self) -> bool:
        return self.post.urgency is not None


@dataclass
class EngagementResult:
    """Post after an upvote/volunteer toggle, and whether the user is now engaged."""

    post: Post
    active: bool


def _require_user(user_id: str) -> str:
    text = str(user_id or "").strip()
    if not text:
        raise ValueError("user_id is required")
    return text


class PostService:
    """Coordinates the store, the urgency classifier and feed assembly."""

    def __init__(
        self,
        *,
        store: Optional[InMemoryPostStore] = None,
        classifier: Optional[UrgencyClassifierProtocol] = None,
        feed_limit: int = GLOBAL_FEED_POST_LIMIT,
        radius_km: float = DEFAULT_RADIUS_KM,
        default_sort: Union[SortMode, str] = SortMode.PRIORITY,
    ) -> None:
        self._store = store if store is not None else InMemoryPostStore()
        self._classifier = classifier
        self.feed_limit = max(1, int(feed_limit))
        self.radius_km = float(radius_km)
        self.default_sort = parse_sort_mode(default_sort)

    @property
    def store(self) -> InMemoryPostStore:
        return self._store

    async def create_post(
        self,
        *,
        author_id: str,
        report: IssueReport,
        location: Optional[GeoPoint] = None,
        image_url: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> PostCreationResult:
        """Classify once, then persist. A classifier failure never blocks creation."""
        urgency = None
        urgency_reason = None
        notice = None

        if self._classifier is None:
            logger.warning("No urgency classifier configured; storing post unclassified")
            notice = URGENCY_UNAVAILABLE_NOTICE
        else:
            try:
                result = await self._classifier.aclassify(report)
                urgency = result.urgency_level
                urgency_reason = result.reason
            except ClassificationError as exc:
                logger.warning("Urgency classification failed (%s): %s", exc.reason, exc.message)
                notice = URGENCY_UNAVAILABLE_NOTICE

        post = Post(
            id=new_post_id(),
            author_id=str(author_id or "").strip(),
            category=report.category,
            title=report.title,
            description=report.description,
            image_url=image_url,
            location=location,
            upvotes=0,
            volunteers=0,
            created_at=now or datetime.now(timezone.utc),
            urgency=urgency,
            urgency_reason=urgency_reason,
            status=PostStatus.OPEN,
        )
        stored = self._store.add(post)
        logger.info("Created post %s (urgency=%s)", stored.id, urgency.value if urgency else "unknown")
        return PostCreationResult(post=stored, notice=notice)

    def get_feed(
        self,
        viewer_location: Optional[GeoPoint] = None,
        sort_mode: Union[SortMode, str, None] = None,
        *,
        now: Optional[datetime] = None,
        notice: Optional[str] = None,
    ) -> FeedResult:
        """Rank the most recent posts for one viewer."""
        requested = parse_sort_mode(sort_mode, default=self.default_sort)
        posts = self._store.list_recent(self.feed_limit)
        result = assemble(
            posts,
            viewer_location,
            requested,
            now=now,
            radius_km=self.radius_km,
        )
        if notice:
            result = result.model_copy(update={"notice": notice})
        return result

    def get_post(self, post_id: str) -> Post:
        post = self._store.get(post_id)
        if post is None:
            raise PostNotFoundError(post_id)
        return post

    def upvote(self, post_id: str, user_id: str) -> EngagementResult:
        """Toggle ``user_id``'s upvote; a second call withdraws it."""
        user_id = _require_user(user_id)
        post = self._store.toggle_upvote(post_id, user_id)
        if post is None:
            raise PostNotFoundError(post_id)
        return EngagementResult(post=post, active=self._store.has_upvoted(post_id, user_id))

    def volunteer(self, post_id: str, user_id: str) -> EngagementResult:
        """Toggle ``user_id`` as a volunteer; the post is in progress while anyone volunteers."""
        user_id = _require_user(user_id)
        post = self._store.toggle_volunteer(post_id, user_id)
        if post is None:
            raise PostNotFoundError(post_id)
        active = self._store.has_volunteered(post_id, user_id)
        logger.info("User %s %s post %s", user_id, "volunteered for" if active else "withdrew from", post_id)
        return EngagementResult(post=post, active=active)

    def resolve(self, post_id: str, *, resolved_by: Optional[str] = None) -> Post:
        post = self._store.update_status(post_id, PostStatus.RESOLVED, resolved_by=resolved_by)
        if post is None:
            raise PostNotFoundError(post_id)
        logger.info("Post %s resolved by %s", post_id, resolved_by or "unknown")
        return post
