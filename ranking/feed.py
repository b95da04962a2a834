"""Feed assembly: annotate, scope, filter and order a post snapshot for one viewer."""

from __future__ import annotations

from datetime import datetime, timezone
import logging
from typing import Callable, Dict, List, Optional, Sequence, Union

from core import AnnotatedPost, FeedResult, FeedScope, GeoPoint, Post, SortMode, to_utc_datetime
from .geo import distance_between
from .scoring import priority_score


logger = logging.getLogger(__name__)

DEFAULT_RADIUS_KM = 10.0


def parse_sort_mode(value: Union[SortMode, str, None], default: SortMode = SortMode.PRIORITY) -> SortMode:
    """Coerce a requested sort mode; empty means ``default``, unknown raises ``ValueError``."""
    if isinstance(value, SortMode):
        return value
    text = str(value or "").strip().lower()
    if not text:
        return default
    return SortMode(text)


def resolve_scope(viewer_location: Optional[GeoPoint]) -> FeedScope:
    return FeedScope.NEARBY if viewer_location is not None else FeedScope.GLOBAL


def resolve_effective_mode(scope: FeedScope, requested: SortMode) -> SortMode:
    """Distance ordering needs a real viewer location; global scope falls back to priority."""
    if scope == FeedScope.GLOBAL and requested == SortMode.DISTANCE:
        return SortMode.PRIORITY
    return requested


def annotate(posts: Sequence[Post], viewer_location: Optional[GeoPoint]) -> List[AnnotatedPost]:
    """One annotated copy per input post, in input order."""
    return [
        AnnotatedPost.from_post(post, distance_between(viewer_location, post.location))
        for post in posts
    ]


def within_radius(posts: Sequence[AnnotatedPost], radius_km: float) -> List[AnnotatedPost]:
    return [post for post in posts if post.distance_km <= radius_km]


def _order_by_priority(posts: Sequence[AnnotatedPost], now: datetime) -> List[AnnotatedPost]:
    scored = [(priority_score(post, now), post) for post in posts]
    return [post for _, post in sorted(scored, key=lambda row: row[0], reverse=True)]


_ORDERINGS: Dict[SortMode, Callable[[Sequence[AnnotatedPost], datetime], List[AnnotatedPost]]] = {
    SortMode.LATEST: lambda posts, now: sorted(posts, key=lambda p: p.timestamp, reverse=True),
    SortMode.UPVOTES: lambda posts, now: sorted(posts, key=lambda p: p.upvotes, reverse=True),
    SortMode.DISTANCE: lambda posts, now: sorted(posts, key=lambda p: p.distance_km),
    SortMode.PRIORITY: _order_by_priority,
}


def order_posts(posts: Sequence[AnnotatedPost], mode: SortMode, now: datetime) -> List[AnnotatedPost]:
    """Stable ordering for ``mode``; ties keep their input order."""
    return _ORDERINGS.get(mode, _order_by_priority)(posts, now)


def assemble(
    posts: Sequence[Post],
    viewer_location: Optional[GeoPoint] = None,
    requested_mode: Union[SortMode, str, None] = SortMode.PRIORITY,
    *,
    now: Optional[datetime] = None,
    radius_km: float = DEFAULT_RADIUS_KM,
) -> FeedResult:
    """Rank ``posts`` for a viewer.

    The input sequence is never mutated. Nearby scope drops posts farther than
    ``radius_km`` (posts without a location have unknown distance and are
    dropped too); global scope keeps everything and relies on the upstream
    fetch limit.
    """
    now = to_utc_datetime(now) if now is not None else datetime.now(timezone.utc)
    requested = parse_sort_mode(requested_mode)

    annotated = annotate(posts, viewer_location)
    scope = resolve_scope(viewer_location)
    if scope == FeedScope.NEARBY:
        kept = within_radius(annotated, radius_km)
    else:
        kept = annotated

    effective = resolve_effective_mode(scope, requested)
    ordered = order_posts(kept, effective, now)

    logger.debug(
        "Assembled feed: scope=%s requested=%s effective=%s in=%d out=%d",
        scope.value,
        requested.value,
        effective.value,
        len(annotated),
        len(ordered),
    )
    return FeedResult(
        posts=ordered,
        scope=scope,
        requested_sort=requested,
        effective_sort=effective,
        radius_km=float(radius_km),
        generated_at=now,
    )
