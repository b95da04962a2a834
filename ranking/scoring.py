"""Explainable priority scoring for issue posts.

The score is additive over five terms so that a missing factor never zeroes
the rest. Every constant below changes visible feed order; treat them as
part of the product behavior.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
import math
from typing import Dict, Optional

from core import AnnotatedPost, UrgencyLevel, to_utc_datetime


_URGENCY_POINTS = {
    UrgencyLevel.HIGH: 500.0,
    UrgencyLevel.MEDIUM: 200.0,
    UrgencyLevel.LOW: 0.0,
}

_RECENCY_MAX = 100.0
_RECENCY_DECAY_PER_HOUR = 2.0

_UPVOTE_WEIGHT = 1.5
_VOLUNTEER_WEIGHT = 10.0

# Step at 1 km: a flat bonus inside, a separate linear decay outside.
_NEAR_THRESHOLD_KM = 1.0
_NEAR_BONUS = 50.0
_PROXIMITY_MAX = 30.0
_PROXIMITY_DECAY_PER_KM = 3.0


@dataclass(frozen=True)
class ScoreBreakdown:
    """Per-term contributions of a priority score."""

    urgency: float
    recency: float
    upvotes: float
    volunteers: float
    proximity: float

    @property
    def total(self) -> float:
        return self.urgency + self.recency + self.upvotes + self.volunteers + self.proximity

    def as_dict(self) -> Dict[str, float]:
        payload = asdict(self)
        payload["total"] = self.total
        return payload


def hours_old(created_at: datetime, now: datetime) -> float:
    """Age in hours, floored at 0 for timestamps after ``now``."""
    delta = to_utc_datetime(now) - to_utc_datetime(created_at)
    return max(0.0, delta.total_seconds() / 3600.0)


def urgency_term(urgency: Optional[UrgencyLevel]) -> float:
    if urgency is None:
        return 0.0
    return _URGENCY_POINTS.get(urgency, 0.0)


def recency_term(age_hours: float) -> float:
    return max(0.0, _RECENCY_MAX - _RECENCY_DECAY_PER_HOUR * max(0.0, age_hours))


def upvote_term(upvotes: int) -> float:
    return max(0.0, _UPVOTE_WEIGHT * upvotes)


def volunteer_term(volunteers: int) -> float:
    return max(0.0, _VOLUNTEER_WEIGHT * volunteers)


def proximity_term(distance_km: float) -> float:
    if not math.isfinite(distance_km):
        return 0.0
    if distance_km < _NEAR_THRESHOLD_KM:
        return _NEAR_BONUS
    return max(0.0, _PROXIMITY_MAX - _PROXIMITY_DECAY_PER_KM * distance_km)


def score_breakdown(post: AnnotatedPost, now: datetime) -> ScoreBreakdown:
    """Break the priority score of ``post`` at instant ``now`` into its terms."""
    return ScoreBreakdown(
        urgency=urgency_term(post.urgency),
        recency=recency_term(hours_old(post.timestamp, now)),
        upvotes=upvote_term(post.upvotes),
        volunteers=volunteer_term(post.volunteers),
        proximity=proximity_term(post.distance_km),
    )


def priority_score(post: AnnotatedPost, now: datetime) -> float:
    """Priority score of ``post`` at ``now``; higher ranks first."""
    return score_breakdown(post, now).total
