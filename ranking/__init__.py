"""Feed ranking: distance, priority scoring and feed assembly."""

from .feed import (
    DEFAULT_RADIUS_KM,
    annotate,
    assemble,
    order_posts,
    parse_sort_mode,
    resolve_effective_mode,
    resolve_scope,
    within_radius,
)
from .geo import EARTH_RADIUS_KM, distance_between, distance_km, parse_viewer_location
from .scoring import ScoreBreakdown, hours_old, priority_score, score_breakdown

__all__ = [
    "DEFAULT_RADIUS_KM",
    "EARTH_RADIUS_KM",
    "ScoreBreakdown",
    "annotate",
    "assemble",
    "distance_between",
    "distance_km",
    "hours_old",
    "order_posts",
    "parse_sort_mode",
    "parse_viewer_location",
    "priority_score",
    "resolve_effective_mode",
    "resolve_scope",
    "score_breakdown",
    "within_radius",
]
