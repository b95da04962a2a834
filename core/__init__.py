"""Core contracts and shared types."""

from .contracts import (
    UNKNOWN_DISTANCE,
    AnnotatedPost,
    Category,
    FeedResult,
    FeedScope,
    GeoPoint,
    IssueReport,
    Post,
    PostStatus,
    SortMode,
    UrgencyClassification,
    UrgencyLevel,
    to_utc_datetime,
)

__all__ = [
    "UNKNOWN_DISTANCE",
    "AnnotatedPost",
    "Category",
    "FeedResult",
    "FeedScope",
    "GeoPoint",
    "IssueReport",
    "Post",
    "PostStatus",
    "SortMode",
    "UrgencyClassification",
    "UrgencyLevel",
    "to_utc_datetime",
]
