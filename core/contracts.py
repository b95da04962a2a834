"""Canonical data contracts for issue posts, classification and feed ranking."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
import math
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


UNKNOWN_DISTANCE = math.inf


class Category(str, Enum):
    """Issue categories a reporter can pick from."""

    GARBAGE = "Garbage"
    POTHOLES = "Potholes"
    WATER_ISSUE = "Water Issue"
    LOST_AND_FOUND = "Lost & Found"
    EVENT = "Event"
    NEWS = "News"
    OTHER = "Other"

    @classmethod
    def _missing_(cls, value: object) -> Optional["Category"]:
        text = str(value or "").strip().lower()
        for member in cls:
            if member.value.lower() == text or member.name.lower() == text:
                return member
        return None


class UrgencyLevel(str, Enum):
    """Ordinal urgency assigned once by the classifier."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return _URGENCY_RANK[self]

    @classmethod
    def _missing_(cls, value: object) -> Optional["UrgencyLevel"]:
        text = str(value or "").strip().lower()
        for member in cls:
            if member.value == text:
                return member
        return None


_URGENCY_RANK = {UrgencyLevel.LOW: 1, UrgencyLevel.MEDIUM: 2, UrgencyLevel.HIGH: 3}


class PostStatus(str, Enum):
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"


class SortMode(str, Enum):
    """Feed ordering requested by the viewer."""

    PRIORITY = "priority"
    LATEST = "latest"
    UPVOTES = "upvotes"
    DISTANCE = "distance"


class FeedScope(str, Enum):
    """Derived from viewer-location availability, never chosen by the user."""

    NEARBY = "nearby"
    GLOBAL = "global"


def to_utc_datetime(value: Any) -> datetime:
    """Normalize an ISO string, epoch seconds/ms or datetime to an aware UTC datetime."""
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        ts = float(value)
        # epoch milliseconds
        if ts > 1e12:
            ts /= 1000.0
        dt = datetime.fromtimestamp(ts, tz=timezone.utc)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError("timestamp is required")
        dt = datetime.fromisoformat(text.replace("Z", "+00:00"))
    else:
        raise ValueError(f"unsupported timestamp: {value!r}")

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


class GeoPoint(BaseModel):
    """Latitude/longitude pair in degrees."""

    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float

    @field_validator("latitude")
    @classmethod
    def _check_latitude(cls, value: float) -> float:
        if not math.isfinite(value) or not -90.0 <= value <= 90.0:
            raise ValueError("latitude must be a finite number in [-90, 90]")
        return float(value)

    @field_validator("longitude")
    @classmethod
    def _check_longitude(cls, value: float) -> float:
        if not math.isfinite(value) or not -180.0 <= value <= 180.0:
            raise ValueError("longitude must be a finite number in [-180, 180]")
        return float(value)


class IssueReport(BaseModel):
    """Input to urgency classification, built once per post-creation request."""

    model_config = ConfigDict(frozen=True)

    category: Category
    title: str
    description: str

    @field_validator("category", mode="before")
    @classmethod
    def _coerce_category(cls, value: Any) -> Category:
        return Category(value)

    @field_validator("title", "description", mode="before")
    @classmethod
    def _non_empty_text(cls, value: Any) -> str:
        text = str(value or "").strip()
        if not text:
            raise ValueError("value is required")
        return text


class UrgencyClassification(BaseModel):
    """Classifier output, persisted with the post and never recomputed."""

    model_config = ConfigDict(frozen=True)

    urgency_level: UrgencyLevel
    reason: str

    @field_validator("urgency_level", mode="before")
    @classmethod
    def _coerce_level(cls, value: Any) -> UrgencyLevel:
        return UrgencyLevel(value)

    @field_validator("reason", mode="before")
    @classmethod
    def _non_empty_reason(cls, value: Any) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("reason must be a non-empty string")
        return value.strip()


class Post(BaseModel):
    """Issue post as yielded by storage; read-only to the ranking engine."""

    id: str
    author_id: str = ""
    category: Category = Category.OTHER
    title: str
    description: str = ""
    image_url: Optional[str] = None
    location: Optional[GeoPoint] = None
    upvotes: int = 0
    volunteers: int = 0
    created_at: datetime
    urgency: Optional[UrgencyLevel] = None
    urgency_reason: Optional[str] = None
    status: PostStatus = PostStatus.OPEN
    resolved_at: Optional[datetime] = None
    resolved_by: Optional[str] = None

    @field_validator("category", mode="before")
    @classmethod
    def _coerce_category(cls, value: Any) -> Category:
        return Category(value)

    @field_validator("urgency", mode="before")
    @classmethod
    def _coerce_urgency(cls, value: Any) -> Optional[UrgencyLevel]:
        if value in (None, ""):
            return None
        return UrgencyLevel(value)

    @field_validator("created_at", mode="before")
    @classmethod
    def _normalize_created_at(cls, value: Any) -> datetime:
        return to_utc_datetime(value)

    @field_validator("resolved_at", mode="before")
    @classmethod
    def _normalize_resolved_at(cls, value: Any) -> Optional[datetime]:
        if value in (None, ""):
            return None
        return to_utc_datetime(value)


class AnnotatedPost(Post):
    """Post plus per-request distance and normalized timestamp. Never persisted."""

    distance_km: float = UNKNOWN_DISTANCE
    timestamp: datetime

    @field_validator("distance_km")
    @classmethod
    def _check_distance(cls, value: float) -> float:
        if math.isnan(value) or value < 0:
            raise ValueError("distance_km must be non-negative or infinite")
        return float(value)

    @field_serializer("distance_km", when_used="json")
    def _serialize_distance(self, value: float) -> Optional[float]:
        return value if math.isfinite(value) else None

    @property
    def has_known_distance(self) -> bool:
        return math.isfinite(self.distance_km)

    @classmethod
    def from_post(cls, post: Post, distance_km: float = UNKNOWN_DISTANCE) -> "AnnotatedPost":
        return cls(
            **post.model_dump(exclude={"distance_km", "timestamp"}),
            distance_km=distance_km,
            timestamp=to_utc_datetime(post.created_at),
        )


class FeedResult(BaseModel):
    """Ordered feed plus the resolved policy, so the UI can relabel its controls."""

    posts: List[AnnotatedPost] = Field(default_factory=list)
    scope: FeedScope
    requested_sort: SortMode
    effective_sort: SortMode
    radius_km: float
    generated_at: datetime
    notice: Optional[str] = None

    @property
    def sort_downgraded(self) -> bool:
        return self.requested_sort != self.effective_sort
