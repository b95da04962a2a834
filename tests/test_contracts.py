from __future__ import annotations

from datetime import datetime, timedelta, timezone
import math

import pytest
from pydantic import ValidationError

from core import (
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
)


def test_issue_report_normalizes_category_and_text() -> None:
    report = IssueReport(category="water issue", title="  Burst main  ", description=" Flooding on 5th ")
    assert report.category == Category.WATER_ISSUE
    assert report.title == "Burst main"
    assert report.description == "Flooding on 5th"

    assert IssueReport(category="Lost & Found", title="t", description="d").category == Category.LOST_AND_FOUND

    with pytest.raises(ValidationError):
        IssueReport(category="Potholes", title="   ", description="d")
    with pytest.raises(ValidationError):
        IssueReport(category="Volcano", title="t", description="d")


def test_urgency_classification_contract() -> None:
    result = UrgencyClassification(urgency_level="HIGH", reason=" Flooding risk ")
    assert result.urgency_level == UrgencyLevel.HIGH
    assert result.reason == "Flooding risk"

    with pytest.raises(ValidationError):
        UrgencyClassification(urgency_level="critical", reason="x")
    with pytest.raises(ValidationError):
        UrgencyClassification(urgency_level="low", reason="")
    with pytest.raises(ValidationError):
        UrgencyClassification(urgency_level="low", reason=3)


def test_urgency_rank_is_ordinal() -> None:
    assert UrgencyLevel.LOW.rank < UrgencyLevel.MEDIUM.rank < UrgencyLevel.HIGH.rank


def test_post_created_at_accepts_common_shapes() -> None:
    expected = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    epoch = int(expected.timestamp())
    for raw in [
        "2026-01-02T03:04:05Z",
        "2026-01-02T04:04:05+01:00",
        epoch,
        epoch * 1000,
        datetime(2026, 1, 2, 3, 4, 5),
        expected,
    ]:
        post = Post(id="p", title="t", created_at=raw)
        assert post.created_at == expected
        assert post.created_at.tzinfo is not None

    with pytest.raises(ValidationError):
        Post(id="p", title="t", created_at="")


def test_post_defaults() -> None:
    post = Post(id="p", title="t", created_at=datetime.now(timezone.utc))
    assert post.status == PostStatus.OPEN
    assert post.urgency is None
    assert post.location is None
    assert post.upvotes == 0 and post.volunteers == 0


def test_geopoint_rejects_out_of_range_and_non_finite() -> None:
    GeoPoint(latitude=-90, longitude=180)
    for lat, lng in [(91, 0), (0, -181), (float("nan"), 0), (0, float("inf"))]:
        with pytest.raises(ValidationError):
            GeoPoint(latitude=lat, longitude=lng)


def test_annotated_post_distance_invariants() -> None:
    now = datetime.now(timezone.utc)
    post = Post(id="p", title="t", created_at=now, location=GeoPoint(latitude=1, longitude=2))

    annotated = AnnotatedPost.from_post(post, 3.5)
    assert annotated.distance_km == 3.5
    assert annotated.timestamp == post.created_at
    assert annotated.location == post.location

    unknown = AnnotatedPost.from_post(post)
    assert math.isinf(unknown.distance_km)
    assert unknown.has_known_distance is False
    assert unknown.model_dump(mode="json")["distance_km"] is None

    again = AnnotatedPost.from_post(annotated, 1.0)
    assert again.distance_km == 1.0

    with pytest.raises(ValidationError):
        AnnotatedPost.from_post(post, float("nan"))
    with pytest.raises(ValidationError):
        AnnotatedPost.from_post(post, -0.1)


def test_feed_result_reports_downgrade() -> None:
    result = FeedResult(
        scope=FeedScope.GLOBAL,
        requested_sort=SortMode.DISTANCE,
        effective_sort=SortMode.PRIORITY,
        radius_km=10.0,
        generated_at=datetime.now(timezone.utc) - timedelta(seconds=1),
    )
    assert result.sort_downgraded is True
    assert result.posts == []
