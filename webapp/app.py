"""FastAPI app serving the ranked issue feed and the post workflow."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, field_validator

from core import Category, GeoPoint, IssueReport, SortMode
from ranking import parse_sort_mode, parse_viewer_location
from utils.exceptions import PostNotFoundError
from webapp.runtime import get_post_service


app = FastAPI(title="civicfeed API")


class CreatePostPayload(BaseModel):
    author_id: str
    category: Category
    title: str
    description: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    image_url: Optional[str] = None

    @field_validator("author_id", "title", "description")
    @classmethod
    def _strip_required(cls, value: str) -> str:
        text = str(value or "").strip()
        if not text:
            raise ValueError("value is required")
        return text


class EngagementPayload(BaseModel):
    user_id: str

    @field_validator("user_id")
    @classmethod
    def _strip_user(cls, value: str) -> str:
        text = str(value or "").strip()
        if not text:
            raise ValueError("user_id is required")
        return text


class ResolvePayload(BaseModel):
    resolved_by: Optional[str] = None


def _sort_or_422(sort: Optional[str]) -> Optional[SortMode]:
    if sort in (None, ""):
        return None
    try:
        return parse_sort_mode(sort)
    except ValueError:
        allowed = ", ".join(mode.value for mode in SortMode)
        raise HTTPException(status_code=422, detail=f"unknown sort '{sort}', expected one of: {allowed}")


@app.get("/api/health")
def health() -> Dict[str, Any]:
    return {"ok": True, "ts": datetime.now(timezone.utc).isoformat(timespec="seconds")}


@app.get("/api/feed")
def get_feed(
    lat: Optional[str] = None,
    lng: Optional[str] = None,
    sort: Optional[str] = None,
) -> Dict[str, Any]:
    requested = _sort_or_422(sort)
    viewer, notice = parse_viewer_location(lat, lng)
    result = get_post_service().get_feed(viewer, requested, notice=notice)
    payload = result.model_dump(mode="json")
    payload["sort_downgraded"] = result.sort_downgraded
    return payload


@app.post("/api/posts")
async def create_post(payload: CreatePostPayload) -> Dict[str, Any]:
    location = None
    if (payload.latitude is None) != (payload.longitude is None):
        raise HTTPException(status_code=422, detail="latitude and longitude must be sent together")
    if payload.latitude is not None:
        try:
            location = GeoPoint(latitude=payload.latitude, longitude=payload.longitude)
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc))
    report = IssueReport(category=payload.category, title=payload.title, description=payload.description)
    created = await get_post_service().create_post(
        author_id=payload.author_id,
        report=report,
        location=location,
        image_url=payload.image_url,
    )
    return {
        "post": created.post.model_dump(mode="json"),
        "classified": created.classified,
        "notice": created.notice,
    }


@app.get("/api/posts/{post_id}")
def get_post(post_id: str) -> Dict[str, Any]:
    try:
        post = get_post_service().get_post(post_id)
    except PostNotFoundError:
        raise HTTPException(status_code=404, detail="post not found")
    return post.model_dump(mode="json")


@app.post("/api/posts/{post_id}/upvote")
def upvote_post(post_id: str, payload: EngagementPayload) -> Dict[str, Any]:
    try:
        result = get_post_service().upvote(post_id, payload.user_id)
    except PostNotFoundError:
        raise HTTPException(status_code=404, detail="post not found")
    return {"post_id": result.post.id, "upvotes": result.post.upvotes, "upvoted": result.active}


@app.post("/api/posts/{post_id}/volunteer")
def volunteer_for_post(post_id: str, payload: EngagementPayload) -> Dict[str, Any]:
    try:
        result = get_post_service().volunteer(post_id, payload.user_id)
    except PostNotFoundError:
        raise HTTPException(status_code=404, detail="post not found")
    return {
        "post_id": result.post.id,
        "volunteers": result.post.volunteers,
        "upvotes": result.post.upvotes,
        "status": result.post.status.value,
        "volunteered": result.active,
    }


@app.post("/api/posts/{post_id}/resolve")
def resolve_post(post_id: str, payload: Optional[ResolvePayload] = None) -> Dict[str, Any]:
    resolved_by = payload.resolved_by if payload else None
    try:
        post = get_post_service().resolve(post_id, resolved_by=resolved_by)
    except PostNotFoundError:
        raise HTTPException(status_code=404, detail="post not found")
    return post.model_dump(mode="json")
