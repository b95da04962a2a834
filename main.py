"""CLI entrypoint: rank a post snapshot, classify a report, or serve the API."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
from pathlib import Path
from typing import List, Optional

from core import IssueReport, Post, SortMode, UrgencyClassification, to_utc_datetime
from ranking import assemble, parse_viewer_location, score_breakdown
from utils.exceptions import CivicFeedError
from utils.logger import configure_logging


def _load_posts(path: str) -> List[Post]:
    try:
        raw = json.loads(Path(path).expanduser().read_text(encoding="utf-8"))
        rows = raw.get("posts", []) if isinstance(raw, dict) else raw
        if not isinstance(rows, list):
            raise ValueError("expected a list of posts or an object with a 'posts' list")
        return [Post.model_validate(row) for row in rows]
    except (OSError, ValueError) as exc:
        # json.JSONDecodeError and pydantic.ValidationError are both ValueErrors
        raise CivicFeedError(f"Could not load posts from {path}: {exc}", {"path": path}) from exc


def _parse_now(value: str):
    if not value:
        return None
    try:
        return to_utc_datetime(value)
    except ValueError as exc:
        raise CivicFeedError(f"Invalid --now timestamp: {value!r}") from exc


def _rank(args: argparse.Namespace) -> int:
    posts = _load_posts(args.posts)
    viewer, notice = parse_viewer_location(args.lat, args.lng)
    now = _parse_now(args.now)
    result = assemble(posts, viewer, args.sort, now=now, radius_km=args.radius_km)
    if notice:
        result = result.model_copy(update={"notice": notice})

    payload = result.model_dump(mode="json")
    if args.explain:
        for row, post in zip(payload["posts"], result.posts):
            row["score"] = score_breakdown(post, result.generated_at).as_dict()
    print(json.dumps(payload, ensure_ascii=False, indent=2))
    return 0


def _classify(args: argparse.Namespace) -> int:
    from intelligence.classifier import LLMUrgencyClassifier
    from intelligence.llm import get_llm

    try:
        report = IssueReport(category=args.category, title=args.title, description=args.description)
    except ValueError as exc:
        raise CivicFeedError(f"Invalid issue report: {exc}") from exc
    llm = get_llm(provider=args.provider)

    async def run() -> UrgencyClassification:
        try:
            return await LLMUrgencyClassifier(llm).aclassify(report)
        finally:
            await llm.aclose()

    result = asyncio.run(run())
    print(json.dumps(result.model_dump(mode="json"), ensure_ascii=False))
    return 0


def _serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("webapp.app:app", host=args.host, port=int(args.port))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="civicfeed CLI")
    parser.add_argument("--verbose", action="store_true")
    sub = parser.add_subparsers(dest="command", required=True)

    rank = sub.add_parser("rank", help="Rank a JSON file of posts")
    rank.add_argument("--posts", required=True)
    rank.add_argument("--lat", default=None)
    rank.add_argument("--lng", default=None)
    rank.add_argument("--sort", default=SortMode.PRIORITY.value, choices=[m.value for m in SortMode])
    rank.add_argument("--now", default="", help="ISO timestamp used for recency decay")
    rank.add_argument("--radius-km", type=float, default=10.0)
    rank.add_argument("--explain", action="store_true", help="Include per-term priority scores")

    cls = sub.add_parser("classify", help="Classify one issue report with the configured LLM")
    cls.add_argument("--category", required=True)
    cls.add_argument("--title", required=True)
    cls.add_argument("--description", required=True)
    cls.add_argument("--provider", default=None)

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", default=8000, type=int)

    args = parser.parse_args(argv)
    configure_logging(verbose=args.verbose)

    handlers = {"rank": _rank, "classify": _classify, "serve": _serve}
    try:
        return handlers[args.command](args)
    except CivicFeedError as exc:
        logging.getLogger("civicfeed").error("%s", exc)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
