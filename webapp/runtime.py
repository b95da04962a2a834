"""Shared runtime singletons for the web and CLI entrypoints."""

from __future__ import annotations

import logging
from threading import Lock
from typing import Optional

from config import get_feed_settings, get_llm_settings
from intelligence.classifier import LLMUrgencyClassifier
from intelligence.llm import get_llm
from posts import InMemoryPostStore, PostService
from utils.exceptions import ConfigurationError


logger = logging.getLogger(__name__)

_STORE = InMemoryPostStore()
_SERVICE: Optional[PostService] = None
_LOCK = Lock()


def build_classifier() -> Optional[LLMUrgencyClassifier]:
    """Classifier for the configured provider, or None when the provider is invalid."""
    try:
        llm = get_llm()
    except ConfigurationError as exc:
        logger.warning("Urgency classifier disabled: %s", exc)
        return None
    return LLMUrgencyClassifier(llm, timeout=get_llm_settings().timeout)


def get_post_service() -> PostService:
    global _SERVICE
    with _LOCK:
        if _SERVICE is None:
            feed = get_feed_settings()
            _SERVICE = PostService(
                store=_STORE,
                classifier=build_classifier(),
                feed_limit=feed.global_feed_limit,
                radius_km=feed.radius_km,
                default_sort=feed.default_sort,
            )
        return _SERVICE
