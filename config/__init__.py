"""
Configuration Management Module
"""
from .settings import (
    Settings,
    LLMSettings,
    FeedSettings,
    get_settings,
    get_llm_settings,
    get_feed_settings,
)

__all__ = [
    "Settings",
    "LLMSettings",
    "FeedSettings",
    "get_settings",
    "get_llm_settings",
    "get_feed_settings",
]
