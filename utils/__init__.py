"""
Utils Module
Logging setup and shared exception types.
"""
from .logger import configure_logging, setup_logger
from .exceptions import (
    CivicFeedError,
    ConfigurationError,
    LLMError,
    ClassificationError,
    StorageError,
    PostNotFoundError,
)

__all__ = [
    "configure_logging",
    "setup_logger",
    "CivicFeedError",
    "ConfigurationError",
    "LLMError",
    "ClassificationError",
    "StorageError",
    "PostNotFoundError",
]
