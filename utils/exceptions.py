"""
Custom Exceptions
Error types shared by the classifier, the post workflow and the API.
"""


class CivicFeedError(Exception):
    """Base error for the civic feed service."""

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self):
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(CivicFeedError):
    """Invalid or missing configuration."""
    pass


class LLMError(CivicFeedError):
    """Text-generation service call failed."""

    def __init__(self, message: str, provider: str = None, **kwargs):
        super().__init__(message, kwargs)
        self.provider = provider


class ClassificationError(LLMError):
    """Urgency could not be assessed.

    ``reason`` is one of ``unreachable``, ``timeout`` or ``malformed``.
    """

    UNREACHABLE = "unreachable"
    TIMEOUT = "timeout"
    MALFORMED = "malformed"

    def __init__(self, message: str, reason: str = UNREACHABLE, provider: str = None, **kwargs):
        super().__init__(message, provider=provider, reason=reason, **kwargs)
        self.reason = reason


class StorageError(CivicFeedError):
    """Post storage failure."""
    pass


class PostNotFoundError(StorageError):
    """No post with the requested id."""

    def __init__(self, post_id: str):
        super().__init__(f"Post not found: {post_id}", {"post_id": post_id})
        self.post_id = post_id
