"""
Settings Configuration
Pydantic-validated settings, loaded from the environment and ``.env``.
"""
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class LLMSettings(BaseSettings):
    """Text-generation service used by the urgency classifier."""
    provider: str = Field(default="openai", description="LLM provider: openai, anthropic, deepseek, gemini")
    model_name: Optional[str] = Field(default=None, description="Model name (provider default when empty)")
    temperature: float = Field(default=0.2, description="Sampling temperature")
    max_tokens: int = Field(default=512, description="Max generated tokens")
    timeout: float = Field(default=30.0, description="Classification timeout (seconds)")

    openai_api_key: Optional[str] = Field(default=None, description="OpenAI API Key")
    anthropic_api_key: Optional[str] = Field(default=None, description="Anthropic API Key")
    deepseek_api_key: Optional[str] = Field(default=None, description="DeepSeek API Key")
    gemini_api_key: Optional[str] = Field(default=None, description="Google Gemini API Key")

    class Config:
        env_prefix = "LLM_"


class FeedSettings(BaseSettings):
    """Feed assembly knobs owned by the deployment, not the scorer."""
    radius_km: float = Field(default=10.0, description="Nearby feed radius (km)")
    global_feed_limit: int = Field(default=50, description="Most-recent posts fetched per feed request")
    default_sort: str = Field(default="priority", description="Sort mode when the request names none")

    class Config:
        env_prefix = "FEED_"


class Settings(BaseSettings):
    """Top-level settings aggregate."""

    llm: LLMSettings = Field(default_factory=LLMSettings)
    feed: FeedSettings = Field(default_factory=FeedSettings)

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @classmethod
    def load_from_env_file(cls, env_path: Optional[Path] = None) -> "Settings":
        """Load ``config/.env`` (or ``env_path``) into the environment, then build settings."""
        if env_path is None:
            env_path = Path(__file__).parent / ".env"

        if env_path.exists():
            from dotenv import load_dotenv
            load_dotenv(env_path)

        return cls(
            llm=LLMSettings(),
            feed=FeedSettings(),
        )


@lru_cache()
def get_settings() -> Settings:
    """Process-wide settings singleton."""
    return Settings.load_from_env_file()


def get_llm_settings() -> LLMSettings:
    return get_settings().llm


def get_feed_settings() -> FeedSettings:
    return get_settings().feed
