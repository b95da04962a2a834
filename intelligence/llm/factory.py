"""
LLM Factory
Build the configured provider client from ``LLMSettings``.
"""
from typing import Optional
import logging

from config import get_llm_settings
from utils.exceptions import ConfigurationError

from .base import BaseLLM
from .openai_llm import OpenAILLM
from .anthropic_llm import AnthropicLLM
from .gemini_llm import GeminiLLM


logger = logging.getLogger(__name__)


DEFAULT_MODELS = {
    "openai": "gpt-4o-mini",
    "anthropic": "claude-3-5-haiku-latest",
    "deepseek": "deepseek-chat",
    "gemini": "gemini-2.0-flash",
}

DEEPSEEK_BASE_URL = "https://api.deepseek.com"


def get_llm(
    provider: Optional[str] = None,
    model: Optional[str] = None,
    **kwargs,
) -> BaseLLM:
    """
    Create an LLM client.

    Values not passed explicitly come from ``LLM_*`` environment settings.

    Example:
        llm = get_llm()
        llm = get_llm(provider="anthropic", temperature=0.0)
    """
    settings = get_llm_settings()

    provider = (provider or settings.provider or "").strip().lower()
    if provider not in DEFAULT_MODELS:
        raise ConfigurationError(f"Unsupported LLM provider: {provider}", {"provider": provider})

    model = model or settings.model_name or DEFAULT_MODELS[provider]

    api_keys = {
        "openai": settings.openai_api_key,
        "anthropic": settings.anthropic_api_key,
        "deepseek": settings.deepseek_api_key,
        "gemini": settings.gemini_api_key,
    }
    api_key = kwargs.pop("api_key", None) or api_keys.get(provider)
    if not api_key:
        logger.warning("No API key configured for LLM provider %s", provider)

    default_params = {
        "temperature": settings.temperature,
        "max_tokens": settings.max_tokens,
        "timeout": settings.timeout,
    }
    for key, value in default_params.items():
        if key not in kwargs:
            kwargs[key] = value

    if provider == "openai":
        return OpenAILLM(
            model=model,
            api_key=api_key,
            base_url=kwargs.pop("base_url", None),
            **kwargs,
        )
    if provider == "deepseek":
        return OpenAILLM(
            model=model,
            api_key=api_key,
            base_url=kwargs.pop("base_url", None) or DEEPSEEK_BASE_URL,
            provider_name="deepseek",
            **kwargs,
        )
    if provider == "anthropic":
        return AnthropicLLM(model=model, api_key=api_key, **kwargs)
    return GeminiLLM(model=model, api_key=api_key, **kwargs)
