from __future__ import annotations

import pytest

from config import get_settings
from config.settings import FeedSettings, LLMSettings
from intelligence.llm import AnthropicLLM, GeminiLLM, OpenAILLM, get_llm
from intelligence.llm.factory import DEEPSEEK_BASE_URL
from utils.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    for key in ["LLM_PROVIDER", "LLM_MODEL_NAME", "LLM_TEMPERATURE", "LLM_TIMEOUT", "FEED_RADIUS_KM"]:
        monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_settings_defaults() -> None:
    llm = LLMSettings()
    feed = FeedSettings()
    assert llm.provider == "openai"
    assert llm.timeout == 30.0
    assert feed.radius_km == 10.0
    assert feed.global_feed_limit == 50
    assert feed.default_sort == "priority"


def test_settings_read_prefixed_env(monkeypatch) -> None:
    monkeypatch.setenv("FEED_RADIUS_KM", "25")
    monkeypatch.setenv("LLM_PROVIDER", "anthropic")
    settings = get_settings()
    assert settings.feed.radius_km == 25.0
    assert settings.llm.provider == "anthropic"


def test_get_llm_builds_each_provider(monkeypatch) -> None:
    monkeypatch.setenv("LLM_TIMEOUT", "12")

    openai_llm = get_llm(provider="openai", api_key="k")
    assert isinstance(openai_llm, OpenAILLM)
    assert openai_llm.model == "gpt-4o-mini"
    assert openai_llm.timeout == 12.0

    deepseek = get_llm(provider="deepseek", api_key="k")
    assert isinstance(deepseek, OpenAILLM)
    assert deepseek.provider == "deepseek"
    assert deepseek.base_url == DEEPSEEK_BASE_URL

    assert isinstance(get_llm(provider="anthropic", api_key="k"), AnthropicLLM)
    assert isinstance(get_llm(provider="gemini", api_key="k"), GeminiLLM)


def test_get_llm_explicit_overrides_win() -> None:
    llm = get_llm(provider="openai", model="gpt-4o", api_key="k", temperature=0.0)
    assert llm.model == "gpt-4o"
    assert llm.temperature == 0.0


def test_get_llm_rejects_unknown_provider() -> None:
    with pytest.raises(ConfigurationError):
        get_llm(provider="llamafile")


class _FakeSDKClient:
    def __init__(self) -> None:
        self.closed = 0

    async def close(self) -> None:
        self.closed += 1


@pytest.mark.asyncio
async def test_aclose_releases_the_sdk_client_once() -> None:
    llm = get_llm(provider="anthropic", api_key="k")
    sdk = _FakeSDKClient()
    llm._client = sdk

    await llm.aclose()
    await llm.aclose()

    assert sdk.closed == 1
    assert llm._client is None


@pytest.mark.asyncio
async def test_aclose_without_a_client_is_a_no_op() -> None:
    await get_llm(provider="gemini", api_key="k").aclose()
