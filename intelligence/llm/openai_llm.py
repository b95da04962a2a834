"""
OpenAI LLM
Chat Completions client; ``base_url`` points it at compatible providers (DeepSeek).
"""
from typing import List, Optional

from .base import BaseLLM, LLMResponse, Message


class OpenAILLM(BaseLLM):
    def __init__(
        self,
        model: str = "gpt-4o-mini",
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        temperature: float = 0.2,
        max_tokens: int = 512,
        timeout: float = 30.0,
        provider_name: str = "openai",
    ):
        super().__init__(model, temperature, max_tokens, timeout)
        self.api_key = api_key
        self.base_url = base_url
        self._provider_name = provider_name

    @property
    def provider(self) -> str:
        return self._provider_name

    def _get_client(self):
        if self._client is None:
            from openai import AsyncOpenAI

            self._client = AsyncOpenAI(api_key=self.api_key, base_url=self.base_url, timeout=self.timeout)
        return self._client

    async def acomplete(self, messages: List[Message], **kwargs) -> LLMResponse:
        params = {
            "model": self.model,
            "messages": [m.to_dict() for m in messages],
            "temperature": kwargs.get("temperature", self.temperature),
            "max_tokens": kwargs.get("max_tokens", self.max_tokens),
        }
        if kwargs.get("json_mode"):
            params["response_format"] = {"type": "json_object"}

        response = await self._get_client().chat.completions.create(**params)

        usage = {}
        if response.usage is not None:
            usage = {"input": response.usage.prompt_tokens, "output": response.usage.completion_tokens}
        return LLMResponse(
            content=response.choices[0].message.content or "",
            model=response.model,
            usage=usage,
        )
