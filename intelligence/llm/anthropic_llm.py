"""
Anthropic LLM
Messages API client.
"""
from typing import List, Optional

from .base import BaseLLM, LLMResponse, Message, MessageRole


class AnthropicLLM(BaseLLM):
    """The system prompt is sent as the top-level ``system`` field, not as a message."""

    def __init__(
        self,
        model: str = "claude-3-5-haiku-latest",
        api_key: Optional[str] = None,
        temperature: float = 0.2,
        max_tokens: int = 512,
        timeout: float = 30.0,
    ):
        super().__init__(model, temperature, max_tokens, timeout)
        self.api_key = api_key

    @property
    def provider(self) -> str:
        return "anthropic"

    def _get_client(self):
        if self._client is None:
            from anthropic import AsyncAnthropic

            self._client = AsyncAnthropic(api_key=self.api_key, timeout=self.timeout)
        return self._client

    async def acomplete(self, messages: List[Message], **kwargs) -> LLMResponse:
        system = "\n\n".join(m.content for m in messages if m.role == MessageRole.SYSTEM)
        params = {
            "model": self.model,
            "messages": [m.to_dict() for m in messages if m.role != MessageRole.SYSTEM],
            "temperature": kwargs.get("temperature", self.temperature),
            "max_tokens": kwargs.get("max_tokens", self.max_tokens),
        }
        if system:
            params["system"] = system

        response = await self._get_client().messages.create(**params)

        return LLMResponse(
            content="".join(block.text for block in response.content if block.type == "text"),
            model=response.model,
            usage={"input": response.usage.input_tokens, "output": response.usage.output_tokens},
        )
