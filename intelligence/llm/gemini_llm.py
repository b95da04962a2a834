"""
Google Gemini LLM
"""
from typing import List, Optional

from .base import BaseLLM, LLMResponse, Message, MessageRole


class GeminiLLM(BaseLLM):
    """``google-generativeai`` client; one ``generate_content`` call per completion."""

    def __init__(
        self,
        model: str = "gemini-2.0-flash",
        api_key: Optional[str] = None,
        temperature: float = 0.2,
        max_tokens: int = 512,
        timeout: float = 30.0,
    ):
        super().__init__(model, temperature, max_tokens, timeout)
        self.api_key = api_key

    @property
    def provider(self) -> str:
        return "gemini"

    async def acomplete(self, messages: List[Message], **kwargs) -> LLMResponse:
        import google.generativeai as genai

        genai.configure(api_key=self.api_key)

        generation_config = {
            "temperature": kwargs.get("temperature", self.temperature),
            "max_output_tokens": kwargs.get("max_tokens", self.max_tokens),
        }
        if kwargs.get("json_mode"):
            generation_config["response_mime_type"] = "application/json"

        system = "\n\n".join(m.content for m in messages if m.role == MessageRole.SYSTEM)
        model = genai.GenerativeModel(
            model_name=self.model,
            generation_config=generation_config,
            system_instruction=system or None,
        )
        prompt = "\n\n".join(m.content for m in messages if m.role == MessageRole.USER)
        response = await model.generate_content_async(prompt, request_options={"timeout": self.timeout})

        usage = {}
        meta = getattr(response, "usage_metadata", None)
        if meta:
            usage = {"input": meta.prompt_token_count, "output": meta.candidates_token_count}
        return LLMResponse(content=response.text or "", model=self.model, usage=usage)
