"""
Base LLM
Provider-neutral prompt -> text contract behind the urgency classifier.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
import inspect
import logging
from typing import Any, Dict, List, Optional


logger = logging.getLogger(__name__)


class MessageRole(str, Enum):
    SYSTEM = "system"
    USER = "user"


@dataclass
class Message:
    role: MessageRole
    content: str

    def to_dict(self) -> Dict[str, Any]:
        return {"role": self.role.value, "content": self.content}

    @classmethod
    def system(cls, content: str) -> "Message":
        return cls(role=MessageRole.SYSTEM, content=content)

    @classmethod
    def user(cls, content: str) -> "Message":
        return cls(role=MessageRole.USER, content=content)


@dataclass
class LLMResponse:
    content: str
    model: str
    usage: Dict[str, int] = field(default_factory=dict)


class BaseLLM(ABC):
    """
    One outbound completion per call, no retries.

    Subclasses build their SDK client lazily and keep it in ``_client`` so
    that ``aclose`` can release it; importing a provider never needs its SDK.
    """

    def __init__(
        self,
        model: str,
        temperature: float = 0.2,
        max_tokens: int = 512,
        timeout: float = 30.0,
    ):
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout
        self._client: Any = None

    @property
    @abstractmethod
    def provider(self) -> str:
        pass

    @abstractmethod
    async def acomplete(self, messages: List[Message], **kwargs) -> LLMResponse:
        """
        Run one completion.

        Keyword overrides: ``temperature``, ``max_tokens`` and ``json_mode``
        (ask the provider for a bare JSON object where it supports that).
        """

    async def achat(self, user_message: str, system_prompt: Optional[str] = None, **kwargs) -> str:
        messages = [Message.system(system_prompt)] if system_prompt else []
        messages.append(Message.user(user_message))

        response = await self.acomplete(messages, **kwargs)
        if response.usage:
            logger.debug("%s/%s usage: %s", self.provider, response.model, response.usage)
        return response.content

    async def aclose(self) -> None:
        client, self._client = self._client, None
        close_fn = getattr(client, "close", None)
        if callable(close_fn):
            result = close_fn()
            if inspect.isawaitable(result):
                await result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(model={self.model}, provider={self.provider})"
