"""
Intelligence Module
LLM abstraction plus the urgency classifier built on it.
"""
from .llm import (
    BaseLLM,
    OpenAILLM,
    AnthropicLLM,
    GeminiLLM,
    get_llm,
)
from .classifier import (
    LLMUrgencyClassifier,
    UrgencyClassifierProtocol,
    aclassify,
    classify,
    parse_classification,
)

__all__ = [
    "BaseLLM",
    "OpenAILLM",
    "AnthropicLLM",
    "GeminiLLM",
    "get_llm",
    "LLMUrgencyClassifier",
    "UrgencyClassifierProtocol",
    "aclassify",
    "classify",
    "parse_classification",
]
