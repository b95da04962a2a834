"""Urgency classification of issue reports through a text-generation service."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Dict, Optional, Protocol, runtime_checkable

from pydantic import ValidationError

from core import Category, IssueReport, UrgencyClassification
from utils.exceptions import ClassificationError

from .llm.base import BaseLLM


logger = logging.getLogger(__name__)


URGENCY_SYSTEM_PROMPT = (
    "You are an AI assistant designed to evaluate the urgency of community issues.\n"
    "Analyze the issue post to determine its urgency level (low, medium, or high).\n"
    "Provide a brief explanation for your assessment. Focus on the impact on the community "
    "and potential risks if the issue is not addressed promptly.\n"
    'Respond with a JSON object with exactly two fields: "urgencyLevel" (one of "low", '
    '"medium", "high") and "reason" (a short string).'
)


def build_urgency_prompt(report: IssueReport) -> str:
    return (
        f"Category: {report.category.value}\n"
        f"Title: {report.title}\n"
        f"Description: {report.description}"
    )


def _extract_json(text: str) -> Dict[str, Any]:
    raw = (text or "").strip()
    if not raw:
        return {}
    try:
        parsed = json.loads(raw)
        return parsed if isinstance(parsed, dict) else {}
    except json.JSONDecodeError:
        pass
    # first decodable object wins; trailing prose may contain braces
    decoder = json.JSONDecoder()
    start = raw.find("{")
    while start != -1:
        try:
            parsed, _ = decoder.raw_decode(raw, start)
        except json.JSONDecodeError:
            start = raw.find("{", start + 1)
            continue
        if isinstance(parsed, dict):
            return parsed
        start = raw.find("{", start + 1)
    return {}


def parse_classification(text: str) -> UrgencyClassification:
    """Parse service output into a classification or raise ``ClassificationError``."""
    payload = _extract_json(text)
    level = payload.get("urgencyLevel", payload.get("urgency_level"))
    reason = payload.get("reason")
    if not isinstance(level, str) or reason is None:
        raise ClassificationError(
            "Classifier response is missing urgencyLevel/reason",
            reason=ClassificationError.MALFORMED,
            raw=(text or "")[:200],
        )
    try:
        return UrgencyClassification(urgency_level=level.strip().lower(), reason=reason)
    except ValidationError as exc:
        raise ClassificationError(
            f"Classifier response has an invalid shape: {exc.errors()[0].get('msg', '')}",
            reason=ClassificationError.MALFORMED,
            raw=(text or "")[:200],
        ) from exc


@runtime_checkable
class UrgencyClassifierProtocol(Protocol):
    """Capability injected into post creation; stubs replace it in tests."""

    async def aclassify(self, report: IssueReport) -> UrgencyClassification:
        ...


class LLMUrgencyClassifier:
    """Classifies a report with one outbound LLM call. Never retries."""

    def __init__(self, llm: BaseLLM, *, timeout: Optional[float] = None) -> None:
        self.llm = llm
        self.timeout = timeout if timeout is not None else llm.timeout

    async def aclassify(self, report: IssueReport) -> UrgencyClassification:
        provider = self.llm.provider
        try:
            response = await asyncio.wait_for(
                self.llm.achat(
                    build_urgency_prompt(report),
                    system_prompt=URGENCY_SYSTEM_PROMPT,
                    json_mode=True,
                ),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as exc:
            raise ClassificationError(
                f"Urgency classification timed out after {self.timeout}s",
                reason=ClassificationError.TIMEOUT,
                provider=provider,
            ) from exc
        except Exception as exc:
            reason = (
                ClassificationError.TIMEOUT
                if "timeout" in type(exc).__name__.lower()
                else ClassificationError.UNREACHABLE
            )
            raise ClassificationError(
                f"Text-generation service call failed: {exc}",
                reason=reason,
                provider=provider,
            ) from exc

        try:
            result = parse_classification(response)
        except ClassificationError as exc:
            exc.provider = provider
            raise
        logger.debug("Classified %r as %s", report.title, result.urgency_level.value)
        return result


async def aclassify(
    category: Category,
    title: str,
    description: str,
    *,
    classifier: Optional[UrgencyClassifierProtocol] = None,
) -> UrgencyClassification:
    """Classify loose fields; builds (and closes) the configured LLM when no classifier is given."""
    report = IssueReport(category=category, title=title, description=description)
    if classifier is not None:
        return await classifier.aclassify(report)

    from .llm import get_llm

    llm = get_llm()
    try:
        return await LLMUrgencyClassifier(llm).aclassify(report)
    finally:
        await llm.aclose()


def classify(
    category: Category,
    title: str,
    description: str,
    *,
    classifier: Optional[UrgencyClassifierProtocol] = None,
) -> UrgencyClassification:
    return asyncio.run(aclassify(category, title, description, classifier=classifier))
