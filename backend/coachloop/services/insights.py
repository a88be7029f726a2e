"""Insight extraction: one model call per transcript, with optional history."""
from __future__ import annotations

import json
import logging
from typing import Optional

from pydantic import ValidationError

from coachloop.core.errors import (
    EmptyResultFailure,
    ExtractionFailure,
    ValidationFailure,
)
from coachloop.schemas import ExtractedInsights
from coachloop.services.llm import LLMProvider, LLMProviderError

SYSTEM_PROMPT = (
    "You are an AI assistant designed to analyze coaching session transcripts and "
    "extract key insights. You help team members grow over time. "
    "Return only a valid JSON object, no markdown formatting."
)

HISTORY_WITH_SUMMARY = (
    "Consider the following summary of key points from recent previous sessions "
    "with this team member:\n"
    "--- HISTORICAL SUMMARY START ---\n"
    "{historical_summary}\n"
    "--- HISTORICAL SUMMARY END ---\n"
    "When generating your insights, reflect on this history. For example, if a skill "
    "was identified previously, note if there's progress or if it remains an area for "
    "development. If new themes emerge, consider how they relate to past discussions."
)

HISTORY_WITHOUT_SUMMARY = (
    "No summary of recent past sessions was provided. Base your analysis solely on "
    "the current transcript."
)

EXTRACTION_PROMPT = (
    "{history_section}\n\n"
    "Based on the provided CURRENT transcript AND considering the historical summary "
    "(if provided), identify the following:\n\n"
    "- Key growth themes for the team member.\n"
    "- Skills that the team member should develop.\n"
    "- Suggested coaching questions to help the team member improve.\n"
    "- Action items for the team member.\n\n"
    "Return JSON with keys: growthThemes, skillsToDevelop, suggestedCoachingQuestions, "
    "actionItems. Each value is an array of strings.\n\n"
    "Current Transcript:\n{transcript}"
)


def build_extraction_prompt(transcript: str, historical_summary: Optional[str] = None) -> str:
    if historical_summary:
        history_section = HISTORY_WITH_SUMMARY.format(historical_summary=historical_summary)
    else:
        history_section = HISTORY_WITHOUT_SUMMARY
    return EXTRACTION_PROMPT.format(history_section=history_section, transcript=transcript)


class InsightExtractionGateway:
    """Wraps the hosted model with a fixed input/output contract.

    One attempt per call; callers that want retries wrap ``extract`` themselves.
    """

    def __init__(self, provider: LLMProvider) -> None:
        self._provider = provider
        self._logger = logging.getLogger("coachloop.insights")

    def extract(
        self, transcript: str, historical_summary: Optional[str] = None
    ) -> ExtractedInsights:
        """
        Raises:
            ValidationFailure: transcript is blank.
            ExtractionFailure: the call failed or the response was not the expected JSON.
            EmptyResultFailure: the call succeeded but carried no insights.
        """
        if not transcript or not transcript.strip():
            raise ValidationFailure(["Transcript is empty."])

        prompt = build_extraction_prompt(transcript, historical_summary)
        self._logger.info(
            "Extracting insights provider=%s history=%s",
            self._provider.name,
            bool(historical_summary),
        )
        try:
            content = self._provider.complete(prompt, system_prompt=SYSTEM_PROMPT, json_mode=True)
        except LLMProviderError as exc:
            self._logger.warning("Model call failed: %s", exc)
            raise ExtractionFailure(str(exc)) from exc
        except Exception as exc:
            self._logger.exception("Model call raised unexpectedly")
            raise ExtractionFailure(str(exc) or type(exc).__name__) from exc

        insights = self._parse(content)
        if insights.is_empty():
            raise EmptyResultFailure()
        return insights

    def _parse(self, content: Optional[str]) -> ExtractedInsights:
        text = LLMProvider.strip_markdown_code_blocks(content or "")
        if not text:
            raise EmptyResultFailure()
        try:
            parsed = json.loads(text)
        except json.JSONDecodeError as exc:
            self._logger.warning("Non-JSON extraction response: %s", text[:300])
            raise ExtractionFailure("Model returned a response that is not JSON.") from exc
        if parsed is None:
            raise EmptyResultFailure()
        if not isinstance(parsed, dict):
            raise ExtractionFailure(
                f"Model returned {type(parsed).__name__} instead of a JSON object."
            )
        try:
            return ExtractedInsights.model_validate(parsed)
        except ValidationError as exc:
            self._logger.warning("Malformed extraction response: %s", exc)
            raise ExtractionFailure("Model returned insights in an unexpected shape.") from exc
