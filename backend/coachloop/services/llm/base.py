from __future__ import annotations

import logging
from abc import ABC, abstractmethod


class LLMProviderError(RuntimeError):
    pass


class LLMProvider(ABC):
    """A hosted chat model that turns one prompt into response text."""

    name = "llm"

    def __init__(self, logger_name: str = "coachloop.llm") -> None:
        self._logger = logging.getLogger(logger_name)

    @abstractmethod
    def complete(
        self,
        prompt: str,
        system_prompt: str | None = None,
        json_mode: bool = False,
    ) -> str:
        """Send one prompt and return the response text.

        Raises LLMProviderError on transport errors and non-success responses.
        """
        raise NotImplementedError

    @staticmethod
    def strip_markdown_code_blocks(text: str) -> str:
        """Remove markdown code block wrappers from text."""
        text = text.strip()
        if not text.startswith("```"):
            return text
        lines = [line for line in text.split("\n") if not line.startswith("```")]
        return "\n".join(lines).strip()
