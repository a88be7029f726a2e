from __future__ import annotations

import requests

from coachloop.services.llm.base import LLMProvider, LLMProviderError


class OpenAIProvider(LLMProvider):
    """LLM provider for OpenAI and OpenAI-compatible APIs."""

    name = "openai"

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str = "https://api.openai.com",
        timeout: int = 120,
        temperature: float = 0.2,
    ) -> None:
        super().__init__(logger_name="coachloop.llm.openai")
        self._api_key = api_key
        self._model = model
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._temperature = temperature

    def complete(
        self,
        prompt: str,
        system_prompt: str | None = None,
        json_mode: bool = False,
    ) -> str:
        request_body: dict = {
            "model": self._model,
            "messages": [
                {"role": "system", "content": system_prompt or "You are a helpful assistant."},
                {"role": "user", "content": prompt},
            ],
            "temperature": self._temperature,
        }
        if json_mode:
            request_body["response_format"] = {"type": "json_object"}

        try:
            response = requests.post(
                f"{self._base_url}/v1/chat/completions",
                headers={
                    "Authorization": f"Bearer {self._api_key}",
                    "Content-Type": "application/json",
                },
                json=request_body,
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            raise LLMProviderError(f"Failed to reach OpenAI: {exc}") from exc

        if response.status_code != 200:
            self._logger.error("OpenAI error: %s - %s", response.status_code, response.text[:500])
            raise LLMProviderError(f"OpenAI error: {response.status_code}")

        choices = response.json().get("choices", [])
        if not choices:
            raise LLMProviderError("OpenAI response missing choices")
        content = choices[0].get("message", {}).get("content", "")
        return str(content or "").strip()
