"""Gemini provider using Google's Generative Language API."""
from __future__ import annotations

import requests

from coachloop.services.llm.base import LLMProvider, LLMProviderError


class GeminiProvider(LLMProvider):
    """LLM provider for Google Gemini models."""

    name = "gemini"

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str = "https://generativelanguage.googleapis.com",
        timeout: int = 120,
        temperature: float = 0.2,
    ) -> None:
        super().__init__(logger_name="coachloop.llm.gemini")
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
        model_name = self._model
        if not model_name.startswith("models/"):
            model_name = f"models/{model_name}"
        url = f"{self._base_url}/v1beta/{model_name}:generateContent"

        body: dict = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {"temperature": self._temperature},
        }
        if system_prompt:
            body["systemInstruction"] = {"parts": [{"text": system_prompt}]}
        if json_mode:
            body["generationConfig"]["responseMimeType"] = "application/json"

        try:
            response = requests.post(
                url,
                params={"key": self._api_key},
                headers={"Content-Type": "application/json"},
                json=body,
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            raise LLMProviderError(f"Failed to reach Gemini API: {exc}") from exc

        if response.status_code != 200:
            self._logger.error("Gemini error: %s - %s", response.status_code, response.text[:500])
            raise LLMProviderError(f"Gemini error: {response.status_code}")

        data = response.json()
        candidates = data.get("candidates", [])
        if not candidates:
            raise LLMProviderError("Gemini response missing candidates")
        parts = candidates[0].get("content", {}).get("parts", [])
        if not parts:
            raise LLMProviderError("Gemini response missing parts")
        return "".join(part.get("text", "") for part in parts).strip()
