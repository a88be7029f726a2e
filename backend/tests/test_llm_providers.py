"""Tests for the HTTP model providers and provider selection."""
import pytest
import requests

from coachloop.core.config import Settings
from coachloop.services.llm import (
    GeminiProvider,
    LLMProviderError,
    OpenAIProvider,
    build_provider,
)


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload or {}
        self.text = text

    def json(self):
        return self._payload


@pytest.fixture
def captured(monkeypatch):
    calls = []

    def install(response=None, error=None):
        def fake_post(url, **kwargs):
            calls.append({"url": url, **kwargs})
            if error is not None:
                raise error
            return response

        monkeypatch.setattr(requests, "post", fake_post)
        return calls

    return install


class TestGeminiProvider:
    def test_success(self, captured):
        calls = captured(
            FakeResponse(payload={"candidates": [{"content": {"parts": [{"text": '{"a": '}, {"text": "1}"}]}}]})
        )
        provider = GeminiProvider(api_key="k", model="gemini-2.0-flash")
        text = provider.complete("prompt", system_prompt="sys", json_mode=True)
        assert text == '{"a": 1}'
        [call] = calls
        assert call["url"] == (
            "https://generativelanguage.googleapis.com/v1beta/models/gemini-2.0-flash:generateContent"
        )
        assert call["params"] == {"key": "k"}
        assert call["json"]["systemInstruction"] == {"parts": [{"text": "sys"}]}
        assert call["json"]["generationConfig"]["responseMimeType"] == "application/json"

    def test_non_200(self, captured):
        captured(FakeResponse(status_code=429, text="quota"))
        with pytest.raises(LLMProviderError, match="429"):
            GeminiProvider(api_key="k", model="m").complete("prompt")

    def test_transport_error(self, captured):
        captured(error=requests.ConnectionError("refused"))
        with pytest.raises(LLMProviderError, match="Failed to reach Gemini"):
            GeminiProvider(api_key="k", model="m").complete("prompt")

    def test_missing_candidates(self, captured):
        captured(FakeResponse(payload={"candidates": []}))
        with pytest.raises(LLMProviderError, match="candidates"):
            GeminiProvider(api_key="k", model="m").complete("prompt")


class TestOpenAIProvider:
    def test_success(self, captured):
        calls = captured(FakeResponse(payload={"choices": [{"message": {"content": " {} "}}]}))
        provider = OpenAIProvider(api_key="k", model="gpt-4o-mini", base_url="http://local/")
        assert provider.complete("prompt", json_mode=True) == "{}"
        [call] = calls
        assert call["url"] == "http://local/v1/chat/completions"
        assert call["headers"]["Authorization"] == "Bearer k"
        assert call["json"]["response_format"] == {"type": "json_object"}

    def test_missing_choices(self, captured):
        captured(FakeResponse(payload={}))
        with pytest.raises(LLMProviderError):
            OpenAIProvider(api_key="k", model="m").complete("prompt")


class TestBuildProvider:
    def test_gemini_default(self):
        provider = build_provider(Settings(llm_api_key="k"))
        assert isinstance(provider, GeminiProvider)

    def test_openai(self):
        provider = build_provider(Settings(llm_api_key="k", llm_provider="OpenAI", llm_model="gpt-4o-mini"))
        assert isinstance(provider, OpenAIProvider)

    def test_missing_key(self):
        with pytest.raises(LLMProviderError, match="LLM_API_KEY"):
            build_provider(Settings(llm_api_key=""))

    def test_unknown_provider(self):
        with pytest.raises(LLMProviderError, match="Unknown provider"):
            build_provider(Settings(llm_api_key="k", llm_provider="mystery"))
