from coachloop.core.config import Settings
from coachloop.services.llm.base import LLMProvider, LLMProviderError
from coachloop.services.llm.gemini_provider import GeminiProvider
from coachloop.services.llm.openai_provider import OpenAIProvider


def build_provider(settings: Settings) -> LLMProvider:
    """Provider selected by ``settings.llm_provider``."""
    provider_name = settings.llm_provider.strip().lower()
    if not settings.llm_api_key:
        raise LLMProviderError(
            f"Missing API key for provider '{provider_name}'. Set LLM_API_KEY."
        )
    if provider_name == "gemini":
        kwargs = {"base_url": settings.llm_base_url} if settings.llm_base_url else {}
        return GeminiProvider(
            api_key=settings.llm_api_key,
            model=settings.llm_model,
            timeout=settings.llm_timeout,
            **kwargs,
        )
    if provider_name == "openai":
        kwargs = {"base_url": settings.llm_base_url} if settings.llm_base_url else {}
        return OpenAIProvider(
            api_key=settings.llm_api_key,
            model=settings.llm_model,
            timeout=settings.llm_timeout,
            **kwargs,
        )
    raise LLMProviderError(f"Unknown provider: {provider_name}")


__all__ = [
    "GeminiProvider",
    "LLMProvider",
    "LLMProviderError",
    "OpenAIProvider",
    "build_provider",
]
