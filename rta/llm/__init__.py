"""LLM adapter layer: Groq/OpenAI and Anthropic behind a common protocol."""

from rta.config import Settings
from rta.errors import ConfigError
from rta.llm.anthropic_provider import AnthropicProvider
from rta.llm.base import LLMProvider, parse_json_object, strip_code_fence
from rta.llm.openai_provider import OpenAIProvider


def get_provider(provider_name: str, **kwargs: object) -> LLMProvider:
    """Return an LLM provider. provider_name: 'groq' | 'openai' | 'anthropic'."""
    name = provider_name.lower()
    if name == "anthropic":
        return AnthropicProvider(**kwargs)
    if name == "groq":
        return OpenAIProvider(name="Groq", **kwargs)
    if name == "openai":
        return OpenAIProvider(**kwargs)
    raise ConfigError(f"Unknown LLM provider '{provider_name}' (expected groq, openai or anthropic)")


def resolve_llm(settings: Settings) -> LLMProvider:
    """Build the configured provider, or raise ConfigError if its key is missing."""
    provider_name = settings.rta_llm_provider.lower()
    timeout = settings.rta_http_timeout
    if provider_name == "groq":
        if not settings.groq_api_key:
            raise ConfigError("GROQ_API_KEY environment variable is not set")
        return get_provider(
            "groq",
            api_key=settings.groq_api_key,
            model=settings.rta_groq_model,
            base_url=settings.rta_groq_base_url,
            timeout=timeout,
        )
    if provider_name == "openai":
        if not settings.openai_api_key:
            raise ConfigError("OPENAI_API_KEY environment variable is not set")
        return get_provider(
            "openai", api_key=settings.openai_api_key, model=settings.rta_openai_model, timeout=timeout
        )
    if provider_name == "anthropic":
        if not settings.anthropic_api_key:
            raise ConfigError("ANTHROPIC_API_KEY environment variable is not set")
        return get_provider(
            "anthropic", api_key=settings.anthropic_api_key, model=settings.rta_anthropic_model, timeout=timeout
        )
    return get_provider(provider_name)


__all__ = [
    "LLMProvider",
    "OpenAIProvider",
    "AnthropicProvider",
    "get_provider",
    "resolve_llm",
    "parse_json_object",
    "strip_code_fence",
]
