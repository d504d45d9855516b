from profiler.ai.config import load_ai_config, provider_api_key
from profiler.ai.types import AIClient, SUPPORTED_PROVIDERS

from profiler.ai.providers.openai_provider import OpenAIProvider
from profiler.ai.providers.claude_provider import ClaudeProvider
from profiler.core.config import settings
from profiler.core.errors import UnsupportedProviderError


def normalize_provider(provider: str | None) -> str:
    name = (provider or settings.default_provider).strip().lower()
    if name not in SUPPORTED_PROVIDERS:
        raise UnsupportedProviderError(f"Unsupported provider '{name}'")
    return name


def get_ai_client(provider: str | None = None) -> AIClient:
    name = normalize_provider(provider)
    cfg = load_ai_config(name)

    if name == "anthropic":
        return ClaudeProvider(cfg)

    # openai, perplexity and deepseek all speak the chat-completions protocol.
    return OpenAIProvider(cfg)


def configured_providers() -> dict[str, str]:
    return {
        name: "configured" if provider_api_key(load_ai_config(name)) else "missing"
        for name in SUPPORTED_PROVIDERS
    }
