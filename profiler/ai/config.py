import os
from dataclasses import dataclass


@dataclass(frozen=True)
class AIConfig:
    provider: str
    model: str
    api_key_env: str
    base_url: str | None
    timeout_s: float
    max_retries: int
    temperature: float
    max_tokens: int


_DEFAULTS = {
    "openai": ("OPENAI", "gpt-4o", "OPENAI_API_KEY", None),
    "anthropic": ("ANTHROPIC", "claude-3-7-sonnet-20250219", "ANTHROPIC_API_KEY", None),
    "perplexity": (
        "PERPLEXITY",
        "llama-3.1-sonar-small-128k-online",
        "PERPLEXITY_API_KEY",
        "https://api.perplexity.ai",
    ),
    "deepseek": ("DEEPSEEK", "deepseek-chat", "DEEPSEEK_API_KEY", "https://api.deepseek.com"),
}


def load_ai_config(provider: str) -> AIConfig:
    prefix, model, key_env, base_url = _DEFAULTS[provider]
    return AIConfig(
        provider=provider,
        model=os.getenv(f"{prefix}_MODEL", model).strip(),
        api_key_env=key_env,
        base_url=(os.getenv(f"{prefix}_BASE_URL") or base_url),
        timeout_s=float(os.getenv(f"{prefix}_TIMEOUT_S", os.getenv("LLM_TIMEOUT_S", "120"))),
        max_retries=int(os.getenv(f"{prefix}_MAX_RETRIES", os.getenv("LLM_MAX_RETRIES", "2"))),
        temperature=float(os.getenv("LLM_TEMPERATURE", "0.1")),
        max_tokens=int(os.getenv("LLM_MAX_TOKENS", "4000")),
    )


def provider_api_key(cfg: AIConfig) -> str:
    return (os.getenv(cfg.api_key_env) or "").strip()
