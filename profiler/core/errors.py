from __future__ import annotations


class ProviderError(RuntimeError):
    def __init__(self, message: str, *, provider: str = "", code: str = "llm_unavailable"):
        super().__init__(message)
        self.provider = provider
        self.code = code


class ProviderNotConfiguredError(ProviderError):
    def __init__(self, provider: str, env_var: str):
        super().__init__(f"{env_var} is missing", provider=provider, code="provider_not_configured")
        self.env_var = env_var


class UnsupportedProviderError(ValueError):
    pass


class ServiceNotConfiguredError(RuntimeError):
    """An optional third-party integration (search, email, GPTZero) has no credentials."""
