from __future__ import annotations

import logging
from typing import Sequence

from anthropic import AnthropicError, AsyncAnthropic

from profiler.ai.config import AIConfig, provider_api_key
from profiler.ai.types import ChatMessage
from profiler.core.errors import ProviderError, ProviderNotConfiguredError

logger = logging.getLogger(__name__)


class ClaudeProvider:
    provider = "anthropic"

    def __init__(self, cfg: AIConfig, api_key: str | None = None):
        self._model = cfg.model
        self._temperature = cfg.temperature
        self._max_tokens = cfg.max_tokens
        key = (api_key or provider_api_key(cfg)).strip()
        if not key:
            raise ProviderNotConfiguredError(self.provider, cfg.api_key_env)

        self._client = AsyncAnthropic(
            api_key=key,
            timeout=cfg.timeout_s,
            max_retries=cfg.max_retries,
        )

    async def complete(self, messages: Sequence[ChatMessage]) -> str:
        # Anthropic takes the system prompt as a separate argument.
        system = "\n\n".join(m.content for m in messages if m.role == "system")
        payload = [{"role": m.role, "content": m.content} for m in messages if m.role != "system"]

        create_kwargs = {
            "model": self._model,
            "max_tokens": self._max_tokens,
            "temperature": self._temperature,
            "messages": payload,
        }
        if system:
            create_kwargs["system"] = system

        try:
            response = await self._client.messages.create(**create_kwargs)
        except AnthropicError as exc:
            logger.warning("llm_request_failed provider=%s model=%s: %s", self.provider, self._model, exc)
            raise ProviderError(str(exc), provider=self.provider) from exc

        return "".join(
            getattr(block, "text", "") for block in response.content if getattr(block, "type", "") == "text"
        )
