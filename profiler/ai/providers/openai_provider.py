from __future__ import annotations

import logging
from typing import Sequence

from openai import AsyncOpenAI, OpenAIError

from profiler.ai.config import AIConfig, provider_api_key
from profiler.ai.types import ChatMessage
from profiler.core.errors import ProviderError, ProviderNotConfiguredError

logger = logging.getLogger(__name__)


class OpenAIProvider:
    """Chat-completions adapter. Perplexity and DeepSeek reuse it with their own base URLs."""

    provider = "openai"

    def __init__(self, cfg: AIConfig, api_key: str | None = None):
        self._model = cfg.model
        self._temperature = cfg.temperature
        self._max_tokens = cfg.max_tokens
        self.provider = cfg.provider
        key = (api_key or provider_api_key(cfg)).strip()
        if not key:
            raise ProviderNotConfiguredError(cfg.provider, cfg.api_key_env)

        self._client = AsyncOpenAI(
            api_key=key,
            base_url=cfg.base_url or None,
            timeout=cfg.timeout_s,
            max_retries=cfg.max_retries,
        )

    async def complete(self, messages: Sequence[ChatMessage]) -> str:
        payload = [{"role": m.role, "content": m.content} for m in messages]
        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=payload,
                temperature=self._temperature,
                max_tokens=self._max_tokens,
            )
        except OpenAIError as exc:
            logger.warning("llm_request_failed provider=%s model=%s: %s", self.provider, self._model, exc)
            raise ProviderError(str(exc), provider=self.provider) from exc

        if not response.choices:
            raise ProviderError("Empty response from provider.", provider=self.provider, code="empty_response")
        return response.choices[0].message.content or ""
