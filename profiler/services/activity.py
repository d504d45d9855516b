from __future__ import annotations

import json
import logging
import time
from typing import Any, Callable, Sequence

from profiler.ai.types import AIClient, ChatMessage
from profiler.analytics import db as analytics_db
from profiler.core.errors import ProviderError

logger = logging.getLogger(__name__)


def safe_record(fn: Callable[..., None], **kwargs: Any) -> None:
    """Write an activity row; storage trouble is logged and never reaches the caller."""
    try:
        fn(**kwargs)
    except Exception as exc:  # noqa: BLE001 - activity log must not break responses
        logger.debug(json.dumps({"event": "activity_log_failed", "fn": fn.__name__, "error": str(exc)}))


async def complete_logged(client: AIClient, messages: Sequence[ChatMessage], *, activity_type: str) -> str:
    started = time.perf_counter()
    try:
        text = await client.complete(messages)
    except ProviderError as exc:
        latency_ms = int((time.perf_counter() - started) * 1000)
        logger.exception(
            json.dumps(
                {
                    "event": "llm_call_failed",
                    "activity": activity_type,
                    "provider": client.provider,
                    "code": exc.code,
                    "latency_ms": latency_ms,
                }
            )
        )
        safe_record(
            analytics_db.log_activity,
            activity_type=activity_type,
            status="error",
            provider=client.provider,
            error_code=exc.code,
            latency_ms=latency_ms,
        )
        raise

    latency_ms = int((time.perf_counter() - started) * 1000)
    logger.info(
        json.dumps(
            {
                "event": "llm_call",
                "activity": activity_type,
                "provider": client.provider,
                "latency_ms": latency_ms,
                "response_chars": len(text or ""),
            }
        )
    )
    safe_record(
        analytics_db.log_activity,
        activity_type=activity_type,
        status="ok",
        provider=client.provider,
        latency_ms=latency_ms,
    )
    return text or ""
