from __future__ import annotations

import json
import logging
import re

import httpx

from profiler.ai.factory import get_ai_client, normalize_provider
from profiler.core.config import settings
from profiler.core.errors import ProviderError
from profiler.core.scoring_config import get_scoring_value
from profiler.parsing.response_parser import clamp_score, clean_markdown
from profiler.prompts.profile import build_detection_messages
from profiler.schemas.rewrite import DetectionResponse
from profiler.services.activity import complete_logged

logger = logging.getLogger(__name__)

GPTZERO_URL = "https://api.gptzero.me/v2/predict/text"

_AI_PROBABILITY = re.compile(r"AI\s+Probability:\s*(\d+(?:\.\d+)?)\s*%", re.IGNORECASE)


def _is_ai(probability: int) -> bool:
    return probability >= int(get_scoring_value("detection.ai_probability_threshold", 50))


def extract_ai_probability(text: str) -> int | None:
    match = _AI_PROBABILITY.search(text or "")
    if not match:
        return None
    return clamp_score(float(match.group(1)))


async def _detect_with_gptzero(text: str) -> DetectionResponse:
    headers = {
        "X-Api-Key": settings.gptzero_api_key or "",
        "Content-Type": "application/json",
        "Accept": "application/json",
    }
    try:
        async with httpx.AsyncClient(timeout=30.0) as client:
            response = await client.post(GPTZERO_URL, headers=headers, json={"document": text, "truncation": True})
            response.raise_for_status()
            data = response.json()
    except (httpx.HTTPError, ValueError) as exc:
        logger.warning(json.dumps({"event": "gptzero_failed", "error": str(exc)}))
        raise ProviderError("AI detection service is unavailable.", provider="gptzero") from exc

    documents = data.get("documents") if isinstance(data, dict) else None
    if not documents or not isinstance(documents, list):
        raise ProviderError("AI detection returned no result.", provider="gptzero", code="empty_response")
    first = documents[0] if isinstance(documents[0], dict) else {}
    try:
        probability = clamp_score(float(first.get("completely_generated_prob")) * 100)
    except (TypeError, ValueError) as exc:
        raise ProviderError(
            "AI detection returned an unreadable result.", provider="gptzero", code="unparseable_response"
        ) from exc
    return DetectionResponse(
        source="gptzero",
        probability=probability,
        is_ai=_is_ai(probability),
        explanation=f"GPTZero estimates a {probability}% chance that this text is fully AI-generated.",
    )


async def _detect_with_llm(text: str, provider: str | None) -> DetectionResponse:
    name = normalize_provider(provider)
    client = get_ai_client(name)
    raw = await complete_logged(client, build_detection_messages(text), activity_type="check_ai")
    probability = extract_ai_probability(raw)
    if probability is None:
        raise ProviderError(
            "AI detection response did not contain a probability.",
            provider=name,
            code="unparseable_response",
        )
    return DetectionResponse(
        source=name,
        probability=probability,
        is_ai=_is_ai(probability),
        explanation=clean_markdown(raw),
    )


async def detect_ai_text(text: str, provider: str | None = None) -> DetectionResponse:
    if settings.gptzero_api_key:
        return await _detect_with_gptzero(text)
    return await _detect_with_llm(text, provider)
