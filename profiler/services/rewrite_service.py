from __future__ import annotations

import re

from profiler.ai.factory import get_ai_client, normalize_provider
from profiler.analytics import db as analytics_db
from profiler.prompts.rewrite import build_rewrite_messages, build_translation_messages
from profiler.schemas.rewrite import RewriteOptions, RewriteResponse, RewriteStats, TranslateResponse
from profiler.services.activity import complete_logged, safe_record

_REWRITTEN_HEADER = re.compile(r"^[^\w\n]*REWRITTEN\s+TEXT[^\w\n]*", re.IGNORECASE | re.MULTILINE)
_EXPLANATION_HEADER = re.compile(r"^[^\w\n]*EXPLANATION[^\w\n]*", re.IGNORECASE | re.MULTILINE)


def split_rewrite_response(raw: str) -> tuple[str, str]:
    """Split a reply into (rewritten text, explanation); unlabelled replies are all content."""
    text = (raw or "").strip()
    start = _REWRITTEN_HEADER.search(text)
    body = text[start.end():] if start else text

    explanation_header = _EXPLANATION_HEADER.search(body)
    if not explanation_header:
        return body.strip(), ""
    content = body[: explanation_header.start()].strip()
    explanation = body[explanation_header.end():].strip()
    return content, explanation


def rewrite_stats(original: str, rewritten: str, instructions: str) -> RewriteStats:
    original_length = len(original)
    rewritten_length = len(rewritten)
    change = ((rewritten_length - original_length) / original_length * 100) if original_length else 0.0
    return RewriteStats(
        original_length=original_length,
        rewritten_length=rewritten_length,
        length_change=round(change, 1),
        original_words=len(original.split()),
        rewritten_words=len(rewritten.split()),
        instructions_followed=instructions,
    )


async def rewrite_document(
    text: str,
    instructions: str,
    provider: str | None = None,
    options: RewriteOptions | None = None,
) -> RewriteResponse:
    opts = options or RewriteOptions()
    name = normalize_provider(provider)
    client = get_ai_client(name)
    messages = build_rewrite_messages(
        text,
        instructions,
        preserve_length=opts.preserve_length,
        preserve_depth=opts.preserve_depth,
    )
    raw = await complete_logged(client, messages, activity_type="rewrite")
    content, explanation = split_rewrite_response(raw)
    if not content:
        raise ValueError("The provider returned an empty rewrite.")

    stats = rewrite_stats(text, content, instructions)
    safe_record(
        analytics_db.log_rewrite,
        provider=name,
        text=text,
        original_length=stats.original_length,
        rewritten_length=stats.rewritten_length,
        instructions=instructions,
    )
    return RewriteResponse(provider=name, content=content, explanation=explanation, stats=stats)


async def translate_document(
    text: str,
    target_language: str,
    provider: str | None = None,
    *,
    preserve_formatting: bool = True,
    preserve_tone: bool = True,
) -> TranslateResponse:
    name = normalize_provider(provider)
    client = get_ai_client(name)
    messages = build_translation_messages(
        text,
        target_language,
        preserve_formatting=preserve_formatting,
        preserve_tone=preserve_tone,
    )
    translated = await complete_logged(client, messages, activity_type="translate")
    return TranslateResponse(provider=name, target_language=target_language, translated_text=translated.strip())
