from __future__ import annotations

import re
import uuid

from profiler.ai.factory import get_ai_client, normalize_provider
from profiler.analytics import db as analytics_db
from profiler.core.scoring_config import get_scoring_value
from profiler.parsing.response_parser import (
    clamp_score,
    clean_markdown,
    extract_intelligence_score,
    parse_profile_response,
)
from profiler.prompts.profile import build_comparison_messages, build_profile_messages
from profiler.schemas.analysis import AnalysisResponse, ComparisonResponse, DocumentScore
from profiler.scoring.heuristics import apply_overrides
from profiler.services.activity import complete_logged, safe_record

_TEXT_A_SCORE = re.compile(r"Text\s+A\s+Score:\s*(\d+)\s*/\s*100", re.IGNORECASE)
_TEXT_B_SCORE = re.compile(r"Text\s+B\s+Score:\s*(\d+)\s*/\s*100", re.IGNORECASE)
_TEXT_B_HEADER = re.compile(r"^\W*(?:TEXT|DOCUMENT)\s+B\b", re.IGNORECASE | re.MULTILINE)
_COMPARE_HEADER = re.compile(r"^\W*(?:COMPARISON|COMPARING|COMPARE)\b", re.IGNORECASE | re.MULTILINE)


async def analyze_document(text: str, provider: str | None = None) -> AnalysisResponse:
    name = normalize_provider(provider)
    client = get_ai_client(name)
    raw = await complete_logged(client, build_profile_messages(text), activity_type="analyze")

    parsed = parse_profile_response(raw, name, text)
    safe_record(
        analytics_db.log_analysis,
        kind="profile",
        provider=name,
        text=text,
        overall_score=parsed.overall_score,
        override_applied=parsed.override_applied,
        result={"score_found": parsed.score_found, "red_flags": parsed.red_flags},
    )
    return AnalysisResponse(
        id=uuid.uuid4().hex,
        word_count=len(text.split()),
        **parsed.model_dump(),
    )


def split_comparison_sections(raw: str) -> tuple[str, str]:
    """Best-effort split of a comparison reply into the TEXT A and TEXT B profiles."""
    b_header = _TEXT_B_HEADER.search(raw)
    if not b_header:
        return raw, ""
    section_a = raw[: b_header.start()]
    rest = raw[b_header.start():]
    compare = _COMPARE_HEADER.search(rest)
    section_b = rest[: compare.start()] if compare else rest
    return section_a, section_b


def _section_score(raw: str, section: str, pattern: re.Pattern[str]) -> int | None:
    labelled = pattern.search(raw)
    if labelled:
        return int(labelled.group(1))
    return extract_intelligence_score(section)


def _document_score(score: int | None, original_text: str) -> DocumentScore:
    fallback = int(get_scoring_value("score.profile_fallback", 50))
    base = clamp_score(score if score is not None else fallback)
    override = apply_overrides(base, original_text)
    return DocumentScore(
        score=override.score,
        score_found=score is not None,
        red_flags=override.red_flags,
        override_applied=override.applied,
    )


def pick_winner(a: DocumentScore, b: DocumentScore) -> str:
    if not (a.score_found or a.override_applied) or not (b.score_found or b.override_applied):
        return "unknown"
    if a.score == b.score:
        return "tie"
    return "A" if a.score > b.score else "B"


async def compare_documents(text_a: str, text_b: str, provider: str | None = None) -> ComparisonResponse:
    name = normalize_provider(provider)
    client = get_ai_client(name)
    raw = await complete_logged(client, build_comparison_messages(text_a, text_b), activity_type="compare")

    section_a, section_b = split_comparison_sections(raw)
    score_a = _document_score(_section_score(raw, section_a, _TEXT_A_SCORE), text_a)
    score_b = _document_score(_section_score(raw, section_b, _TEXT_B_SCORE), text_b)
    winner = pick_winner(score_a, score_b)

    safe_record(
        analytics_db.log_comparison,
        provider=name,
        text_a=text_a,
        text_b=text_b,
        score_a=score_a.score,
        score_b=score_b.score,
        winner=winner,
    )
    return ComparisonResponse(
        provider=name,
        document_a=score_a,
        document_b=score_b,
        winner=winner,
        formatted_report=clean_markdown(raw),
        raw_report=raw,
    )
