from __future__ import annotations

import math
import re

from profiler.core.scoring_config import get_scoring_value
from profiler.parsing.models import ParsedProfile
from profiler.scoring.heuristics import apply_overrides

# Order matters: the first pattern yielding a value in range wins.
_INTELLIGENCE_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"Final\s+Intelligence\s+Score:\s*(\d+)\s*/\s*100", re.IGNORECASE),
    re.compile(r"Estimated\s+Intelligence\s+Score:\s*(\d+)\s*/\s*100", re.IGNORECASE),
    re.compile(r"Intelligence\s+Score:\s*(\d+)\s*/\s*100", re.IGNORECASE),
    re.compile(r"Overall\s+Score:\s*(\d+)\s*/\s*100", re.IGNORECASE),
    re.compile(r"Score:\s*(\d+)\s*/\s*100", re.IGNORECASE),
    re.compile(r"(\d+)\s*/\s*100\s*-\s*Intelligence", re.IGNORECASE),
    re.compile(r"Assessment:\s*(\d+)\s*(?:out\s+of|/)\s*100", re.IGNORECASE),
    re.compile(r"Intelligence\s+Level:\s*(\d+)", re.IGNORECASE),
    re.compile(r"Cognitive\s+Score:\s*(\d+)", re.IGNORECASE),
    re.compile(r"Author\s+outperforms\s*(\d+)\s*%", re.IGNORECASE),
)

_CONTEXTUAL_SCORE = re.compile(
    r"(?:intelligence|cognitive|score|assessment)[^\n]*?(\d{1,3})\s*(?:/\s*100|out\s+of\s+100)",
    re.IGNORECASE,
)

_FINAL_SCORE = re.compile(r"Final\s+Score:\s*(\d+(?:\.\d+)?)\s*/\s*100", re.IGNORECASE)
_QUESTION_SCORE = re.compile(r"Score:\s*(\d+(?:\.\d+)?)\s*/\s*100", re.IGNORECASE)
_ANY_SCORE = re.compile(r"(\d+(?:\.\d+)?)\s*/\s*100")

_BULLET = re.compile(r"^(\s*)[*\-+]\s+", re.MULTILINE)
_HEADING = re.compile(r"^\s*#{1,6}\s*", re.MULTILINE)
_BOLD = re.compile(r"(\*\*|__)(.+?)\1", re.DOTALL)
_ITALIC = re.compile(r"(?<![\w*])\*(?!\s)(.+?)(?<!\s)\*(?![\w*])")
_CODE_FENCE = re.compile(r"^```[^\n]*\n?", re.MULTILINE)
_INLINE_CODE = re.compile(r"`([^`]*)`")
_EXTRA_NEWLINES = re.compile(r"\n{3,}")

_SUMMARY_LINE = re.compile(r"^\s*Summary:\s*(.+)$", re.IGNORECASE | re.MULTILINE)
_VERDICT_LINE = re.compile(r"^\s*(?:Final\s+)?Verdict:\s*(.+)$", re.IGNORECASE | re.MULTILINE)
_HIGHLIGHT_MARK = "✓"


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def clamp_score(value: float | int | None) -> int:
    """Round and clamp into [score.min, score.max]; NaN and None become the minimum."""
    low = int(get_scoring_value("score.min", 0))
    high = int(get_scoring_value("score.max", 100))
    if value is None:
        return low
    try:
        number = float(value)
    except (TypeError, ValueError):
        return low
    if math.isnan(number):
        return low
    if math.isinf(number):
        return high if number > 0 else low
    return max(low, min(high, _round_half_up(number)))


def extract_intelligence_score(text: str) -> int | None:
    if not text:
        return None

    for pattern in _INTELLIGENCE_PATTERNS:
        match = pattern.search(text)
        if not match:
            continue
        score = int(match.group(1))
        if 0 <= score <= 100:
            return score

    match = _CONTEXTUAL_SCORE.search(text)
    if match:
        score = int(match.group(1))
        if 0 <= score <= 100:
            return score
    return None


def extract_evaluation_score(text: str, fallback: int | None = None) -> int:
    if fallback is None:
        fallback = int(get_scoring_value("score.evaluation_fallback", 75))
    if not text:
        return clamp_score(fallback)

    final = _FINAL_SCORE.search(text)
    if final:
        return clamp_score(float(final.group(1)))

    question_scores = [float(value) for value in _QUESTION_SCORE.findall(text)]
    if question_scores:
        return clamp_score(sum(question_scores) / len(question_scores))

    all_scores = [float(value) for value in _ANY_SCORE.findall(text)]
    if len(all_scores) > 1:
        return clamp_score(sum(all_scores) / len(all_scores))

    return clamp_score(fallback)


def clean_markdown(text: str) -> str:
    if not text:
        return ""
    cleaned = text.replace("\r\n", "\n")
    cleaned = _CODE_FENCE.sub("", cleaned)
    cleaned = _BULLET.sub(lambda m: f"{m.group(1)}• ", cleaned)
    cleaned = _HEADING.sub("", cleaned)
    cleaned = _BOLD.sub(r"\2", cleaned)
    cleaned = _ITALIC.sub(r"\1", cleaned)
    cleaned = _INLINE_CODE.sub(r"\1", cleaned)
    cleaned = _EXTRA_NEWLINES.sub("\n\n", cleaned)
    return cleaned.strip()


def extract_summary(text: str) -> str | None:
    match = _SUMMARY_LINE.search(text or "")
    if not match:
        return None
    return match.group(1).strip() or None


def extract_verdict(text: str) -> str | None:
    matches = _VERDICT_LINE.findall(text or "")
    if not matches:
        return None
    # The closing verdict is the one that counts.
    return matches[-1].strip() or None


def extract_highlights(text: str) -> list[str]:
    highlights: list[str] = []
    for line in (text or "").splitlines():
        stripped = line.strip().lstrip("•").strip()
        if stripped.startswith(_HIGHLIGHT_MARK):
            item = stripped[len(_HIGHLIGHT_MARK):].strip()
            if item:
                highlights.append(item)
    return highlights


def parse_profile_response(raw: str, provider: str, original_text: str = "") -> ParsedProfile:
    """Turn a raw profiling reply into a scored report.

    The score comes from the raw reply, then heuristic overrides are applied
    against the author's text, not the model's answer.
    """
    score = extract_intelligence_score(raw)
    fallback = int(get_scoring_value("score.profile_fallback", 50))
    base_score = clamp_score(score if score is not None else fallback)

    formatted = clean_markdown(raw)
    override = apply_overrides(base_score, original_text)
    if override.banner:
        formatted = f"{override.banner}\n\n{formatted}"

    return ParsedProfile(
        provider=provider,
        overall_score=override.score,
        score_found=score is not None,
        formatted_report=formatted,
        raw_report=raw,
        summary=extract_summary(formatted),
        highlights=extract_highlights(formatted),
        verdict=extract_verdict(formatted),
        red_flags=override.red_flags,
        override_applied=override.applied,
    )
