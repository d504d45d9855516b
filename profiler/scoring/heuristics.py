from __future__ import annotations

import json
import logging

from profiler.core.scoring_config import get_scoring_value
from profiler.parsing.models import ScoreOverride

logger = logging.getLogger(__name__)

PSEUDO_INTELLECTUAL_BANNER = (
    "⚠️ PSEUDO-INTELLECTUAL PROSE DETECTED ⚠️\n\n"
    "This text contains academic jargon without logical structure. "
    "Score overridden to {score}/100.\n\n"
    "Original Analysis:"
)


def _red_flag_phrases() -> list[str]:
    phrases = get_scoring_value("pseudo_intellectual.red_flags", []) or []
    return [str(phrase).strip().lower() for phrase in phrases if str(phrase).strip()]


def detect_pseudo_intellectual(text: str) -> list[str]:
    """Return the red-flag phrases found in ``text`` (case-insensitive substring match)."""
    if not text:
        return []
    lowered = text.lower()
    return [phrase for phrase in _red_flag_phrases() if phrase in lowered]


def matches_garbage_abstract(text: str) -> bool:
    if not text:
        return False
    lowered = text.lower()
    groups = get_scoring_value("garbage_abstract.phrase_groups", []) or []
    for group in groups:
        phrases = [str(p).lower() for p in (group or []) if str(p).strip()]
        if phrases and all(phrase in lowered for phrase in phrases):
            return True
    return False


def apply_overrides(score: int, original_text: str) -> ScoreOverride:
    red_flags = detect_pseudo_intellectual(original_text)

    if get_scoring_value("pseudo_intellectual.enabled", True):
        threshold = int(get_scoring_value("pseudo_intellectual.threshold", 3))
        if len(red_flags) >= threshold:
            forced = int(get_scoring_value("pseudo_intellectual.override_score", 35))
            logger.info(
                json.dumps(
                    {
                        "event": "score_override",
                        "rule": "pseudo_intellectual",
                        "original_score": score,
                        "score": forced,
                        "red_flag_count": len(red_flags),
                    }
                )
            )
            return ScoreOverride(
                score=forced,
                original_score=score,
                red_flags=red_flags,
                rule="pseudo_intellectual",
                banner=PSEUDO_INTELLECTUAL_BANNER.format(score=forced),
            )

    if get_scoring_value("garbage_abstract.enabled", True) and matches_garbage_abstract(original_text):
        cap = int(get_scoring_value("garbage_abstract.cap", 40))
        if score > cap:
            logger.info(
                json.dumps(
                    {
                        "event": "score_override",
                        "rule": "garbage_abstract",
                        "original_score": score,
                        "score": cap,
                    }
                )
            )
            return ScoreOverride(score=cap, original_score=score, red_flags=red_flags, rule="garbage_abstract")

    return ScoreOverride(score=score, original_score=score, red_flags=red_flags)
