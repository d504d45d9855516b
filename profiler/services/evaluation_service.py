from __future__ import annotations

import asyncio
import json
import logging

from profiler.ai.factory import get_ai_client, normalize_provider
from profiler.ai.types import AIClient
from profiler.analytics import db as analytics_db
from profiler.core.config import settings
from profiler.core.errors import ProviderError
from profiler.core.scoring_config import get_scoring_value
from profiler.parsing.response_parser import clamp_score, clean_markdown, extract_evaluation_score
from profiler.prompts.evaluation import (
    build_consistency_messages,
    build_dual_comparison_messages,
    build_phase1_messages,
    build_pushback_messages,
    get_questions,
)
from profiler.schemas.evaluation import (
    ChunkScore,
    DualEvaluationResponse,
    EvaluationResponse,
    PhaseResult,
)
from profiler.services.activity import complete_logged, safe_record

logger = logging.getLogger(__name__)


def _title(mode: str) -> str:
    return mode.replace("_", " ").upper()


def split_into_chunks(text: str, chunk_words: int) -> list[str]:
    words = text.split()
    size = max(1, int(chunk_words))
    return [" ".join(words[i:i + size]) for i in range(0, len(words), size)]


async def _run_phases(client: AIClient, text: str, mode: str, comprehensive: bool) -> list[PhaseResult]:
    phase1 = await complete_logged(client, build_phase1_messages(text, mode), activity_type="evaluate_phase1")
    phases = [PhaseResult(phase=1, score=extract_evaluation_score(phase1), response=phase1)]
    if not comprehensive:
        return phases

    threshold = int(get_scoring_value("evaluation.pushback_threshold", 95))
    if phases[0].score < threshold:
        phase2 = await complete_logged(
            client,
            build_pushback_messages(text, mode, phases[0].score),
            activity_type="evaluate_phase2",
        )
        phases.append(
            PhaseResult(phase=2, score=extract_evaluation_score(phase2, fallback=phases[0].score), response=phase2)
        )

    current = max(p.score for p in phases)
    phase3 = await complete_logged(
        client,
        build_consistency_messages(text, current),
        activity_type="evaluate_phase3",
    )
    phases.append(PhaseResult(phase=3, score=extract_evaluation_score(phase3, fallback=current), response=phase3))
    return phases


def _single_report(mode: str, comprehensive: bool, phases: list[PhaseResult], final_score: int) -> str:
    if not comprehensive:
        return (
            f"QUICK {_title(mode)} EVALUATION\n\n"
            f"{clean_markdown(phases[0].response)}\n\n"
            f"Final Score: {final_score}/100"
        )

    parts = [f"COMPREHENSIVE {_title(mode)} EVALUATION"]
    for phase in phases:
        parts.append(f"PHASE {phase.phase} (Score: {phase.score}/100)\n{clean_markdown(phase.response)}")
    parts.append(f"Final Score: {final_score}/100")
    return "\n\n".join(parts)


def _chunked_report(mode: str, chunks: list[ChunkScore], failed: list[int], final_score: int) -> str:
    scores = [c.score for c in chunks]
    lines = [f"CHUNKED {_title(mode)} EVALUATION ({len(chunks) + len(failed)} chunks)", ""]
    for chunk in chunks:
        lines.append(f"Chunk {chunk.index} ({chunk.word_count} words): {chunk.score}/100")
    for index in failed:
        lines.append(f"Chunk {index}: evaluation failed, excluded from the average")
    lines.append("")
    lines.append(f"Range: {min(scores)}-{max(scores)}")
    lines.append(f"Final Score: {final_score}/100")
    return "\n".join(lines)


async def _evaluate_chunked(
    client: AIClient, text: str, mode: str, comprehensive: bool
) -> EvaluationResponse:
    pieces = split_into_chunks(text, settings.evaluation_chunk_words)
    chunks: list[ChunkScore] = []
    failed: list[int] = []

    for index, piece in enumerate(pieces, start=1):
        if index > 1 and settings.evaluation_chunk_delay_s > 0:
            await asyncio.sleep(settings.evaluation_chunk_delay_s)
        try:
            phases = await _run_phases(client, piece, mode, comprehensive)
        except ProviderError as exc:
            logger.warning(
                json.dumps({"event": "evaluation_chunk_failed", "chunk": index, "code": exc.code})
            )
            failed.append(index)
            continue
        score = max(p.score for p in phases) if comprehensive else phases[0].score
        chunks.append(ChunkScore(index=index, word_count=len(piece.split()), score=score))

    if not chunks:
        raise ProviderError(
            "Every chunk of the document failed to evaluate.",
            provider=client.provider,
            code="evaluation_failed",
        )

    final_score = clamp_score(sum(c.score for c in chunks) / len(chunks))
    return EvaluationResponse(
        provider=client.provider,
        mode=mode,
        comprehensive=comprehensive,
        final_score=final_score,
        report=_chunked_report(mode, chunks, failed, final_score),
        chunks=chunks,
        failed_chunks=failed,
    )


async def _evaluate_with_client(
    client: AIClient, text: str, mode: str, comprehensive: bool
) -> EvaluationResponse:
    if len(text.split()) > settings.evaluation_chunk_threshold_words:
        return await _evaluate_chunked(client, text, mode, comprehensive)

    phases = await _run_phases(client, text, mode, comprehensive)
    final_score = max(p.score for p in phases) if comprehensive else phases[0].score
    return EvaluationResponse(
        provider=client.provider,
        mode=mode,
        comprehensive=comprehensive,
        final_score=final_score,
        report=_single_report(mode, comprehensive, phases, final_score),
        phases=phases,
    )


async def evaluate_document(
    text: str,
    provider: str | None = None,
    mode: str = "originality",
    comprehensive: bool = False,
) -> EvaluationResponse:
    get_questions(mode)  # unknown modes fail before any provider call
    client = get_ai_client(normalize_provider(provider))
    result = await _evaluate_with_client(client, text, mode, comprehensive)
    safe_record(
        analytics_db.log_analysis,
        kind=f"evaluation:{mode}",
        provider=result.provider,
        text=text,
        overall_score=result.final_score,
        result={"comprehensive": comprehensive, "chunks": len(result.chunks), "failed": result.failed_chunks},
    )
    return result


def _winner(score_a: int, score_b: int) -> str:
    if score_a == score_b:
        return "tie"
    return "A" if score_a > score_b else "B"


async def evaluate_dual(
    text_a: str,
    text_b: str,
    provider: str | None = None,
    mode: str = "originality",
    comprehensive: bool = False,
) -> DualEvaluationResponse:
    get_questions(mode)
    client = get_ai_client(normalize_provider(provider))
    result_a = await _evaluate_with_client(client, text_a, mode, comprehensive)
    result_b = await _evaluate_with_client(client, text_b, mode, comprehensive)

    comparison = await complete_logged(
        client,
        build_dual_comparison_messages(mode, result_a.final_score, result_b.final_score),
        activity_type="evaluate_dual",
    )
    winner = _winner(result_a.final_score, result_b.final_score)
    if winner == "tie":
        judgment = "Both documents demonstrate equal performance."
    else:
        judgment = f"Document {winner} demonstrates superior {mode.replace('_', ' ')}."

    report = (
        f"DUAL {_title(mode)} COMPARISON\n\n"
        f"Document A Score: {result_a.final_score}/100\n"
        f"Document B Score: {result_b.final_score}/100\n\n"
        f"{clean_markdown(comparison)}\n\n"
        f"Final Judgment: {judgment}"
    )
    safe_record(
        analytics_db.log_comparison,
        provider=client.provider,
        text_a=text_a,
        text_b=text_b,
        score_a=result_a.final_score,
        score_b=result_b.final_score,
        winner=winner,
    )
    return DualEvaluationResponse(
        provider=client.provider,
        mode=mode,
        document_a=result_a,
        document_b=result_b,
        comparison=report,
        winner=winner,
    )
