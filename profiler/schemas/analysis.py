from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from profiler.core.config import settings

MAX_TEXT_CHARS = settings.max_document_chars

Winner = Literal["A", "B", "tie", "unknown"]


class AnalyzeRequest(BaseModel):
    content: str = Field(min_length=1, max_length=MAX_TEXT_CHARS)
    provider: str | None = Field(default=None, max_length=40)


class AnalysisResponse(BaseModel):
    id: str
    provider: str
    overall_score: int = Field(ge=0, le=100)
    score_found: bool
    formatted_report: str
    raw_report: str
    summary: str | None = None
    highlights: list[str] = Field(default_factory=list)
    verdict: str | None = None
    red_flags: list[str] = Field(default_factory=list)
    override_applied: bool = False
    word_count: int = Field(ge=0)


class CompareRequest(BaseModel):
    document_a: str = Field(min_length=1, max_length=MAX_TEXT_CHARS)
    document_b: str = Field(min_length=1, max_length=MAX_TEXT_CHARS)
    provider: str | None = Field(default=None, max_length=40)


class DocumentScore(BaseModel):
    score: int = Field(ge=0, le=100)
    score_found: bool
    red_flags: list[str] = Field(default_factory=list)
    override_applied: bool = False


class ComparisonResponse(BaseModel):
    provider: str
    document_a: DocumentScore
    document_b: DocumentScore
    winner: Winner
    formatted_report: str
    raw_report: str
