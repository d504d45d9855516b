from __future__ import annotations

from pydantic import BaseModel, Field

from profiler.prompts.evaluation import EvaluationMode
from profiler.schemas.analysis import MAX_TEXT_CHARS, Winner


class EvaluateRequest(BaseModel):
    content: str = Field(min_length=1, max_length=MAX_TEXT_CHARS)
    provider: str | None = Field(default=None, max_length=40)
    mode: EvaluationMode = "originality"
    comprehensive: bool = False


class PhaseResult(BaseModel):
    phase: int = Field(ge=1, le=3)
    score: int = Field(ge=0, le=100)
    response: str


class ChunkScore(BaseModel):
    index: int = Field(ge=1)
    word_count: int = Field(ge=0)
    score: int = Field(ge=0, le=100)


class EvaluationResponse(BaseModel):
    provider: str
    mode: EvaluationMode
    comprehensive: bool
    final_score: int = Field(ge=0, le=100)
    report: str
    phases: list[PhaseResult] = Field(default_factory=list)
    chunks: list[ChunkScore] = Field(default_factory=list)
    failed_chunks: list[int] = Field(default_factory=list)


class DualEvaluateRequest(BaseModel):
    document_a: str = Field(min_length=1, max_length=MAX_TEXT_CHARS)
    document_b: str = Field(min_length=1, max_length=MAX_TEXT_CHARS)
    provider: str | None = Field(default=None, max_length=40)
    mode: EvaluationMode = "originality"
    comprehensive: bool = False


class DualEvaluationResponse(BaseModel):
    provider: str
    mode: EvaluationMode
    document_a: EvaluationResponse
    document_b: EvaluationResponse
    comparison: str
    winner: Winner
