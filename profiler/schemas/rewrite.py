from __future__ import annotations

from pydantic import BaseModel, Field

from profiler.schemas.analysis import MAX_TEXT_CHARS


class RewriteOptions(BaseModel):
    preserve_length: bool = False
    preserve_depth: bool = True


class RewriteRequest(BaseModel):
    original_text: str = Field(min_length=1, max_length=MAX_TEXT_CHARS)
    instructions: str = Field(min_length=1, max_length=10000)
    provider: str | None = Field(default=None, max_length=40)
    options: RewriteOptions = Field(default_factory=RewriteOptions)


class RewriteStats(BaseModel):
    original_length: int = Field(ge=0)
    rewritten_length: int = Field(ge=0)
    length_change: float
    original_words: int = Field(ge=0)
    rewritten_words: int = Field(ge=0)
    instructions_followed: str


class RewriteResponse(BaseModel):
    provider: str
    content: str
    explanation: str
    stats: RewriteStats


class TranslateRequest(BaseModel):
    text: str = Field(min_length=1, max_length=MAX_TEXT_CHARS)
    target_language: str = Field(min_length=2, max_length=60)
    provider: str | None = Field(default=None, max_length=40)
    preserve_formatting: bool = True
    preserve_tone: bool = True


class TranslateResponse(BaseModel):
    provider: str
    target_language: str
    translated_text: str


class DetectionRequest(BaseModel):
    content: str = Field(min_length=1, max_length=MAX_TEXT_CHARS)
    provider: str | None = Field(default=None, max_length=40)


class DetectionResponse(BaseModel):
    source: str
    probability: int = Field(ge=0, le=100)
    is_ai: bool
    explanation: str = ""
