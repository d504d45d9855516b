from __future__ import annotations

from pydantic import BaseModel, Field


class ParsedProfile(BaseModel):
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


class ScoreOverride(BaseModel):
    score: int = Field(ge=0, le=100)
    original_score: int
    red_flags: list[str] = Field(default_factory=list)
    rule: str | None = None
    banner: str | None = None

    @property
    def applied(self) -> bool:
        return self.rule is not None
