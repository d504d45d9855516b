from __future__ import annotations

from pydantic import BaseModel, Field


class SearchRequest(BaseModel):
    query: str = Field(min_length=1, max_length=500)
    num_results: int = Field(default=5, ge=1, le=10)
    prefetch: bool = False


class SearchResult(BaseModel):
    title: str
    link: str
    snippet: str = ""


class FetchUrlRequest(BaseModel):
    url: str = Field(min_length=4, max_length=2048)


class FetchUrlResponse(BaseModel):
    success: bool
    url: str
    title: str = ""
    content: str
    characters: int = Field(ge=0)
    truncated: bool = False


class SearchResponse(BaseModel):
    success: bool
    results: list[SearchResult] = Field(default_factory=list)
    pages: list[FetchUrlResponse] = Field(default_factory=list)


class ExtractTextResponse(BaseModel):
    filename: str
    extension: str
    text: str
    characters: int = Field(ge=0)
    word_count: int = Field(ge=0)


class ShareRequest(BaseModel):
    recipient_email: str = Field(min_length=5, max_length=320, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    subject: str = Field(default="Cognitive profile report", max_length=200)
    content: str = Field(min_length=1, max_length=200000)
    sender_name: str | None = Field(default=None, max_length=120)


class ShareResponse(BaseModel):
    success: bool
    message: str
