"""Pydantic schemas for trend search."""

from typing import Literal

from pydantic import BaseModel, Field


class TrendSearchRequest(BaseModel):
    query: str = Field(min_length=1, max_length=400)
    search_depth: Literal["basic", "advanced"] = "basic"
    max_results: int = Field(5, ge=1, le=20)


class SearchHit(BaseModel):
    title: str = ""
    url: str = ""
    content: str = ""
    score: float | None = None


class TrendSearchResult(BaseModel):
    answer: str | None = None
    results: list[SearchHit]
    query: str
    follow_up_questions: list[str]
