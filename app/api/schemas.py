"""Pydantic response schemas for the discovery API."""

from pydantic import BaseModel


class RecommendationItem(BaseModel):
    rank: int
    book_id: str
    title: str
    author: str
    dewey_decimal: str
    match_score: float
    recommended_by: list[str]
    fallback: str | None = None
    reason: str


class RecommendationsResponse(BaseModel):
    success: bool = True
    reader_id: str
    count: int
    recommendations: list[RecommendationItem]


class BreakdownItem(BaseModel):
    category: str
    dewey: str
    count: int
    percentage: str


class ReadingProfileResponse(BaseModel):
    success: bool = True
    reader_id: str
    name: str
    total_books: int
    summary: str
    breakdown: list[BreakdownItem]
