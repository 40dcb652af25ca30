"""Recommendation & reading-profile routes."""

import re

from fastapi import APIRouter, Depends, HTTPException, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.adapters.library.sql import SqlLibraryAdapter
from app.api.schemas import (
    BreakdownItem,
    ReadingProfileResponse,
    RecommendationItem,
    RecommendationsResponse,
)
from app.config import settings
from app.database import get_session
from app.ports.recommender import FallbackTag, Recommendation
from app.services.discovery import DiscoveryService

router = APIRouter(prefix="/api/v1", tags=["Discovery"])

_READER_ID = re.compile(settings.reader_id_pattern)


def get_discovery_service(
    session: AsyncSession = Depends(get_session),
) -> DiscoveryService:
    """Build a request-scoped discovery service over the SQL store."""
    return DiscoveryService(
        SqlLibraryAdapter(session),
        min_similarity=settings.min_similarity,
        max_peers=settings.max_peers,
        default_limit=settings.default_limit,
        max_limit=settings.max_limit,
    )


def valid_reader_id(reader_id: str = Path(...)) -> str:
    if not _READER_ID.match(reader_id):
        raise HTTPException(
            status_code=400,
            detail=f'Invalid reader id format. Expected e.g. U001, got "{reader_id}"',
        )
    return reader_id


def _reason(rec: Recommendation) -> str:
    if rec.fallback is FallbackTag.COLD_START_POPULARITY:
        return "Trending in the library: popular with all readers right now"
    if rec.fallback is FallbackTag.CATEGORY_POPULARITY:
        return "Popular in subjects you already enjoy reading"
    peers = len(rec.contributing_peers)
    return (
        "Readers with similar tastes also enjoyed this book "
        f"(matched by {peers} peer reader{'s' if peers != 1 else ''})"
    )


@router.get("/recommend/{reader_id}", response_model=RecommendationsResponse)
async def get_recommendations(
    reader_id: str = Depends(valid_reader_id),
    limit: int = Query(settings.default_limit, ge=1, le=settings.max_limit),
    min_score: float = Query(settings.min_similarity, ge=0.0, le=1.0),
    service: DiscoveryService = Depends(get_discovery_service),
) -> RecommendationsResponse:
    """Top book recommendations ranked by peer similarity."""
    results = await service.recommend(reader_id, limit=limit, min_score=min_score)

    items = [
        RecommendationItem(
            rank=index,
            book_id=rec.book_id,
            title=rec.title,
            author=rec.author,
            dewey_decimal=rec.category_code,
            match_score=rec.score,
            recommended_by=rec.contributing_peers,
            fallback=rec.fallback.value if rec.fallback else None,
            reason=_reason(rec),
        )
        for index, rec in enumerate(results, start=1)
    ]
    return RecommendationsResponse(reader_id=reader_id, count=len(items), recommendations=items)


@router.get("/patterns/{reader_id}", response_model=ReadingProfileResponse)
async def get_reading_profile(
    reader_id: str = Depends(valid_reader_id),
    service: DiscoveryService = Depends(get_discovery_service),
) -> ReadingProfileResponse:
    """Percentage breakdown of a reader's history by Dewey category."""
    profile = await service.reading_profile(reader_id)
    if profile.total_books == 0:
        raise HTTPException(
            status_code=404,
            detail=f'No reading history found for reader "{reader_id}"',
        )

    return ReadingProfileResponse(
        reader_id=profile.reader_id,
        name=profile.reader_name,
        total_books=profile.total_books,
        summary=profile.summary,
        breakdown=[
            BreakdownItem(
                category=share.category,
                dewey=share.category_code,
                count=share.count,
                percentage=share.percentage,
            )
            for share in profile.breakdown
        ],
    )
