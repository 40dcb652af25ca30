"""Recommender port — abstract interface for the discovery engine."""

import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass, field


class FallbackTag(str, enum.Enum):
    """Which fallback policy produced a recommendation."""

    COLD_START_POPULARITY = "cold_start_popularity"
    CATEGORY_POPULARITY = "dewey_category_popularity"


@dataclass
class Recommendation:
    """A single ranked book recommendation."""

    book_id: str
    title: str
    author: str
    category_code: str
    score: float
    contributing_peers: list[str] = field(default_factory=list)
    fallback: FallbackTag | None = None


@dataclass
class CategoryShare:
    """One line of a reading profile breakdown."""

    category: str
    category_code: str
    count: int
    percentage: str


@dataclass
class ReadingProfile:
    """A reader's borrowing history broken down by subject category."""

    reader_id: str
    reader_name: str
    total_books: int
    breakdown: list[CategoryShare]
    summary: str


class RecommenderPort(ABC):
    """Abstraction for the book discovery engine."""

    @abstractmethod
    async def recommend(
        self,
        reader_id: str,
        limit: int | None = None,
        min_score: float | None = None,
    ) -> list[Recommendation]:
        """Return ranked book recommendations for a reader."""
        ...

    @abstractmethod
    async def reading_profile(self, reader_id: str) -> ReadingProfile:
        """Return the reader's category breakdown."""
        ...
