"""
Discovery service — deterministic book recommendations by Jaccard similarity.

recommend():
  1. Load the target reader's read-set. Empty → global popularity fallback.
  2. Load every other reader's read-set.
  3. Score peers by Jaccard similarity and keep those above the threshold.
     None qualify → category popularity fallback.
  4. Pool unread books from the top peers, weighted by peer similarity.
  5. Enrich with catalogue metadata, rank and truncate.

reading_profile():
  Group the reader's history by Dewey code and express each category as a
  share of the total.
"""

import logging

from app.domain.candidates import Candidate, aggregate_candidates
from app.domain.dewey import classify
from app.domain.similarity import MIN_SIMILARITY, score_peers
from app.ports.library import LibraryDataPort
from app.ports.recommender import (
    CategoryShare,
    ReadingProfile,
    Recommendation,
    RecommenderPort,
)
from app.services import fallback

logger = logging.getLogger(__name__)

MAX_PEERS = 50
DEFAULT_LIMIT = 5
MAX_LIMIT = 10

SCORE_PRECISION = 4


class DiscoveryService(RecommenderPort):
    """Recommendations and reading profiles over a library data port."""

    def __init__(
        self,
        data: LibraryDataPort,
        *,
        min_similarity: float = MIN_SIMILARITY,
        max_peers: int = MAX_PEERS,
        default_limit: int = DEFAULT_LIMIT,
        max_limit: int = MAX_LIMIT,
    ) -> None:
        self._data = data
        self._min_similarity = min_similarity
        self._max_peers = max_peers
        self._default_limit = default_limit
        self._max_limit = max_limit

    async def recommend(
        self,
        reader_id: str,
        limit: int | None = None,
        min_score: float | None = None,
    ) -> list[Recommendation]:
        """
        Return up to ``limit`` recommendations for a reader.

        ``limit`` is capped at the configured maximum. Store failures
        propagate to the caller; no fallback is served in their place.
        """
        limit = self._default_limit if limit is None else limit
        min_score = self._min_similarity if min_score is None else min_score
        if limit < 1:
            raise ValueError(f"limit must be positive, got {limit}")
        if not 0.0 <= min_score <= 1.0:
            raise ValueError(f"min_score must be within [0, 1], got {min_score}")
        limit = min(limit, self._max_limit)

        target_books = await self._data.books_borrowed_by(reader_id)
        if not target_books:
            logger.info("Reader %s has no history; using cold-start fallback", reader_id)
            return await fallback.global_popularity(self._data, limit)

        peer_books = await self._data.all_other_readers_books(reader_id)
        if not peer_books:
            logger.info("No other readers have borrowed anything; nothing to recommend")
            return []

        peers = score_peers(target_books, peer_books, min_score)
        if not peers:
            logger.info(
                "No peers of %s reached similarity %.2f; using category fallback",
                reader_id,
                min_score,
            )
            return await fallback.category_popularity(self._data, target_books, limit)

        logger.info(
            "Reader %s: %d of %d peers qualified (using top %d)",
            reader_id,
            len(peers),
            len(peer_books),
            min(len(peers), self._max_peers),
        )
        candidates = aggregate_candidates(peers[: self._max_peers], target_books)
        logger.info("Reader %s: %d candidate books", reader_id, len(candidates))
        return await self._enrich_and_rank(candidates, limit)

    async def _enrich_and_rank(
        self, candidates: dict[str, Candidate], limit: int
    ) -> list[Recommendation]:
        if not candidates:
            return []

        books = await self._data.metadata_for(candidates.keys())
        results = []
        for book in books:
            candidate = candidates[book.book_id]
            results.append(
                Recommendation(
                    book_id=book.book_id,
                    title=book.title,
                    author=book.author,
                    category_code=book.category_code,
                    score=round(candidate.weighted_score, SCORE_PRECISION),
                    contributing_peers=list(candidate.contributing_peers),
                )
            )

        results.sort(key=lambda rec: (-rec.score, rec.title, rec.book_id))
        return results[:limit]

    async def reading_profile(self, reader_id: str) -> ReadingProfile:
        """
        Break a reader's history down by subject category.

        An unknown reader and a reader without loans both yield an empty
        profile rather than an error.
        """
        histogram = await self._data.category_histogram_for(reader_id)
        if not histogram.entries:
            return ReadingProfile(
                reader_id=reader_id,
                reader_name="Unknown",
                total_books=0,
                breakdown=[],
                summary="No reading history found.",
            )

        entries = sorted(histogram.entries, key=lambda e: (-e.count, e.category_code))
        total = sum(entry.count for entry in entries)
        breakdown = [
            CategoryShare(
                category=classify(entry.category_code),
                category_code=entry.category_code,
                count=entry.count,
                percentage=f"{entry.count / total * 100:.2f}%",
            )
            for entry in entries
        ]
        summary = ", ".join(f"{share.percentage} {share.category}" for share in breakdown)

        return ReadingProfile(
            reader_id=reader_id,
            reader_name=histogram.reader_name or "Unknown",
            total_books=total,
            breakdown=breakdown,
            summary=summary,
        )
