"""Deterministic fallback rankings for readers without usable peers."""

import logging
from collections.abc import Set

from app.ports.library import LibraryDataPort, PopularBook
from app.ports.recommender import FallbackTag, Recommendation

logger = logging.getLogger(__name__)


def _tagged(rows: list[PopularBook], tag: FallbackTag) -> list[Recommendation]:
    return [
        Recommendation(
            book_id=row.book_id,
            title=row.title,
            author=row.author,
            category_code=row.category_code,
            score=0.0,
            contributing_peers=[],
            fallback=tag,
        )
        for row in rows
    ]


async def global_popularity(data: LibraryDataPort, limit: int) -> list[Recommendation]:
    """Cold start: the most-borrowed books in the whole library."""
    rows = await data.global_borrow_counts(limit)
    logger.info("Global popularity fallback returned %d books", len(rows))
    return _tagged(rows, FallbackTag.COLD_START_POPULARITY)


async def category_popularity(
    data: LibraryDataPort,
    read_books: Set[str],
    limit: int,
) -> list[Recommendation]:
    """
    Popular unread books sharing a category code with the reader's history.

    Categories are the exact codes of the books already read.
    """
    read_metadata = await data.metadata_for(read_books)
    codes = {book.category_code for book in read_metadata}
    rows = await data.category_popularity(read_books, codes, limit)
    logger.info(
        "Category popularity fallback over %d codes returned %d books",
        len(codes),
        len(rows),
    )
    return _tagged(rows, FallbackTag.CATEGORY_POPULARITY)
