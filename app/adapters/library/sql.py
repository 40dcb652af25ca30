"""SQLAlchemy adapter for the library data port."""

import logging
from collections.abc import Iterable

from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.models import Book, Loan, Reader
from app.ports.library import (
    BookMetadata,
    CategoryCount,
    CategoryHistogram,
    LibraryDataPort,
    PopularBook,
)

logger = logging.getLogger(__name__)


class SqlLibraryAdapter(LibraryDataPort):
    """Read readers, books and loans through an async SQLAlchemy session."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def books_borrowed_by(self, reader_id: str) -> set[str]:
        result = await self._session.execute(
            select(Loan.book_id).where(Loan.user_id == reader_id).distinct()
        )
        books = set(result.scalars().all())
        logger.debug("Reader %s has %d distinct books", reader_id, len(books))
        return books

    async def all_other_readers_books(self, exclude_reader_id: str) -> dict[str, set[str]]:
        """Single query grouped in Python, avoiding one query per reader."""
        result = await self._session.execute(
            select(Loan.user_id, Loan.book_id)
            .where(Loan.user_id != exclude_reader_id)
            .order_by(Loan.user_id)
        )
        readers: dict[str, set[str]] = {}
        for user_id, book_id in result.all():
            readers.setdefault(user_id, set()).add(book_id)
        logger.debug("Loaded histories for %d other readers", len(readers))
        return readers

    async def metadata_for(self, book_ids: Iterable[str]) -> list[BookMetadata]:
        ids = list(book_ids)
        if not ids:
            return []
        result = await self._session.execute(
            select(Book.book_id, Book.title, Book.author, Book.dewey_decimal).where(
                Book.book_id.in_(ids)
            )
        )
        return [BookMetadata(*row) for row in result.all()]

    async def global_borrow_counts(self, limit: int) -> list[PopularBook]:
        borrow_count = func.count(Loan.loan_id).label("borrow_count")
        result = await self._session.execute(
            select(Book.book_id, Book.title, Book.author, Book.dewey_decimal, borrow_count)
            .join(Loan, Loan.book_id == Book.book_id)
            .group_by(Book.book_id, Book.title, Book.author, Book.dewey_decimal)
            .order_by(desc(borrow_count), Book.book_id)
            .limit(limit)
        )
        return [PopularBook(*row) for row in result.all()]

    async def category_popularity(
        self,
        exclude_book_ids: Iterable[str],
        category_codes: Iterable[str],
        limit: int,
    ) -> list[PopularBook]:
        codes = sorted(set(category_codes))
        if not codes:
            return []
        excluded = list(exclude_book_ids)

        borrow_count = func.count(Loan.loan_id).label("borrow_count")
        query = (
            select(Book.book_id, Book.title, Book.author, Book.dewey_decimal, borrow_count)
            .join(Loan, Loan.book_id == Book.book_id)
            .where(Book.dewey_decimal.in_(codes))
        )
        if excluded:
            query = query.where(Book.book_id.not_in(excluded))
        result = await self._session.execute(
            query.group_by(Book.book_id, Book.title, Book.author, Book.dewey_decimal)
            .order_by(desc(borrow_count), Book.book_id)
            .limit(limit)
        )
        return [PopularBook(*row) for row in result.all()]

    async def category_histogram_for(self, reader_id: str) -> CategoryHistogram:
        book_count = func.count(Loan.book_id.distinct()).label("book_count")
        result = await self._session.execute(
            select(Reader.name, Book.dewey_decimal, book_count)
            .join(Loan, Loan.user_id == Reader.user_id)
            .join(Book, Book.book_id == Loan.book_id)
            .where(Reader.user_id == reader_id)
            .group_by(Reader.name, Book.dewey_decimal)
            .order_by(desc(book_count), Book.dewey_decimal)
        )
        rows = result.all()
        if not rows:
            return CategoryHistogram(reader_name=None, entries=[])
        return CategoryHistogram(
            reader_name=rows[0].name,
            entries=[CategoryCount(row.dewey_decimal, int(row.book_count)) for row in rows],
        )
