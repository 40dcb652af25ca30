import logging
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass

from app.ports.library import (
    BookMetadata,
    CategoryCount,
    CategoryHistogram,
    LibraryDataPort,
    PopularBook,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoanRecord:
    reader_id: str
    book_id: str


class InMemoryLibraryAdapter(LibraryDataPort):
    """
    Library data held in plain Python collections.

    Useful for tests and demos without a database. Mirrors the ordering
    rules of the SQL adapter: popularity ties break on book id, histogram
    ties on category code.
    """

    def __init__(
        self,
        readers: dict[str, str] | None = None,
        books: Iterable[BookMetadata] = (),
        loans: Iterable[tuple[str, str]] = (),
    ) -> None:
        self.readers = dict(readers or {})
        self.books = {book.book_id: book for book in books}
        self.loans = [LoanRecord(reader_id, book_id) for reader_id, book_id in loans]

    def borrow(self, reader_id: str, book_id: str) -> None:
        self.loans.append(LoanRecord(reader_id, book_id))

    async def books_borrowed_by(self, reader_id: str) -> set[str]:
        return {loan.book_id for loan in self.loans if loan.reader_id == reader_id}

    async def all_other_readers_books(self, exclude_reader_id: str) -> dict[str, set[str]]:
        readers: dict[str, set[str]] = {}
        for loan in sorted(self.loans, key=lambda loan: loan.reader_id):
            if loan.reader_id != exclude_reader_id:
                readers.setdefault(loan.reader_id, set()).add(loan.book_id)
        return readers

    async def metadata_for(self, book_ids: Iterable[str]) -> list[BookMetadata]:
        return [self.books[book_id] for book_id in set(book_ids) if book_id in self.books]

    def _ranked(self, book_ids: set[str], limit: int) -> list[PopularBook]:
        counts = Counter(
            loan.book_id for loan in self.loans if loan.book_id in book_ids
        )
        ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))[:limit]
        results = []
        for book_id, count in ranked:
            book = self.books[book_id]
            results.append(
                PopularBook(book.book_id, book.title, book.author, book.category_code, count)
            )
        return results

    async def global_borrow_counts(self, limit: int) -> list[PopularBook]:
        return self._ranked(set(self.books), limit)

    async def category_popularity(
        self,
        exclude_book_ids: Iterable[str],
        category_codes: Iterable[str],
        limit: int,
    ) -> list[PopularBook]:
        excluded = set(exclude_book_ids)
        codes = set(category_codes)
        eligible = {
            book_id
            for book_id, book in self.books.items()
            if book.category_code in codes and book_id not in excluded
        }
        return self._ranked(eligible, limit)

    async def category_histogram_for(self, reader_id: str) -> CategoryHistogram:
        read = await self.books_borrowed_by(reader_id)
        counts = Counter(
            self.books[book_id].category_code for book_id in read if book_id in self.books
        )
        if not counts:
            return CategoryHistogram(reader_name=None, entries=[])
        entries = [
            CategoryCount(code, count)
            for code, count in sorted(counts.items(), key=lambda item: (-item[1], item[0]))
        ]
        logger.debug("Histogram for %s: %d categories", reader_id, len(entries))
        return CategoryHistogram(reader_name=self.readers.get(reader_id), entries=entries)
