"""Library data port — abstract read access to readers, books and loans."""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class BookMetadata:
    """Catalogue data for a single book."""

    book_id: str
    title: str
    author: str
    category_code: str


@dataclass(frozen=True)
class PopularBook(BookMetadata):
    """A book together with its total historical borrow count."""

    borrow_count: int = 0


@dataclass(frozen=True)
class CategoryCount:
    """Number of distinct books a reader borrowed under one category code."""

    category_code: str
    count: int


@dataclass(frozen=True)
class CategoryHistogram:
    """A reader's history grouped by category code."""

    reader_name: str | None
    entries: list[CategoryCount]


class LibraryDataPort(ABC):
    """
    Abstraction over the library store.

    Implementations may block on I/O and must let their failures
    propagate; callers never retry.
    """

    @abstractmethod
    async def books_borrowed_by(self, reader_id: str) -> set[str]:
        """Return the distinct book ids the reader ever borrowed."""
        ...

    @abstractmethod
    async def all_other_readers_books(self, exclude_reader_id: str) -> dict[str, set[str]]:
        """Return ``{reader_id: book ids}`` for every reader except one."""
        ...

    @abstractmethod
    async def metadata_for(self, book_ids: Iterable[str]) -> list[BookMetadata]:
        """Return metadata for the known books among ``book_ids``."""
        ...

    @abstractmethod
    async def global_borrow_counts(self, limit: int) -> list[PopularBook]:
        """Return the most-borrowed books, most popular first."""
        ...

    @abstractmethod
    async def category_popularity(
        self,
        exclude_book_ids: Iterable[str],
        category_codes: Iterable[str],
        limit: int,
    ) -> list[PopularBook]:
        """Return the most-borrowed books in the given categories."""
        ...

    @abstractmethod
    async def category_histogram_for(self, reader_id: str) -> CategoryHistogram:
        """Return the reader's name and per-category book counts."""
        ...
