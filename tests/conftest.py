import os

# Point the application at SQLite before any app module builds its engine.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

from collections.abc import AsyncGenerator  # noqa: E402

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.domain.models import Base  # noqa: E402
from app.scripts.seed import seed  # noqa: E402

TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest.fixture
def library_dataset() -> dict[str, list[dict]]:
    """
    A small library.

    U001 and U002 share two of four books (Jaccard 0.5); U003, U005 and U006
    overlap with nobody else in U001's history. U004 has no loans. U002
    borrowed B001 twice.
    """
    return {
        "users": [
            {"user_id": "U001", "name": "Amaka Okoro"},
            {"user_id": "U002", "name": "Bola Adeyemi"},
            {"user_id": "U003", "name": "Chidi Eze"},
            {"user_id": "U004", "name": "David Ibrahim"},
            {"user_id": "U005", "name": "Fatima Yusuf"},
            {"user_id": "U006", "name": "Grace Obi"},
        ],
        "books": [
            {"book_id": "B001", "title": "Clean Code", "author": "Robert C. Martin", "dewey_decimal": "005.1"},
            {"book_id": "B002", "title": "The Pragmatic Programmer", "author": "Andrew Hunt", "dewey_decimal": "005.1"},
            {"book_id": "B003", "title": "Good to Great", "author": "Jim Collins", "dewey_decimal": "658.4"},
            {"book_id": "B004", "title": "Rework", "author": "Jason Fried", "dewey_decimal": "658.1"},
            {"book_id": "B005", "title": "Sapiens", "author": "Yuval Noah Harari", "dewey_decimal": "909"},
            {"book_id": "B006", "title": "Steve Jobs", "author": "Walter Isaacson", "dewey_decimal": "921"},
            {"book_id": "B007", "title": "Long Walk to Freedom", "author": "Nelson Mandela", "dewey_decimal": "921"},
            {"book_id": "B008", "title": "Thinking, Fast and Slow", "author": "Daniel Kahneman", "dewey_decimal": "153.4"},
        ],
        "loans": [
            {"loan_id": "L001", "user_id": "U001", "book_id": "B001", "borrowed_at": "2024-01-05"},
            {"loan_id": "L002", "user_id": "U001", "book_id": "B002", "borrowed_at": "2024-01-19"},
            {"loan_id": "L003", "user_id": "U001", "book_id": "B003", "borrowed_at": "2024-02-02"},
            {"loan_id": "L004", "user_id": "U002", "book_id": "B001", "borrowed_at": "2024-01-08"},
            {"loan_id": "L005", "user_id": "U002", "book_id": "B002", "borrowed_at": "2024-01-22"},
            {"loan_id": "L006", "user_id": "U002", "book_id": "B004", "borrowed_at": "2024-02-11"},
            {"loan_id": "L007", "user_id": "U002", "book_id": "B001", "borrowed_at": "2024-03-01"},
            {"loan_id": "L008", "user_id": "U003", "book_id": "B005", "borrowed_at": "2024-01-15"},
            {"loan_id": "L009", "user_id": "U003", "book_id": "B007", "borrowed_at": "2024-02-20"},
            {"loan_id": "L010", "user_id": "U005", "book_id": "B006", "borrowed_at": "2024-03-03"},
            {"loan_id": "L011", "user_id": "U006", "book_id": "B007", "borrowed_at": "2024-01-30"},
            {"loan_id": "L012", "user_id": "U006", "book_id": "B008", "borrowed_at": "2024-02-14"},
        ],
    }


@pytest.fixture
async def engine():
    """A fresh in-memory database per test."""
    engine = create_async_engine(TEST_DATABASE_URL, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def session_factory(engine, library_dataset) -> async_sessionmaker[AsyncSession]:
    """Session factory over a database seeded with ``library_dataset``."""
    factory = async_sessionmaker(engine, expire_on_commit=False)
    async with factory() as session:
        await seed(session, library_dataset)
    return factory


@pytest.fixture
async def session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session
