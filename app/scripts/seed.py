"""
Seed the library tables from a JSON dataset.

The dataset is an object with ``users``, ``books`` and ``loans`` arrays:

  {"users": [{"user_id": "U001", "name": "..."}],
   "books": [{"book_id": "B001", "title": "...", "author": "...", "dewey_decimal": "005.1"}],
   "loans": [{"loan_id": "L001", "user_id": "U001", "book_id": "B001", "borrowed_at": "2024-01-15"}]}

Usage:

  python -m app.scripts.seed --file library_dataset.json
  python -m app.scripts.seed --file library_dataset.json --create-schema

Rows are merged by primary key, so re-running the seeder is safe.
"""

import argparse
import asyncio
import json
import logging
from datetime import date
from pathlib import Path

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import async_session_factory, engine
from app.domain.models import Base, Book, Loan, Reader

logger = logging.getLogger(__name__)

DEFAULT_FILE = Path("library_dataset.json")


def load_dataset(path: Path) -> dict[str, list[dict]]:
    """Read and sanity-check the dataset file."""
    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)

    for key in ("users", "books", "loans"):
        if not isinstance(data.get(key, []), list):
            raise ValueError(f"Expected a list under '{key}' in {path}")
    return {key: data.get(key, []) for key in ("users", "books", "loans")}


async def seed(session: AsyncSession, dataset: dict[str, list[dict]]) -> dict[str, int]:
    """Upsert users, books and loans in foreign-key-safe order."""
    for row in dataset["users"]:
        await session.merge(Reader(user_id=row["user_id"], name=row["name"]))
    logger.info("Users: %d row(s) upserted", len(dataset["users"]))

    for row in dataset["books"]:
        await session.merge(
            Book(
                book_id=row["book_id"],
                title=row["title"],
                author=row["author"],
                dewey_decimal=str(row["dewey_decimal"]),
            )
        )
    logger.info("Books: %d row(s) upserted", len(dataset["books"]))
    await session.flush()

    for row in dataset["loans"]:
        await session.merge(
            Loan(
                loan_id=row["loan_id"],
                user_id=row["user_id"],
                book_id=row["book_id"],
                borrowed_at=date.fromisoformat(row["borrowed_at"]),
            )
        )
    logger.info("Loans: %d row(s) upserted", len(dataset["loans"]))
    await session.commit()

    counts = {}
    for model in (Reader, Book, Loan):
        result = await session.execute(select(func.count()).select_from(model))
        counts[model.__tablename__] = result.scalar_one()
    return counts


async def main(path: Path, create_schema: bool) -> None:
    dataset = load_dataset(path)
    logger.info(
        "Loaded dataset: %d books, %d users, %d loans",
        len(dataset["books"]),
        len(dataset["users"]),
        len(dataset["loans"]),
    )

    if create_schema:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async with async_session_factory() as session:
        counts = await seed(session, dataset)
    for table, count in counts.items():
        logger.info("Verification: %s has %d row(s)", table, count)

    await engine.dispose()


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )
    parser = argparse.ArgumentParser(description="Seed the library database from JSON.")
    parser.add_argument("--file", type=Path, default=DEFAULT_FILE, help="Dataset JSON path")
    parser.add_argument(
        "--create-schema",
        action="store_true",
        help="Create missing tables before seeding (development only)",
    )
    args = parser.parse_args()
    asyncio.run(main(args.file, args.create_schema))
