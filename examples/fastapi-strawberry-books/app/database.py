"""SQLite book catalog for demonstration purposes."""

import asyncio
from collections.abc import Sequence
from pathlib import Path

import aiosqlite

DB_PATH = Path(__file__).parent.parent / "data" / "books.db"

call_count: dict[str, int] = {
    "list_books": 0,
    "find_books": 0,
    "find_authors": 0,
}


def reset_call_count() -> None:
    """Reset the call counter."""
    for key in call_count:
        call_count[key] = 0


async def get_db() -> aiosqlite.Connection:
    """Get database connection."""
    DB_PATH.parent.mkdir(parents=True, exist_ok=True)
    db = await aiosqlite.connect(DB_PATH)
    db.row_factory = aiosqlite.Row
    return db


async def init_db() -> None:
    """Initialize the database with tables and sample data."""
    db = await get_db()
    try:
        await db.execute("""
            CREATE TABLE IF NOT EXISTS authors (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS books (
                id TEXT PRIMARY KEY,
                title TEXT NOT NULL,
                author_id TEXT NOT NULL,
                paid INTEGER NOT NULL DEFAULT 0,
                FOREIGN KEY (author_id) REFERENCES authors(id)
            )
        """)

        cursor = await db.execute("SELECT COUNT(*) FROM authors")
        count = (await cursor.fetchone())[0]

        if count == 0:
            await db.executemany(
                "INSERT INTO authors (id, name) VALUES (?, ?)",
                [
                    ("1", "Frank Herbert"),
                    ("2", "Jane Austen"),
                    ("3", "James Joyce"),
                ],
            )
            await db.executemany(
                "INSERT INTO books (id, title, author_id, paid) VALUES (?, ?, ?, ?)",
                [
                    ("101", "Dune", "1", 1),
                    ("102", "Dune Messiah", "1", 0),
                    ("103", "Emma", "2", 0),
                    ("104", "Pride and Prejudice", "2", 0),
                    ("105", "Ulysses", "3", 1),
                ],
            )
            await db.commit()
            print("[DB] Database initialized with sample data")
    finally:
        await db.close()


async def simulate_latency(ms: int = 30) -> None:
    """Simulate database latency."""
    await asyncio.sleep(ms / 1000)


async def _find_by_ids(table: str, ids: Sequence[str]) -> list[dict]:
    placeholders = ", ".join("?" for _ in ids)
    db = await get_db()
    try:
        cursor = await db.execute(
            f"SELECT * FROM {table} WHERE id IN ({placeholders})", list(ids)
        )
        rows = await cursor.fetchall()
        return [dict(row) for row in rows]
    finally:
        await db.close()


async def list_books() -> list[dict]:
    """Get all books."""
    call_count["list_books"] += 1
    await simulate_latency()

    db = await get_db()
    try:
        cursor = await db.execute("SELECT * FROM books ORDER BY id")
        rows = await cursor.fetchall()
        return [dict(row) for row in rows]
    finally:
        await db.close()


class BooksStore:
    """Entity store over the books table."""

    async def find_by_ids(self, ids: Sequence[str]) -> list[dict]:
        """Fetch books by id in one query."""
        call_count["find_books"] += 1
        print(f"[DB] find_books({list(ids)}) (total: {call_count['find_books']})")
        await simulate_latency()
        return await _find_by_ids("books", ids)


class AuthorsStore:
    """Entity store over the authors table."""

    async def find_by_ids(self, ids: Sequence[str]) -> list[dict]:
        """Fetch authors by id in one query."""
        call_count["find_authors"] += 1
        print(f"[DB] find_authors({list(ids)}) (total: {call_count['find_authors']})")
        await simulate_latency()
        return await _find_by_ids("authors", ids)


books_store = BooksStore()
authors_store = AuthorsStore()
