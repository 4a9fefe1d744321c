"""Strawberry GraphQL schema resolving relations through batched loaders."""

import strawberry
from strawberry.types import Info

from app import database as db
from batchql import EntityDataLoader, get_loader


class BooksDataLoader(EntityDataLoader):
    entity_name = "Book"


class AuthorsDataLoader(EntityDataLoader):
    entity_name = "Author"


@strawberry.type
class Author:
    """A book author."""

    id: strawberry.ID
    name: str

    @classmethod
    def from_dict(cls, data: dict) -> "Author":
        """Create Author from dictionary."""
        return cls(id=strawberry.ID(data["id"]), name=data["name"])


@strawberry.type
class Book:
    """A book in the catalog."""

    id: strawberry.ID
    title: str
    paid: bool
    author_id: strawberry.Private[str]

    @strawberry.field
    async def author(self, info: Info) -> Author | None:
        """Get the book author. Batched across all books in the request."""
        loader = get_loader(info, AuthorsDataLoader, info.context["authors"])
        author_data = await loader.load(self.author_id)
        return Author.from_dict(author_data) if author_data else None

    @classmethod
    def from_dict(cls, data: dict) -> "Book":
        """Create Book from dictionary."""
        return cls(
            id=strawberry.ID(data["id"]),
            title=data["title"],
            paid=bool(data["paid"]),
            author_id=data["author_id"],
        )


@strawberry.type
class DbStats:
    """Database call statistics for debugging."""

    list_books_calls: int
    find_books_calls: int
    find_authors_calls: int


@strawberry.type
class Query:
    """GraphQL Query type."""

    @strawberry.field
    async def books(self, info: Info) -> list[Book]:
        """Get all books, priming the book loader with each one."""
        books_data = await db.list_books()
        loader = get_loader(info, BooksDataLoader, info.context["books"])
        for book_data in books_data:
            loader.cache(book_data)
        return [Book.from_dict(b) for b in books_data]

    @strawberry.field
    async def book(self, info: Info, id: strawberry.ID) -> Book | None:
        """Get a book by ID."""
        loader = get_loader(info, BooksDataLoader, info.context["books"])
        book_data = await loader.load(str(id))
        return Book.from_dict(book_data) if book_data else None

    @strawberry.field
    async def reading_list(self, info: Info, ids: list[strawberry.ID]) -> list[Book]:
        """Get several books by ID in one query, skipping unknown ones."""
        loader = get_loader(info, BooksDataLoader, info.context["books"])
        books_data = await loader.load_many([str(i) for i in ids])
        return [
            Book.from_dict(b)
            for b in books_data
            if b is not None and not isinstance(b, BaseException)
        ]

    @strawberry.field
    def db_stats(self) -> DbStats:
        """Get database call statistics."""
        return DbStats(
            list_books_calls=db.call_count["list_books"],
            find_books_calls=db.call_count["find_books"],
            find_authors_calls=db.call_count["find_authors"],
        )
