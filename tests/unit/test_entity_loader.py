"""Tests for EntityDataLoader and InMemoryEntityStore."""

import asyncio
from dataclasses import dataclass

import pytest

from batchql import EntityDataLoader, EntityNotFoundError, InMemoryEntityStore


class ObjectId:
    """Stand-in for a database id type with a string form."""

    def __init__(self, value: str) -> None:
        self._value = value

    def __str__(self) -> str:
        return self._value


class BooksDataLoader(EntityDataLoader):
    entity_name = "Book"
    id_field = "_id"


@dataclass
class Author:
    id: str
    name: str


@pytest.fixture
def books_store() -> InMemoryEntityStore:
    """Create a store with a few books."""
    return InMemoryEntityStore(
        [
            {"_id": "1", "title": "Dune", "author_id": "a1"},
            {"_id": "2", "title": "Emma", "author_id": "a2"},
            {"_id": "3", "title": "Ulysses", "author_id": "a3"},
        ],
        id_field="_id",
    )


class TestEntityDataLoader:
    """Tests for EntityDataLoader."""

    @pytest.mark.asyncio
    async def test_batches_store_queries(
        self, books_store: InMemoryEntityStore
    ) -> None:
        """Test that lookups in one turn become one store query."""
        loader = BooksDataLoader(books_store)

        books = await asyncio.gather(loader.load("3"), loader.load("1"))

        assert [book["title"] for book in books] == ["Ulysses", "Dune"]
        assert books_store.queries == [["3", "1"]]

    @pytest.mark.asyncio
    async def test_results_realigned_to_keys(self) -> None:
        """Test that records returned out of order match their ids."""

        class ReversedStore:
            async def find_by_ids(self, ids: list[str]) -> list[dict[str, str]]:
                return [{"id": i, "name": f"author {i}"} for i in reversed(ids)]

        loader = EntityDataLoader(ReversedStore())

        names = await loader.load_many(["a", "b", "c"])

        assert [n["name"] for n in names] == ["author a", "author b", "author c"]

    @pytest.mark.asyncio
    async def test_missing_id_resolves_to_none(
        self, books_store: InMemoryEntityStore
    ) -> None:
        """Test that unknown ids resolve to None by default."""
        loader = BooksDataLoader(books_store)

        assert await loader.load("404") is None

    @pytest.mark.asyncio
    async def test_missing_id_can_raise(
        self, books_store: InMemoryEntityStore
    ) -> None:
        """Test raise_on_missing delivers EntityNotFoundError to that key only."""
        loader = BooksDataLoader(books_store, raise_on_missing=True)

        results = await loader.load_many(["1", "404"])

        assert results[0]["title"] == "Dune"
        assert isinstance(results[1], EntityNotFoundError)
        assert results[1].entity == "Book"
        assert loader.cache_map.get("404") is None

    @pytest.mark.asyncio
    async def test_object_ids_share_entry_with_strings(
        self, books_store: InMemoryEntityStore
    ) -> None:
        """Test that an id object and its string form load once."""
        loader = BooksDataLoader(books_store)

        by_object = loader.load(ObjectId("2"))
        by_string = loader.load("2")

        assert by_object is by_string
        assert (await by_object)["title"] == "Emma"
        assert books_store.queries == [["2"]]

    @pytest.mark.asyncio
    async def test_cache_primes_known_record(self) -> None:
        """Test priming the loader with a record already loaded."""
        store = InMemoryEntityStore()
        loader = EntityDataLoader(store)
        author = Author(id="a1", name="Frank Herbert")

        loader.cache(author)

        assert await loader.load("a1") is author
        assert store.query_count == 0

    def test_key_reads_id_field(self, books_store: InMemoryEntityStore) -> None:
        """Test reading ids from mappings and objects."""
        assert BooksDataLoader(books_store).key({"_id": ObjectId("9")}) == "9"
        assert EntityDataLoader(books_store).key(Author(id="a1", name="x")) == "a1"
        assert EntityDataLoader(books_store, id_field="name").key(
            Author(id="a1", name="x")
        ) == "x"

    def test_name_defaults_to_entity(self, books_store: InMemoryEntityStore) -> None:
        """Test the default loader name."""
        assert BooksDataLoader(books_store).name == "Book"
        assert EntityDataLoader(books_store).name == "EntityDataLoader"
        assert BooksDataLoader(books_store).store is books_store


class TestInMemoryEntityStore:
    """Tests for InMemoryEntityStore."""

    @pytest.mark.asyncio
    async def test_find_by_ids_skips_unknown(self) -> None:
        """Test that unknown ids are absent from the result."""
        store = InMemoryEntityStore([Author(id="a1", name="x")])

        assert await store.find_by_ids(["a1", "zz"]) == [Author(id="a1", name="x")]
        assert store.queries == [["a1", "zz"]]
        assert len(store) == 1

    def test_add_replaces(self) -> None:
        """Test that adding a record with the same id replaces it."""
        store = InMemoryEntityStore([{"id": 1, "name": "old"}])

        store.add({"id": "1", "name": "new"})

        assert len(store) == 1
