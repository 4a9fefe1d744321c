"""Loaders for entities stored by id.

An ``EntityDataLoader`` turns many ``load(id)`` calls made while resolving
one request into a single "find by ids" query against a store, then lines
the records back up with the requested ids.

Usage:
    class BooksDataLoader(EntityDataLoader):
        entity_name = "Book"
        id_field = "_id"

    loader = BooksDataLoader(books_store)
    book = await loader.load(book_id)
"""

from collections.abc import Hashable, Iterable, Mapping, Sequence
from typing import Any, Protocol

from batchql.core.entities.loader_config import LoaderConfig
from batchql.core.errors import EntityNotFoundError
from batchql.core.services.data_loader import DataLoader
from batchql.infrastructure.key_normalizers.default import str_key


class IEntityStore(Protocol):
    """Contract for stores that can fetch many records by id."""

    async def find_by_ids(self, ids: Sequence[str]) -> Iterable[Any]:
        """Fetch the records whose id is in ``ids``, in any order.

        Args:
            ids: String ids to look up.

        Returns:
            The matching records. Missing ids are simply absent.
        """
        ...


class EntityDataLoader(DataLoader[Any, Any]):
    """DataLoader over an entity store, keyed by the string form of ids.

    Ids are normalized with ``str`` so that an ObjectId-like value and its
    string form share one cache entry and one slot in the store query.
    """

    entity_name: str | None = None
    id_field: str = "id"

    def __init__(
        self,
        store: IEntityStore,
        config: LoaderConfig | None = None,
        *,
        id_field: str | None = None,
        raise_on_missing: bool = False,
        **loader_kwargs: Any,
    ) -> None:
        """Initialize the loader.

        Args:
            store: Store queried once per batch.
            config: Optional loader configuration.
            id_field: Field holding the id on stored records. Defaults to
                the class attribute ``id_field``.
            raise_on_missing: Fail loads of unknown ids with
                EntityNotFoundError instead of resolving them to None.
            **loader_kwargs: Passed through to DataLoader.
        """
        loader_kwargs.setdefault("cache_key_fn", str_key)
        if config is None:
            config = LoaderConfig(name=self.entity_name or type(self).__name__)
        super().__init__(self._load_entities, config, **loader_kwargs)
        self._store = store
        if id_field is not None:
            self.id_field = id_field
        self._raise_on_missing = raise_on_missing

    @property
    def store(self) -> IEntityStore:
        """Get the backing store."""
        return self._store

    def key(self, record: Any) -> Hashable:
        """Return the normalized id of a record."""
        if isinstance(record, Mapping):
            return str_key(record[self.id_field])
        return str_key(getattr(record, self.id_field))

    def cache(self, record: Any) -> "EntityDataLoader":
        """Prime the cache with a record that is already loaded."""
        self.prime(self.key(record), record)
        return self

    async def _load_entities(self, ids: Sequence[Hashable]) -> list[Any]:
        records = await self._store.find_by_ids([str(i) for i in ids])
        by_id = {self.key(record): record for record in records}

        # Results must line up with the requested ids
        return [self._result_for(i, by_id) for i in ids]

    def _result_for(self, entity_id: Hashable, by_id: dict[Hashable, Any]) -> Any:
        if entity_id in by_id:
            return by_id[entity_id]
        if self._raise_on_missing:
            return EntityNotFoundError(entity_id, self.entity_name)
        return None


class InMemoryEntityStore:
    """Entity store kept in a dictionary.

    Suitable for tests and examples. Counts queries so callers can check
    that lookups were batched.
    """

    def __init__(
        self,
        records: Iterable[Any] = (),
        id_field: str = "id",
    ) -> None:
        """Initialize the store.

        Args:
            records: Initial records.
            id_field: Field holding the id on each record.
        """
        self._id_field = id_field
        self._records: dict[str, Any] = {}
        self.queries: list[list[str]] = []
        for record in records:
            self.add(record)

    def add(self, record: Any) -> None:
        """Insert or replace a record."""
        if isinstance(record, Mapping):
            record_id = record[self._id_field]
        else:
            record_id = getattr(record, self._id_field)
        self._records[str(record_id)] = record

    async def find_by_ids(self, ids: Sequence[str]) -> list[Any]:
        """Return the stored records for ``ids``, skipping unknown ones."""
        self.queries.append(list(ids))
        return [self._records[i] for i in ids if i in self._records]

    @property
    def query_count(self) -> int:
        """Number of ``find_by_ids`` calls made."""
        return len(self.queries)

    def __len__(self) -> int:
        """Return the number of stored records."""
        return len(self._records)
