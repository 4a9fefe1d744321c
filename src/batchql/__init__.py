"""batchql - Batched, per-request entity loading for GraphQL APIs.

A Python library that coalesces the point lookups made by GraphQL
resolvers into batched fetches against a backing store, caches them for
the duration of one request, and plugs into Ariadne and Strawberry.

Example with Strawberry:
    import strawberry
    from strawberry.types import Info

    from batchql import EntityDataLoader, get_loader
    from batchql.adapters.strawberry import DataLoaderExtension

    class AuthorsDataLoader(EntityDataLoader):
        entity_name = "Author"

    @strawberry.type
    class Book:
        title: str
        author_id: strawberry.Private[str]

        @strawberry.field
        async def author(self, info: Info) -> "Author | None":
            loader = get_loader(info, AuthorsDataLoader, authors_store)
            return await loader.load(self.author_id)

    schema = strawberry.Schema(query=Query, extensions=[DataLoaderExtension])

Example with a plain batch function:
    from batchql import DataLoader, LoaderConfig, str_key

    async def load_books(ids):
        rows = await db.find_books(ids)
        by_id = {str(row["_id"]): row for row in rows}
        return [by_id.get(book_id) for book_id in ids]

    loader = DataLoader(
        load_books,
        LoaderConfig(max_batch_size=100),
        cache_key_fn=str_key,
    )
    first, second = await asyncio.gather(loader.load("1"), loader.load("2"))
"""

from batchql.core.entities import Batch, LoaderConfig, LoaderStats, PendingLoad
from batchql.core.errors import (
    BatchFetchError,
    BatchSealedError,
    BatchShapeError,
    EntityNotFoundError,
    InvalidKeyError,
    LoaderError,
    PerKeyFailure,
)
from batchql.core.interfaces import (
    IBatchLoadFn,
    IBatchScheduler,
    ICacheMap,
    IKeyNormalizer,
)
from batchql.core.services import DataLoader
from batchql.decorators import LoaderFactory, batch_loader
from batchql.entity_loader import EntityDataLoader, IEntityStore, InMemoryEntityStore
from batchql.infrastructure import (
    AttributeKeyNormalizer,
    EventLoopScheduler,
    ImmediateScheduler,
    InMemoryCacheMap,
    ManualScheduler,
    canonical_key,
    identity_key,
    str_key,
)
from batchql.registry import (
    LOADERS_CONTEXT_KEY,
    LoaderRegistry,
    get_context_loaders,
    get_loader,
    get_loaders,
    inject_loaders,
)

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Core entities
    "Batch",
    "LoaderConfig",
    "LoaderStats",
    "PendingLoad",
    # Errors
    "LoaderError",
    "InvalidKeyError",
    "BatchFetchError",
    "BatchShapeError",
    "BatchSealedError",
    "PerKeyFailure",
    "EntityNotFoundError",
    # Core interfaces
    "IBatchLoadFn",
    "IBatchScheduler",
    "ICacheMap",
    "IKeyNormalizer",
    # Core services
    "DataLoader",
    # Entity loading
    "EntityDataLoader",
    "IEntityStore",
    "InMemoryEntityStore",
    # Infrastructure implementations
    "InMemoryCacheMap",
    "AttributeKeyNormalizer",
    "canonical_key",
    "identity_key",
    "str_key",
    "EventLoopScheduler",
    "ImmediateScheduler",
    "ManualScheduler",
    # Per-request registry
    "LOADERS_CONTEXT_KEY",
    "LoaderRegistry",
    "get_context_loaders",
    "get_loader",
    "get_loaders",
    "inject_loaders",
    # Decorators
    "LoaderFactory",
    "batch_loader",
]
