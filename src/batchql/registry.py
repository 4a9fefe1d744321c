"""Per-request loader registry.

Loaders cache for the lifetime of one request. A ``LoaderRegistry`` is
created for each incoming request, placed in the GraphQL context, and
discarded with it, so that resolvers share loaders within a request but
never across requests.

Usage with Ariadne:
    from batchql.registry import get_loader

    @book.field("author")
    async def resolve_author(book, info):
        return await get_loader(info, AuthorsDataLoader, store).load(book["author_id"])

Usage with Strawberry:
    @strawberry.field
    async def author(self, info: Info) -> Author:
        return await get_loader(info, AuthorsDataLoader, store).load(self.author_id)
"""

import logging
from collections.abc import Callable, Hashable
from typing import Any, TypeVar

from batchql.core.errors import LoaderError
from batchql.core.services.data_loader import DataLoader

logger = logging.getLogger(__name__)

L = TypeVar("L", bound=DataLoader[Any, Any])

# Context key for the loader registry
LOADERS_CONTEXT_KEY = "_batchql_loaders"


class LoaderRegistry:
    """Holds the loaders of a single request.

    Loaders are created lazily, one per (factory, args) pair.
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._loaders: dict[tuple[Hashable, ...], DataLoader[Any, Any]] = {}

    def get(self, factory: Callable[..., L], *args: Any) -> L:
        """Return the loader built by ``factory(*args)`` for this request.

        The factory is called on first use only; later calls with the same
        factory and arguments return the same loader.

        Args:
            factory: Loader class or callable returning a loader.
            *args: Arguments for the factory. Must be hashable.

        Returns:
            The request's loader for this factory and arguments.
        """
        key = (factory, *args)
        loader = self._loaders.get(key)
        if loader is None:
            loader = factory(*args)
            self._loaders[key] = loader
        return loader  # type: ignore[return-value]

    def clear_all(self) -> None:
        """Clear the cache of every loader in the registry."""
        for loader in self._loaders.values():
            loader.clear_all()

    async def close(self) -> None:
        """Wait for in-flight batches, then drop every loader."""
        for loader in list(self._loaders.values()):
            await loader.wait_idle()
        if self._loaders:
            logger.debug("Closing registry with %d loader(s)", len(self._loaders))
        self._loaders.clear()

    @property
    def stats(self) -> dict[str, dict[str, int]]:
        """Get statistics of every loader, by loader name."""
        return {loader.name: loader.stats for loader in self._loaders.values()}

    def __contains__(self, factory: object) -> bool:
        """Check if a loader was created by ``factory``, with any arguments."""
        return any(key[0] == factory for key in self._loaders)

    def __len__(self) -> int:
        """Return the number of loaders created."""
        return len(self._loaders)


def inject_loaders(context: Any, registry: LoaderRegistry) -> None:
    """Install a registry into a GraphQL context.

    This should be called when setting up the request context.

    Args:
        context: The GraphQL context (dictionary or object).
        registry: The registry for this request.
    """
    if isinstance(context, dict):
        context[LOADERS_CONTEXT_KEY] = registry
    else:
        setattr(context, LOADERS_CONTEXT_KEY, registry)


def get_loaders(info: Any) -> LoaderRegistry | None:
    """Get the loader registry from GraphQL resolver info.

    Args:
        info: The GraphQL resolver info object.

    Returns:
        The LoaderRegistry, or None if not installed.
    """
    return get_context_loaders(getattr(info, "context", None))


def get_context_loaders(context: Any) -> LoaderRegistry | None:
    """Get the loader registry from a GraphQL context.

    Args:
        context: The GraphQL context (dictionary or object).

    Returns:
        The LoaderRegistry, or None if not installed.
    """
    if context is None:
        return None
    # Ariadne/graphql-core style
    if isinstance(context, dict):
        return context.get(LOADERS_CONTEXT_KEY)
    # Strawberry style (context is an object with attributes)
    return getattr(context, LOADERS_CONTEXT_KEY, None)


def get_loader(info: Any, factory: Callable[..., L], *args: Any) -> L:
    """Get the request's loader for ``factory(*args)``.

    Args:
        info: The GraphQL resolver info object.
        factory: Loader class or callable returning a loader.
        *args: Arguments for the factory.

    Returns:
        The loader for the current request.

    Raises:
        LoaderError: If no registry was installed in the context.
    """
    registry = get_loaders(info)
    if registry is None:
        raise LoaderError(
            "No loader registry in the GraphQL context. "
            "Install one with inject_loaders() or a batchql adapter."
        )
    return registry.get(factory, *args)
