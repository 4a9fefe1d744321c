"""Strawberry extension installing per-request loaders."""

import logging
from collections.abc import AsyncIterator

from strawberry.extensions import SchemaExtension

from batchql.registry import LoaderRegistry, get_context_loaders, inject_loaders

logger = logging.getLogger(__name__)


class DataLoaderExtension(SchemaExtension):
    """Strawberry SchemaExtension giving each operation its own loaders.

    A fresh LoaderRegistry is placed in the execution context before the
    operation runs and closed afterwards, once in-flight batches settle.
    A registry installed by the caller is left to the caller. Resolvers
    fetch their loaders with ``batchql.registry.get_loader``.

    Usage:
        import strawberry
        from batchql.adapters.strawberry import DataLoaderExtension

        schema = strawberry.Schema(
            query=Query,
            extensions=[DataLoaderExtension],
        )
    """

    async def on_operation(self) -> AsyncIterator[None]:
        """Hook called around operation execution.

        Yields once the registry is installed.
        """
        context = self.execution_context.context
        registry: LoaderRegistry | None = None

        if context is None:
            logger.warning("No context value; loaders cannot be installed")
        elif get_context_loaders(context) is None:
            registry = LoaderRegistry()
            inject_loaders(context, registry)

        yield  # Execution happens here

        if registry is not None:
            await registry.close()
