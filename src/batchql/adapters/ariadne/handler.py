"""Loader-aware HTTP handler for Ariadne GraphQL."""

from typing import Any

from ariadne.asgi.handlers import GraphQLHTTPHandler

from batchql.registry import LoaderRegistry, get_context_loaders, inject_loaders


class LoaderGraphQLHTTPHandler(GraphQLHTTPHandler):
    """HTTP handler that gives every request its own loader registry.

    The registry is installed into the context before execution and closed
    once the response is ready, so loader caches never outlive a request.
    """

    async def get_context_for_request(self, request: Any, data: Any) -> Any:
        context = await super().get_context_for_request(request, data)
        if context is None:
            context = {"request": request}
        self._ensure_registry(context)
        return context

    async def execute_graphql_query(
        self,
        request: Any,
        data: Any,
        *,
        context_value: Any = None,
        query_document: Any = None,
    ) -> tuple[bool, dict[str, Any]]:
        if context_value is None:
            context_value = await self.get_context_for_request(request, data)
        else:
            self._ensure_registry(context_value)

        try:
            return await super().execute_graphql_query(
                request,
                data,
                context_value=context_value,
                query_document=query_document,
            )
        finally:
            registry = get_context_loaders(context_value)
            if registry is not None:
                await registry.close()

    def _ensure_registry(self, context_value: Any) -> None:
        if get_context_loaders(context_value) is None:
            inject_loaders(context_value, LoaderRegistry())


def create_loader_context(**extra: Any) -> dict[str, Any]:
    """Build a context dict holding a fresh loader registry.

    For direct ``ariadne.graphql`` calls, outside the ASGI app.

    Args:
        **extra: Additional context entries.

    Returns:
        The context dictionary.
    """
    context: dict[str, Any] = dict(extra)
    inject_loaders(context, LoaderRegistry())
    return context
