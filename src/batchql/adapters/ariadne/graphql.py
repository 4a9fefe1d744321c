"""Loader-aware GraphQL ASGI app for Ariadne."""

from typing import Any

from ariadne.asgi import GraphQL

from batchql.adapters.ariadne.handler import LoaderGraphQLHTTPHandler


class LoaderGraphQL(GraphQL):
    """Drop-in replacement for Ariadne's GraphQL with per-request loaders.

    Example::

        app = LoaderGraphQL(schema, context_value=get_context)

        @book.field("author")
        async def resolve_author(book, info):
            return await get_loader(info, AuthorsDataLoader, store).load(
                book["author_id"]
            )
    """

    def __init__(self, schema: Any, **kwargs: Any) -> None:
        kwargs.setdefault("http_handler", LoaderGraphQLHTTPHandler())
        super().__init__(schema, **kwargs)
