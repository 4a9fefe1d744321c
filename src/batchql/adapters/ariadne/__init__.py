"""Ariadne framework adapter for batchql."""

from batchql.adapters.ariadne.graphql import LoaderGraphQL
from batchql.adapters.ariadne.handler import (
    LoaderGraphQLHTTPHandler,
    create_loader_context,
)

__all__ = [
    "LoaderGraphQL",
    "LoaderGraphQLHTTPHandler",
    "create_loader_context",
]
