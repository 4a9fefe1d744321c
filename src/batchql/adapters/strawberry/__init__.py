"""Strawberry framework adapter for batchql."""

from batchql.adapters.strawberry.extension import DataLoaderExtension

__all__ = ["DataLoaderExtension"]
