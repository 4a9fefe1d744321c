"""Cache map implementations."""

from batchql.infrastructure.cache_maps.memory import InMemoryCacheMap

__all__ = ["InMemoryCacheMap"]
