"""Infrastructure layer implementations for batchql."""

from batchql.infrastructure.cache_maps import InMemoryCacheMap
from batchql.infrastructure.key_normalizers import (
    AttributeKeyNormalizer,
    canonical_key,
    identity_key,
    str_key,
)
from batchql.infrastructure.schedulers import (
    EventLoopScheduler,
    ImmediateScheduler,
    ManualScheduler,
)

__all__ = [
    "InMemoryCacheMap",
    "AttributeKeyNormalizer",
    "canonical_key",
    "identity_key",
    "str_key",
    "EventLoopScheduler",
    "ImmediateScheduler",
    "ManualScheduler",
]
