"""Core interfaces (Protocol classes) for batchql."""

from batchql.core.interfaces.batch_load_fn import IBatchLoadFn
from batchql.core.interfaces.batch_scheduler import IBatchScheduler
from batchql.core.interfaces.cache_map import ICacheMap
from batchql.core.interfaces.key_normalizer import IKeyNormalizer

__all__ = [
    "IBatchLoadFn",
    "IBatchScheduler",
    "ICacheMap",
    "IKeyNormalizer",
]
