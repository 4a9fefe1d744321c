"""Domain entities for batchql."""

from batchql.core.entities.batch import Batch, PendingLoad
from batchql.core.entities.loader_config import LoaderConfig
from batchql.core.entities.loader_stats import LoaderStats

__all__ = [
    "Batch",
    "PendingLoad",
    "LoaderConfig",
    "LoaderStats",
]
