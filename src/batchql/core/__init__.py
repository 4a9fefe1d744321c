"""Core domain layer for batchql."""

from batchql.core.entities import Batch, LoaderConfig, LoaderStats, PendingLoad
from batchql.core.errors import (
    BatchFetchError,
    BatchSealedError,
    BatchShapeError,
    EntityNotFoundError,
    InvalidKeyError,
    LoaderError,
    PerKeyFailure,
)
from batchql.core.interfaces import (
    IBatchLoadFn,
    IBatchScheduler,
    ICacheMap,
    IKeyNormalizer,
)
from batchql.core.services import DataLoader

__all__ = [
    # Entities
    "Batch",
    "LoaderConfig",
    "LoaderStats",
    "PendingLoad",
    # Errors
    "LoaderError",
    "InvalidKeyError",
    "BatchFetchError",
    "BatchShapeError",
    "BatchSealedError",
    "PerKeyFailure",
    "EntityNotFoundError",
    # Interfaces
    "IBatchLoadFn",
    "IBatchScheduler",
    "ICacheMap",
    "IKeyNormalizer",
    # Services
    "DataLoader",
]
