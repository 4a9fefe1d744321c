"""Domain services for batchql."""

from batchql.core.services.data_loader import DataLoader

__all__ = [
    "DataLoader",
]
