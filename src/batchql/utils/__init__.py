"""Utility helpers for batchql."""

from batchql.utils.keys import freeze

__all__ = ["freeze"]
