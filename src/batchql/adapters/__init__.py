"""Framework adapters for batchql."""
