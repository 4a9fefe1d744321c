"""Batch scheduler implementations."""

from batchql.infrastructure.schedulers.event_loop import (
    EventLoopScheduler,
    ImmediateScheduler,
    ManualScheduler,
)

__all__ = [
    "EventLoopScheduler",
    "ImmediateScheduler",
    "ManualScheduler",
]
