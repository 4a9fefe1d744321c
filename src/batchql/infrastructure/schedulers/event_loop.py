"""Batch schedulers."""

import asyncio
import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)


class EventLoopScheduler:
    """Dispatch on the next turn of the asyncio event loop.

    Every load issued before the current task yields control lands in the
    same batch. This is the default scheduler.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        """Initialize the scheduler.

        Args:
            loop: Event loop to schedule on. Defaults to the running loop
                at the time of scheduling.
        """
        self._loop = loop

    def __call__(self, callback: Callable[[], None]) -> None:
        """Schedule the callback with ``call_soon``."""
        loop = self._loop or asyncio.get_running_loop()
        loop.call_soon(callback)


class ImmediateScheduler:
    """Dispatch synchronously, as soon as the first load arrives.

    Each batch holds a single request, which disables coalescing while
    keeping the cache.
    """

    def __call__(self, callback: Callable[[], None]) -> None:
        """Invoke the callback right away."""
        callback()


class ManualScheduler:
    """Hold dispatch callbacks until the owner calls ``flush``.

    Useful when the request scope wants to decide explicitly when batches
    go out, or in tests that need deterministic batch boundaries.
    """

    def __init__(self) -> None:
        """Initialize an empty queue of callbacks."""
        self._pending: list[Callable[[], None]] = []

    def __call__(self, callback: Callable[[], None]) -> None:
        """Queue the callback."""
        self._pending.append(callback)

    def flush(self) -> int:
        """Run every queued callback.

        Callbacks queued while flushing are left for the next flush.

        Returns:
            Number of callbacks run.
        """
        pending, self._pending = self._pending, []
        for callback in pending:
            callback()
        if pending:
            logger.debug("Flushed %d scheduled batch(es)", len(pending))
        return len(pending)

    def __len__(self) -> int:
        """Return the number of queued callbacks."""
        return len(self._pending)
