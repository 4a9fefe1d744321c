"""Batch scheduler interface."""

from collections.abc import Callable
from typing import Protocol


class IBatchScheduler(Protocol):
    """Contract for deferring batch dispatch.

    Called with the dispatch callback when the first request of a new
    batch arrives. The callback must run after every load issued in the
    current turn has been registered.
    """

    def __call__(self, callback: Callable[[], None]) -> None:
        """Arrange for ``callback`` to be invoked later."""
        ...
