"""Batch fetch function interface."""

from collections.abc import Awaitable, Sequence
from typing import Any, Protocol


class IBatchLoadFn(Protocol):
    """Contract for the function a DataLoader calls once per batch.

    Receives the normalized keys of a batch, duplicates removed, and
    returns one result per key in the same order. A position may hold an
    exception instance to fail only that key. Raising fails the whole
    batch.
    """

    def __call__(
        self,
        keys: Sequence[Any],
    ) -> Awaitable[Sequence[Any]] | Sequence[Any]:
        """Fetch values for a batch of keys.

        Args:
            keys: Normalized keys in dispatch order, without duplicates.

        Returns:
            A sequence with exactly one value or exception per key,
            either directly or as an awaitable.
        """
        ...
