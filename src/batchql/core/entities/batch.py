"""Batch and pending load entities."""

import asyncio
from collections.abc import Hashable
from dataclasses import dataclass, field
from typing import Any

from batchql.core.errors import BatchSealedError


@dataclass
class PendingLoad:
    """A single ``load`` call waiting for its batch to resolve.

    Attributes:
        key: The key as passed by the caller.
        cache_key: The normalized key used for caching and deduplication.
        future: Resolved exactly once with the value or the failure.
    """

    key: Any
    cache_key: Hashable
    future: "asyncio.Future[Any]"

    @property
    def is_settled(self) -> bool:
        """Check if the future has already been resolved or cancelled."""
        return self.future.done()

    def resolve(self, value: Any) -> None:
        """Settle the future with a value, unless already settled."""
        if not self.is_settled:
            self.future.set_result(value)

    def reject(self, error: BaseException) -> None:
        """Settle the future with a failure, unless already settled."""
        if not self.is_settled:
            self.future.set_exception(error)


@dataclass
class Batch:
    """Pending loads accumulated within one dispatch window.

    A batch accepts new requests until it is sealed. Sealing happens when
    the batch is handed to the fetch function; later loads start a new
    batch.
    """

    requests: list[PendingLoad] = field(default_factory=list)
    sealed: bool = False

    def add(self, request: PendingLoad) -> None:
        """Append a pending load.

        Raises:
            BatchSealedError: If the batch was already dispatched.
        """
        if self.sealed:
            raise BatchSealedError("Cannot add a request to a dispatched batch")
        self.requests.append(request)

    def seal(self) -> None:
        """Close the batch to further requests."""
        self.sealed = True

    def unique_keys(self) -> list[Hashable]:
        """Return normalized keys with duplicates removed, in first-seen order."""
        return list(dict.fromkeys(request.cache_key for request in self.requests))

    def waiters(self) -> dict[Hashable, list[PendingLoad]]:
        """Group pending loads by normalized key."""
        grouped: dict[Hashable, list[PendingLoad]] = {}
        for request in self.requests:
            grouped.setdefault(request.cache_key, []).append(request)
        return grouped

    def __len__(self) -> int:
        """Return the number of pending loads in the batch."""
        return len(self.requests)
