"""Cache map interface."""

from collections.abc import Hashable
from typing import Any, Protocol


class ICacheMap(Protocol):
    """Contract for the per-loader store of pending and resolved results.

    Values are futures. Methods are synchronous because ``load`` must
    register its request within the same event-loop turn.
    """

    def get(self, key: Hashable) -> Any | None:
        """Return the cached future for a key, or None."""
        ...

    def set(self, key: Hashable, value: Any) -> None:
        """Store a future for a key."""
        ...

    def delete(self, key: Hashable) -> bool:
        """Remove a key.

        Returns:
            True if the key existed and was removed, False otherwise.
        """
        ...

    def clear(self) -> None:
        """Remove every entry."""
        ...

    def __len__(self) -> int:
        """Return the number of entries."""
        ...
