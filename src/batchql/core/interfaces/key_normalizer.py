"""Key normalizer interface."""

from collections.abc import Hashable
from typing import Any, Protocol


class IKeyNormalizer(Protocol):
    """Contract for mapping caller keys to a canonical cache key.

    Two keys naming the same entity (an ObjectId and its string form,
    say) must normalize to equal, hashable values.
    """

    def __call__(self, key: Any) -> Hashable:
        """Return the normalized form of a key."""
        ...
