"""Default key normalizer implementations."""

from collections.abc import Callable, Hashable, Mapping
from typing import Any

from batchql.utils.keys import freeze


def identity_key(key: Any) -> Hashable:
    """Use the key itself as the cache key.

    Unhashable keys (lists, dicts, sets) are frozen into tuples first.
    """
    try:
        hash(key)
    except TypeError:
        return freeze(key)
    return key


def str_key(key: Any) -> Hashable:
    """Use the string form of the key.

    Lets an ObjectId and its hex string share one cache entry.
    """
    return str(key)


def canonical_key(key: Any) -> Hashable:
    """Freeze a structured key (dict, list, set) into a hashable tuple."""
    return freeze(key)


class AttributeKeyNormalizer:
    """Normalize object keys by one of their fields.

    Reads ``attr`` from the key (attribute or mapping entry) and coerces
    it, so that a record, a dict and a bare id can all be used as keys.
    Keys that carry no such field are coerced as they are.
    """

    def __init__(
        self,
        attr: str = "id",
        coerce: Callable[[Any], Hashable] = str,
    ) -> None:
        """Initialize the normalizer.

        Args:
            attr: Name of the attribute or mapping key holding the id.
            coerce: Conversion applied to the extracted value.
        """
        self._attr = attr
        self._coerce = coerce

    def __call__(self, key: Any) -> Hashable:
        """Return the coerced id carried by the key."""
        if isinstance(key, Mapping) and self._attr in key:
            return self._coerce(key[self._attr])
        if hasattr(key, self._attr):
            return self._coerce(getattr(key, self._attr))
        return self._coerce(key)
