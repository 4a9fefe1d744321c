"""Utilities for turning structured keys into hashable values."""

from collections.abc import Hashable, Mapping, Set
from typing import Any


def freeze(value: Any) -> Hashable:
    """Create a deterministic, hashable form of a value.

    Mappings become sorted tuples of (key, value) pairs, sequences become
    tuples and sets become sorted tuples, recursively. Equal structures
    produce equal results regardless of mapping insertion order.

    Args:
        value: Any value built from mappings, sequences, sets and scalars.

    Returns:
        A hashable value.
    """
    if isinstance(value, Mapping):
        return tuple(
            sorted(((str(k), freeze(v)) for k, v in value.items()), key=_sort_key)
        )
    if isinstance(value, (list, tuple)):
        return tuple(freeze(item) for item in value)
    if isinstance(value, Set):
        return tuple(sorted((freeze(item) for item in value), key=_sort_key))
    if isinstance(value, Hashable):
        return value
    # Unhashable custom objects fall back to their string form
    return repr(value)


def _sort_key(item: Any) -> str:
    return repr(item)
