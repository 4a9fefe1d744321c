"""Pytest configuration for batchql tests."""

from collections.abc import Hashable, Sequence
from typing import Any

import pytest


class RecordingFetch:
    """Batch fetch function that records every call it receives.

    Resolves key ``k`` to ``"value-k"``. Keys listed in ``fail_keys`` get a
    per-key ValueError; setting ``error`` makes the next calls raise.
    """

    def __init__(self, fail_keys: Sequence[Hashable] = ()) -> None:
        self.calls: list[list[Any]] = []
        self.fail_keys = set(fail_keys)
        self.error: Exception | None = None

    async def __call__(self, keys: Sequence[Any]) -> list[Any]:
        self.calls.append(list(keys))
        if self.error is not None:
            raise self.error
        return [
            ValueError(f"cannot load {key}") if key in self.fail_keys else f"value-{key}"
            for key in keys
        ]


@pytest.fixture
def fetch() -> RecordingFetch:
    """Create a recording batch fetch function."""
    return RecordingFetch()
