"""Tests for core entities."""

import asyncio

import pytest

from batchql.core.entities import Batch, LoaderConfig, LoaderStats, PendingLoad
from batchql.core.errors import BatchSealedError


def _pending(key: str, cache_key: str | None = None) -> PendingLoad:
    future = asyncio.get_running_loop().create_future()
    return PendingLoad(key=key, cache_key=cache_key or key, future=future)


class TestLoaderConfig:
    """Tests for LoaderConfig entity."""

    def test_defaults(self) -> None:
        """Test default configuration values."""
        config = LoaderConfig()

        assert config.batch is True
        assert config.cache is True
        assert config.max_batch_size is None
        assert config.name is None

    def test_invalid_max_batch_size(self) -> None:
        """Test that a non-positive batch size is rejected."""
        with pytest.raises(ValueError, match="max_batch_size"):
            LoaderConfig(max_batch_size=0)


class TestPendingLoad:
    """Tests for PendingLoad entity."""

    @pytest.mark.asyncio
    async def test_settles_once(self) -> None:
        """Test that only the first resolution is kept."""
        request = _pending("a")

        request.resolve(1)
        request.resolve(2)
        request.reject(ValueError("late"))

        assert request.is_settled
        assert await request.future == 1

    @pytest.mark.asyncio
    async def test_reject(self) -> None:
        """Test rejecting a pending load."""
        request = _pending("a")

        request.reject(KeyError("a"))

        with pytest.raises(KeyError):
            await request.future


class TestBatch:
    """Tests for Batch entity."""

    @pytest.mark.asyncio
    async def test_unique_keys_keep_first_seen_order(self) -> None:
        """Test deduplication of normalized keys."""
        batch = Batch()
        for key in ["b", "a", "b", "c", "a"]:
            batch.add(_pending(key))

        assert len(batch) == 5
        assert batch.unique_keys() == ["b", "a", "c"]

    @pytest.mark.asyncio
    async def test_waiters_group_by_cache_key(self) -> None:
        """Test grouping requests that share a normalized key."""
        batch = Batch()
        first = _pending(key="1", cache_key="1")
        second = _pending(key="01", cache_key="1")
        other = _pending(key="2")
        for request in (first, second, other):
            batch.add(request)

        waiters = batch.waiters()

        assert waiters == {"1": [first, second], "2": [other]}

    @pytest.mark.asyncio
    async def test_sealed_batch_rejects_requests(self) -> None:
        """Test that a dispatched batch cannot grow."""
        batch = Batch()
        batch.add(_pending("a"))
        batch.seal()

        with pytest.raises(BatchSealedError):
            batch.add(_pending("b"))
        assert len(batch) == 1


class TestLoaderStats:
    """Tests for LoaderStats entity."""

    def test_as_dict_includes_total(self) -> None:
        """Test conversion to a dictionary."""
        stats = LoaderStats(hits=2, misses=3, batches=1, keys_fetched=3)

        assert stats.as_dict() == {
            "hits": 2,
            "misses": 3,
            "batches": 1,
            "keys_fetched": 3,
            "failures": 0,
            "total": 5,
        }
