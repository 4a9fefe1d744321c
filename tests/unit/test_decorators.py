"""Tests for loader decorators."""

import asyncio
from typing import Any

import pytest

from batchql import DataLoader, LoaderConfig, LoaderRegistry, batch_loader, str_key


@batch_loader()
async def load_squares(keys: list[int]) -> list[int]:
    return [key * key for key in keys]


@batch_loader(LoaderConfig(name="prefixed", max_batch_size=2), cache_key_fn=str_key)
async def load_prefixed(prefix: str, keys: list[str]) -> list[str]:
    return [f"{prefix}{key}" for key in keys]


class TestBatchLoader:
    """Tests for the batch_loader decorator."""

    def test_factory_keeps_function_metadata(self) -> None:
        """Test that the factory looks like the wrapped function."""
        assert load_squares.__name__ == "load_squares"
        assert "load_squares" in repr(load_squares)

    @pytest.mark.asyncio
    async def test_factory_builds_fresh_loaders(self) -> None:
        """Test that each call creates a new loader."""
        first = load_squares()
        second = load_squares()

        assert isinstance(first, DataLoader)
        assert first is not second
        assert first.name.endswith("load_squares")
        assert await asyncio.gather(first.load(2), first.load(3)) == [4, 9]

    @pytest.mark.asyncio
    async def test_arguments_bound_before_keys(self) -> None:
        """Test that factory arguments are passed ahead of the keys."""
        loader = load_prefixed("book:")

        assert await loader.load(1) == "book:1"
        assert loader.name == "prefixed"
        assert loader.config.max_batch_size == 2

    @pytest.mark.asyncio
    async def test_works_with_registry(self) -> None:
        """Test using a factory as a registry key."""
        registry = LoaderRegistry()

        loader: Any = registry.get(load_prefixed, "author:")

        assert registry.get(load_prefixed, "author:") is loader
        assert await loader.load("7") == "author:7"
