"""DataLoader - batches and caches point lookups for one request."""

import asyncio
import functools
import inspect
import logging
from collections.abc import Callable, Hashable, Iterable, Mapping, Sequence
from typing import Any, Generic, TypeVar

from batchql.core.entities.batch import Batch, PendingLoad
from batchql.core.entities.loader_config import LoaderConfig
from batchql.core.entities.loader_stats import LoaderStats
from batchql.core.errors import BatchFetchError, BatchShapeError, InvalidKeyError
from batchql.core.interfaces.batch_load_fn import IBatchLoadFn
from batchql.core.interfaces.batch_scheduler import IBatchScheduler
from batchql.core.interfaces.cache_map import ICacheMap
from batchql.core.interfaces.key_normalizer import IKeyNormalizer
from batchql.infrastructure.cache_maps.memory import InMemoryCacheMap
from batchql.infrastructure.key_normalizers.default import identity_key
from batchql.infrastructure.schedulers.event_loop import EventLoopScheduler

logger = logging.getLogger(__name__)

K = TypeVar("K")
V = TypeVar("V")


class DataLoader(Generic[K, V]):
    """Coalesces point lookups into batched fetches and caches the results.

    Every ``load`` issued within one event-loop turn joins the same batch.
    When the batch is dispatched, the batch fetch function is called once
    with the distinct normalized keys, and each caller's future is settled
    from the result at its key's position.

    A loader is meant to live for a single request. Its cache is never
    evicted on its own; use ``clear``/``clear_all`` or drop the loader with
    the request.

    Example:
        async def load_books(ids):
            rows = await store.find_by_ids(ids)
            by_id = {str(row["_id"]): row for row in rows}
            return [by_id.get(book_id) for book_id in ids]

        loader = DataLoader(load_books, cache_key_fn=str_key)
        book, other = await asyncio.gather(loader.load("1"), loader.load("2"))
    """

    def __init__(
        self,
        batch_load_fn: IBatchLoadFn,
        config: LoaderConfig | None = None,
        *,
        cache_key_fn: IKeyNormalizer | None = None,
        cache_map: ICacheMap | None = None,
        batch_schedule_fn: IBatchScheduler | None = None,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        """Initialize the loader.

        Args:
            batch_load_fn: Function receiving a sequence of normalized keys
                and returning one value or exception per key.
            config: Optional loader configuration. Uses defaults if not provided.
            cache_key_fn: Normalizes keys for caching and deduplication.
                Defaults to using the key itself.
            cache_map: Store for pending and resolved futures. Defaults to
                an unbounded in-memory map owned by this loader.
            batch_schedule_fn: Defers batch dispatch. Defaults to the next
                turn of the event loop.
            loop: Event loop to create futures and tasks on. Defaults to
                the running loop.
        """
        self._batch_load_fn = batch_load_fn
        self._config = config or LoaderConfig()
        self._cache_key_fn = (
            cache_key_fn if cache_key_fn is not None else identity_key
        )
        self._cache_map: ICacheMap = (
            cache_map if cache_map is not None else InMemoryCacheMap()
        )
        self._schedule: IBatchScheduler = (
            batch_schedule_fn
            if batch_schedule_fn is not None
            else EventLoopScheduler(loop)
        )
        self._loop = loop

        self._batch: Batch | None = None
        self._tasks: set[asyncio.Task[None]] = set()
        self._stats = LoaderStats()

    @property
    def config(self) -> LoaderConfig:
        """Get the loader configuration."""
        return self._config

    @property
    def name(self) -> str:
        """Get a readable name for logs."""
        if self._config.name:
            return self._config.name
        fn = self._batch_load_fn
        return getattr(fn, "__qualname__", None) or type(fn).__qualname__

    @property
    def cache_map(self) -> ICacheMap:
        """Get the cache map holding this loader's futures."""
        return self._cache_map

    @property
    def stats(self) -> dict[str, int]:
        """Get loader statistics.

        Returns:
            Dictionary with hits, misses, batches, keys fetched, failures
            and total loads.
        """
        return self._stats.as_dict()

    @property
    def is_idle(self) -> bool:
        """Check that no batch is open or in flight."""
        return self._batch is None and not self._tasks

    def load(self, key: K) -> "asyncio.Future[V]":
        """Load the value for a key.

        Returns the cached future when the normalized key was already
        requested in this scope; otherwise adds the key to the open batch.

        Args:
            key: The key to load. Must not be None.

        Returns:
            A future settled with the value, or with the failure for this key.

        Raises:
            InvalidKeyError: If the key is None.
        """
        if key is None:
            raise InvalidKeyError(self._config.name)

        cache_key = self._cache_key_fn(key)

        if self._config.cache:
            cached = self._cache_map.get(cache_key)
            if cached is not None:
                self._stats.hits += 1
                return cached

        self._stats.misses += 1
        future: asyncio.Future[V] = self._get_loop().create_future()
        if self._config.cache:
            self._cache_map.set(cache_key, future)

        batch = self._open_batch()
        batch.add(PendingLoad(key=key, cache_key=cache_key, future=future))

        if not self._config.batch:
            self._dispatch(batch)
        elif len(batch) == 1:
            self._schedule(functools.partial(self._dispatch, batch))

        return future

    def load_many(self, keys: Iterable[K]) -> "asyncio.Future[list[V | BaseException]]":
        """Load several keys at once, preserving input order.

        Loads are issued immediately, so they share a batch with any other
        load of the current turn.

        Args:
            keys: Keys to load.

        Returns:
            A future settled with a list holding, for each key, either its
            value or the exception it failed with.
        """
        futures: list[asyncio.Future[Any]] = []
        for key in keys:
            try:
                futures.append(self.load(key))
            except InvalidKeyError as e:
                failed = self._get_loop().create_future()
                failed.set_exception(e)
                futures.append(failed)
        return asyncio.gather(*futures, return_exceptions=True)

    def clear(self, key: K) -> "DataLoader[K, V]":
        """Evict a key from the cache.

        A batch already in flight still settles its callers; only later
        loads are affected.

        Args:
            key: The key to evict.

        Returns:
            The loader, for chaining.
        """
        self._cache_map.delete(self._cache_key_fn(key))
        return self

    def clear_many(self, keys: Iterable[K]) -> "DataLoader[K, V]":
        """Evict several keys from the cache."""
        for key in keys:
            self.clear(key)
        return self

    def clear_all(self) -> "DataLoader[K, V]":
        """Evict every key from the cache."""
        self._cache_map.clear()
        return self

    def prime(self, key: K, value: V) -> "DataLoader[K, V]":
        """Seed the cache with a known value.

        Does nothing when the key is already cached, so in-flight work is
        never overwritten. Does nothing when caching is disabled.

        Args:
            key: The key to seed.
            value: The value ``load(key)`` should resolve to.

        Returns:
            The loader, for chaining.

        Raises:
            InvalidKeyError: If the key is None.
        """
        if key is None:
            raise InvalidKeyError(self._config.name)
        if not self._config.cache:
            return self

        cache_key = self._cache_key_fn(key)
        if self._cache_map.get(cache_key) is None:
            future: asyncio.Future[V] = self._get_loop().create_future()
            future.set_result(value)
            self._cache_map.set(cache_key, future)
        return self

    def prime_many(self, values: Mapping[K, V]) -> "DataLoader[K, V]":
        """Seed the cache with several known values."""
        for key, value in values.items():
            self.prime(key, value)
        return self

    def dispatch(self) -> bool:
        """Dispatch the open batch now instead of waiting for the scheduler.

        Returns:
            True if a batch was dispatched, False if none was open.
        """
        batch = self._batch
        if batch is None or batch.sealed or not len(batch):
            return False
        self._dispatch(batch)
        return True

    async def wait_idle(self) -> None:
        """Wait until every dispatched batch has settled."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        return self._loop or asyncio.get_running_loop()

    def _open_batch(self) -> Batch:
        if self._batch is None or self._batch.sealed:
            self._batch = Batch()
        return self._batch

    def _dispatch(self, batch: Batch) -> None:
        """Seal a batch and start fetching it.

        Scheduled callbacks may fire for a batch that was already
        dispatched explicitly; those are ignored.
        """
        if batch.sealed:
            return
        batch.seal()
        if self._batch is batch:
            self._batch = None

        task = self._get_loop().create_task(self._execute(batch))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _execute(self, batch: Batch) -> None:
        """Fetch a sealed batch, chunked by max_batch_size.

        Keys are deduplicated before chunking, so a key shared by several
        callers is fetched exactly once even when the batch is split.
        """
        waiters = batch.waiters()
        keys = batch.unique_keys()
        size = self._config.max_batch_size or len(keys)

        for start in range(0, len(keys), size):
            chunk = keys[start : start + size]
            try:
                await self._fetch_chunk(chunk, waiters)
            except asyncio.CancelledError:
                # Chunks not fetched yet are cancelled along with this one
                self._cancel(keys[start:], waiters)
                raise

    async def _fetch_chunk(
        self,
        keys: list[Hashable],
        waiters: dict[Hashable, list[PendingLoad]],
    ) -> None:
        """Call the batch fetch function once and settle its callers."""
        self._stats.batches += 1
        self._stats.keys_fetched += len(keys)
        logger.debug("Dispatching batch of %d key(s) on %s", len(keys), self.name)

        try:
            results = self._batch_load_fn(keys)
            if inspect.isawaitable(results):
                results = await results
        except Exception as e:
            logger.warning(
                "Batch fetch failed on %s for %d key(s): %s", self.name, len(keys), e
            )
            error = BatchFetchError(f"Batch fetch failed: {e}", keys)
            error.__cause__ = e
            self._fail_all(keys, waiters, error)
            return

        try:
            self._check_shape(keys, results)
        except BatchShapeError as e:
            logger.warning("Malformed batch result on %s: %s", self.name, e)
            self._fail_all(keys, waiters, e)
            return

        for key, result in zip(keys, results):
            if isinstance(result, BaseException):
                self._fail_key(waiters[key], result)
            else:
                for request in waiters[key]:
                    request.resolve(result)

    def _check_shape(self, keys: list[Hashable], results: Any) -> None:
        if isinstance(results, (str, bytes)) or not isinstance(results, Sequence):
            raise BatchShapeError(
                "Batch fetch must return a sequence of results, "
                f"got {type(results).__name__}",
                keys,
            )
        if len(results) != len(keys):
            raise BatchShapeError(
                f"Batch fetch returned {len(results)} result(s) "
                f"for {len(keys)} key(s)",
                keys,
                expected=len(keys),
                actual=len(results),
            )

    def _fail_all(
        self,
        keys: list[Hashable],
        waiters: dict[Hashable, list[PendingLoad]],
        error: BaseException,
    ) -> None:
        for key in keys:
            self._fail_key(waiters[key], error)

    def _fail_key(self, requests: list[PendingLoad], error: BaseException) -> None:
        # Failures are not memoized: the next load of the key refetches
        self._stats.failures += 1
        for request in requests:
            self._evict(request)
            request.reject(error)

    def _cancel(
        self,
        keys: list[Hashable],
        waiters: dict[Hashable, list[PendingLoad]],
    ) -> None:
        for key in keys:
            for request in waiters[key]:
                if request.is_settled:
                    continue
                self._evict(request)
                request.future.cancel()

    def _evict(self, request: PendingLoad) -> None:
        if not self._config.cache:
            return
        if self._cache_map.get(request.cache_key) is request.future:
            self._cache_map.delete(request.cache_key)
