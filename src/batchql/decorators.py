"""Framework-agnostic loader decorators.

These decorators turn a plain batch function into a loader factory that
can be handed to a LoaderRegistry, so each request gets its own loader.
"""

import functools
from collections.abc import Callable
from typing import Any

from batchql.core.entities.loader_config import LoaderConfig
from batchql.core.services.data_loader import DataLoader


class LoaderFactory:
    """Callable building a fresh DataLoader around one batch function.

    Instances are hashable, so they work as LoaderRegistry keys.
    """

    def __init__(
        self,
        batch_load_fn: Callable[..., Any],
        config: LoaderConfig | None = None,
        **loader_kwargs: Any,
    ) -> None:
        self.batch_load_fn = batch_load_fn
        self.config = config
        self.loader_kwargs = loader_kwargs
        functools.update_wrapper(self, batch_load_fn)

    def __call__(self, *args: Any) -> DataLoader[Any, Any]:
        """Create a new loader.

        Extra positional arguments are bound in front of the keys, so a
        batch function ``fetch(store, keys)`` becomes ``factory(store)``.
        """
        fn = functools.partial(self.batch_load_fn, *args) if args else self.batch_load_fn
        config = self.config or LoaderConfig(name=self.batch_load_fn.__qualname__)
        return DataLoader(fn, config, **self.loader_kwargs)

    def __repr__(self) -> str:
        return f"<LoaderFactory {self.batch_load_fn.__qualname__}>"


def batch_loader(
    config: LoaderConfig | None = None,
    **loader_kwargs: Any,
) -> Callable[[Callable[..., Any]], LoaderFactory]:
    """Decorator turning a batch function into a loader factory.

    Args:
        config: Loader configuration for every loader the factory builds.
        **loader_kwargs: Passed through to DataLoader (cache_key_fn,
            cache_map, batch_schedule_fn).

    Returns:
        Decorator producing a LoaderFactory.

    Example:
        @batch_loader(LoaderConfig(max_batch_size=100), cache_key_fn=str_key)
        async def load_authors(store, ids):
            rows = await store.find_by_ids(ids)
            by_id = {str(row["id"]): row for row in rows}
            return [by_id.get(i) for i in ids]

        author = await get_loader(info, load_authors, store).load(author_id)
    """

    def decorator(func: Callable[..., Any]) -> LoaderFactory:
        return LoaderFactory(func, config, **loader_kwargs)

    return decorator
