"""Loader configuration entity."""

from dataclasses import dataclass


@dataclass
class LoaderConfig:
    """Loader configuration.

    Scalar options controlling how a DataLoader batches and caches.
    Collaborators (cache map, key normalizer, scheduler) are injected
    into the loader directly.

    Batching:
        When batch=True, loads issued within one event-loop turn are
        collected into a single call of the batch fetch function. When
        False, every load is fetched on its own.

    Caching:
        When cache=True, repeated loads of the same normalized key share
        one future for the lifetime of the loader (one request).
    """

    batch: bool = True
    max_batch_size: int | None = None
    cache: bool = True
    name: str | None = None

    def __post_init__(self) -> None:
        """Validate the batch size cap."""
        if self.max_batch_size is not None and self.max_batch_size < 1:
            raise ValueError(
                f"max_batch_size must be a positive integer, got {self.max_batch_size}"
            )
