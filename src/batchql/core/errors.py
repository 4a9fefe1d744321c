"""Exceptions raised and delivered by data loaders."""

from typing import Any


class LoaderError(Exception):
    """Base class for every error raised by batchql."""

    pass


class InvalidKeyError(LoaderError, ValueError):
    """Raised synchronously when ``load`` receives a ``None`` key."""

    def __init__(self, loader_name: str | None = None) -> None:
        self.loader_name = loader_name
        where = f" on loader {loader_name!r}" if loader_name else ""
        super().__init__(f"load() requires a key, got None{where}")


class BatchFetchError(LoaderError):
    """The batch fetch function failed for a whole batch.

    Every pending load of the failed fetch call receives the same instance.
    The original exception is available as ``__cause__``.
    """

    def __init__(self, message: str, keys: list[Any] | None = None) -> None:
        super().__init__(message)
        self.keys = list(keys) if keys else []


class BatchShapeError(BatchFetchError):
    """The batch fetch function returned a malformed result.

    Raised when the result is not a sequence, or its length does not match
    the number of keys requested.
    """

    def __init__(
        self,
        message: str,
        keys: list[Any] | None = None,
        expected: int | None = None,
        actual: int | None = None,
    ) -> None:
        super().__init__(message, keys)
        self.expected = expected
        self.actual = actual


class PerKeyFailure(LoaderError):
    """Failure marker for a single position in a batch result.

    Fetch functions may place an instance of this (or any other exception)
    at the position of a key that could not be loaded. Only the callers
    waiting on that key see it.
    """

    def __init__(self, key: Any, message: str | None = None) -> None:
        self.key = key
        super().__init__(message or f"Failed to load key {key!r}")


class EntityNotFoundError(PerKeyFailure):
    """No entity exists for the requested id."""

    def __init__(self, key: Any, entity: str | None = None) -> None:
        self.entity = entity
        label = entity or "Entity"
        super().__init__(key, f"{label} not found: {key!r}")


class BatchSealedError(LoaderError):
    """A request was added to a batch that has already been dispatched."""

    pass
