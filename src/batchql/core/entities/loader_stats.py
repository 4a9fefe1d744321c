"""Loader statistics entity."""

from dataclasses import asdict, dataclass


@dataclass
class LoaderStats:
    """Counters collected by a DataLoader over its lifetime.

    Attributes:
        hits: Loads answered from the cache.
        misses: Loads that had to join a batch.
        batches: Calls made to the batch fetch function.
        keys_fetched: Distinct keys passed to the batch fetch function.
        failures: Keys that settled with an error.
    """

    hits: int = 0
    misses: int = 0
    batches: int = 0
    keys_fetched: int = 0
    failures: int = 0

    @property
    def total(self) -> int:
        """Total number of loads requested."""
        return self.hits + self.misses

    def as_dict(self) -> dict[str, int]:
        """Return the counters as a plain dictionary."""
        data = asdict(self)
        data["total"] = self.total
        return data
