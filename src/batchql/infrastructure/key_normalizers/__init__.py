"""Key normalizer implementations."""

from batchql.infrastructure.key_normalizers.default import (
    AttributeKeyNormalizer,
    canonical_key,
    identity_key,
    str_key,
)

__all__ = [
    "AttributeKeyNormalizer",
    "canonical_key",
    "identity_key",
    "str_key",
]
