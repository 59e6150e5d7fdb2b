"""Hash algorithm registry and streaming adapters."""

from __future__ import annotations

from hashcalc.core.hashing.adapters import (
    DigestStreamHasher,
    IntDigestStreamHasher,
    StreamHasher,
)
from hashcalc.core.hashing.registry import HashAlgorithm, get_hasher, supported_algorithms

__all__ = [
    "DigestStreamHasher",
    "HashAlgorithm",
    "IntDigestStreamHasher",
    "StreamHasher",
    "get_hasher",
    "supported_algorithms",
]
