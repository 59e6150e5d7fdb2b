"""Hash function registry.

Maps a hash algorithm identifier to a streaming hasher. Adding an
algorithm means adding one ``HashAlgorithm`` member and one entry in
``_REGISTRY``; the pipeline and workers stay untouched.
"""

from __future__ import annotations

import hashlib
from collections.abc import Callable
from enum import Enum

import blake3
import xxhash

from hashcalc.core.hashing.adapters import (
    DigestStreamHasher,
    IntDigestStreamHasher,
    StreamHasher,
)
from hashcalc.shared.constants import Hashing
from hashcalc.shared.errors import UnsupportedAlgorithmError


class HashAlgorithm(str, Enum):
    """Supported hash algorithms."""

    MD5 = "MD5"
    SHA1 = "SHA1"
    SHA256 = "SHA256"
    XXHASH64 = "XXHASH64"
    BLAKE3 = "BLAKE3"

    @classmethod
    def parse(cls, identifier: str | HashAlgorithm) -> HashAlgorithm:
        """Resolve an identifier case-insensitively.

        Raises:
            UnsupportedAlgorithmError: If the identifier is unknown.
        """
        if isinstance(identifier, HashAlgorithm):
            return identifier
        try:
            return cls(identifier.strip().upper())
        except (ValueError, AttributeError):
            raise UnsupportedAlgorithmError(
                str(identifier), supported_algorithms()
            ) from None


# (chunk_size, pad_xxhash64) -> StreamHasher
_AdapterBuilder = Callable[[int, bool], StreamHasher]

_REGISTRY: dict[HashAlgorithm, _AdapterBuilder] = {
    HashAlgorithm.MD5: lambda chunk, _pad: DigestStreamHasher("MD5", hashlib.md5, chunk),
    HashAlgorithm.SHA1: lambda chunk, _pad: DigestStreamHasher("SHA1", hashlib.sha1, chunk),
    HashAlgorithm.SHA256: lambda chunk, _pad: DigestStreamHasher("SHA256", hashlib.sha256, chunk),
    HashAlgorithm.XXHASH64: lambda chunk, pad: IntDigestStreamHasher(
        "XXHASH64",
        xxhash.xxh64,
        chunk,
        width=Hashing.XXHASH64_HEX_WIDTH if pad else None,
    ),
    HashAlgorithm.BLAKE3: lambda chunk, _pad: DigestStreamHasher("BLAKE3", blake3.blake3, chunk),
}


def supported_algorithms() -> list[str]:
    """Return the identifiers of all registered algorithms."""
    return [algorithm.value for algorithm in _REGISTRY]


def get_hasher(
    identifier: str | HashAlgorithm,
    *,
    chunk_size: int = Hashing.CHUNK_SIZE,
    pad_xxhash64: bool = False,
) -> StreamHasher:
    """Return the streaming hasher registered for ``identifier``.

    Args:
        identifier: Algorithm identifier such as ``"SHA256"`` (case-insensitive).
        chunk_size: Number of bytes read per iteration.
        pad_xxhash64: Zero-pad XXHASH64 digests to 16 hex digits.

    Returns:
        A StreamHasher that can be shared across threads.

    Raises:
        UnsupportedAlgorithmError: If the identifier is not registered.
    """
    algorithm = HashAlgorithm.parse(identifier)
    return _REGISTRY[algorithm](chunk_size, pad_xxhash64)
