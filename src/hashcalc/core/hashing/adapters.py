"""Streaming hasher adapters.

Every supported algorithm is wrapped into the same callable shape:
``hasher(stream) -> hex digest``. The pipeline never branches on the
algorithm; it only calls the adapter it was given.

Two algorithm shapes are supported:

- objects exposing ``update()`` / ``hexdigest()`` (hashlib, blake3)
- objects exposing ``update()`` / ``intdigest()`` (xxhash), whose 64-bit
  integer result is rendered as hex text
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, BinaryIO, Protocol

from hashcalc.shared.constants import Hashing
from hashcalc.shared.errors import ErrorCode, ErrorContext, ReadFailureError


class StreamHasher(Protocol):
    """Callable computing the digest of a binary stream."""

    name: str

    def __call__(self, stream: BinaryIO) -> str: ...


class _ChunkedStreamHasher:
    """Feed loop shared by both adapter shapes."""

    def __init__(
        self,
        name: str,
        factory: Callable[[], Any],
        chunk_size: int = Hashing.CHUNK_SIZE,
    ) -> None:
        if chunk_size < 1:
            msg = f"chunk_size must be positive, got {chunk_size}"
            raise ValueError(msg)
        self.name = name
        self._factory = factory
        self.chunk_size = chunk_size

    def __call__(self, stream: BinaryIO) -> str:
        """Consume the stream in chunks and return its digest.

        Args:
            stream: Binary stream positioned at the first byte to hash.

        Returns:
            Lowercase hexadecimal digest.

        Raises:
            ReadFailureError: If reading the stream fails.
        """
        # A fresh hash object per call, so one adapter serves every worker
        digest = self._factory()
        try:
            while chunk := stream.read(self.chunk_size):
                digest.update(chunk)
        except OSError as e:
            stream_name = getattr(stream, "name", None)
            raise ReadFailureError(
                ErrorCode.FILE_READ_ERROR,
                f"error reading stream: {e.strerror or e}",
                ErrorContext(
                    file_path=stream_name if isinstance(stream_name, str) else None,
                    operation="hash_stream",
                    additional_data={"algorithm": self.name},
                ),
                original_error=e,
            ) from e
        return self._finalize(digest)

    def _finalize(self, digest: Any) -> str:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, chunk_size={self.chunk_size})"


class DigestStreamHasher(_ChunkedStreamHasher):
    """Adapter for algorithms with a ``hexdigest()`` finalizer."""

    def _finalize(self, digest: Any) -> str:
        return digest.hexdigest().lower()


class IntDigestStreamHasher(_ChunkedStreamHasher):
    """Adapter for algorithms finalizing to a 64-bit integer.

    Args:
        name: Algorithm identifier.
        factory: Zero-argument callable returning a fresh hash object.
        chunk_size: Read size in bytes.
        width: Zero-pad the hex text to this width. ``None`` keeps the
            variable-width rendering, where small values produce fewer
            than 16 hex digits.
    """

    def __init__(
        self,
        name: str,
        factory: Callable[[], Any],
        chunk_size: int = Hashing.CHUNK_SIZE,
        width: int | None = None,
    ) -> None:
        super().__init__(name, factory, chunk_size)
        self.width = width

    def _finalize(self, digest: Any) -> str:
        value: int = digest.intdigest()
        if self.width:
            return format(value, f"0{self.width}x")
        return format(value, "x")
