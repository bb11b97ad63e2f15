"""Content digests for the content store (pinned SHA-256, streaming)."""

from __future__ import annotations

import hashlib
from abc import ABC, abstractmethod
from collections.abc import AsyncIterable
from pathlib import Path
from typing import Any, BinaryIO

from recordvault.core.constants import CHUNK_SIZE, DIGEST_ALGORITHM
from recordvault.domain.value_objects import Digest


class HashAlgorithm(ABC):
    """Abstract hash algorithm."""

    name: str

    @abstractmethod
    def new(self) -> Any:
        """Return a fresh incremental hasher (hashlib-compatible)."""
        ...


class SHA256Algorithm(HashAlgorithm):
    """SHA-256 implementation."""

    name = "sha256"

    def new(self) -> Any:
        return hashlib.sha256()


def _rewind_if_seekable(stream: BinaryIO) -> None:
    seek = getattr(stream, "seek", None)
    if callable(seek):
        seek(0)


class HashService:
    """Single source of truth for document digests (IHashService).

    The algorithm is pinned by DIGEST_ALGORITHM; stored digests are only
    comparable under the algorithm that produced them, so anything else is
    rejected at construction.
    """

    def __init__(
        self,
        algorithm: HashAlgorithm | None = None,
        chunk_size: int = CHUNK_SIZE,
    ) -> None:
        self.algorithm = algorithm or SHA256Algorithm()
        if self.algorithm.name != DIGEST_ALGORITHM:
            raise ValueError(
                f"Digest algorithm is pinned to {DIGEST_ALGORITHM!r}, "
                f"got {self.algorithm.name!r}"
            )
        self.chunk_size = chunk_size

    @property
    def algorithm_name(self) -> str:
        return self.algorithm.name

    def new_hasher(self) -> Any:
        """Incremental hasher of the pinned algorithm, for callers that feed chunks."""
        return self.algorithm.new()

    def hash_bytes(self, data: bytes) -> str:
        """Digest of an in-memory buffer."""
        hasher = self.new_hasher()
        hasher.update(data)
        return hasher.hexdigest()

    def hash_stream(self, stream: BinaryIO) -> str:
        """Digest of a stream read in chunks.

        Seekable streams are rewound before and after, so the caller can
        hand the same stream on to storage. Read errors propagate.
        """
        hasher = self.new_hasher()
        _rewind_if_seekable(stream)
        while chunk := stream.read(self.chunk_size):
            hasher.update(chunk)
        _rewind_if_seekable(stream)
        return hasher.hexdigest()

    async def hash_chunks(self, chunks: AsyncIterable[bytes]) -> str:
        """Digest of an async byte stream, e.g. a storage download. Errors propagate."""
        hasher = self.new_hasher()
        async for chunk in chunks:
            hasher.update(chunk)
        return hasher.hexdigest()

    def hash_file(self, path: str | Path) -> str:
        """Digest of a file on disk. OSError propagates for unreadable files."""
        with open(path, "rb") as f:
            return self.hash_stream(f)

    @staticmethod
    def is_valid_digest(value: str | None) -> bool:
        """Return True for a 64-char lowercase-normalizable hex digest."""
        return Digest.is_valid(value)
