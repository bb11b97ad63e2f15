"""Tests for HashService (pinned SHA-256, streaming digests)."""

import io

import pytest

from recordvault.application.services.hash_service import (
    HashAlgorithm,
    HashService,
    SHA256Algorithm,
)

HELLO_SHA256 = "2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824"


class _MD5Algorithm(HashAlgorithm):
    name = "md5"

    def new(self):
        import hashlib

        return hashlib.md5()


class _CountingSHA256(SHA256Algorithm):
    def __init__(self) -> None:
        self.created = 0

    def new(self):
        self.created += 1
        return super().new()


async def _chunks(*parts: bytes):
    for part in parts:
        yield part


class TestHashServiceDigests:
    """Bytes, streams and files give the same lowercase hex digest."""

    def test_hash_bytes_known_value(self) -> None:
        assert HashService().hash_bytes(b"hello") == HELLO_SHA256

    def test_hash_stream_matches_bytes(self) -> None:
        svc = HashService(chunk_size=2)
        assert svc.hash_stream(io.BytesIO(b"hello")) == HELLO_SHA256

    def test_hash_stream_rewinds(self) -> None:
        stream = io.BytesIO(b"hello")
        stream.read(3)
        HashService().hash_stream(stream)
        assert stream.tell() == 0
        assert stream.read() == b"hello"

    def test_hash_file(self, tmp_path) -> None:
        path = tmp_path / "a.bin"
        path.write_bytes(b"hello")
        assert HashService().hash_file(path) == HELLO_SHA256

    def test_hash_file_missing_raises(self, tmp_path) -> None:
        with pytest.raises(OSError):
            HashService().hash_file(tmp_path / "nope.bin")

    def test_empty_input(self) -> None:
        digest = HashService().hash_bytes(b"")
        assert digest == "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"

    async def test_hash_chunks_matches_bytes(self) -> None:
        assert await HashService().hash_chunks(_chunks(b"he", b"l", b"lo")) == HELLO_SHA256

    async def test_hash_chunks_propagates_errors(self) -> None:
        async def failing():
            yield b"he"
            raise OSError("disk gone")

        with pytest.raises(OSError):
            await HashService().hash_chunks(failing())

    def test_incremental_hasher_uses_configured_algorithm(self) -> None:
        algorithm = _CountingSHA256()
        svc = HashService(algorithm=algorithm)
        hasher = svc.new_hasher()
        hasher.update(b"hello")
        assert hasher.hexdigest() == HELLO_SHA256
        assert algorithm.created == 1


class TestHashServicePinning:
    def test_default_algorithm_is_sha256(self) -> None:
        assert HashService().algorithm_name == "sha256"
        assert isinstance(HashService().algorithm, SHA256Algorithm)

    def test_other_algorithm_rejected(self) -> None:
        with pytest.raises(ValueError, match="pinned"):
            HashService(algorithm=_MD5Algorithm())


class TestIsValidDigest:
    def test_valid(self) -> None:
        assert HashService.is_valid_digest(HELLO_SHA256)

    def test_uppercase_accepted(self) -> None:
        assert HashService.is_valid_digest(HELLO_SHA256.upper())

    @pytest.mark.parametrize("value", [None, "", "abc", "z" * 64, HELLO_SHA256 + "0"])
    def test_invalid(self, value) -> None:
        assert not HashService.is_valid_digest(value)
