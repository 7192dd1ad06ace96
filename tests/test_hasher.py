"""
Unit tests for HasherImpl.
Verifies streaming full-content hashes, caching and unreadable-file handling.
"""
import hashlib
from unittest import mock

import xxhash

from songsweep.core.hasher import HasherImpl, MD5AlgorithmImpl, XXHashAlgorithmImpl, algorithm_for
from songsweep.core.models import FileCandidate, HashAlgorithmName


class TestHasherImpl:
    """Test full-content hashing with chunked reads."""

    def test_same_content_produces_same_hash(self, tmp_path):
        content = b"test content " * 10000
        a = tmp_path / "a.mp3"
        b = tmp_path / "b.mp3"
        a.write_bytes(content)
        b.write_bytes(content)

        hasher = HasherImpl(XXHashAlgorithmImpl())
        hash_a = hasher.compute_full_hash(FileCandidate(path=str(a), size_bytes=len(content)))
        hash_b = hasher.compute_full_hash(FileCandidate(path=str(b), size_bytes=len(content)))

        assert hash_a == hash_b
        assert hash_a == xxhash.xxh64(content).hexdigest()

    def test_different_content_produces_different_hashes(self, tmp_path):
        a = tmp_path / "a.mp3"
        b = tmp_path / "b.mp3"
        a.write_bytes(b"A" * 1024)
        b.write_bytes(b"B" * 1024)

        hasher = HasherImpl()
        assert hasher.compute_full_hash(FileCandidate(path=str(a), size_bytes=1024)) != \
            hasher.compute_full_hash(FileCandidate(path=str(b), size_bytes=1024))

    def test_small_chunks_give_the_same_digest(self, tmp_path):
        """Chunk size must not change the result."""
        content = bytes(range(256)) * 100
        path = tmp_path / "song.flac"
        path.write_bytes(content)

        small = HasherImpl(chunk_size=7).compute_full_hash(FileCandidate(path=str(path), size_bytes=len(content)))
        large = HasherImpl().compute_full_hash(FileCandidate(path=str(path), size_bytes=len(content)))
        assert small == large

    def test_md5_algorithm(self, tmp_path):
        content = b"md5 me"
        path = tmp_path / "song.mp3"
        path.write_bytes(content)

        hasher = HasherImpl(algorithm_for(HashAlgorithmName.MD5))
        assert hasher.compute_full_hash(FileCandidate(path=str(path), size_bytes=len(content))) == \
            hashlib.md5(content).hexdigest()

    def test_algorithm_for_defaults_to_xxhash(self):
        assert isinstance(algorithm_for(HashAlgorithmName.XXHASH), XXHashAlgorithmImpl)
        assert isinstance(algorithm_for(HashAlgorithmName.MD5), MD5AlgorithmImpl)

    def test_hash_is_cached_on_candidate(self, tmp_path):
        path = tmp_path / "song.mp3"
        path.write_bytes(b"X" * 100)
        candidate = FileCandidate(path=str(path), size_bytes=100)

        hasher = HasherImpl()
        first = hasher.compute_full_hash(candidate)
        assert candidate.content_hash == first

        with mock.patch("builtins.open") as mock_open:
            assert hasher.compute_full_hash(candidate) == first
            mock_open.assert_not_called()

    def test_unreadable_file_returns_none(self, tmp_path):
        candidate = FileCandidate(path=str(tmp_path / "missing.mp3"), size_bytes=100)
        assert HasherImpl().compute_full_hash(candidate) is None
        assert candidate.content_hash is None
