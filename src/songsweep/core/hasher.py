"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/hasher.py
Full-content hashing of audio candidates with pluggable streaming algorithms.

HasherImpl reads files in fixed-size chunks, so memory use is bounded regardless
of file size, and caches the hex digest on the candidate.
"""

import hashlib
import logging
from typing import Optional

import xxhash

from songsweep.core.models import FileCandidate, HashAlgorithmName
from songsweep.core.interfaces import Hasher, HashAlgorithm

logger = logging.getLogger(__name__)

READ_CHUNK_SIZE = 64 * 1024


# Use the same way to implement and use any other hashing algorithm
class XXHashAlgorithmImpl(HashAlgorithm):
    name = "xxhash64"

    @staticmethod
    def new():
        return xxhash.xxh64()


class MD5AlgorithmImpl(HashAlgorithm):
    """MD5, for digests comparable with md5sum output."""
    name = "md5"

    @staticmethod
    def new():
        return hashlib.md5()


def algorithm_for(name: HashAlgorithmName) -> HashAlgorithm:
    if name == HashAlgorithmName.MD5:
        return MD5AlgorithmImpl()
    return XXHashAlgorithmImpl()


class HasherImpl(Hasher):
    """
    A hasher implementation that supports any algorithm via the HashAlgorithm interface.
    Computes the full content hash and caches it in FileCandidate.content_hash.
    """

    def __init__(self, algorithm: Optional[HashAlgorithm] = None, chunk_size: int = READ_CHUNK_SIZE):
        self.algorithm = algorithm or XXHashAlgorithmImpl()
        self.chunk_size = chunk_size

    def compute_full_hash(self, candidate: FileCandidate) -> Optional[str]:
        """
        Returns the hex digest of the whole file, or None if it cannot be read.
        """
        if candidate.content_hash is not None:
            return candidate.content_hash
        digest = self.algorithm.new()
        try:
            with open(candidate.path, 'rb') as f:
                while True:
                    data = f.read(self.chunk_size)
                    if not data:
                        break
                    digest.update(data)
        except OSError as e:
            logger.warning(f"Could not hash {candidate.path}: {e}")
            return None
        candidate.content_hash = digest.hexdigest()
        return candidate.content_hash
