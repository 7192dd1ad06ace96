"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/interfaces.py

Defines core interfaces (Protocols) used throughout the song deduplication system.

Key Components:
---------------
- HashAlgorithm: Streaming hash function factory (xxHash64, MD5).
- Hasher: Computes and caches the full content hash of a candidate.
- FileScanner: Scans a directory tree and returns audio candidates.
- FileGrouper: Partitions candidates by size, content hash or song key.
- SizeStage: First exact pass, partitions candidates by size.
- HashStage: Splits size partitions into exact duplicate groups by content hash.
- ClassificationStage: Song key pass over the candidates left unclaimed.
- DuplicateClassifier: Runs all passes and collects statistics.
"""

from typing import Protocol, List, Dict, Optional, Callable, Set, Tuple, Any
from songsweep.core.models import FileCandidate, DuplicateGroup, ClassificationStats


class HashAlgorithm(Protocol):
    """
    Interface for streaming hash algorithms.

    `new()` returns an object with `update(bytes)` and `hexdigest()`,
    the shape shared by xxhash and hashlib objects.
    """

    name: str

    def new(self) -> Any:
        ...


class Hasher(Protocol):
    """Interface for hashing a whole file."""
    def compute_full_hash(self, candidate: FileCandidate) -> Optional[str]: ...


class FileScanner(Protocol):
    def scan(
        self,
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> List[FileCandidate]:
        """
        Scan audio files under the configured root.

        Returns:
            Candidates in deterministic enumeration order, lyric sidecars attached.
        """
        ...


class FileGrouper(Protocol):
    def group_by_size(self, candidates: List[FileCandidate]) -> Dict[int, List[FileCandidate]]:
        ...

    def group_by_full_hash(self, candidates: List[FileCandidate]) -> Dict[str, List[FileCandidate]]:
        ...

    def group_by_song_key(self, candidates: List[FileCandidate]) -> Dict[str, List[FileCandidate]]:
        ...


class SizeStage(Protocol):
    def process(
        self,
        candidates: List[FileCandidate],
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> List[List[FileCandidate]]:
        ...


class HashStage(Protocol):
    def process(
        self,
        partitions: List[List[FileCandidate]],
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> List[DuplicateGroup]:
        ...


class ClassificationStage(Protocol):
    """
    One classification pass.

    Receives every candidate plus the paths already claimed by earlier passes,
    and returns the duplicate groups it found.
    """

    def get_stage_name(self) -> str:
        ...

    def process(
        self,
        candidates: List[FileCandidate],
        claimed_paths: Set[str],
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> List[DuplicateGroup]:
        ...


class DuplicateClassifier(Protocol):
    def classify(
        self,
        candidates: List[FileCandidate],
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> Tuple[List[DuplicateGroup], ClassificationStats]:
        """
        Run the exact pass, then the song key pass over what is left.

        Returns:
            (groups, stats); exact groups first, both parts in deterministic order.
        """
        ...
