"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/grouper.py
Partitions audio candidates by size, content hash or normalized song key.
"""

import logging
from collections import defaultdict
from typing import Any, Callable, Dict, List, Optional

from songsweep.core.interfaces import FileGrouper, Hasher
from songsweep.core.models import FileCandidate
from songsweep.core.hasher import HasherImpl

logger = logging.getLogger(__name__)


class FileGrouperImpl(FileGrouper):
    """
    Groups candidates by a computed key, keeping only groups of two or more.
    Uses an injected Hasher for content hashing.
    """

    def __init__(self, hasher: Optional[Hasher] = None):
        self.hasher = hasher or HasherImpl()

    def group_by_size(self, candidates: List[FileCandidate]) -> Dict[int, List[FileCandidate]]:
        """Groups candidates by their size."""
        return self._group_by(candidates, lambda c: c.size_bytes)

    def group_by_full_hash(self, candidates: List[FileCandidate]) -> Dict[str, List[FileCandidate]]:
        """Groups candidates by full content hash. Unreadable files are left out."""
        return self._group_by(candidates, self.hasher.compute_full_hash)

    def group_by_song_key(self, candidates: List[FileCandidate]) -> Dict[str, List[FileCandidate]]:
        """Groups candidates by normalized "<artist>|<title>" key."""
        return self._group_by(candidates, lambda c: c.normalized_key or None)

    @staticmethod
    def _group_by(
            candidates: List[FileCandidate],
            key_func: Callable[[FileCandidate], Any]
    ) -> Dict[Any, List[FileCandidate]]:
        """
        Helper method to group candidates by any computed key.
        A key of None drops the candidate. Members keep their input order.
        """
        groups = defaultdict(list)
        skipped = 0
        for candidate in candidates:
            try:
                key = key_func(candidate)
            except OSError as e:
                logger.warning(f"Error processing {candidate.path}: {e}")
                skipped += 1
                continue
            if key is not None:
                groups[key].append(candidate)

        if skipped > 0:
            logger.warning(f"Skipped {skipped} files due to read errors")

        return {key: group for key, group in groups.items() if len(group) >= 2}
