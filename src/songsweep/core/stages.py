"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/stages.py
Classification passes used by the duplicate classifier.

STAGE CONTRACTS
---------------
SizeStageImpl      : Partitions audio candidates by size. Zero-byte files and
                     lyric files never take part, unique sizes are dropped.
FullHashStage      : Splits each size partition by full content hash. Every
                     hash sub-partition of two or more files is an exact group.
SemanticStage      : Partitions the candidates not claimed by exact groups by
                     normalized song key. Short titles without an artist and
                     empty titles are left out.

Every stage reports progress via callback (stage name, processed count, total count).
Hashing happens only inside FullHashStage, so files with a unique size are never read.
"""

import logging
from typing import Callable, List, Optional, Set

from songsweep.core.grouper import FileGrouperImpl
from songsweep.core.interfaces import ClassificationStage, HashStage, SizeStage
from songsweep.core.models import DuplicateGroup, DuplicateKind, FileCandidate, Stage, UNKNOWN_ARTIST

logger = logging.getLogger(__name__)

# Titles this short are only trusted when an artist anchors them
SHORT_TITLE_LENGTH = 4


class SizeStageImpl(SizeStage):
    def __init__(self, grouper: FileGrouperImpl):
        self.grouper = grouper

    def process(
        self,
        candidates: List[FileCandidate],
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> List[List[FileCandidate]]:
        eligible = [c for c in candidates if c.size_bytes > 0 and not c.is_lyric]
        if progress_callback:
            progress_callback(Stage.SIZE, 0, len(eligible))

        size_groups = self.grouper.group_by_size(eligible)

        if progress_callback:
            progress_callback(Stage.SIZE, len(eligible), len(eligible))
        return list(size_groups.values())


class FullHashStage(HashStage):
    """
    Confirms exact duplicates inside each size partition.
    A file that cannot be read drops out of its partition.
    """

    def __init__(self, grouper: FileGrouperImpl):
        self.grouper = grouper

    def process(
        self,
        partitions: List[List[FileCandidate]],
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> List[DuplicateGroup]:
        total_files = sum(len(p) for p in partitions)
        processed_files = 0
        groups = []

        for partition in partitions:
            for content_hash, members in self.grouper.group_by_full_hash(partition).items():
                groups.append(DuplicateGroup(kind=DuplicateKind.EXACT, key=content_hash, members=members))
            processed_files += len(partition)
            if progress_callback:
                progress_callback(Stage.HASH, processed_files, total_files)

        return groups


class SemanticStage(ClassificationStage):
    def __init__(self, grouper: FileGrouperImpl):
        self.grouper = grouper

    def get_stage_name(self) -> str:
        return "semantic"

    @staticmethod
    def is_eligible(candidate: FileCandidate) -> bool:
        """
        True if a candidate may take part in song key grouping.
        """
        if candidate.is_lyric or not candidate.normalized_key:
            return False
        _, _, title = candidate.normalized_key.partition("|")
        if not title:
            return False
        parsed_title = candidate.parsed_title or ""
        if len(parsed_title) <= SHORT_TITLE_LENGTH and candidate.parsed_artist in (None, UNKNOWN_ARTIST):
            return False
        return True

    def process(
        self,
        candidates: List[FileCandidate],
        claimed_paths: Set[str],
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> List[DuplicateGroup]:
        eligible = [
            c for c in candidates
            if c.path not in claimed_paths and self.is_eligible(c)
        ]
        logger.debug(f"Song key grouping: {len(eligible)} of {len(candidates)} candidates eligible")
        if progress_callback:
            progress_callback(Stage.SEMANTIC, 0, len(eligible))

        groups = [
            DuplicateGroup(kind=DuplicateKind.SEMANTIC, key=key, members=members)
            for key, members in self.grouper.group_by_song_key(eligible).items()
        ]

        if progress_callback:
            progress_callback(Stage.SEMANTIC, len(eligible), len(eligible))
        return groups
