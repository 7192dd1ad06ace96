"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/classifier.py
Two-pass duplicate classification:
    - exact:    size → full content hash
    - semantic: normalized "<artist>|<title>" key, over files no exact group claimed
"""

import time
from typing import Callable, List, Optional, Tuple

from songsweep.core.grouper import FileGrouperImpl
from songsweep.core.interfaces import DuplicateClassifier
from songsweep.core.models import ClassificationStats, DuplicateGroup, FileCandidate
from songsweep.core.stages import FullHashStage, SemanticStage, SizeStageImpl


class DuplicateClassifierImpl(DuplicateClassifier):
    """
    Runs the exact pass and the song key pass and collects per-stage statistics.
    Candidates must already carry parsed_artist, parsed_title and normalized_key.
    """

    def __init__(self, grouper: Optional[FileGrouperImpl] = None):
        self.grouper = grouper or FileGrouperImpl()

    def classify(
        self,
        candidates: List[FileCandidate],
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> Tuple[List[DuplicateGroup], ClassificationStats]:
        stats = ClassificationStats()
        total_start_time = time.time()

        start_time = time.time()
        partitions = SizeStageImpl(self.grouper).process(candidates, progress_callback=progress_callback)
        stats.update_stage(
            "size",
            groups_found=len(partitions),
            files_processed=sum(len(p) for p in partitions),
            duration=time.time() - start_time
        )

        start_time = time.time()
        exact_groups = FullHashStage(self.grouper).process(partitions, progress_callback=progress_callback)
        exact_groups.sort(key=lambda g: (-g.keeper.size_bytes, g.members[0].path))
        DuplicateClassifierImpl._update_stats(stats, "hash", time.time() - start_time, exact_groups)

        claimed_paths = {m.path for g in exact_groups for m in g.members}

        semantic_stage = SemanticStage(self.grouper)
        start_time = time.time()
        semantic_groups = semantic_stage.process(candidates, claimed_paths, progress_callback=progress_callback)
        semantic_groups.sort(key=lambda g: g.key)
        DuplicateClassifierImpl._update_stats(
            stats, semantic_stage.get_stage_name(), time.time() - start_time, semantic_groups
        )

        stats.total_time = time.time() - total_start_time
        return exact_groups + semantic_groups, stats

    @staticmethod
    def _update_stats(stats: ClassificationStats, stage: str, duration: float, groups: List[DuplicateGroup]):
        stats.update_stage(
            stage_name=stage,
            groups_found=len(groups),
            files_processed=sum(len(g.members) for g in groups),
            duration=duration
        )
