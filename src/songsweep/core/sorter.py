"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/sorter.py
Pure ranking logic for duplicate groups, no dependencies outside core.
Picks the keeper of every group; the first member after sorting is kept.
"""

import re
from typing import List

from songsweep.core.models import DuplicateGroup, FileCandidate

BYTES_PER_POINT = 1_048_576

FORMAT_BONUS = {
    ".flac": 50,
    ".ape": 40,
    ".wav": 30,
}

TRADITIONAL_ONLY_CHARS = frozenset("齊學華國愛戀夢風雲時間東車馬鳥魚長門開關聽說話語紅綠藍黃頭臉體發無從來過")

_PATTERN_COPY = re.compile(r'(copy|副本|拷贝)(\s*[(（]?\d+[)）]?)?', re.IGNORECASE)


class Sorter:
    """
    Orders files inside duplicate groups, best first. Modifies groups in-place.
    Sorting priority (applied lexicographically):
    1. Higher score (see `score`)
    2. Shorter raw name
    3. Names that do not look like a copy ("copy", "副本", "拷贝", optionally numbered)
    4. Enumeration order
    """

    @staticmethod
    def score(candidate: FileCandidate) -> float:
        """
        Additive desirability score:
            +100  raw name in "Artist - Title" form
            +20   no traditional-only characters in the filename
            +1    per MiB of file size
            +50/40/30 for .flac/.ape/.wav
        """
        total = 0.0
        if " - " in (candidate.raw_name or ""):
            total += 100
        if not TRADITIONAL_ONLY_CHARS.intersection(candidate.name):
            total += 20
        total += candidate.size_bytes / BYTES_PER_POINT
        total += FORMAT_BONUS.get(candidate.extension, 0)
        return total

    @staticmethod
    def is_copy_name(candidate: FileCandidate) -> bool:
        return _PATTERN_COPY.search(candidate.raw_name or "") is not None

    @staticmethod
    def rank(members: List[FileCandidate]) -> List[FileCandidate]:
        """Return members ordered best first. The input list is left untouched."""
        return sorted(
            members,
            key=lambda c: (
                -Sorter.score(c),
                len(c.raw_name or ""),
                Sorter.is_copy_name(c),
                c.order,
            )
        )

    @staticmethod
    def sort_files_inside_groups(groups: List[DuplicateGroup]) -> None:
        if not groups:
            return
        for group in groups:
            group.members = Sorter.rank(group.members)
