"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/special_versions.py
Detects live recordings, backing tracks and intros by filename keywords.
"""

import os
import re
from types import MappingProxyType
from typing import Dict, List, Optional

from songsweep.core.models import FileCandidate, SpecialCategory

# Checked in order; the first category with a matching pattern wins
CATEGORY_PATTERNS = MappingProxyType({
    SpecialCategory.LIVE: (
        # "live" as a word of its own, not part of "Oliver" or "delivery"
        re.compile(r'(?<![A-Za-z])live(?![A-Za-z])', re.IGNORECASE),
        re.compile(r'演唱会'),
        re.compile(r'现场版'),
        re.compile(r'现场'),
    ),
    SpecialCategory.INSTRUMENTAL: (
        re.compile(r'伴奏'),
        re.compile(r'纯音乐'),
        re.compile(r'纯享'),
    ),
    SpecialCategory.INTRO: (
        re.compile(r'intro', re.IGNORECASE),
        re.compile(r'序曲'),
    ),
})


def detect_category(filename: str) -> Optional[SpecialCategory]:
    """Category of a filename (extension ignored), or None for a regular track."""
    name = os.path.splitext(os.path.basename(filename))[0]
    for category, patterns in CATEGORY_PATTERNS.items():
        if any(p.search(name) for p in patterns):
            return category
    return None


def find_special_versions(candidates: List[FileCandidate]) -> Dict[SpecialCategory, List[FileCandidate]]:
    """
    Group special versions by category. Every category is present in the
    result, in detection order, and candidates keep their input order.
    """
    found: Dict[SpecialCategory, List[FileCandidate]] = {category: [] for category in CATEGORY_PATTERNS}
    for candidate in candidates:
        if candidate.is_lyric:
            continue
        category = detect_category(candidate.name)
        if category is not None:
            found[category].append(candidate)
    return found
