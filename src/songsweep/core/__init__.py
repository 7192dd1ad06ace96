"""
Core song deduplication engine: scanner, parser, normalizer, classifier and ranking.

This package contains the side-effect-free foundation of songsweep:
- FileScannerImpl: deterministic library traversal with lyric sidecar lookup
- HasherImpl + XXHashAlgorithmImpl: streaming full-content hashing
- parser / normalizer: filename → (artist, title) → "<artist>|<title>" key
- DuplicateClassifierImpl: exact pass (size → hash), then song key pass
- Sorter: scores group members and picks the keeper
- Models: FileCandidate, DuplicateGroup, ResolutionPlan and ScanParams

Nothing here moves or deletes files.
"""

from .scanner import FileScannerImpl
from .grouper import FileGrouperImpl
from .hasher import HasherImpl, XXHashAlgorithmImpl, MD5AlgorithmImpl
from .classifier import DuplicateClassifierImpl
from .sorter import Sorter
from .lyrics import OrphanLyricFinder
from .empty_dirs import EmptyDirectoryFinder
from .models import (
    FileCandidate, DuplicateGroup, DuplicateKind, MoveOperation, ResolutionPlan,
    ScanParams, ArtistFallback, HashAlgorithmName, ClassificationStats, SpecialCategory)

__all__ = [
    "FileScannerImpl",
    "FileGrouperImpl",
    "HasherImpl",
    "XXHashAlgorithmImpl",
    "MD5AlgorithmImpl",
    "DuplicateClassifierImpl",
    "Sorter",
    "OrphanLyricFinder",
    "EmptyDirectoryFinder",
    "FileCandidate",
    "DuplicateGroup",
    "DuplicateKind",
    "MoveOperation",
    "ResolutionPlan",
    "ScanParams",
    "ArtistFallback",
    "HashAlgorithmName",
    "ClassificationStats",
    "SpecialCategory",
]
