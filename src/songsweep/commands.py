"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

commands.py
Command orchestrators, the single place where core components are wired together.
The CLI only parses arguments, prints and asks for confirmation.

Usage:
    params = ScanParams.from_human_readable("/music/Beyond", artist_fallback=ArtistFallback.ROOT)
    command = DuplicateScanCommand()
    groups, stats = command.execute(params, progress_callback=cli_progress_printer)
    result = PlanService.emit(groups, params.root_dir, params.quarantine_dir)
"""

import os
import logging
from typing import Callable, Dict, List, Optional, Tuple

from songsweep.core.classifier import DuplicateClassifierImpl
from songsweep.core.empty_dirs import EmptyDirectoryFinder
from songsweep.core.grouper import FileGrouperImpl
from songsweep.core.hasher import HasherImpl, algorithm_for
from songsweep.core.lyrics import OrphanLyricFinder
from songsweep.core.models import (
    ClassificationStats, DuplicateGroup, EmptyDirectory, FileCandidate, MoveOperation,
    OrphanLyric, ScanParams, SpecialCategory)
from songsweep.core.normalizer import normalize
from songsweep.core.parser import artist_matches, parse
from songsweep.core.scanner import FileScannerImpl
from songsweep.core.sorter import Sorter
from songsweep.core.special_versions import find_special_versions
from songsweep.services.file_service import FileService
from songsweep.services.script_builder import script_builder_for

logger = logging.getLogger(__name__)

ProgressCallback = Optional[Callable[[str, int, Optional[int]], None]]


def scan_library(params: ScanParams, progress_callback: ProgressCallback = None) -> List[FileCandidate]:
    scanner = FileScannerImpl(
        root_dir=params.root_dir,
        extensions=params.extensions,
        min_size=params.min_size_bytes,
        max_size=params.max_size_bytes,
    )
    return scanner.scan(progress_callback=progress_callback)


def label_candidates(candidates: List[FileCandidate], params: ScanParams) -> None:
    """
    Fill parsed_artist, parsed_title and normalized_key on every candidate.
    A collaboration naming the fallback artist ("齐秦 & 王祖贤" in 齐秦/) is keyed
    under the fallback artist.
    """
    for candidate in candidates:
        fallback = params.fallback_for(candidate.path)
        parsed = parse(candidate.name, fallback_artist=fallback, known_artists=params.known_artists)
        artist = parsed.artist
        if fallback and artist != fallback and artist_matches(artist, fallback):
            logger.debug(f"Folding artist '{artist}' onto '{fallback}' for {candidate.name}")
            artist = fallback
        candidate.parsed_artist = artist
        candidate.parsed_title = parsed.title
        candidate.normalized_key = normalize(parsed.title, artist)


class DuplicateScanCommand:
    """
    Orchestrates duplicate detection:
    1. Scan the library (audio files + lyric sidecars)
    2. Parse and normalize every filename
    3. Classify exact and semantic duplicates
    4. Rank every group so its first member is the keeper
    """

    def __init__(self):
        self._candidates: List[FileCandidate] = []

    def execute(
            self,
            params: ScanParams,
            progress_callback: ProgressCallback = None
    ) -> Tuple[List[DuplicateGroup], ClassificationStats]:
        """
        Args:
            params: Validated scan parameters
            progress_callback: (stage: str, current: int, total: Optional[int]) -> None

        Returns:
            Tuple of (ranked duplicate groups, statistics)

        Raises:
            RuntimeError: If the root directory cannot be scanned
        """
        self._candidates = scan_library(params, progress_callback)
        logger.info(f"Found {len(self._candidates)} audio files in {params.root_dir}")

        label_candidates(self._candidates, params)

        hasher = HasherImpl(algorithm_for(params.hash_algorithm))
        classifier = DuplicateClassifierImpl(FileGrouperImpl(hasher))
        groups, stats = classifier.classify(self._candidates, progress_callback=progress_callback)

        Sorter.sort_files_inside_groups(groups)
        return groups, stats

    def get_candidates(self) -> List[FileCandidate]:
        """Get scanned candidates after execution."""
        return self._candidates.copy()


class SpecialVersionsCommand:
    def execute(
            self,
            params: ScanParams,
            progress_callback: ProgressCallback = None
    ) -> Dict[SpecialCategory, List[FileCandidate]]:
        return find_special_versions(scan_library(params, progress_callback))


class OrphanLyricsCommand:
    def execute(self, params: ScanParams) -> List[OrphanLyric]:
        if not os.path.isdir(params.root_dir):
            raise RuntimeError(f"Not a directory: {params.root_dir}")
        return OrphanLyricFinder(params.extensions).find(params.root_dir)


class EmptyDirectoriesCommand:
    def execute(self, params: ScanParams) -> List[EmptyDirectory]:
        if not os.path.isdir(params.root_dir):
            raise RuntimeError(f"Not a directory: {params.root_dir}")
        return EmptyDirectoryFinder().find(params.root_dir)


def write_cleanup_script(
        operations: List[MoveOperation],
        params: ScanParams,
        script_name: str,
        script_format: Optional[str] = None,
        title: str = "Duplicate cleanup script",
) -> str:
    """
    Write the moves as "<root>/<script_name>.sh" (or .bat). The script is never executed.

    Returns:
        Path of the written script.
    """
    builder = script_builder_for(script_format)
    text = builder.build(operations, params.root_dir, params.quarantine_dir, title=title)
    path = os.path.join(params.root_dir, script_name + builder.extension)
    return FileService.write_script(path, text)
