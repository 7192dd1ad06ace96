"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/scanner.py
Implements audio file scanning for a music library.
Features:
- Deterministic traversal (directory and file names are visited in sorted order)
- Skips hidden entries and quarantine folders (names starting with "." or "_")
- Applies size and extension filters
- Attaches same-name .lrc sidecars to the audio files they belong to
"""

import os
import time
import logging
from pathlib import Path
from typing import Callable, Dict, Iterator, List, Optional, Tuple

from songsweep.core.models import FileCandidate, LYRIC_EXTENSION
from songsweep.core.interfaces import FileScanner

logger = logging.getLogger(__name__)

IGNORED_PREFIXES = (".", "_")


def is_ignored_name(name: str) -> bool:
    """Hidden files and quarantine/work folders are never part of the library."""
    return name.startswith(IGNORED_PREFIXES)


def walk_library(root_dir: str) -> Iterator[Tuple[str, List[str], List[str]]]:
    """
    os.walk over a library in sorted order, pruning ignored directories.
    Yields (dirpath, dirnames, filenames) with ignored files removed.
    """
    def _on_error(error: OSError):
        logger.warning(f"Cannot read directory {error.filename}: {error.strerror}")

    for dirpath, dirnames, filenames in os.walk(root_dir, onerror=_on_error):
        dirnames[:] = sorted(
            d for d in dirnames
            if not is_ignored_name(d) and not os.path.islink(os.path.join(dirpath, d))
        )
        yield dirpath, dirnames, sorted(f for f in filenames if not is_ignored_name(f))


class FileScannerImpl(FileScanner):
    """
    Scans a music library and returns audio candidates in enumeration order.

    Attributes:
        root_dir: Root directory to scan
        extensions: Audio extensions to accept (e.g. [".mp3", ".flac"])
        min_size: Minimum file size in bytes (optional)
        max_size: Maximum file size in bytes (optional)
    """

    def __init__(
        self,
        root_dir: str,
        extensions: List[str],
        min_size: Optional[int] = None,
        max_size: Optional[int] = None,
    ):
        self.root_dir = root_dir
        self.extensions = {ext.lower() for ext in extensions}
        self.min_size = min_size
        self.max_size = max_size

    def scan(
            self,
            progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> List[FileCandidate]:
        logger.debug(f"Starting scan of {self.root_dir}")
        logger.debug(f"Filters: min_size={self.min_size}, max_size={self.max_size}, extensions={sorted(self.extensions)}")

        root_path = Path(self.root_dir)
        if not root_path.exists():
            error_msg = f"Directory does not exist: {self.root_dir}"
            logger.error(error_msg)
            raise RuntimeError(error_msg)
        if not root_path.is_dir():
            error_msg = f"Not a directory: {self.root_dir}"
            logger.error(error_msg)
            raise RuntimeError(error_msg)

        candidates: List[FileCandidate] = []
        processed_files = 0
        start_time = time.time()

        for dirpath, _, filenames in walk_library(str(root_path)):
            lyrics = self._index_lyrics(dirpath, filenames)
            for filename in filenames:
                processed_files += 1
                candidate = self._process_file(Path(dirpath) / filename)
                if candidate is None:
                    continue
                candidate.order = len(candidates)
                candidate.associated_lyric_path = lyrics.get(candidate.raw_name.lower())
                candidates.append(candidate)

            if progress_callback:
                progress_callback('scanning', processed_files, None)

        logger.debug(f"Total scan time: {time.time() - start_time:.2f} seconds")
        logger.debug(f"Scan completed. Found {len(candidates)} audio files.")
        return candidates

    @staticmethod
    def _index_lyrics(dirpath: str, filenames: List[str]) -> Dict[str, str]:
        """Map lowercased base name → path for every .lrc file in one directory."""
        index = {}
        for filename in filenames:
            stem, ext = os.path.splitext(filename)
            if ext.lower() == LYRIC_EXTENSION:
                index[stem.lower()] = os.path.join(dirpath, filename)
        return index

    def _process_file(self, path: Path) -> Optional[FileCandidate]:
        """
        Return a FileCandidate if the path is a regular audio file passing all filters.
        Zero-byte files are kept; the classifier never hashes them.
        """
        if path.suffix.lower() not in self.extensions:
            return None

        try:
            if path.is_symlink():
                logger.debug(f"Skipping symbolic link: {path}")
                return None
            size = path.stat().st_size
        except OSError as e:
            logger.warning(f"Could not read {path}: {e}")
            return None

        if not self._size_passes(size):
            logger.debug(f"Skipping {path} (size {size} bytes outside range)")
            return None

        return FileCandidate(path=str(path), size_bytes=size)

    def _size_passes(self, size: int) -> bool:
        if self.min_size is not None and size < self.min_size:
            return False
        if self.max_size is not None and size > self.max_size:
            return False
        return True
