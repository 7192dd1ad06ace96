"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/lyrics.py
Finds .lrc lyric files whose audio file is gone.
"""

import os
import logging
from typing import Iterable, List

from songsweep.core.models import DEFAULT_AUDIO_EXTENSIONS, LYRIC_EXTENSION, OrphanLyric
from songsweep.core.scanner import walk_library

logger = logging.getLogger(__name__)


class OrphanLyricFinder:
    """
    A lyric file is orphaned when no audio file in the same directory shares
    its base name. Both the extension and the base name compare case-insensitively.
    """

    def __init__(self, audio_extensions: Iterable[str] = DEFAULT_AUDIO_EXTENSIONS):
        self.audio_extensions = {ext.lower() for ext in audio_extensions}

    def find(self, root_dir: str) -> List[OrphanLyric]:
        orphans = []
        for dirpath, _, filenames in walk_library(root_dir):
            audio_stems = set()
            lyric_files = []
            for filename in filenames:
                stem, ext = os.path.splitext(filename)
                ext = ext.lower()
                if ext == LYRIC_EXTENSION:
                    lyric_files.append((stem, filename))
                elif ext in self.audio_extensions:
                    audio_stems.add(stem.lower())

            for stem, filename in lyric_files:
                if stem.lower() not in audio_stems:
                    path = os.path.join(dirpath, filename)
                    logger.debug(f"Orphan lyric: {path}")
                    orphans.append(OrphanLyric(path=path))

        return orphans
