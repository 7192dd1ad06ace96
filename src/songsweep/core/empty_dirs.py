"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/empty_dirs.py
Finds leaf directories left without music: empty, or holding only cover art.
"""

import os
import logging
from typing import List, Optional

from songsweep.core.models import EmptyDirectory
from songsweep.core.scanner import walk_library

logger = logging.getLogger(__name__)

COVER_FILENAMES = frozenset({"cover.jpg", "cover.jpeg"})


class EmptyDirectoryFinder:
    """
    Reports leaf directories (no subdirectories of any kind) whose visible
    files are either absent ("empty") or only cover images ("cover-only").
    Hidden files such as .DS_Store do not count. The root is never reported.
    """

    def find(self, root_dir: str) -> List[EmptyDirectory]:
        root = os.path.normpath(root_dir)
        found = []
        for dirpath, dirnames, _ in walk_library(root):
            if dirnames or os.path.normpath(dirpath) == root:
                continue
            reason = self._classify(dirpath)
            if reason:
                logger.debug(f"{reason} directory: {dirpath}")
                found.append(EmptyDirectory(path=dirpath, reason=reason))
        return found

    @staticmethod
    def _classify(dirpath: str) -> Optional[str]:
        try:
            entries = list(os.scandir(dirpath))
        except OSError as e:
            logger.warning(f"Cannot read directory {dirpath}: {e}")
            return None

        if any(entry.is_dir(follow_symlinks=False) for entry in entries):
            return None

        visible = [entry.name for entry in entries if not entry.name.startswith(".")]
        if not visible:
            return "empty"
        if all(name.lower() in COVER_FILENAMES for name in visible):
            return "cover-only"
        return None
