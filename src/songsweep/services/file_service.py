"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/file_service.py
Filesystem side of the cleanup: quarantine moves, cleanup scripts and the system trash.
Nothing here erases a file permanently.
"""
import os
import shutil
import logging
from pathlib import Path
from typing import List, Tuple

from send2trash import send2trash

from songsweep.core.models import MoveOperation

logger = logging.getLogger(__name__)

SCRIPT_MODE = 0o755


class FileService:
    """
    Moves files into quarantine, writes cleanup scripts and trashes reviewed quarantines.
    """

    @staticmethod
    def unique_path(path: str) -> str:
        """Return path, or "name_2.ext", "name_3.ext", ... if it is already taken."""
        if not os.path.lexists(path):
            return path
        stem, ext = os.path.splitext(path)
        counter = 2
        while os.path.lexists(f"{stem}_{counter}{ext}"):
            counter += 1
        return f"{stem}_{counter}{ext}"

    @staticmethod
    def move_file(source: str, destination: str) -> str:
        """
        Moves a file, creating parent directories. An existing destination is
        never overwritten; the file lands next to it under a numbered name.

        Returns:
            The path the file was moved to.
        """
        if not os.path.lexists(source):
            raise FileNotFoundError(f"File not found: {source}")

        try:
            os.makedirs(os.path.dirname(destination), exist_ok=True)
            target = FileService.unique_path(destination)
            shutil.move(source, target)
        except OSError as e:
            raise RuntimeError(f"Failed to move file: {e}") from e

        logger.info(f"Moved {source} → {target}")
        return target

    @classmethod
    def apply_moves(cls, operations: List[MoveOperation]) -> List[Tuple[MoveOperation, str]]:
        """
        Performs every move, continuing past individual failures.

        Returns:
            (operation, error message) for each move that failed.
        """
        failures = []
        for operation in operations:
            try:
                cls.move_file(operation.source, operation.destination)
            except (FileNotFoundError, RuntimeError) as e:
                logger.warning(f"Could not move {operation.source}: {e}")
                failures.append((operation, str(e)))
        return failures

    @staticmethod
    def write_script(path: str, text: str) -> str:
        """Writes a cleanup script and marks it executable. The script is not run."""
        try:
            with open(path, "w", encoding="utf-8", newline="") as f:
                f.write(text)
            os.chmod(path, SCRIPT_MODE)
        except OSError as e:
            raise RuntimeError(f"Failed to write script: {e}") from e
        return path

    @staticmethod
    def move_to_trash(file_path: str):
        """Moves a file or directory to the system trash."""
        path = Path(file_path).resolve()

        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        try:
            send2trash(str(path))
        except Exception as e:
            raise RuntimeError(f"Failed to move to trash: {e}") from e
