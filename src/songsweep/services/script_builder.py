"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/script_builder.py
Renders move operations as a reviewable cleanup script.
The script only moves files into quarantine; it is written to disk but never run by songsweep.
"""

import os
import shlex
from datetime import datetime
from typing import List, Optional

from songsweep.core.models import MoveOperation


class ShellScriptBuilder:
    """
    POSIX shell script: `set -e`, one `mkdir -p` per target folder, one `mv` per file.
    A move whose destination already exists is skipped, so running the script again
    never replaces a file already in quarantine.
    """

    extension = ".sh"
    line_ending = "\n"

    def build(
            self,
            operations: List[MoveOperation],
            root_dir: str,
            quarantine_dir: str,
            title: str = "Duplicate cleanup script",
    ) -> str:
        lines = [
            "#!/bin/bash",
            f"# {title} (generated)",
            f"# Generated: {datetime.now():%Y-%m-%d %H:%M:%S}",
            f"# Library: {root_dir}",
            "#",
            f"# Files are moved into {_relative(quarantine_dir, root_dir)}, nothing is deleted.",
            "# Review the quarantine folder before removing it.",
            "",
            "set -e",
            "",
            f"cd {shlex.quote(root_dir)}",
        ]

        created_dirs = set()
        for operation in operations:
            target_dir = os.path.dirname(operation.destination)
            if target_dir not in created_dirs:
                created_dirs.add(target_dir)
                lines.append("")
                lines.append(f"mkdir -p {shlex.quote(_relative(target_dir, root_dir))}")
            source = shlex.quote(_relative(operation.source, root_dir))
            destination = shlex.quote(_relative(operation.destination, root_dir))
            lines.append(f"[ -e {destination} ] || mv -n {source} {destination} 2>/dev/null || true")

        lines += [
            "",
            'echo ""',
            'echo "✅ Cleanup finished."',
            f"echo {shlex.quote('📁 Files moved to: ' + _relative(quarantine_dir, root_dir))}",
            'echo "Review the folder, then delete it manually."',
            "",
        ]
        return self.line_ending.join(lines)


class BatchScriptBuilder:
    """Windows batch equivalent of ShellScriptBuilder, with the same no-overwrite rule."""

    extension = ".bat"
    line_ending = "\r\n"

    def build(
            self,
            operations: List[MoveOperation],
            root_dir: str,
            quarantine_dir: str,
            title: str = "Duplicate cleanup script",
    ) -> str:
        lines = [
            "@echo off",
            "chcp 65001 >nul",
            f"rem {title} (generated)",
            f"rem Generated: {datetime.now():%Y-%m-%d %H:%M:%S}",
            f"rem Library: {root_dir}",
            "rem Files are moved into quarantine, nothing is deleted.",
            "",
            f'cd /d "{root_dir}"',
        ]

        created_dirs = set()
        for operation in operations:
            target_dir = os.path.dirname(operation.destination)
            if target_dir not in created_dirs:
                created_dirs.add(target_dir)
                folder = _windows(_relative(target_dir, root_dir))
                lines.append("")
                lines.append(f'if not exist "{folder}" mkdir "{folder}"')
            source = _windows(_relative(operation.source, root_dir))
            destination = _windows(_relative(operation.destination, root_dir))
            lines.append(f'if not exist "{destination}" move "{source}" "{destination}" >nul 2>&1')

        lines += [
            "",
            "echo.",
            "echo Cleanup finished.",
            f'echo Files moved to: {_windows(_relative(quarantine_dir, root_dir))}',
            "",
        ]
        return self.line_ending.join(lines)


def script_builder_for(script_format: Optional[str] = None):
    """Builder for "sh" or "bat"; defaults to the current platform."""
    if script_format is None:
        script_format = "bat" if os.name == "nt" else "sh"
    if script_format == "bat":
        return BatchScriptBuilder()
    if script_format == "sh":
        return ShellScriptBuilder()
    raise ValueError(f"Unknown script format: {script_format}")


def _relative(path: str, root_dir: str) -> str:
    return os.path.join(".", os.path.relpath(path, root_dir))


def _windows(path: str) -> str:
    return path.replace("/", "\\")
