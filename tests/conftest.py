"""
Shared fixtures for songsweep tests.
Creates isolated temporary music libraries with controlled files.
"""
import pytest
import tempfile
from pathlib import Path
from typing import Dict
import sys

# Add src/ to sys.path so the 'songsweep' package is importable without installing
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from songsweep.core.models import FileCandidate  # noqa: E402

MB = 1024 * 1024


@pytest.fixture
def temp_dir():
    """Creates isolated temporary directory, auto-cleanup after test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def make_candidate():
    """
    Factory for in-memory candidates. Enumeration order follows creation order
    unless given explicitly.
    """
    counter = {"order": 0}

    def _make(path: str, size_bytes: int = MB, **kwargs) -> FileCandidate:
        kwargs.setdefault("order", counter["order"])
        counter["order"] += 1
        return FileCandidate(path=path, size_bytes=size_bytes, **kwargs)

    return _make


@pytest.fixture
def music_library(temp_dir) -> Dict[str, Path]:
    """
    Creates a small artist folder:
    - an exact duplicate pair (same bytes, different names), one with lyrics
    - a semantic duplicate pair ("Beyond - 海阔天空" / "海阔天空 [Live]")
    - a unique song, a live recording, an orphaned lyric file
    - a zero-byte file, a non-audio file, a hidden file and a quarantine folder
    """
    root = temp_dir / "Beyond"
    root.mkdir()
    files = {"root": root}

    files["exact_a"] = root / "Beyond - 真的爱你.mp3"
    files["exact_a"].write_bytes(b"A" * 4096)
    files["exact_b"] = root / "真的爱你 copy.mp3"
    files["exact_b"].write_bytes(b"A" * 4096)
    files["exact_b_lrc"] = root / "真的爱你 copy.lrc"
    files["exact_b_lrc"].write_text("[00:00.00]真的爱你", encoding="utf-8")

    files["semantic_mp3"] = root / "Beyond - 海阔天空.mp3"
    files["semantic_mp3"].write_bytes(b"B" * 3000)
    files["semantic_flac"] = root / "海阔天空 [Live].flac"
    files["semantic_flac"].write_bytes(b"C" * 5000)
    files["semantic_flac_lrc"] = root / "海阔天空 [Live].lrc"
    files["semantic_flac_lrc"].write_text("[00:00.00]海阔天空", encoding="utf-8")

    files["unique"] = root / "Beyond - 光辉岁月.mp3"
    files["unique"].write_bytes(b"D" * 2000)

    live_dir = root / "live"
    live_dir.mkdir()
    files["live"] = live_dir / "Beyond - 喜欢你 (演唱会).mp3"
    files["live"].write_bytes(b"E" * 1000)

    files["orphan_lrc"] = root / "Beyond - 不再犹豫.lrc"
    files["orphan_lrc"].write_text("[00:00.00]不再犹豫", encoding="utf-8")

    files["empty_audio"] = root / "empty.mp3"
    files["empty_audio"].write_bytes(b"")
    files["cover"] = root / "cover.jpg"
    files["cover"].write_bytes(b"F" * 100)
    files["hidden"] = root / ".Beyond - 真的爱你.mp3"
    files["hidden"].write_bytes(b"A" * 4096)

    quarantine = root / "_duplicates_temp"
    quarantine.mkdir()
    files["quarantined"] = quarantine / "Beyond - 真的爱你.mp3"
    files["quarantined"].write_bytes(b"A" * 4096)

    return files
