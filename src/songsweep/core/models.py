"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models for song scanning, duplicate classification and resolution plans.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Optional, Union, Callable, FrozenSet
import logging
import os
from enum import Enum

logger = logging.getLogger(__name__)


# =============================
# Constants
# =============================

DEFAULT_AUDIO_EXTENSIONS: FrozenSet[str] = frozenset({
    ".mp3", ".flac", ".m4a", ".wav", ".ape", ".wma",
    ".ogg", ".aac", ".alac", ".aiff", ".dff", ".dsf",
})

LYRIC_EXTENSION = ".lrc"

UNKNOWN_ARTIST = "Unknown"

DEFAULT_QUARANTINE_NAME = "_duplicates_temp"


# =============================
# Enums
# =============================

class DuplicateKind(Enum):
    """
    How the members of a duplicate group were matched.
    """
    EXACT = "exact"
    SEMANTIC = "semantic"

    @property
    def display_name(self) -> str:
        """Human-readable name for report headings."""
        mapping = {
            DuplicateKind.EXACT: "Exact duplicates",
            DuplicateKind.SEMANTIC: "Semantic duplicates",
        }
        return mapping.get(self, self.value)

    def __repr__(self) -> str:
        return self.value


class Stage(str, Enum):
    SIZE = "Size grouping"
    HASH = "Content Hash"
    SEMANTIC = "Song key grouping"


class ArtistFallback(Enum):
    """
    Where the artist comes from when the filename does not name one.
    """
    NONE = "none"
    ROOT = "root"
    PARENT = "parent"
    EXPLICIT = "explicit"

    @property
    def display_name(self) -> str:
        mapping = {
            ArtistFallback.NONE: "Unknown",
            ArtistFallback.ROOT: "Scanned directory name",
            ArtistFallback.PARENT: "Parent directory name",
            ArtistFallback.EXPLICIT: "Explicit artist",
        }
        return mapping.get(self, self.value)


class HashAlgorithmName(Enum):
    XXHASH = "xxhash"
    MD5 = "md5"


class SpecialCategory(Enum):
    """
    Special recordings that usually do not belong in a clean library.
    The value is the quarantine subdirectory the category is moved into.
    """
    LIVE = "live"
    INSTRUMENTAL = "instrumental"
    INTRO = "intro"

    @property
    def label(self) -> str:
        mapping = {
            SpecialCategory.LIVE: "Live versions",
            SpecialCategory.INSTRUMENTAL: "Instrumental / backing tracks",
            SpecialCategory.INTRO: "Intros / overtures",
        }
        return mapping.get(self, self.value)


# ======================
#  Core Data Models
# ======================

@dataclass
class FileCandidate:
    """
    One audio file considered for deduplication.
    Parsing and hashing results are filled in by later stages.
    """
    path: str
    size_bytes: int
    extension: Optional[str] = None
    raw_name: Optional[str] = None
    parsed_artist: Optional[str] = None
    parsed_title: Optional[str] = None
    normalized_key: str = ""
    content_hash: Optional[str] = None
    associated_lyric_path: Optional[str] = None
    order: int = 0

    def __post_init__(self):
        """Derive extension and raw name from the path when not provided."""
        base = os.path.basename(self.path)
        stem, ext = os.path.splitext(base)
        if self.extension is None:
            self.extension = ext.lower()  # ".FLAC" → ".flac"
        if self.raw_name is None:
            self.raw_name = stem

    @property
    def name(self) -> str:
        """Filename with extension."""
        return os.path.basename(self.path)

    @property
    def directory(self) -> str:
        return os.path.dirname(self.path)

    @property
    def is_lyric(self) -> bool:
        return self.extension == LYRIC_EXTENSION

    def __repr__(self):
        return f"<FileCandidate path={self.path}, size={self.size_bytes}>"


@dataclass
class DuplicateGroup:
    """
    Two or more candidates judged to be the same song.
    Exact groups share size and content hash; semantic groups share the normalized key.
    After ranking, members are ordered best first.
    """
    kind: DuplicateKind
    key: str
    members: List[FileCandidate]

    @property
    def duplicate_count(self) -> int:
        return len(self.members)

    @property
    def keeper(self) -> FileCandidate:
        return self.members[0]

    @property
    def removable(self) -> List[FileCandidate]:
        return self.members[1:]

    @property
    def total_size(self) -> int:
        return sum(m.size_bytes for m in self.members)

    @property
    def title(self) -> str:
        """Readable song label for reports and quarantine folder names."""
        if self.kind == DuplicateKind.SEMANTIC and "|" in self.key:
            artist, title = self.key.split("|", 1)
            return f"{artist} - {title}"
        return self.keeper.parsed_title or self.keeper.raw_name or UNKNOWN_ARTIST

    def is_duplicate(self) -> bool:
        """True if this group contains at least two files."""
        return self.duplicate_count >= 2

    def __repr__(self):
        return f"<DuplicateGroup kind={self.kind.value}, key={self.key}, count={len(self.members)}>"


@dataclass(frozen=True)
class MoveOperation:
    """A proposed move of one file into the quarantine directory."""
    source: str
    destination: str
    is_lyric: bool = False


@dataclass
class ResolutionPlan:
    """
    Keepers and removable members across all duplicate groups,
    plus the moves (audio first, then its lyric sidecar) that quarantine the removable ones.
    """
    quarantine_dir: str
    groups: List[DuplicateGroup] = field(default_factory=list)
    keepers: List[FileCandidate] = field(default_factory=list)
    removable: List[FileCandidate] = field(default_factory=list)
    move_operations: List[MoveOperation] = field(default_factory=list)

    @property
    def bytes_to_free(self) -> int:
        return sum(c.size_bytes for c in self.removable)


@dataclass
class OrphanLyric:
    path: str


@dataclass
class EmptyDirectory:
    path: str
    reason: str  # "empty" or "cover-only"


@dataclass
class ClassificationStats:
    """
    Statistics collected during classification.
    """
    def __init__(self):
        self.total_time: float = 0.0
        self.stage_stats: Dict[str, Dict[str, Union[int, float]]] = {}
        self._listeners: List[Callable[[str, Dict], None]] = []

    def add_listener(self, listener: Callable[[str, Dict], None]):
        """Adds a listener to receive updates when stats are updated."""
        self._listeners.append(listener)

    def update_stage(
            self,
            stage_name: str,
            groups_found: int,
            files_processed: int,
            duration: float
    ) -> None:
        if stage_name not in self.stage_stats:
            self.stage_stats[stage_name] = {
                "groups": 0,
                "files": 0,
                "time": 0.0
            }
        self.stage_stats[stage_name]["groups"] += groups_found
        self.stage_stats[stage_name]["files"] += files_processed
        self.stage_stats[stage_name]["time"] += duration

        for listener in self._listeners:
            try:
                listener(stage_name, self.stage_stats[stage_name])
            except Exception as e:
                logger.warning(f"Error in stats event handler: {e}")

    def print_summary(self) -> str:
        labels = {
            "size": "📁 Size Groups",
            "hash": "🔒 Content Hash Groups",
            "semantic": "🎵 Song Key Groups",
        }

        lines = [
            "📊 Classification Statistics:",
            f"Total Execution Time: {self.total_time:.3f}s\n",
            "Stage: GROUPS / FILES / TIME"
        ]

        for stage, data in self.stage_stats.items():
            label = labels.get(stage.lower(), stage.title())
            lines.append(f"{label}: {data['groups']} / {data['files']} / {data['time']:.3f}s")

        return "\n".join(lines)


"""
DTO for scan parameters with built-in validation.
"""
from songsweep.utils.convert_utils import ConvertUtils


@dataclass
class ScanParams:
    """Parameters for a scan with validation."""
    root_dir: str
    extensions: List[str] = field(default_factory=lambda: sorted(DEFAULT_AUDIO_EXTENSIONS))
    min_size_bytes: int = 0
    max_size_bytes: Optional[int] = None
    artist_fallback: ArtistFallback = ArtistFallback.ROOT
    fallback_artist: Optional[str] = None
    known_artists: List[str] = field(default_factory=list)
    quarantine_name: str = DEFAULT_QUARANTINE_NAME
    hash_algorithm: HashAlgorithmName = HashAlgorithmName.XXHASH

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if not self.root_dir:
            raise ValueError("Root directory cannot be empty")

        if self.min_size_bytes < 0:
            raise ValueError("Minimum size cannot be negative")

        if self.max_size_bytes is not None and self.max_size_bytes < self.min_size_bytes:
            raise ValueError("Maximum size cannot be less than minimum size")

        if self.artist_fallback == ArtistFallback.EXPLICIT and not (self.fallback_artist or "").strip():
            raise ValueError("An explicit fallback artist requires an artist name")

        if not self.quarantine_name or os.sep in self.quarantine_name or "/" in self.quarantine_name:
            raise ValueError("Quarantine name must be a single directory name")

        # Scans skip "_" folders, so quarantined files are never picked up again
        if not self.quarantine_name.startswith("_"):
            raise ValueError("Quarantine name must start with '_'")

        # Normalize extensions: ensure they start with dot and are lowercase
        normalized = []
        for ext in self.extensions:
            ext = ext.strip().lower()
            if ext and not ext.startswith('.'):
                ext = f".{ext}"
            if ext and ext not in normalized:
                normalized.append(ext)
        if not normalized:
            raise ValueError("At least one audio extension is required")
        if LYRIC_EXTENSION in normalized:
            raise ValueError("Lyric files (.lrc) cannot be scanned as audio")
        self.extensions = normalized

        self.known_artists = [a.strip() for a in self.known_artists if a and a.strip()]

    @property
    def quarantine_dir(self) -> str:
        return os.path.join(self.root_dir, self.quarantine_name)

    def fallback_for(self, file_path: str) -> Optional[str]:
        """Artist to use for a file whose name does not carry one."""
        if self.artist_fallback == ArtistFallback.EXPLICIT:
            return self.fallback_artist
        if self.artist_fallback == ArtistFallback.ROOT:
            return os.path.basename(os.path.normpath(self.root_dir)) or None
        if self.artist_fallback == ArtistFallback.PARENT:
            return os.path.basename(os.path.dirname(file_path)) or None
        return None

    @staticmethod
    def from_human_readable(
            root_dir: str,
            min_size_str: str = "0",
            max_size_str: str = "",
            extensions_str: str = "",
            artist_fallback: ArtistFallback = ArtistFallback.ROOT,
            fallback_artist: Optional[str] = None,
            known_artists: Optional[List[str]] = None,
            quarantine_name: str = DEFAULT_QUARANTINE_NAME,
            hash_algorithm: HashAlgorithmName = HashAlgorithmName.XXHASH,
    ) -> 'ScanParams':
        """
        Factory method to create params from human-readable inputs.
        Useful for CLI argument parsing.
        """
        min_size = ConvertUtils.human_to_bytes(min_size_str) if min_size_str else 0
        max_size = ConvertUtils.human_to_bytes(max_size_str) if max_size_str else None

        ext_list = [
            ext.strip() for ext in extensions_str.split(",") if ext.strip()
        ] if extensions_str else sorted(DEFAULT_AUDIO_EXTENSIONS)

        return ScanParams(
            root_dir=root_dir,
            extensions=ext_list,
            min_size_bytes=min_size,
            max_size_bytes=max_size,
            artist_fallback=artist_fallback,
            fallback_artist=fallback_artist,
            known_artists=known_artists or [],
            quarantine_name=quarantine_name,
            hash_algorithm=hash_algorithm,
        )
