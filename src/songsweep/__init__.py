"""
songsweep: duplicate song finder and music library housekeeping.

Core features:
- Exact duplicates by size and full content hash (xxHash64 or MD5)
- Same-song duplicates by parsed and normalized "artist - title" filenames
- Deterministic keeper selection (naming, script, size and lossless format)
- Quarantine plans and reviewable cleanup scripts; lyric sidecars move with their songs
- Special versions, orphaned lyrics and empty folders
- Safe by construction: files are moved, reviewed quarantines go to the system trash
"""

# Get version
try:
    from importlib.metadata import version as _version
    __version__ = _version("songsweep")
except Exception:
    try:
        import tomllib  # Python 3.11+
    except ImportError:
        import tomli as tomllib  # Python < 3.11: pip install tomli

    with open("pyproject.toml", "rb") as f:
        __version__ = tomllib.load(f)["project"]["version"]

# Public API, only what users should import directly
from songsweep.commands import DuplicateScanCommand
from songsweep.core import ScanParams, ArtistFallback, FileCandidate, DuplicateGroup, DuplicateKind
from songsweep.core.parser import parse
from songsweep.core.normalizer import normalize
from songsweep.core.sorter import Sorter
from songsweep.utils.convert_utils import ConvertUtils
from songsweep.services import PlanService
from songsweep.services.file_service import FileService

__all__ = [
    "DuplicateScanCommand",
    "ScanParams",
    "ArtistFallback",
    "FileCandidate",
    "DuplicateGroup",
    "DuplicateKind",
    "parse",
    "normalize",
    "Sorter",
    "ConvertUtils",
    "PlanService",
    "FileService",
    "__version__",
]
