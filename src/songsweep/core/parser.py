"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/parser.py
Extracts (artist, title) from song filenames.

Matchers are tried in a fixed order and the first one that returns a split wins:
    1. "Artist - Title"
    2. "Artist-Title"      (rejected when the left side is a bare number)
    3. "Title (Artist)"    (rejected when the parenthesis is a version tag)
    4. whole name as title
A leading track number is removed before matching.
"""

import os
import re
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Tuple

from songsweep.core.models import UNKNOWN_ARTIST
from songsweep.core.normalizer import is_descriptive_tag, normalize_artist

# "01 - Title", "01. Title", "01 Title", "25.Title"
_TRACK_PREFIX_PATTERNS = (
    re.compile(r'^\d+\s+-\s+'),
    re.compile(r'^\d+[.\-]?\s+'),
    re.compile(r'^\d+\.'),
)
_PATTERN_TITLE_PARENTHETICAL = re.compile(r'^(.+?)\s*[（(]([^()（）]+)[)）]$')
_PATTERN_SHORT_TAG = re.compile(r'\s*[（(](Live|Remix|Cover|DJ|伴奏|演唱会|版)[)）]$', re.IGNORECASE)
_PATTERN_EXTENSION = re.compile(r'^\.[A-Za-z0-9]{1,5}$')
_PATTERN_NUMERIC = re.compile(r'^\d+$')
_COLLABORATION_SEPARATORS = re.compile(r'[、&,/×]|\s+x\s+|\s+feat\.?\s+|\s+ft\.?\s+|\s+with\s+', re.IGNORECASE)

Split = Tuple[Optional[str], str]


@dataclass(frozen=True)
class ParsedName:
    artist: str
    title: str

    @property
    def has_unknown_artist(self) -> bool:
        return self.artist == UNKNOWN_ARTIST


def strip_track_number(name: str) -> str:
    """Remove one leading track number; never strips the name to nothing."""
    for pattern in _TRACK_PREFIX_PATTERNS:
        stripped, count = pattern.subn('', name, count=1)
        if count:
            return stripped.strip() or name
    return name


def _split_spaced_dash(name: str) -> Optional[Split]:
    if ' - ' not in name:
        return None
    left, right = name.split(' - ', 1)
    left, right = left.strip(), right.strip()
    if not left or not right:
        return None
    return left, right


def _split_bare_dash(name: str) -> Optional[Split]:
    if '-' not in name:
        return None
    left, right = name.split('-', 1)
    left, right = left.strip(), right.strip()
    # "1-01" style leftovers are still track numbers, not artists
    if not left or not right or _PATTERN_NUMERIC.match(left):
        return None
    return left, right


def _split_parenthetical(name: str) -> Optional[Split]:
    match = _PATTERN_TITLE_PARENTHETICAL.match(name)
    if not match:
        return None
    title, artist = match.group(1).strip(), match.group(2).strip()
    if not title or not artist or is_descriptive_tag(artist):
        return None
    return artist, title


def _whole_name(name: str) -> Optional[Split]:
    return None, name


MATCHERS: Tuple[Callable[[str], Optional[Split]], ...] = (
    _split_spaced_dash,
    _split_bare_dash,
    _split_parenthetical,
    _whole_name,
)


def _is_known(name: Optional[str], known: List[str]) -> bool:
    if not name:
        return False
    folded = normalize_artist(name)
    return any(folded == normalize_artist(k) for k in known)


def parse(
        filename: str,
        fallback_artist: Optional[str] = None,
        known_artists: Optional[Iterable[str]] = None,
) -> ParsedName:
    """
    Parse a song filename (with or without extension) into artist and title.

    Args:
        filename: Base filename, e.g. "03. Beyond - 海阔天空.mp3"
        fallback_artist: Artist to use when the name does not carry one
        known_artists: Optional allowlist; "Title - Artist" is flipped when only
                       the right side is a known artist

    Returns:
        ParsedName, never raising. Unknown artists become fallback_artist or "Unknown".
    """
    stem, ext = os.path.splitext(filename)
    raw_name = stem if _PATTERN_EXTENSION.match(ext) else filename
    fallback = fallback_artist.strip() if fallback_artist and fallback_artist.strip() else None

    name = strip_track_number(raw_name.strip())
    artist, title = None, name
    for matcher in MATCHERS:
        split = matcher(name)
        if split is not None:
            artist, title = split
            break

    known = list(known_artists or [])
    if known and artist and _is_known(title, known) and not _is_known(artist, known):
        artist, title = title, artist

    title = _PATTERN_SHORT_TAG.sub('', title).strip() or title

    if not artist or artist.lower() == UNKNOWN_ARTIST.lower():
        artist = fallback or UNKNOWN_ARTIST

    return ParsedName(artist=artist, title=title or raw_name)


def artist_matches(file_artist: Optional[str], context_artist: Optional[str]) -> bool:
    """
    True if file_artist names context_artist, either exactly or as one
    collaborator ("齐秦 & 王祖贤", "A feat. B").
    """
    if not file_artist or not context_artist:
        return False

    norm_file = normalize_artist(file_artist)
    norm_context = normalize_artist(context_artist)
    if not norm_context:
        return False
    if norm_file == norm_context:
        return True

    collaborators = [
        normalize_artist(part) for part in _COLLABORATION_SEPARATORS.split(file_artist)
    ]
    return any(
        c and (c == norm_context or norm_context in c or c in norm_context)
        for c in collaborators
    )
