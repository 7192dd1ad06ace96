"""
Copyright (c) 2026 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/normalizer.py
Song key normalization for semantic duplicate detection.

The key has the form "<artist>|<title>". Titles lose trailing descriptive
suffixes ("(Live)", "[Remastered]", "(2005版)"), traditional Chinese characters
are folded to simplified ones, standalone Roman numerals become digits, and
case, whitespace and dashes are dropped. Artists get only the script, case
and whitespace folding.

The traditional→simplified table is deliberately partial: it covers the
characters that actually show up in the filenames this tool was built for,
not the full Unicode CJK range. Names using other traditional characters
will not be folded.
"""

import re
from functools import lru_cache
from types import MappingProxyType
from typing import Optional

# Lookup tables (immutable)
TRAD_TO_SIMP = MappingProxyType({
    '齊': '齐', '學': '学', '華': '华', '國': '国', '愛': '爱',
    '戀': '恋', '夢': '梦', '風': '风', '雲': '云', '時': '时',
    '間': '间', '東': '东', '車': '车', '馬': '马', '鳥': '鸟',
    '魚': '鱼', '長': '长', '門': '门', '開': '开', '關': '关',
    '聽': '听', '說': '说', '話': '话', '語': '语', '紅': '红',
    '綠': '绿', '藍': '蓝', '黃': '黄', '頭': '头', '臉': '脸',
    '體': '体', '發': '发', '無': '无', '從': '从', '來': '来',
    '過': '过', '裡': '里', '裏': '里', '葉': '叶', '電': '电',
    '腦': '脑', '機': '机', '書': '书', '畫': '画', '詩': '诗',
    '聲': '声', '響': '响', '樂': '乐', '見': '见', '親': '亲',
    '對': '对', '這': '这', '誰': '谁', '讓': '让', '還': '还',
    '後': '后', '隨': '随', '現': '现', '場': '场', '會': '会',
    '純': '纯', '鋼': '钢', '獨': '独', '粵': '粤',
})

ROMAN_TO_ARABIC = MappingProxyType({
    'VIII': '8', 'VII': '7', 'III': '3', 'II': '2', 'IV': '4',
    'VI': '6', 'IX': '9', 'V': '5', 'X': '10', 'I': '1',
})

DESCRIPTIVE_VOCABULARY = (
    'live', 'remix', 'mix', 'cover', 'demo', 'acoustic', 'instrumental',
    'dj', '伴奏', '演唱会', '现场', '版', '大合唱', '合唱', '独唱',
    '钢琴版', '吉他版', '纯音乐', 'karaoke', 'ktv', 'radio edit',
    'remaster', 'remastered', 'bonus', 'edit', 'extended', 'short',
    '国语', '粤语', '日语', '英语', '翻唱',
)

# Pre-compiled regex patterns
_PATTERN_NOISE = re.compile(r'[\s\-–—·]')
_PATTERN_TRAILING_NOISE = re.compile(r'[\s\-–—·]+$')
_PATTERN_TRAILING_BRACKET = re.compile(r'\s*[\[【][^\[\]【】]*[\]】]$')
_PATTERN_TRAILING_PAREN = re.compile(r'\s*[（(]([^()（）]*)[)）]$')
_PATTERN_VERSION_MARKER = re.compile(r'\d+(?:年版|年|版)')
# Longest numerals first so "III" is not read as three "I"s
_PATTERN_ROMAN = re.compile(
    r'(?<![A-Za-z])(VIII|VII|III|IV|VI|IX|II|V|X|I)(?![A-Za-z])',
    re.IGNORECASE
)


def fold_traditional(text: str) -> str:
    """Replace known traditional characters with their simplified forms."""
    return "".join(TRAD_TO_SIMP.get(c, c) for c in text)


def fold_roman_numerals(text: str) -> str:
    """Replace standalone Roman numerals I-X with Arabic digits."""
    return _PATTERN_ROMAN.sub(lambda m: ROMAN_TO_ARABIC[m.group(1).upper()], text)


def _strip_noise(text: str) -> str:
    return _PATTERN_NOISE.sub('', text)


def _trim(text: str) -> str:
    return _PATTERN_TRAILING_NOISE.sub('', text.strip())


def _fold_for_matching(text: str) -> str:
    # Same folding the title pipeline applies after suffix stripping
    return _strip_noise(fold_roman_numerals(fold_traditional(text)).lower())


_VOCABULARY_FOLDED = tuple(sorted(
    {_fold_for_matching(term) for term in DESCRIPTIVE_VOCABULARY},
    key=len,
    reverse=True,
))


def is_descriptive_tag(content: str) -> bool:
    """
    True if bracket content describes a version of a song rather than naming it:
    it starts with a descriptive term ("Live at Wembley", "钢琴版") or is a
    year/version marker.
    """
    folded = _fold_for_matching(content)
    if not folded:
        return False
    if folded.startswith(_VOCABULARY_FOLDED):
        return True
    return _PATTERN_VERSION_MARKER.fullmatch(folded) is not None


def strip_descriptive_suffixes(title: str) -> str:
    """
    Repeatedly remove a trailing [...] block and a trailing descriptive
    parenthetical until the title stops changing.
    """
    result = _trim(title)
    while True:
        previous = result
        result = _trim(_PATTERN_TRAILING_BRACKET.sub('', result))
        match = _PATTERN_TRAILING_PAREN.search(result)
        if match and is_descriptive_tag(match.group(1)):
            result = _trim(result[:match.start()])
        if result == previous:
            return result


@lru_cache(maxsize=8192)
def normalize_title(title: Optional[str]) -> str:
    """
    Normalize a song title for grouping.

    Examples:
        "海阔天空 [Live]"      → "海阔天空"
        "趁早 (2005版)"        → "趁早"
        "Rocky II (Remaster)" → "rocky2"
        "風繼續吹"             → "风繼續吹"  (only mapped characters fold)
    """
    if not title:
        return ""
    result = strip_descriptive_suffixes(title)
    result = fold_traditional(result)
    result = fold_roman_numerals(result)
    return _strip_noise(result.lower())


@lru_cache(maxsize=8192)
def normalize_artist(artist: Optional[str]) -> str:
    """Fold script, case and whitespace of an artist name."""
    if not artist:
        return ""
    return re.sub(r'\s+', '', fold_traditional(artist).lower())


def normalize(title: Optional[str], artist: Optional[str]) -> str:
    """Grouping key "<normArtist>|<normTitle>" for a parsed song."""
    return f"{normalize_artist(artist)}|{normalize_title(title)}"
