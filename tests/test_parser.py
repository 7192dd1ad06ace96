"""
Unit tests for filename parsing.
Verifies matcher order, track number removal, fallbacks and the known artists flip.
"""
import pytest
from songsweep.core.parser import ParsedName, artist_matches, parse, strip_track_number


class TestStripTrackNumber:
    @pytest.mark.parametrize("name, expected", [
        ("01 - Beyond - 海阔天空", "Beyond - 海阔天空"),
        ("01. 海阔天空", "海阔天空"),
        ("01 海阔天空", "海阔天空"),
        ("25.海阔天空", "海阔天空"),
        ("海阔天空", "海阔天空"),
    ])
    def test_removes_one_leading_track_number(self, name, expected):
        assert strip_track_number(name) == expected

    def test_never_strips_to_empty(self):
        assert strip_track_number("05") == "05"
        assert strip_track_number("05.") == "05."


class TestParse:
    """First matching rule wins."""

    def test_spaced_dash(self):
        assert parse("Beyond - 海阔天空.mp3") == ParsedName("Beyond", "海阔天空")

    def test_splits_on_first_spaced_dash_only(self):
        assert parse("Beyond - 海阔天空 - Live.mp3") == ParsedName("Beyond", "海阔天空 - Live")

    def test_bare_dash(self):
        assert parse("Beyond-海阔天空.flac") == ParsedName("Beyond", "海阔天空")

    def test_bare_dash_with_numeric_left_side_is_not_an_artist(self):
        parsed = parse("1-01.mp3")
        assert parsed.artist == "Unknown"

    def test_parenthetical_artist(self):
        assert parse("海阔天空 (Beyond).mp3") == ParsedName("Beyond", "海阔天空")
        assert parse("后来（刘若英）.mp3") == ParsedName("刘若英", "后来")

    def test_version_parenthetical_is_not_an_artist(self):
        """(2005版) labels a version; the title keeps it and the artist falls back."""
        parsed = parse("趁早 (2005版).mp3", fallback_artist="张惠妹")
        assert parsed.artist == "张惠妹"
        assert parsed.title == "趁早 (2005版)"

    def test_live_parenthetical_is_stripped_from_title(self):
        parsed = parse("海阔天空 (Live).mp3")
        assert parsed.title == "海阔天空"
        assert parsed.has_unknown_artist

    def test_short_tag_stripped_once_after_split(self):
        assert parse("Beyond - 海阔天空 (伴奏).mp3") == ParsedName("Beyond", "海阔天空")

    def test_whole_name_becomes_title(self):
        assert parse("海阔天空.mp3") == ParsedName("Unknown", "海阔天空")

    def test_track_number_then_split(self):
        assert parse("03. Beyond - 海阔天空.mp3") == ParsedName("Beyond", "海阔天空")

    def test_dot_in_name_is_not_an_extension(self):
        assert parse("Mr. Brightside") == ParsedName("Unknown", "Mr. Brightside")

    def test_fallback_artist(self):
        assert parse("海阔天空.mp3", fallback_artist="Beyond").artist == "Beyond"

    def test_unknown_placeholder_is_replaced_by_fallback(self):
        assert parse("unknown - 海阔天空.mp3", fallback_artist="Beyond").artist == "Beyond"

    def test_blank_fallback_is_ignored(self):
        assert parse("海阔天空.mp3", fallback_artist="  ").artist == "Unknown"

    def test_digits_only_name(self):
        """Scenario: "05.mp3" has no artist and keeps its digits as the title."""
        assert parse("05.mp3") == ParsedName("Unknown", "05")

    @pytest.mark.parametrize("name", ["", " - ", "-", "()", "（）.mp3", "...", "-.mp3"])
    def test_never_raises(self, name):
        parsed = parse(name)
        assert isinstance(parsed, ParsedName)
        assert parsed.artist


class TestKnownArtists:
    def test_title_artist_order_is_flipped(self):
        parsed = parse("海阔天空 - Beyond.mp3", known_artists=["Beyond"])
        assert parsed == ParsedName("Beyond", "海阔天空")

    def test_artist_title_order_is_kept(self):
        parsed = parse("Beyond - 海阔天空.mp3", known_artists=["Beyond"])
        assert parsed == ParsedName("Beyond", "海阔天空")

    def test_no_flip_without_allowlist(self):
        assert parse("海阔天空 - Beyond.mp3") == ParsedName("海阔天空", "Beyond")

    def test_flip_compares_normalized_names(self):
        parsed = parse("光辉岁月 - beyond.mp3", known_artists=["Beyond"])
        assert parsed.artist == "beyond"
        assert parsed.title == "光辉岁月"


class TestArtistMatches:
    @pytest.mark.parametrize("file_artist, context", [
        ("齐秦", "齐秦"),
        ("齊秦", "齐秦"),
        ("齐秦 & 王祖贤", "齐秦"),
        ("王祖贤、齐秦", "齐秦"),
        ("Jay Chou feat. Lara", "jay chou"),
    ])
    def test_matches(self, file_artist, context):
        assert artist_matches(file_artist, context)

    @pytest.mark.parametrize("file_artist, context", [
        ("王祖贤", "齐秦"),
        (None, "齐秦"),
        ("齐秦", None),
        ("齐秦", "  "),
    ])
    def test_does_not_match(self, file_artist, context):
        assert not artist_matches(file_artist, context)
