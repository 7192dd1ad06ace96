"""
Unit tests for core/sorter.py
Verifies keeper selection: score, then name length, then copy markers, then enumeration order.
"""
import pytest

from songsweep.core.models import DuplicateGroup, DuplicateKind
from songsweep.core.sorter import Sorter

MB = 1024 * 1024


# =============================================================================
# 1. SCORE
# =============================================================================
class TestScore:
    """Each scoring component on its own."""

    def test_artist_title_form_adds_100(self, make_candidate):
        named = make_candidate("/m/Beyond - 海阔天空.mp3", 0)
        bare = make_candidate("/m/海阔天空.mp3", 0)
        assert Sorter.score(named) - Sorter.score(bare) == 100

    def test_simplified_name_adds_20(self, make_candidate):
        simplified = make_candidate("/m/齐秦.mp3", 0)
        traditional = make_candidate("/m/齊秦.mp3", 0)
        assert Sorter.score(simplified) == 20
        assert Sorter.score(traditional) == 0

    def test_one_point_per_mebibyte(self, make_candidate):
        assert Sorter.score(make_candidate("/m/齊.mp3", 3 * MB)) == 3
        assert Sorter.score(make_candidate("/m/齊.mp3", MB // 2)) == 0.5

    @pytest.mark.parametrize("ext, bonus", [(".flac", 50), (".ape", 40), (".wav", 30), (".mp3", 0), (".m4a", 0)])
    def test_format_bonus(self, make_candidate, ext, bonus):
        assert Sorter.score(make_candidate(f"/m/齊{ext}", 0)) == bonus

    def test_uppercase_extension_gets_the_bonus(self, make_candidate):
        assert Sorter.score(make_candidate("/m/齊.FLAC", 0)) == 50

    def test_live_flac_beats_named_mp3(self, make_candidate):
        """20 + 60 + 50 = 130 against 100 + 20 + 5 = 125."""
        mp3 = make_candidate("/m/Beyond - 海阔天空.mp3", 5 * MB)
        flac = make_candidate("/m/海阔天空 [Live].flac", 60 * MB)
        assert Sorter.score(mp3) == 125
        assert Sorter.score(flac) == 130


# =============================================================================
# 2. COPY MARKERS
# =============================================================================
class TestIsCopyName:
    @pytest.mark.parametrize("name", [
        "真的爱你 copy.mp3",
        "真的爱你 Copy 2.mp3",
        "真的爱你 copy (3).mp3",
        "真的爱你 副本.mp3",
        "真的爱你 - 拷贝.mp3",
        "真的爱你 副本（2）.mp3",
    ])
    def test_copy_names(self, make_candidate, name):
        assert Sorter.is_copy_name(make_candidate(f"/m/{name}"))

    def test_regular_name(self, make_candidate):
        assert not Sorter.is_copy_name(make_candidate("/m/Beyond - 真的爱你.mp3"))

    def test_extension_is_not_inspected(self, make_candidate):
        assert not Sorter.is_copy_name(make_candidate("/m/song.copy"))


# =============================================================================
# 3. RANKING
# =============================================================================
class TestRank:
    def test_highest_score_first(self, make_candidate):
        low = make_candidate("/m/海阔天空.mp3", MB)
        high = make_candidate("/m/Beyond - 海阔天空.mp3", MB)
        assert Sorter.rank([low, high]) == [high, low]

    def test_shorter_raw_name_breaks_score_ties(self, make_candidate):
        longer = make_candidate("/a/海阔天空 .mp3", MB)
        shorter = make_candidate("/b/海阔天空.mp3", MB)
        assert Sorter.rank([longer, shorter])[0] is shorter

    def test_copy_marker_breaks_length_ties(self, make_candidate):
        """"copy" and "abcd" have equal length; the copy loses."""
        copy = make_candidate("/m/x copy.mp3", MB)
        plain = make_candidate("/m/x abcd.mp3", MB)
        assert Sorter.rank([copy, plain]) == [plain, copy]

    def test_enumeration_order_is_the_last_tie_break(self, make_candidate):
        first = make_candidate("/a/海阔天空.mp3", MB)
        second = make_candidate("/b/海阔天空.mp3", MB)
        assert Sorter.rank([second, first]) == [first, second]

    def test_rank_does_not_modify_input(self, make_candidate):
        low = make_candidate("/m/海阔天空.mp3", MB)
        high = make_candidate("/m/Beyond - 海阔天空.mp3", MB)
        members = [low, high]

        Sorter.rank(members)

        assert members == [low, high]

    def test_exact_copy_loses_to_original(self, make_candidate):
        original = make_candidate("/m/Beyond - 真的爱你.mp3", 4096)
        copy = make_candidate("/m/真的爱你 copy.mp3", 4096)
        assert Sorter.rank([copy, original])[0] is original


class TestSortFilesInsideGroups:
    def test_empty_list(self):
        groups = []
        Sorter.sort_files_inside_groups(groups)
        assert groups == []

    def test_keeper_is_first_member(self, make_candidate):
        mp3 = make_candidate("/m/Beyond - 海阔天空.mp3", 5 * MB)
        flac = make_candidate("/m/海阔天空 [Live].flac", 60 * MB)
        group = DuplicateGroup(kind=DuplicateKind.SEMANTIC, key="beyond|海阔天空", members=[mp3, flac])

        Sorter.sort_files_inside_groups([group])

        assert group.keeper is flac
        assert group.removable == [mp3]
