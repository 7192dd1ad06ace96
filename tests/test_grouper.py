"""
Unit tests for FileGrouperImpl.
Verifies grouping by size, content hash and song key, and single-member filtering.
"""
from unittest import mock

from songsweep.core.grouper import FileGrouperImpl
from songsweep.core.hasher import HasherImpl


class TestFileGrouperImpl:
    def test_group_by_size_drops_unique_sizes(self, make_candidate):
        a = make_candidate("/m/a.mp3", 100)
        b = make_candidate("/m/b.mp3", 100)
        c = make_candidate("/m/c.mp3", 200)

        groups = FileGrouperImpl().group_by_size([a, b, c])

        assert groups == {100: [a, b]}

    def test_group_by_song_key_keeps_input_order(self, make_candidate):
        a = make_candidate("/m/a.mp3", normalized_key="beyond|海阔天空")
        b = make_candidate("/m/b.flac", normalized_key="beyond|海阔天空")
        c = make_candidate("/m/c.mp3", normalized_key="beyond|光辉岁月")

        groups = FileGrouperImpl().group_by_song_key([b, c, a])

        assert groups == {"beyond|海阔天空": [b, a]}

    def test_group_by_song_key_ignores_empty_keys(self, make_candidate):
        a = make_candidate("/m/a.mp3")
        b = make_candidate("/m/b.mp3")
        assert FileGrouperImpl().group_by_song_key([a, b]) == {}

    def test_group_by_full_hash(self, tmp_path, make_candidate):
        for name, content in (("a.mp3", b"same"), ("b.mp3", b"same"), ("c.mp3", b"diff")):
            (tmp_path / name).write_bytes(content)
        a, b, c = (make_candidate(str(tmp_path / n), 4) for n in ("a.mp3", "b.mp3", "c.mp3"))

        groups = FileGrouperImpl().group_by_full_hash([a, b, c])

        assert list(groups.values()) == [[a, b]]

    def test_unreadable_files_are_left_out(self, tmp_path, make_candidate):
        (tmp_path / "a.mp3").write_bytes(b"same")
        (tmp_path / "b.mp3").write_bytes(b"same")
        a = make_candidate(str(tmp_path / "a.mp3"), 4)
        b = make_candidate(str(tmp_path / "b.mp3"), 4)
        missing = make_candidate(str(tmp_path / "gone.mp3"), 4)

        groups = FileGrouperImpl().group_by_full_hash([a, missing, b])

        assert list(groups.values()) == [[a, b]]

    def test_uses_injected_hasher(self, make_candidate):
        hasher = mock.Mock(spec=HasherImpl)
        hasher.compute_full_hash.side_effect = lambda c: "h"
        a = make_candidate("/m/a.mp3", 4)
        b = make_candidate("/m/b.mp3", 4)

        groups = FileGrouperImpl(hasher).group_by_full_hash([a, b])

        assert groups == {"h": [a, b]}
        assert hasher.compute_full_hash.call_count == 2
