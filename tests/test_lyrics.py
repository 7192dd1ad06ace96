"""
Unit tests for OrphanLyricFinder.
"""
from songsweep.core.lyrics import OrphanLyricFinder


def _orphan_paths(root):
    return [o.path for o in OrphanLyricFinder().find(str(root))]


class TestOrphanLyricFinder:
    def test_finds_orphan_in_library(self, music_library):
        assert _orphan_paths(music_library["root"]) == [str(music_library["orphan_lrc"])]

    def test_lyric_with_audio_is_not_orphaned(self, temp_dir):
        (temp_dir / "Song.flac").write_bytes(b"x")
        (temp_dir / "Song.lrc").write_text("la")
        assert _orphan_paths(temp_dir) == []

    def test_stem_and_extension_compare_case_insensitively(self, temp_dir):
        (temp_dir / "song.MP3").write_bytes(b"x")
        (temp_dir / "SONG.LRC").write_text("la")
        assert _orphan_paths(temp_dir) == []

    def test_audio_in_another_directory_does_not_count(self, temp_dir):
        (temp_dir / "a").mkdir()
        (temp_dir / "a" / "Song.mp3").write_bytes(b"x")
        (temp_dir / "Song.lrc").write_text("la")

        orphans = OrphanLyricFinder().find(str(temp_dir))

        assert [o.path for o in orphans] == [str(temp_dir / "Song.lrc")]

    def test_non_audio_file_does_not_count(self, temp_dir):
        (temp_dir / "Song.txt").write_text("notes")
        (temp_dir / "Song.lrc").write_text("la")
        assert _orphan_paths(temp_dir) == [str(temp_dir / "Song.lrc")]

    def test_custom_audio_extensions(self, temp_dir):
        (temp_dir / "Song.opus").write_bytes(b"x")
        (temp_dir / "Song.lrc").write_text("la")
        assert OrphanLyricFinder(audio_extensions=[".OPUS"]).find(str(temp_dir)) == []

    def test_hidden_and_quarantined_lyrics_are_ignored(self, temp_dir):
        (temp_dir / ".Song.lrc").write_text("la")
        (temp_dir / "_duplicates_temp").mkdir()
        (temp_dir / "_duplicates_temp" / "Song.lrc").write_text("la")
        assert _orphan_paths(temp_dir) == []
