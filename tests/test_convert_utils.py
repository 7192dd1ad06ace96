"""
Tests for size conversion and folder-name helpers used by filters and reports.
"""
import pytest
from songsweep.utils.convert_utils import ConvertUtils


class TestHumanToBytes:
    """Size filters accept plain bytes or binary units."""

    @pytest.mark.parametrize("text, expected", [
        ("0", 0),
        ("1024", 1024),
        ("1024B", 1024),
        ("1K", 1024),
        ("1.5KB", 1536),
        ("1M", 1024 ** 2),
        ("500kb", 500 * 1024),
        ("0.5GB", 512 * 1024 ** 2),
        (" 2MB\n", 2 * 1024 ** 2),
        ("10 M", 10 * 1024 ** 2),
        ("1P", 1024 ** 5),
    ])
    def test_valid_sizes(self, text, expected):
        assert ConvertUtils.human_to_bytes(text) == expected

    @pytest.mark.parametrize("text", ["-1", "-1KB"])
    def test_rejects_negative_values(self, text):
        with pytest.raises(ValueError, match="Negative size not allowed"):
            ConvertUtils.human_to_bytes(text)

    @pytest.mark.parametrize("text", ["", "big", "1.2.3KB", "1KB2", "MB", "1 XB"])
    def test_rejects_invalid_formats(self, text):
        with pytest.raises(ValueError):
            ConvertUtils.human_to_bytes(text)

    def test_is_valid_size_format(self):
        assert ConvertUtils.is_valid_size_format("10MB")
        assert not ConvertUtils.is_valid_size_format("ten")


class TestBytesToHuman:
    @pytest.mark.parametrize("size, expected", [
        (0, "0.00B"),
        (1023, "1023.00B"),
        (1536, "1.50KB"),
        (5 * 1024 ** 2, "5.00MB"),
        (1024 ** 3, "1.00GB"),
        (1024 ** 6, "1024.00PB"),
        (-5, "0B"),
    ])
    def test_formats(self, size, expected):
        assert ConvertUtils.bytes_to_human(size) == expected

    def test_bytes_to_megabytes(self):
        assert ConvertUtils.bytes_to_megabytes(3 * 1024 ** 2) == "3.00MB"
        assert ConvertUtils.bytes_to_megabytes(512 * 1024) == "0.50MB"
        assert ConvertUtils.bytes_to_megabytes(-1) == "0.00MB"


class TestSafeDirName:
    def test_replaces_invalid_characters(self):
        assert ConvertUtils.safe_dir_name('a/b\\c:d*e?f"g<h>i|j') == "a_b_c_d_e_f_g_h_i_j"

    def test_keeps_unicode(self):
        assert ConvertUtils.safe_dir_name("海阔天空 (Live)") == "海阔天空 (Live)"

    def test_truncates(self):
        assert ConvertUtils.safe_dir_name("x" * 80) == "x" * 50
        assert ConvertUtils.safe_dir_name("abcdef", max_length=3) == "abc"
