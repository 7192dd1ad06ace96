"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

utils/convert_utils.py
Size parsing for the --min-size/--max-size filters and the formatting used in reports.
"""
import re

# Binary multiples, indexed by position: B, K, M, G, T, P
SIZE_UNITS = ("B", "KB", "MB", "GB", "TB", "PB")
SIZE_PATTERN = re.compile(r"^(-?\d+(?:\.\d+)?)\s*([KMGTP]?)B?$")

INVALID_FOLDER_CHARS = '/\\:*?"<>|'


class ConvertUtils:
    @staticmethod
    def bytes_to_human(size_bytes: int) -> str:
        """
        Size with two decimals in the largest unit below 1024 (e.g., 1.50KB, 3.00MB).
        """
        if size_bytes < 0:
            return "0B"

        value = float(size_bytes)
        unit_index = 0
        while value >= 1024 and unit_index < len(SIZE_UNITS) - 1:
            value /= 1024
            unit_index += 1
        return f"{value:.2f}{SIZE_UNITS[unit_index]}"

    @staticmethod
    def bytes_to_megabytes(size_bytes: int) -> str:
        """Megabytes with two decimals, the unit used in song listings."""
        return f"{max(size_bytes, 0) / 1024 / 1024:.2f}MB"

    @staticmethod
    def human_to_bytes(size_str: str) -> int:
        """
        Parse '1000', '1.5GB', '2048KB', '1K', '10 M' (case-insensitive) into bytes.
        Raises ValueError for negative sizes or invalid formats.
        """
        text = size_str.strip().upper()
        match = SIZE_PATTERN.match(text)
        if not match:
            raise ValueError(
                f"Invalid size format: '{size_str.strip()}'. "
                f"Supported formats: 1.5GB, 2048KB, 1000, 1K, 1M, etc."
            )

        number, prefix = match.groups()
        value = float(number)
        if value < 0:
            raise ValueError(f"Negative size not allowed: '{text}'")

        power = SIZE_UNITS.index(prefix + "B") if prefix else 0
        return int(value * 1024 ** power)

    @staticmethod
    def is_valid_size_format(size_str: str) -> bool:
        try:
            ConvertUtils.human_to_bytes(size_str)
            return True
        except ValueError:
            return False

    @staticmethod
    def safe_dir_name(name: str, max_length: int = 50) -> str:
        """Replace characters that are invalid in folder names and cut to max_length."""
        cleaned = "".join("_" if c in INVALID_FOLDER_CHARS else c for c in name)
        return cleaned[:max_length]
