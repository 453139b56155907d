"""Tests for storage path helpers."""

import re
from datetime import datetime

import pytest

from app.core.storage.paths import MAX_FILENAME_LENGTH, generate_storage_path, sanitize_filename


@pytest.mark.unit
class TestSanitizeFilename:
    """Test cases for sanitize_filename."""

    def test_keeps_safe_names(self):
        """Test that safe names keep their stem and extension."""
        assert re.fullmatch(r"report-2024_\d+\.pdf", sanitize_filename("report-2024.pdf"))

    @pytest.mark.parametrize(
        "filename",
        ["../../etc/passwd", "..\\..\\windows\\system32", "/absolute/path.txt"],
    )
    def test_strips_directories(self, filename):
        """Test that directory components are removed."""
        result = sanitize_filename(filename)
        assert "/" not in result
        assert "\\" not in result
        assert ".." not in result

    def test_replaces_unsafe_characters(self):
        """Test that spaces and symbols become single underscores."""
        result = sanitize_filename("my  file (1)!.txt")
        assert re.fullmatch(r"my_file_1_?_\d+\.txt", result)

    def test_empty_name(self):
        """Test that an empty name still yields a usable key."""
        assert re.fullmatch(r"file_\d+", sanitize_filename(""))

    def test_long_names_are_truncated(self):
        """Test that very long names fit the column."""
        result = sanitize_filename("a" * 1000 + ".txt")
        assert len(result) <= MAX_FILENAME_LENGTH
        assert result.endswith(".txt")


@pytest.mark.unit
class TestGenerateStoragePath:
    """Test cases for generate_storage_path."""

    def test_dated_layout(self):
        """Test the owner/YYYY/MM/DD/name layout."""
        path = generate_storage_path("user-1", "a.txt", now=datetime(2024, 3, 7))
        assert path == "user-1/2024/03/07/a.txt"

    def test_owner_is_sanitized(self):
        """Test that owner IDs cannot inject path segments."""
        path = generate_storage_path("../evil", "a.txt", now=datetime(2024, 3, 7))
        assert path.split("/")[0] == ".._evil"
        assert path.count("/") == 4
