"""
Tests for input validation and sanitization utilities.
"""

import pytest

from log_assistant.utils.helpers import format_file_size, truncate_text
from log_assistant.utils.validators import InputSanitizer, Validators


class TestInputSanitizer:
    """Tests for InputSanitizer class."""

    def test_sanitize_note_basic(self):
        """Test surrounding whitespace is removed."""
        assert InputSanitizer.sanitize_note("  stage 1 map  ") == "stage 1 map"

    def test_sanitize_note_max_length(self):
        """Test note truncation to max length."""
        result = InputSanitizer.sanitize_note("a" * 2500, max_length=2000)
        assert len(result) == 2000

    def test_sanitize_note_removes_control_chars(self):
        """Test null byte and control character removal."""
        result = InputSanitizer.sanitize_note("hello\x00\x01\x02world")
        assert result == "helloworld"

    def test_sanitize_note_preserves_newlines(self):
        """Test newlines are preserved."""
        assert "\n" in InputSanitizer.sanitize_note("pull 1\npull 2")

    def test_sanitize_note_normalizes_unicode(self):
        """Test compatibility characters are folded."""
        assert InputSanitizer.sanitize_note("ﬁrst pull") == "first pull"

    def test_sanitize_note_empty(self):
        """Test empty and missing notes."""
        assert InputSanitizer.sanitize_note("") == ""
        assert InputSanitizer.sanitize_note(None) == ""

    @pytest.mark.parametrize("filename,expected", [
        ("log.csv", "log.csv"),
        ("../../etc/passwd", "etcpasswd"),
        ("C:\\logs\\pull.csv", "Clogspull.csv"),
        (None, ""),
    ])
    def test_sanitize_filename(self, filename, expected):
        """Test path components are stripped."""
        assert InputSanitizer.sanitize_filename(filename) == expected


class TestValidateUpload:
    """Tests for upload validation."""

    def test_valid_upload(self):
        assert Validators.validate_upload(b"Time,RPM\n", 1024) == (True, "")

    @pytest.mark.parametrize("data", [None, b""])
    def test_missing_content(self, data):
        is_valid, error = Validators.validate_upload(data, 1024)

        assert is_valid is False
        assert error == "No file content received"

    def test_too_large(self):
        is_valid, error = Validators.validate_upload(b"x" * 2048, 1024)

        assert is_valid is False
        assert error == "File is too large (2.0 KB, maximum 1.0 KB)"

    def test_exact_limit_accepted(self):
        is_valid, _ = Validators.validate_upload(b"x" * 1024, 1024)
        assert is_valid is True


class TestHelpers:
    """Tests for helper functions."""

    @pytest.mark.parametrize("size,expected", [
        (512, "512.0 B"),
        (2048, "2.0 KB"),
        (20 * 1024 * 1024, "20.0 MB"),
    ])
    def test_format_file_size(self, size, expected):
        assert format_file_size(size) == expected

    def test_truncate_text(self):
        assert truncate_text("short", 10) == "short"
        assert truncate_text("a" * 20, 10) == "aaaaaaa..."
