"""
Input validation utilities for datalog uploads.
"""

import re
import unicodedata
from typing import Optional, Tuple

from .helpers import format_file_size


class InputSanitizer:
    """Sanitization utilities for user input."""

    @staticmethod
    def sanitize_note(value: Optional[str], max_length: int = 2000) -> str:
        """
        Sanitize the free-text note that accompanies an upload.

        Args:
            value: Note as received (may be None)
            max_length: Maximum allowed length

        Returns:
            Sanitized note ("" when absent)
        """
        if not value:
            return ""

        # Remove null bytes and control characters (except newline, tab)
        value = re.sub(r'[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]', '', str(value))

        value = unicodedata.normalize('NFKC', value)

        return value.strip()[:max_length]

    @staticmethod
    def sanitize_filename(filename: Optional[str]) -> str:
        """Strip path components and separators from an uploaded file name."""
        if not filename:
            return ""

        filename = re.sub(r'[/\\:\x00]', '', filename)
        filename = filename.strip('. ')
        return filename[:255]


class Validators:
    """Collection of upload validation functions."""

    @staticmethod
    def validate_upload(data: Optional[bytes], max_bytes: int) -> Tuple[bool, str]:
        """
        Validate raw upload bytes before parsing.

        Args:
            data: File content
            max_bytes: Upper size bound

        Returns:
            Tuple of (is_valid, error_message)
        """
        if data is None or len(data) == 0:
            return False, "No file content received"

        if len(data) > max_bytes:
            return False, (
                f"File is too large ({format_file_size(len(data))}, "
                f"maximum {format_file_size(max_bytes)})"
            )

        return True, ""
