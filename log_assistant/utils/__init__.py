"""Utility modules for the Log Assistant."""

from .validators import Validators, InputSanitizer
from .helpers import format_file_size, truncate_text

__all__ = [
    "Validators",
    "InputSanitizer",
    "format_file_size",
    "truncate_text",
]
