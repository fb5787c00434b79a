"""
Utility functions for turning titles into safe file names.
"""

import re
from typing import Optional
from .constants import MAX_FILENAME_BYTES, MAX_FILENAME_LENGTH

# Characters not allowed in file names on common file systems
_INVALID_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f\x80-\x9f]')
_MULTIPLE_SPACES = re.compile(r" +")

_RESERVED_NAMES = {
    'CON', 'PRN', 'AUX', 'NUL',
    'COM1', 'COM2', 'COM3', 'COM4', 'COM5', 'COM6', 'COM7', 'COM8', 'COM9',
    'LPT1', 'LPT2', 'LPT3', 'LPT4', 'LPT5', 'LPT6', 'LPT7', 'LPT8', 'LPT9'
}


def filename_friendly(title: str) -> str:
    """
    Sanitize a title into a file name.

    Invalid characters become spaces and runs of spaces collapse into one,
    so distinct titles may map to the same name.

    Args:
        title: Title to sanitize

    Returns:
        Safe file name (without extension), possibly empty
    """
    if not title:
        return ""

    sanitized = _INVALID_CHARS.sub(" ", title)
    sanitized = _MULTIPLE_SPACES.sub(" ", sanitized)
    # Leading/trailing dots would produce hidden or relative names
    sanitized = sanitized.strip(" .")

    if sanitized.upper() in _RESERVED_NAMES:
        sanitized = f"_{sanitized}"

    sanitized = sanitized[:MAX_FILENAME_LENGTH]
    # Cut multi-byte titles on a character boundary
    sanitized = sanitized.encode("utf-8")[:MAX_FILENAME_BYTES].decode("utf-8", errors="ignore")
    return sanitized.strip()


def entry_filename(title: Optional[str], fallback: Optional[str], content_id: str) -> str:
    """
    Get the file name of a bookmark.

    Uses the title, falling back to the location and then to the content id.
    """
    return (
        (title and filename_friendly(title))
        or (fallback and filename_friendly(fallback))
        or content_id
    ).strip()
