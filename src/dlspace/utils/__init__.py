"""Utility modules for download disk management."""

from dlspace.utils.debounce import Debouncer, debounce
from dlspace.utils.disk import (
    UNKNOWN_DISK_SPACE,
    InsufficientDiskSpaceError,
    check_disk_space,
    check_size_string_fits,
    get_available_disk_space,
    get_directory_size,
)
from dlspace.utils.size import format_bytes, parse_size_to_bytes

__all__ = [
    "Debouncer",
    "debounce",
    "UNKNOWN_DISK_SPACE",
    "InsufficientDiskSpaceError",
    "get_available_disk_space",
    "get_directory_size",
    "check_disk_space",
    "check_size_string_fits",
    "format_bytes",
    "parse_size_to_bytes",
]
