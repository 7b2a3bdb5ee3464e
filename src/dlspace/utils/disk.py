"""Disk space utilities for download management.

This module answers two questions a download manager keeps asking:
how much room is left on the target filesystem, and how much room
the files already downloaded take up.

Every query here is best effort. Failures are logged and degrade to a
safe value (``None`` for free space, ``0`` for directory size) so that
callers never have to guard these calls.
"""

import logging
import os
import shutil
from pathlib import Path

from dlspace.utils.size import format_bytes, parse_size_to_bytes

logger = logging.getLogger(__name__)

# Returned by get_available_disk_space when free space cannot be determined
UNKNOWN_DISK_SPACE = None


class InsufficientDiskSpaceError(Exception):
    """Raised when there is not enough disk space for a download."""

    def __init__(self, required_bytes: int, available_bytes: int, path: Path):
        self.required_bytes = required_bytes
        self.available_bytes = available_bytes
        self.path = path

        super().__init__(
            f"Insufficient disk space at {path}: "
            f"required {format_bytes(required_bytes)}, "
            f"available {format_bytes(available_bytes)}"
        )


def get_available_disk_space(path: str | Path) -> int | None:
    """Get available disk space on the filesystem containing the given path.

    The value is the space available to unprivileged users
    (available blocks * block size), not the raw free block count.

    Args:
        path: Directory to check

    Returns:
        Available space in bytes, or None if it cannot be determined.
        Never raises.
    """
    try:
        return shutil.disk_usage(path).free
    except (OSError, ValueError) as e:
        logger.error(f"Error checking disk space for {path}: {e}")
        return UNKNOWN_DISK_SPACE


def get_directory_size(path: str | Path) -> int:
    """Get the total size of regular files under a directory.

    Subdirectories are walked with an explicit stack. Symlinks are never
    followed and, like devices, sockets and FIFOs, contribute nothing.

    Args:
        path: Directory to measure

    Returns:
        Total size in bytes. Returns 0 if the directory itself cannot be
        listed. Files whose size cannot be read are skipped. Never raises.
    """
    total_size = 0

    try:
        pending = _list_directory(path)
    except (OSError, ValueError) as e:
        logger.error(f"Error calculating directory size for {path}: {e}")
        return 0

    while pending:
        entry = pending.pop()

        try:
            is_dir = entry.is_dir(follow_symlinks=False)
            is_file = entry.is_file(follow_symlinks=False)
        except OSError as e:
            logger.warning(f"Could not determine type of {entry.path}: {e}")
            continue

        if is_dir:
            try:
                pending.extend(_list_directory(entry.path))
            except OSError as e:
                logger.warning(f"Could not list directory {entry.path}: {e}")
        elif is_file:
            try:
                total_size += entry.stat(follow_symlinks=False).st_size
            except OSError as e:
                logger.warning(f"Could not get size for {entry.path}: {e}")

    return total_size


def _list_directory(path: str | Path) -> list[os.DirEntry]:
    with os.scandir(path) as it:
        return list(it)


def check_disk_space(
    required_bytes: int,
    target_path: str | Path,
    multiplier: float = 1.0,
    reserve_bytes: int = 0,
) -> bool:
    """Check if there is sufficient disk space for a download.

    The required space is calculated as
    ``required_bytes * multiplier + reserve_bytes``. A multiplier above 1.0
    leaves room for temporary files written while a download is extracted,
    and the reserve keeps the filesystem from being filled completely.

    When free space cannot be determined the check passes with a warning,
    since the query is advisory.

    Args:
        required_bytes: Expected size of the download in bytes
        target_path: Directory the download will be written to
        multiplier: Multiplier for required space (default 1.0)
        reserve_bytes: Space that must remain free afterwards (default 0)

    Returns:
        True if sufficient space is available or space is unknown

    Raises:
        InsufficientDiskSpaceError: If not enough space is available
    """
    required_space = int(required_bytes * multiplier) + reserve_bytes
    available_space = get_available_disk_space(target_path)

    if available_space is UNKNOWN_DISK_SPACE:
        logger.warning(
            f"Disk space at {target_path} is unknown, "
            f"skipping check for {format_bytes(required_space)}"
        )
        return True

    if available_space < required_space:
        raise InsufficientDiskSpaceError(
            required_bytes=required_space,
            available_bytes=available_space,
            path=Path(target_path),
        )

    return True


def check_size_string_fits(
    size_string: str,
    target_path: str | Path,
    multiplier: float = 1.0,
    reserve_bytes: int = 0,
) -> bool:
    """Check disk space for a download whose size is given as text (e.g. "1500 MB").

    Unparseable size strings count as 0 bytes, so only the reserve is checked.

    Raises:
        InsufficientDiskSpaceError: If not enough space is available
    """
    return check_disk_space(
        parse_size_to_bytes(size_string),
        target_path,
        multiplier=multiplier,
        reserve_bytes=reserve_bytes,
    )
