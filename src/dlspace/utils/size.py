"""Byte count formatting and parsing.

Sizes move between two forms: integer byte counts used for arithmetic,
and short strings such as "1.5 GB" shown to users or found in catalog
metadata. Both directions use binary (1024-based) units.
"""

import logging
import math
import re

logger = logging.getLogger(__name__)

UNITS = ["B", "KB", "MB", "GB", "TB"]

# Units accepted by parse_size_to_bytes; "tb" is intentionally absent
UNIT_MULTIPLIERS = {
    "b": 1,
    "kb": 1024,
    "mb": 1024**2,
    "gb": 1024**3,
}

SIZE_PATTERN = re.compile(r"^([\d.]+)\s*(kb|mb|gb|b)$", re.IGNORECASE | re.ASCII)


def format_bytes(size_bytes: float) -> str:
    """Format bytes as human-readable string.

    Args:
        size_bytes: Size in bytes (non-negative)

    Returns:
        Human-readable string with one decimal place (e.g., "1.5 GB").
        Values of 1024 TB and above stay in TB.
    """
    size = size_bytes
    unit_index = 0

    while size >= 1024 and unit_index < len(UNITS) - 1:
        size /= 1024
        unit_index += 1

    return f"{size:.1f} {UNITS[unit_index]}"


def parse_size_to_bytes(size_string: str) -> int:
    """Parse a size string such as "1500 MB" or "2.5 gb" to bytes.

    Surrounding whitespace is ignored and the space between number and
    unit is optional. Accepted units are B, KB, MB and GB in any case.
    Only ASCII digits are accepted in the number.

    Args:
        size_string: Size string to parse

    Returns:
        Size in bytes rounded to the nearest integer, or 0 if the input
        cannot be parsed. Never raises.
    """
    if not isinstance(size_string, str) or not size_string.strip():
        logger.warning(f"Could not parse size string: {size_string!r}")
        return 0

    match = SIZE_PATTERN.match(size_string.strip())
    if not match:
        logger.warning(f"Could not parse size string: {size_string!r}")
        return 0

    number, unit = match.groups()
    try:
        value = float(number)
    except ValueError:
        logger.warning(f"Invalid number in size string: {size_string!r}")
        return 0

    size_bytes = value * UNIT_MULTIPLIERS[unit.lower()]
    if not math.isfinite(size_bytes):
        logger.warning(f"Size out of range in size string: {size_string[:40]!r}")
        return 0

    return round(size_bytes)
