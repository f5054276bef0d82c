"""Validation rules for farm entries.

Size text is parsed as a human-readable byte quantity and checked against the
minimum farm size. Paths are probed for a writable directory; the blocking
probe runs in an executor so the event loop is never stalled.
"""

from __future__ import annotations

import asyncio
import logging
import re
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)

# 2 GB, decimal gigabytes
MIN_FARM_SIZE = 1000 * 1000 * 1000 * 2

_UNIT_MULTIPLIERS: dict[str, int] = {
    "b": 1,
    "k": 1000,
    "kb": 1000,
    "ki": 1024,
    "kib": 1024,
    "m": 1000**2,
    "mb": 1000**2,
    "mi": 1024**2,
    "mib": 1024**2,
    "g": 1000**3,
    "gb": 1000**3,
    "gi": 1024**3,
    "gib": 1024**3,
    "t": 1000**4,
    "tb": 1000**4,
    "ti": 1024**4,
    "tib": 1024**4,
    "p": 1000**5,
    "pb": 1000**5,
    "pi": 1024**5,
    "pib": 1024**5,
    "e": 1000**6,
    "eb": 1000**6,
    "ei": 1024**6,
    "eib": 1024**6,
}

# Number, optional whitespace, optional unit: "10 GB", "2.5gib", "1500000000"
_SIZE_PATTERN = re.compile(r"^(\d+(?:\.\d*)?|\.\d+)\s*([A-Za-z]*)$")


def parse_byte_size(text: str) -> int | None:
    """Parse a human-readable byte size.

    Args:
        text: Size as typed by the user

    Returns:
        Size in bytes, or None if the text is not a byte quantity

    Examples:
        >>> parse_byte_size("2 GB")
        2000000000
        >>> parse_byte_size("1 KiB")
        1024
        >>> parse_byte_size("abc") is None
        True
    """
    match = _SIZE_PATTERN.match(text.strip())
    if not match:
        return None

    number, unit = match.group(1), match.group(2).lower()
    multiplier = _UNIT_MULTIPLIERS.get(unit or "b")
    if multiplier is None:
        return None

    # Absurdly long numbers overflow float or exceed the int conversion limit
    try:
        if "." in number:
            return int(float(number) * multiplier)
        return int(number) * multiplier
    except (ValueError, OverflowError):
        return None


def is_size_valid(text: str) -> bool:
    """Return True if the text parses and meets the minimum farm size."""
    size = parse_byte_size(text)
    return size is not None and size >= MIN_FARM_SIZE


def is_directory_writable(path: Path) -> bool:
    """Check that path is an existing directory we can create files in.

    A missing path, a regular file and a read-only directory all return False;
    the reason is not reported.
    """
    try:
        if not path.is_dir():
            return False
        with tempfile.TemporaryFile(dir=path):
            pass
    except OSError as err:
        logger.debug(f"Directory {path} is not writable: {err}")
        return False

    return True


async def probe_directory_writable(path: Path) -> bool:
    """Run is_directory_writable without blocking the event loop."""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, is_directory_writable, path)
