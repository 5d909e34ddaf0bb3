#!/usr/bin/env python3
"""
Auxiliary utility functions for Swoop

Size formatting and path display helpers shared by the scanner output
and the deletion report.
"""

import pathlib
from typing import Optional

_SIZE_UNITS = (
    ("TB", 1024**4),
    ("GB", 1024**3),
    ("MB", 1024**2),
    ("KB", 1024),
)

UNIT_STYLES = {
    "B": "green",
    "KB": "cyan",
    "MB": "yellow",
    "GB": "magenta",
    "TB": "red",
}


def size_parts(size_bytes: int) -> tuple[str, str]:
    """Split a byte size into a display value and its unit

    Args:
        size_bytes: Size in bytes to format

    Returns:
        Tuple like ("1.00", "KB") or ("789", "B"), using 1024-based units
    """
    for unit, factor in _SIZE_UNITS:
        if size_bytes >= factor:
            return f"{size_bytes / factor:.2f}", unit
    return str(size_bytes), "B"


def format_size(size_bytes: int) -> str:
    """Format byte size into human-readable string like "1.00 KB" or "789 B" """
    value, unit = size_parts(size_bytes)
    return f"{value} {unit}"


def format_path_for_display(path, home_path: Optional[str] = None) -> str:
    """Format file path for display by replacing home directory with ~

    Args:
        path: File path to format
        home_path: Home directory path (defaults to platform home)

    Returns:
        Path with home directory replaced by ~ if applicable
    """
    if home_path is None:
        home_path = str(pathlib.Path.home())

    path = str(path)
    home = home_path.rstrip("/")
    if home and (path == home or path.startswith(home + "/")):
        return "~" + path[len(home) :]
    return path
