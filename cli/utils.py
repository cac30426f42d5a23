"""Utility functions for CLI output formatting."""

from typing import Tuple

KIB = 1024
MIB = 1024 * 1024
GIB = 1024 * 1024 * 1024


def scale_transfer(total_bytes: float) -> Tuple[float, str]:
    """
    Scale a running transfer total for the status line.

    Args:
        total_bytes: Bytes transferred so far

    Returns:
        Tuple of (scaled value, unit) with unit one of KB, MB, GB
    """
    if total_bytes < MIB:
        return total_bytes / KIB, "KB"
    if total_bytes < GIB:
        return total_bytes / MIB, "MB"
    return total_bytes / GIB, "GB"


def format_file_size(size_bytes: int) -> str:
    """
    Format file size in bytes to human-readable format with appropriate unit.

    Uses binary units (1024-based) and automatically selects the most
    appropriate unit (B, KiB, MiB, GiB, TiB).

    Args:
        size_bytes: File size in bytes

    Returns:
        Formatted string with size and unit (e.g., "1.50 MiB", "512 B")
    """
    if size_bytes < 1024:
        return f"{size_bytes} B"

    units = ['KiB', 'MiB', 'GiB', 'TiB']
    size = size_bytes / 1024.0

    for unit in units:
        if size < 1024.0:
            return f"{size:.2f} {unit}"
        size /= 1024.0

    return f"{size:.2f} PiB"


def truncate(text: str, limit: int) -> str:
    """Cut text to at most `limit` characters (never negative)."""
    return text[:max(0, limit)]
