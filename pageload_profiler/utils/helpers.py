# pageload_profiler/utils/helpers.py - Helper functions
"""
General formatting helpers shared by the exporters.
"""

from typing import Optional


def format_bytes(bytes_count: float) -> str:
    """
    Format bytes into human-readable string.

    Args:
        bytes_count: Number of bytes

    Returns:
        Formatted string (e.g., "1.5 KB")
    """
    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if bytes_count < 1024.0:
            return f"{bytes_count:.1f} {unit}"
        bytes_count /= 1024.0

    return f"{bytes_count:.1f} PB"


def format_duration_ms(duration_ms: Optional[float]) -> str:
    """
    Format a duration in milliseconds.

    Args:
        duration_ms: Duration in milliseconds, None when unknown

    Returns:
        Formatted string (e.g., "850ms", "3.2s")
    """
    if duration_ms is None:
        return "n/a"
    if duration_ms < 1000:
        return f"{duration_ms:.0f}ms"
    return f"{duration_ms / 1000:.1f}s"
