"""Conversiones entre segundos y duraciones tipo reloj."""

from __future__ import annotations


def parse_duration(text: str) -> int:
    """Convert ``hh:mm:ss`` or ``mm:ss`` to seconds; blank means not recorded.

    Example: '45:32' -> 2732

    Raises:
        ValueError: If the text is not in one of the accepted formats.
    """
    s = text.strip()
    if not s:
        return 0
    parts = s.split(":")
    if len(parts) not in (2, 3):
        raise ValueError("Duration must be in hh:mm:ss or mm:ss format")
    try:
        values = [int(p) for p in parts]
    except ValueError as exc:
        raise ValueError(f"Duration must be numeric: {text!r}") from exc
    if any(v < 0 for v in values):
        raise ValueError(f"Duration cannot be negative: {text!r}")
    if len(values) == 2:
        minutes, seconds = values
        return minutes * 60 + seconds
    hours, minutes, seconds = values
    return hours * 3600 + minutes * 60 + seconds


def format_duration(total_seconds: int) -> str:
    """Convert seconds to 'HH:MM:SS'."""
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    seconds = total_seconds % 60
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def format_pace(minutes_per_mile: float) -> str:
    """Format decimal minutes per mile as 'M:SS/mi'."""
    if minutes_per_mile <= 0:
        return "-"
    total = int(round(minutes_per_mile * 60))
    return f"{total // 60}:{total % 60:02d}/mi"
