import math


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, halves away from zero.
    Example: 2.5 -> 3, -2.5 -> -3 (the builtin round() would give 2 / -2)
    """
    if value >= 0:
        return int(math.floor(value + 0.5))
    return -int(math.floor(-value + 0.5))


def hhmmss_to_seconds(hhmmss: str) -> int:
    """
    Convert 'HH:MM:SS' or 'MM:SS' -> total seconds (int).
    Example: '00:45:32' -> 2732
    """
    parts = hhmmss.strip().split(":")
    if len(parts) == 2:
        parts = ["0"] + parts
    if len(parts) != 3:
        raise ValueError("Duration must be in HH:MM:SS format")

    hours, minutes, seconds = map(int, parts)
    return hours * 3600 + minutes * 60 + seconds


def seconds_to_hhmmss(total_seconds: int) -> str:
    """
    Convert total seconds (int) -> 'HH:MM:SS'.
    Example: 2732 -> '00:45:32'
    """
    total_seconds = max(0, int(total_seconds))
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    seconds = total_seconds % 60
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def format_pace(seconds_per_mile: int) -> str:
    """
    Format a pace in seconds per mile as 'M:SS /mi'.
    Example: 425 -> '7:05 /mi'
    """
    clamped = max(0, int(seconds_per_mile))
    minutes = clamped // 60
    seconds = clamped % 60
    return f"{minutes}:{seconds:02d} /mi"


def average_pace(seconds: float, distance_mi: float):
    """Whole seconds per mile, or None unless both inputs are positive."""
    if seconds <= 0 or distance_mi <= 0:
        return None
    return round_half_up(seconds / distance_mi)
