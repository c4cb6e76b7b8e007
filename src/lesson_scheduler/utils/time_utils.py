"""
Time-of-day arithmetic on "HH:MM" strings.

All lesson times are stored as zero-padded "HH:MM" strings and compared
as minutes from midnight.
"""

import re

from ..exceptions import InvalidTimeError


_HHMM_PATTERN = re.compile(r'^(\d{1,2}):(\d{2})$')


def to_minutes(hhmm: str) -> int:
    """
    Convert "HH:MM" to minutes from midnight.

    Args:
        hhmm: Time of day string

    Returns:
        Minutes from midnight

    Raises:
        InvalidTimeError: If the string is not a valid time of day

    Examples:
        >>> to_minutes("09:30")
        570
    """
    match = _HHMM_PATTERN.match(hhmm or "")
    if not match:
        raise InvalidTimeError(f"Invalid time format: {hhmm!r} (expected HH:MM)")

    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 24 or minutes > 59 or (hours == 24 and minutes != 0):
        raise InvalidTimeError(f"Time out of range: {hhmm!r}")

    return hours * 60 + minutes


def to_hhmm(minutes: int) -> str:
    """
    Convert minutes from midnight to "HH:MM".

    Examples:
        >>> to_hhmm(570)
        '09:30'
    """
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def add_minutes(hhmm: str, delta: int) -> str:
    """Shift a time of day by ``delta`` minutes."""
    return to_hhmm(to_minutes(hhmm) + delta)


def round_to_quarter(hhmm: str) -> str:
    """Round a time of day to the nearest quarter hour."""
    minutes = to_minutes(hhmm)
    return to_hhmm(((minutes + 7) // 15) * 15)


def floor_to_quarter(hhmm: str) -> str:
    """Round a time of day down to the quarter hour."""
    return to_hhmm((to_minutes(hhmm) // 15) * 15)


def ranges_overlap(a_start: int, a_end: int, b_start: int, b_end: int) -> bool:
    """
    Check whether two half-open minute intervals overlap.

    Intervals that only touch (one ends exactly where the other starts)
    do not overlap.

    Examples:
        >>> ranges_overlap(540, 600, 600, 660)
        False
        >>> ranges_overlap(540, 600, 570, 630)
        True
    """
    return a_start < b_end and a_end > b_start


def is_valid_time(hhmm: str) -> bool:
    """Check whether a string is a valid "HH:MM" time of day."""
    try:
        to_minutes(hhmm)
    except InvalidTimeError:
        return False
    return True
