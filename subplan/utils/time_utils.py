"""
Time helpers for the Soccer Substitution Planner application.

Slot times are minute offsets within a half. They are floats (2.5 minute
slots are common) but whole minutes are shown without a trailing ``.0`` so
narrative text and serialized keys read the way a coach writes them.
"""
import time
from typing import Tuple, Union

Number = Union[int, float]


def fmt_minutes(value: Number) -> str:
    """
    Format a minute value without a redundant fractional part.

    Args:
        value: Minutes to format

    Returns:
        Formatted string

    Example:
        >>> fmt_minutes(5.0)
        '5'
        >>> fmt_minutes(7.5)
        '7.5'
    """
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def slot_key(half: int, slot_time: Number) -> str:
    """Build the ``"{half}-{slot}"`` key used by the serialized plan."""
    return f"{half}-{fmt_minutes(slot_time)}"


def parse_slot_key(key: str) -> Tuple[int, float]:
    """
    Split a ``"{half}-{slot}"`` key back into its parts.

    Raises:
        ValueError: If the key is not in the expected format
    """
    half_text, sep, time_text = key.partition("-")
    if not sep:
        raise ValueError(f"Invalid slot key: {key!r}")
    return int(half_text), float(time_text)


def now_ts() -> float:
    """
    Get current timestamp in epoch seconds.

    Returns:
        Current time as floating point epoch seconds
    """
    return time.time()
