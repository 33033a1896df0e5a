"""Trip duration from departure/arrival wall-clock times."""

import re
from typing import Tuple

from rezervasyon.core.exceptions import MalformedTime

MINUTES_PER_DAY = 24 * 60
UNKNOWN_DURATION = "-"

_CLOCK_RE = re.compile(r"(\d{1,2}):(\d{1,2})", re.ASCII)


def parse_clock(value: str) -> int:
    """Parse 'HH:MM' (24-hour) into minutes after midnight."""
    match = _CLOCK_RE.fullmatch(value.strip()) if isinstance(value, str) else None
    if match is None:
        raise MalformedTime(str(value))
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise MalformedTime(value)
    return hours * 60 + minutes


def trip_duration(departure: str, arrival: str) -> Tuple[int, int]:
    """
    Return (hours, minutes) between departure and arrival.

    An arrival earlier than the departure is an overnight trip and wraps
    past midnight.
    """
    total = parse_clock(arrival) - parse_clock(departure)
    if total < 0:
        total += MINUTES_PER_DAY
    return divmod(total, 60)


def format_duration(departure: str, arrival: str) -> str:
    try:
        hours, minutes = trip_duration(departure, arrival)
    except MalformedTime:
        return UNKNOWN_DURATION
    return f"{hours}s {minutes}d"
