"""
Parser for weekday/time-of-day range expressions.

Accepted forms (case-insensitive, whitespace around tokens is ignored):

    Monday
    Mon 09:00-17:00
    13:14:15 - 23:00:00

Expected bad input never raises: the parse functions return None instead.
"""

import logging
import re
from typing import Dict, List, Optional, Sequence

import pendulum
from pendulum import Time, WeekDay

from .models import WeekdayTimeRange, WeekdayTimeRangeSet

logger = logging.getLogger(__name__)

WEEKDAY_PATTERN = "Monday|Mon|Tuesday|Tue|Wednesday|Wed|Thursday|Thu|Friday|Fri|Saturday|Sat|Sunday|Sun"
TIME24_PATTERN = r"(?:[01]?[0-9]|2[0-3]):[0-5][0-9](?::[0-5][0-9])?"

RANGE_REGEX = re.compile(
    rf"\s*(?P<weekday>{WEEKDAY_PATTERN})?"
    rf"\s*(?:(?P<time1>{TIME24_PATTERN})\s*-\s*(?P<time2>{TIME24_PATTERN}))?\s*",
    re.IGNORECASE,
)

# Full names and 3-letter abbreviations, lowercased
WEEKDAY_NAMES: Dict[str, WeekDay] = {
    **{day.name.lower(): day for day in WeekDay},
    **{day.name.lower()[:3]: day for day in WeekDay},
}


def parse_weekday(text: Optional[str]) -> Optional[WeekDay]:
    """Resolve a weekday name or abbreviation; None for empty input."""
    if not text or not text.strip():
        return None

    try:
        return WEEKDAY_NAMES[text.strip().lower()]
    except KeyError:
        raise ValueError(f"Unknown weekday: {text!r}") from None


def parse_time(text: Optional[str]) -> Optional[Time]:
    """Parse "H:MM" or "HH:MM:SS" into a Time; None for empty input."""
    if not text or not text.strip():
        return None

    parts = [int(part) for part in text.strip().split(":")]
    if len(parts) == 2:
        parts.append(0)
    hour, minute, second = parts
    return pendulum.time(hour, minute, second)


def _reject(text: object, reason: str) -> None:
    logger.debug("Rejected range expression %r: %s", text, reason)
    return None


def parse_range(text: Optional[str]) -> Optional[WeekdayTimeRange]:
    """
    Parse a single expression into a WeekdayTimeRange.

    Args:
        text: Expression such as "Sunday", "Mon 09:00-17:00" or "13:00-14:30:15"

    Returns:
        The parsed range, or None if the expression is empty, does not match
        the grammar, has an unpaired time, or its start is not before its end.
    """
    if text is None or not text.strip():
        return _reject(text, "empty expression")

    match = RANGE_REGEX.fullmatch(text)
    if not match:
        return _reject(text, "does not match grammar")

    weekday = parse_weekday(match.group("weekday"))
    start_time = parse_time(match.group("time1"))
    end_time = parse_time(match.group("time2"))

    if weekday is None and start_time is None and end_time is None:
        return _reject(text, "no weekday or times")

    if (start_time is None) != (end_time is None):
        return _reject(text, "times must come in pairs")

    if start_time is not None and start_time >= end_time:
        return _reject(text, "start time must be before end time")

    return WeekdayTimeRange(weekday=weekday, start_time=start_time, end_time=end_time)


def parse_ranges(texts: Sequence[str]) -> Optional[WeekdayTimeRangeSet]:
    """
    Parse every expression into a WeekdayTimeRangeSet.

    All or nothing: if any expression fails, None is returned. An empty
    sequence yields an empty set.

    Raises:
        TypeError: If texts is None or a single string
    """
    if texts is None:
        raise TypeError("texts must be a sequence of strings, not None")
    if isinstance(texts, str):
        raise TypeError("texts must be a sequence of strings, not a single string")

    ranges: List[WeekdayTimeRange] = []
    for text in texts:
        time_range = parse_range(text)
        if time_range is None:
            return None
        ranges.append(time_range)

    return WeekdayTimeRangeSet(ranges=tuple(ranges))
