"""
Recurring weekday and time-of-day range filters.
"""

from .domain import (
    RangeParseError,
    RangeValidationError,
    TimefilterError,
    UnknownScheduleError,
    WeekdayTimeRange,
    WeekdayTimeRangeSet,
    parse_range,
    parse_ranges,
)

__version__ = "0.1.0"

__all__ = [
    "RangeParseError",
    "RangeValidationError",
    "TimefilterError",
    "UnknownScheduleError",
    "WeekdayTimeRange",
    "WeekdayTimeRangeSet",
    "parse_range",
    "parse_ranges",
]
