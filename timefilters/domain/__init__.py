"""
Domain layer - Pure range parsing and matching logic without I/O.
"""

from .exceptions import RangeParseError, RangeValidationError, TimefilterError, UnknownScheduleError
from .models import WeekdayTimeRange, WeekdayTimeRangeSet
from .parser import parse_range, parse_ranges

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
