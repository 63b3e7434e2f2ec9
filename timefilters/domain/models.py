"""
Domain models for recurring weekday/time-of-day ranges.
"""

from dataclasses import dataclass, field
from datetime import datetime, time
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

import pendulum
from pendulum import Time, WeekDay

from .exceptions import RangeParseError, RangeValidationError


def _to_time(value: time) -> Time:
    """Normalize any time-of-day value to a naive pendulum Time."""
    if not isinstance(value, time):
        raise RangeValidationError(f"Expected a time of day, got {type(value).__name__}: {value!r}")
    if isinstance(value, Time) and value.tzinfo is None:
        return value
    return pendulum.time(value.hour, value.minute, value.second, value.microsecond)


def _format_time(value: time) -> str:
    return value.format("HH:mm:ss")


@dataclass(frozen=True)
class WeekdayTimeRange:
    """
    An immutable recurring window: an optional weekday and an optional
    start/end time of day.

    Invariants: start_time and end_time are both set or both unset, and
    start_time is strictly before end_time. A range with no fields at all
    is a placeholder that never matches.
    """
    weekday: Optional[WeekDay] = None
    start_time: Optional[time] = None
    end_time: Optional[time] = None

    def __post_init__(self):
        if (self.start_time is None) != (self.end_time is None):
            raise RangeValidationError("start_time and end_time must both be set or both be None")

        if self.weekday is not None and not isinstance(self.weekday, WeekDay):
            try:
                weekday = WeekDay(self.weekday)
            except (ValueError, TypeError):
                raise RangeValidationError(f"Invalid weekday: {self.weekday!r}") from None
            object.__setattr__(self, "weekday", weekday)

        if self.start_time is not None:
            start = _to_time(self.start_time)
            end = _to_time(self.end_time)
            if start >= end:
                raise RangeValidationError(
                    f"Start time {_format_time(start)} must be before end time {_format_time(end)}"
                )
            object.__setattr__(self, "start_time", start)
            object.__setattr__(self, "end_time", end)

    @classmethod
    def for_weekday(cls, weekday: WeekDay) -> "WeekdayTimeRange":
        """Create a range covering the whole of one weekday."""
        return cls(weekday=weekday)

    @classmethod
    def for_times(cls, start_time: time, end_time: time) -> "WeekdayTimeRange":
        """Create a daily recurring time-of-day range."""
        return cls(start_time=start_time, end_time=end_time)

    @classmethod
    def parse(cls, text: str) -> "WeekdayTimeRange":
        """
        Parse an expression such as "Mon 09:00-17:00".

        Raises:
            RangeParseError: If the expression is not valid
        """
        from .parser import parse_range

        result = parse_range(text)
        if result is None:
            raise RangeParseError(text)
        return result

    @classmethod
    def from_strings(cls, weekday: str, start_time: str, end_time: str) -> "WeekdayTimeRange":
        """Build a range from separate weekday and time tokens."""
        return cls.parse(f"{weekday} {start_time}-{end_time}")

    @classmethod
    def from_weekday_string(cls, weekday: str) -> "WeekdayTimeRange":
        return cls.parse(weekday)

    @classmethod
    def from_time_strings(cls, start_time: str, end_time: str) -> "WeekdayTimeRange":
        return cls.parse(f"{start_time}-{end_time}")

    @property
    def has_times(self) -> bool:
        return self.start_time is not None

    @property
    def is_empty(self) -> bool:
        """True for the placeholder range that has neither weekday nor times."""
        return self.weekday is None and not self.has_times

    def within(self, instant: datetime) -> bool:
        """
        Check whether an instant falls inside this range.

        Only the instant's weekday and wall-clock time of day are used. The
        time window is half-open: start is inclusive, end is exclusive.
        """
        if self.is_empty:
            return False

        if self.weekday is not None and WeekDay(instant.weekday()) != self.weekday:
            return False

        if self.has_times:
            time_of_day = instant.time()
            return self.start_time <= time_of_day < self.end_time

        return True

    def filter_within(self, instants: Iterable[datetime]) -> Tuple[bool, List[datetime]]:
        """
        Return whether any of the instants match, and the matching ones in
        input order.
        """
        matches = [instant for instant in instants if self.within(instant)]
        return bool(matches), matches

    def render(self) -> str:
        """
        Render the canonical form, e.g. "Sunday 01:02:03-13:14:15".

        Abbreviated weekdays come back as full names and seconds are always
        included.
        """
        parts: List[str] = []
        if self.weekday is not None:
            parts.append(self.weekday.name.capitalize())
        if self.has_times:
            parts.append(f"{_format_time(self.start_time)}-{_format_time(self.end_time)}")
        return " ".join(parts)

    def __str__(self) -> str:
        return self.render()


@dataclass(frozen=True)
class WeekdayTimeRangeSet:
    """
    An immutable collection of ranges combined with logical OR.

    The empty set is valid and never matches.
    """
    ranges: Tuple[WeekdayTimeRange, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "ranges", tuple(self.ranges))

    @classmethod
    def parse(cls, texts: Sequence[str]) -> "WeekdayTimeRangeSet":
        """
        Parse every expression into a set.

        Raises:
            RangeParseError: If any expression is not valid
        """
        from .parser import parse_range, parse_ranges

        if texts is not None and not isinstance(texts, str):
            texts = list(texts)
        result = parse_ranges(texts)
        if result is None:
            invalid = [text for text in texts if parse_range(text) is None]
            raise RangeParseError(
                invalid,
                f"Invalid weekday/time range expression(s): {', '.join(repr(text) for text in invalid)}",
            )
        return result

    @property
    def is_empty(self) -> bool:
        return not self.ranges

    def within(self, instant: datetime) -> bool:
        """True if at least one range contains the instant."""
        return any(time_range.within(instant) for time_range in self.ranges)

    def filter_within(self, instants: Iterable[datetime]) -> Tuple[bool, List[datetime]]:
        matches = [instant for instant in instants if self.within(instant)]
        return bool(matches), matches

    def render(self) -> str:
        return ", ".join(time_range.render() for time_range in self.ranges)

    def __len__(self) -> int:
        return len(self.ranges)

    def __iter__(self) -> Iterator[WeekdayTimeRange]:
        return iter(self.ranges)

    def __str__(self) -> str:
        return self.render()
