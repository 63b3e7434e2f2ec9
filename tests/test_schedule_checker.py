"""
Tests for the ScheduleChecker service.
"""

import pendulum
import pytest

from timefilters.config import AppConfig
from timefilters.domain.exceptions import UnknownScheduleError
from timefilters.domain.models import WeekdayTimeRangeSet
from timefilters.services.schedule_checker import ScheduleChecker


class StubClock:
    """Minimal stub matching ClockProtocol."""

    def __init__(self, now: str):
        self._now = now
        self.calls = []

    def now(self, timezone):
        self.calls.append(timezone)
        return pendulum.parse(self._now, tz=timezone)


def _build_checker(now: str = "2024-11-25 10:00") -> ScheduleChecker:
    schedules = {
        "office-hours": WeekdayTimeRangeSet.parse(["Mon 09:00-17:00", "Tue 09:00-17:00"]),
        "weekend": WeekdayTimeRangeSet.parse(["Saturday", "Sunday"]),
        "lunch": WeekdayTimeRangeSet.parse(["12:00-13:00"]),
    }
    return ScheduleChecker(schedules=schedules, clock=StubClock(now), timezone="Europe/Berlin")


def test_is_active_defaults_to_clock():
    """Without an instant, the clock supplies now in the configured timezone."""
    checker = _build_checker(now="2024-11-25 10:00")  # Monday

    assert checker.is_active("office-hours")
    assert not checker.is_active("weekend")
    assert checker._clock.calls == ["Europe/Berlin", "Europe/Berlin"]


def test_is_active_with_explicit_instant():
    checker = _build_checker()
    sunday_noon = pendulum.parse("2024-11-24 12:30", tz="Europe/Berlin")

    assert checker.is_active("weekend", at=sunday_noon)
    assert checker.is_active("LUNCH", at=sunday_noon)
    assert not checker.is_active("office-hours", at=sunday_noon)


def test_active_schedules_in_configured_order():
    checker = _build_checker(now="2024-11-25 12:15")

    assert checker.active_schedules() == ["office-hours", "lunch"]


def test_filter_instants():
    checker = _build_checker()
    instants = [
        pendulum.parse("2024-11-23 08:00", tz="Europe/Berlin"),  # Saturday
        pendulum.parse("2024-11-25 08:00", tz="Europe/Berlin"),  # Monday
        pendulum.parse("2024-11-24 23:59", tz="Europe/Berlin"),  # Sunday
    ]

    assert checker.filter_instants("weekend", instants) == [instants[0], instants[2]]


def test_unknown_schedule_raises():
    checker = _build_checker()

    with pytest.raises(UnknownScheduleError):
        checker.is_active("holidays")


def test_from_config():
    config = AppConfig(timezone="Europe/Berlin", schedules={"weekend": ["Sat", "Sun"]})

    checker = ScheduleChecker.from_config(config, clock=StubClock("2024-11-23 09:00"))

    assert checker.schedule_names == ["weekend"]
    assert checker.is_active("weekend")
