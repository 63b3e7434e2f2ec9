"""
Application service for evaluating named schedules.

The checker holds parsed range sets keyed by schedule name and answers
whether a schedule is active at a given instant. "Now" comes from a clock
dependency so tests can pin the current time via a simple protocol.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Protocol

import pendulum
from pendulum import DateTime

from ..config import AppConfig
from ..domain.exceptions import UnknownScheduleError
from ..domain.models import WeekdayTimeRangeSet

logger = logging.getLogger(__name__)


class ClockProtocol(Protocol):
    """Protocol describing the clock behaviour needed by the service."""

    def now(self, timezone: str) -> DateTime:
        """Return the current instant in the given timezone."""


class SystemClock:
    """Clock backed by the system time."""

    def now(self, timezone: str) -> DateTime:
        return pendulum.now(timezone)


class ScheduleChecker:
    """
    Evaluates named weekday/time range sets against instants.
    """

    def __init__(
        self,
        schedules: Mapping[str, WeekdayTimeRangeSet],
        clock: Optional[ClockProtocol] = None,
        timezone: str = "UTC",
    ) -> None:
        self._schedules: Dict[str, WeekdayTimeRangeSet] = dict(schedules)
        self._clock = clock or SystemClock()
        self._timezone = timezone

    @classmethod
    def from_config(cls, config: AppConfig, clock: Optional[ClockProtocol] = None) -> "ScheduleChecker":
        """Build a checker from every schedule in the configuration."""
        return cls(
            schedules=config.schedule_sets(),
            clock=clock,
            timezone=config.timezone,
        )

    @property
    def schedule_names(self) -> List[str]:
        return list(self._schedules)

    def get_schedule(self, name: str) -> WeekdayTimeRangeSet:
        """
        Look up a schedule by name, ignoring case.

        Raises:
            UnknownScheduleError: If the name is not known
        """
        for schedule_name, range_set in self._schedules.items():
            if schedule_name.lower() == name.lower():
                return range_set
        raise UnknownScheduleError(name)

    def now(self) -> DateTime:
        return self._clock.now(self._timezone)

    def is_active(self, name: str, at: Optional[DateTime] = None) -> bool:
        """Check whether a schedule contains the instant (defaults to now)."""
        range_set = self.get_schedule(name)
        instant = at if at is not None else self.now()
        active = range_set.within(instant)
        logger.debug("Schedule %s at %s: %s", name, instant, "active" if active else "inactive")
        return active

    def active_schedules(self, at: Optional[DateTime] = None) -> List[str]:
        """Names of all schedules containing the instant, in configured order."""
        instant = at if at is not None else self.now()
        return [
            name for name, range_set in self._schedules.items()
            if range_set.within(instant)
        ]

    def filter_instants(self, name: str, instants: Iterable[DateTime]) -> List[DateTime]:
        """Return the instants that fall within a schedule, in input order."""
        _, matches = self.get_schedule(name).filter_within(instants)
        return matches
