"""
Service layer helpers that evaluate configured schedules.
"""

from .schedule_checker import ClockProtocol, ScheduleChecker, SystemClock

__all__ = ["ClockProtocol", "ScheduleChecker", "SystemClock"]
