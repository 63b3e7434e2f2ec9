"""
Domain-specific exception hierarchy for the timefilters package.
"""


class TimefilterError(Exception):
    """Base class for all application-level errors."""


class RangeValidationError(TimefilterError, ValueError):
    """Raised when a range is constructed with unpaired or out-of-order times."""


class RangeParseError(TimefilterError, ValueError):
    """Raised by the strict parse helpers when an expression is not valid."""

    def __init__(self, expression: object, message: str | None = None):
        self.expression = expression
        super().__init__(message or f"Invalid weekday/time range expression: {expression!r}")


class UnknownScheduleError(TimefilterError, KeyError):
    """Raised when a schedule name is not present in the configuration."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"Unknown schedule: '{self.name}'"
