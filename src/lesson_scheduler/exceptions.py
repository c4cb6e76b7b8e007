"""
Exception hierarchy for the scheduling core.

Expected rejections (conflicts, lunch-break violations, inactive students)
are returned as failed ``Result`` values and never raised. The exceptions
below signal malformed input or configuration.
"""


class SchedulingError(Exception):
    """Base class for scheduling errors."""
    pass


class InvalidTimeError(SchedulingError, ValueError):
    """Raised when a time-of-day string is not in HH:MM format."""
    pass


class ConfigurationError(SchedulingError, ValueError):
    """Raised when the time grid or scheduler configuration is invalid."""
    pass
