"""
Time Grid: the fixed weekly slot catalog and the lunch-break instant.

No lesson may straddle the lunch-break instant: ``start < lunch < end`` is
forbidden, while ending exactly at lunch or starting exactly at lunch is
allowed.
"""

import calendar
from dataclasses import dataclass
from typing import List, NamedTuple, Tuple

from ..exceptions import ConfigurationError, InvalidTimeError
from ..utils.time_utils import to_hhmm, to_minutes


DEFAULT_TIME_SLOTS: Tuple[str, ...] = tuple(f"{hour:02d}:00" for hour in range(8, 20))
DEFAULT_LUNCH_BREAK = "12:00"
# Monday..Saturday, as date.weekday() numbers
DEFAULT_WEEKDAYS: Tuple[int, ...] = (0, 1, 2, 3, 4, 5)


class WeeklySlot(NamedTuple):
    """A (weekday, time-of-day) pair from the grid."""
    weekday: int
    time: str

    @property
    def day_name(self) -> str:
        return calendar.day_name[self.weekday]


@dataclass(frozen=True)
class TimeGrid:
    """
    Ordered time-of-day slots plus the lunch-break instant.

    Attributes:
        slots: Slot start times in ascending order ("HH:MM")
        lunch_break: Lunch-break instant ("HH:MM")
        weekdays: Teaching days as ``date.weekday()`` numbers (Monday = 0)

    Examples:
        >>> grid = TimeGrid()
        >>> grid.straddles_lunch("11:30", "12:30")
        True
        >>> grid.straddles_lunch("11:00", "12:00")
        False
    """

    slots: Tuple[str, ...] = DEFAULT_TIME_SLOTS
    lunch_break: str = DEFAULT_LUNCH_BREAK
    weekdays: Tuple[int, ...] = DEFAULT_WEEKDAYS

    def __post_init__(self):
        errors = []

        if not self.slots:
            errors.append("time grid must contain at least one slot")

        try:
            minutes = [to_minutes(slot) for slot in self.slots]
            if any(b <= a for a, b in zip(minutes, minutes[1:])):
                errors.append("time grid slots must be strictly ascending")
        except InvalidTimeError as e:
            errors.append(str(e))

        try:
            to_minutes(self.lunch_break)
        except InvalidTimeError as e:
            errors.append(f"lunch break: {e}")

        if not self.weekdays:
            errors.append("time grid must contain at least one weekday")
        elif any(day not in range(7) for day in self.weekdays):
            errors.append(f"weekdays must be between 0 and 6, got {list(self.weekdays)}")
        elif len(set(self.weekdays)) != len(self.weekdays):
            errors.append("weekdays must not repeat")

        if errors:
            raise ConfigurationError("Invalid time grid: " + "; ".join(errors))

    @property
    def lunch_minutes(self) -> int:
        return to_minutes(self.lunch_break)

    def weekly_slots(self) -> List[WeeklySlot]:
        """
        Build the weekly slot catalog.

        Returns:
            Every (weekday, time) pair in grid order, excluding the lunch instant
        """
        return [
            WeeklySlot(weekday, time)
            for weekday in self.weekdays
            for time in self.slots
            if time != self.lunch_break
        ]

    def straddles_lunch(self, start: str, end: str) -> bool:
        """Check whether ``[start, end)`` strictly contains the lunch instant."""
        lunch = self.lunch_minutes
        return to_minutes(start) < lunch < to_minutes(end)

    def day_window(self, last_slot_length: int = 60) -> Tuple[str, str]:
        """
        Default rendering window for one day.

        Returns:
            (first slot start, last slot start + ``last_slot_length`` minutes)
        """
        return self.slots[0], to_hhmm(to_minutes(self.slots[-1]) + last_slot_length)
