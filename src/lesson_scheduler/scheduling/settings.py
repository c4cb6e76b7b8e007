"""
Immutable scheduling constants consumed by the core.

The environment-driven ``utils.config.Config`` builds one of these via
``to_scheduler_config()``; the core never reads the environment itself.
"""

from dataclasses import dataclass, field

from ..exceptions import ConfigurationError
from .time_grid import TimeGrid


@dataclass(frozen=True)
class SchedulerConfig:
    """
    Scheduling constants.

    Attributes:
        grid: Weekly time grid and lunch-break instant
        room_count: Number of rooms shared by all instructors (ROOM_COUNT)
        allocation_weeks: Horizon of the initial allocation in weeks
        max_repeat_weeks: Upper clamp for weekly repeats
        lesson_duration: Default lesson length in minutes
    """

    grid: TimeGrid = field(default_factory=TimeGrid)
    room_count: int = 4
    allocation_weeks: int = 12
    max_repeat_weeks: int = 52
    lesson_duration: int = 60

    def __post_init__(self):
        for name in ("room_count", "allocation_weeks", "max_repeat_weeks", "lesson_duration"):
            value = getattr(self, name)
            if not isinstance(value, int) or value <= 0:
                raise ConfigurationError(f"{name} must be a positive integer, got {value!r}")

    def clamp_weeks(self, weeks: int) -> int:
        """Clamp a repeat count to ``[1, max_repeat_weeks]``."""
        return min(self.max_repeat_weeks, max(1, weeks))

    def is_valid_room(self, room_id: int) -> bool:
        return isinstance(room_id, int) and 1 <= room_id <= self.room_count
