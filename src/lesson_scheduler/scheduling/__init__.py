"""
Scheduling core.

Usage:
    >>> from lesson_scheduler.scheduling import Scheduler, SchedulerConfig
    >>> scheduler = Scheduler.create(students, instructors, config=SchedulerConfig(room_count=3))
    >>> scheduler, report = scheduler.allocate(rng=random.Random(42))
    >>> placed = scheduler.layout_day(date(2026, 10, 19))
"""

from .allocator import allocate, assign_instructors
from .conflicts import check_conflict, overlapping_lessons
from .layout import layout_day, layout_week
from .recurrence import expand_weekly
from .scheduler import Scheduler, new_lesson_id
from .settings import SchedulerConfig
from .time_grid import TimeGrid, WeeklySlot

__all__ = [
    "Scheduler",
    "SchedulerConfig",
    "TimeGrid",
    "WeeklySlot",
    "allocate",
    "assign_instructors",
    "check_conflict",
    "expand_weekly",
    "layout_day",
    "layout_week",
    "new_lesson_id",
    "overlapping_lessons",
]
