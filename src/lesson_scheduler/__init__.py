"""
Lesson scheduler.

Weekly slot allocation, conflict detection, weekly recurrence and
overlap layout for recurring music lessons.
"""

from .models import Instructor, Lesson, LessonStatus, Student
from .scheduling import Scheduler, SchedulerConfig, TimeGrid

__all__ = [
    "Instructor",
    "Lesson",
    "LessonStatus",
    "Scheduler",
    "SchedulerConfig",
    "Student",
    "TimeGrid",
]

__version__ = "0.1.0"
