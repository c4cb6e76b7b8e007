"""
Data models for the lesson scheduler.
"""

from .conflict import ConflictKind, ConflictReason
from .lesson import (
    DEFAULT_LESSON_DURATION,
    EntityStatus,
    Instructor,
    Lesson,
    LessonData,
    LessonStatus,
    Student,
)
from .placement import PlacedLesson
from .report import (
    AllocationReport,
    OutcomeStatus,
    RecurrenceReport,
    SkippedItem,
    SkipReason,
)
from .result import RejectionCode, Result, ResultStatus

__all__ = [
    "AllocationReport",
    "ConflictKind",
    "ConflictReason",
    "DEFAULT_LESSON_DURATION",
    "EntityStatus",
    "Instructor",
    "Lesson",
    "LessonData",
    "LessonStatus",
    "OutcomeStatus",
    "PlacedLesson",
    "RecurrenceReport",
    "RejectionCode",
    "Result",
    "ResultStatus",
    "SkippedItem",
    "SkipReason",
    "Student",
]
