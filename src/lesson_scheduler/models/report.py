"""
Structured outcome reports for bulk scheduling operations.

The allocator and the recurrence expander can both succeed partially.
These reports make every skipped student or occurrence visible to the
caller together with its reason.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from .conflict import ConflictReason
from .lesson import Lesson, Student


class OutcomeStatus(Enum):
    """Overall outcome of a bulk operation."""
    SUCCEEDED = "succeeded"
    PARTIAL = "partial"
    FAILED = "failed"


class SkipReason(Enum):
    """Why a student or occurrence was left out."""
    NO_SLOT = "no_slot"
    NO_INSTRUCTOR = "no_instructor"
    INACTIVE_STUDENT = "inactive_student"
    LUNCH_BREAK = "lunch_break"
    CONFLICT = "conflict"


@dataclass(frozen=True)
class SkippedItem:
    """
    One student or occurrence that was not scheduled.

    Attributes:
        subject_id: Student id (allocation) or base lesson id (recurrence)
        reason: Skip reason code
        message: Human-readable explanation
        occurrence_date: Occurrence date, for recurrence skips
        conflict: Conflict detail when reason is CONFLICT
    """

    subject_id: str
    reason: SkipReason
    message: str
    occurrence_date: Optional[date] = None
    conflict: Optional[ConflictReason] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "subject_id": self.subject_id,
            "reason": self.reason.value,
            "message": self.message,
            "date": self.occurrence_date.isoformat() if self.occurrence_date else None,
            "conflict": self.conflict.to_dict() if self.conflict else None,
        }


def _outcome(done: int, skipped: int) -> OutcomeStatus:
    if not skipped:
        return OutcomeStatus.SUCCEEDED
    if done:
        return OutcomeStatus.PARTIAL
    return OutcomeStatus.FAILED


@dataclass(frozen=True)
class AllocationReport:
    """
    Result of the initial bulk allocation.

    Attributes:
        lessons: Dated occurrences generated for every scheduled student
        students: Input students with their round-robin instructor assigned
        scheduled_student_ids: Students that received a weekly slot
        skipped: Students that received no lessons, with reasons

    Examples:
        >>> report = allocate(students, instructors, config, rng)
        >>> if report.status is OutcomeStatus.PARTIAL:
        ...     for item in report.skipped:
        ...         print(item.subject_id, item.reason.value)
    """

    lessons: Tuple[Lesson, ...]
    students: Tuple[Student, ...]
    scheduled_student_ids: Tuple[str, ...] = ()
    skipped: Tuple[SkippedItem, ...] = ()

    @property
    def status(self) -> OutcomeStatus:
        return _outcome(len(self.scheduled_student_ids), len(self.skipped))

    @property
    def unscheduled_student_ids(self) -> List[str]:
        return [item.subject_id for item in self.skipped]

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to dictionary format.

        Returns:
            Dictionary representation of the report
        """
        return {
            "status": self.status.value,
            "total_students": len(self.students),
            "scheduled": len(self.scheduled_student_ids),
            "unscheduled": len(self.skipped),
            "total_lessons": len(self.lessons),
            "skipped": [item.to_dict() for item in self.skipped],
        }


@dataclass(frozen=True)
class RecurrenceReport:
    """
    Result of a weekly repeat expansion.

    Attributes:
        base_lesson_id: Lesson the series was projected from
        requested_weeks: Number of weeks after clamping to the allowed range
        accepted: Occurrences that passed the lunch and conflict checks
        skipped: Occurrences that were dropped, with reasons
    """

    base_lesson_id: str
    requested_weeks: int
    accepted: Tuple[Lesson, ...] = ()
    skipped: Tuple[SkippedItem, ...] = ()

    @property
    def status(self) -> OutcomeStatus:
        return _outcome(len(self.accepted), len(self.skipped))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "base_lesson_id": self.base_lesson_id,
            "status": self.status.value,
            "requested_weeks": self.requested_weeks,
            "accepted": [lesson.id for lesson in self.accepted],
            "skipped": [item.to_dict() for item in self.skipped],
        }
