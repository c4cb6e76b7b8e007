"""
Conflict Detector.

Interval-overlap validation used by every interactive mutation and, through
``overlapping_lessons``, by the slot allocator. Two lessons collide when they
are on the same date, both active, and their half-open ``[time, end_time)``
intervals overlap.
"""

import logging
from typing import Iterable, Iterator, Mapping, Optional, Tuple

from ..models.conflict import ConflictKind, ConflictReason
from ..models.lesson import Lesson
from ..utils.time_utils import ranges_overlap


logger = logging.getLogger(__name__)


# Priority order in which a colliding lesson is checked
CONFLICT_KEYS: Tuple[Tuple[ConflictKind, str], ...] = (
    (ConflictKind.INSTRUCTOR_BUSY, "instructor_id"),
    (ConflictKind.ROOM_BUSY, "room_id"),
    (ConflictKind.STUDENT_DOUBLE_BOOKED, "student_id"),
)


def overlapping_lessons(
    candidate: Lesson,
    lessons: Iterable[Lesson],
    key: Optional[str] = None,
    ignore_lesson_id: Optional[str] = None
) -> Iterator[Lesson]:
    """
    Yield active lessons whose interval overlaps the candidate on its date.

    Args:
        candidate: Lesson being placed (its id and status are not consulted)
        lessons: Current lesson set
        key: Optional attribute ("instructor_id", "room_id", "student_id")
            that must also match for a lesson to be yielded
        ignore_lesson_id: Lesson excluded from comparison (the one being moved)

    Yields:
        Colliding lessons, in collection order
    """
    start, end = candidate.start_minutes, candidate.end_minutes

    for lesson in lessons:
        if not lesson.is_active or lesson.id == ignore_lesson_id:
            continue
        if lesson.date != candidate.date:
            continue
        if key is not None and getattr(lesson, key) != getattr(candidate, key):
            continue
        if ranges_overlap(start, end, lesson.start_minutes, lesson.end_minutes):
            yield lesson


def check_conflict(
    candidate: Lesson,
    lessons: Iterable[Lesson],
    ignore_lesson_id: Optional[str] = None,
    instructor_names: Optional[Mapping[str, str]] = None,
    student_names: Optional[Mapping[str, str]] = None
) -> Optional[ConflictReason]:
    """
    Check a candidate placement against the current lesson set.

    The first overlapping lesson in collection order decides the result;
    against that lesson the instructor, room and student constraints are
    checked in that priority order. The lunch-break rule is not checked
    here (see ``TimeGrid.straddles_lunch``).

    Args:
        candidate: Lesson being placed
        lessons: Current lesson set
        ignore_lesson_id: Lesson excluded from comparison
        instructor_names: Optional id -> name lookup for messages
        student_names: Optional id -> name lookup for messages

    Returns:
        The first ConflictReason found, or None if the placement is free

    Examples:
        >>> reason = check_conflict(candidate, scheduler.lessons)
        >>> if reason is not None:
        ...     print(reason.message)
    """
    instructor_names = instructor_names or {}
    student_names = student_names or {}

    for existing in overlapping_lessons(candidate, lessons, ignore_lesson_id=ignore_lesson_id):
        for kind, key in CONFLICT_KEYS:
            if getattr(existing, key) != getattr(candidate, key):
                continue

            if kind is ConflictKind.INSTRUCTOR_BUSY:
                name = instructor_names.get(existing.instructor_id, existing.instructor_id)
                message = f"Instructor {name} is already scheduled during this time."
            elif kind is ConflictKind.ROOM_BUSY:
                message = f"Room {existing.room_id} is already booked during this time."
            else:
                name = student_names.get(existing.student_id, existing.student_id)
                message = f"Student {name} already has a lesson during this time."

            logger.debug(
                f"Conflict for {candidate.date} {candidate.time}-{candidate.end_time}: "
                f"{kind.value} with {existing.id}"
            )
            return ConflictReason(kind=kind, message=message, conflicting_lesson_id=existing.id)

    return None
