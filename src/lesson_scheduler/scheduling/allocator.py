"""
Slot Allocator.

One-time bulk assignment of a weekly recurring slot to each student,
expanded into dated occurrences over the allocation horizon.

This is a greedy, no-backtrack heuristic: the slot catalog is shuffled once
and every student takes the first slot that is still free for their
instructor, has a room left, and does not put a second lesson on a weekday
the student already has. Students processed later can end up with no slot
even when a different assignment of earlier students would have fit
everyone; they are reported as skipped rather than raised.
"""

import logging
import random
from dataclasses import replace
from datetime import date, timedelta
from typing import Dict, List, Optional, Sequence

from ..models.lesson import Instructor, Lesson, Student
from ..models.report import AllocationReport, SkippedItem, SkipReason
from ..utils.time_utils import add_minutes
from .conflicts import overlapping_lessons
from .settings import SchedulerConfig
from .time_grid import WeeklySlot


logger = logging.getLogger(__name__)


def assign_instructors(
    students: Sequence[Student],
    instructors: Sequence[Instructor]
) -> List[Student]:
    """
    Round-robin assign instructors to students (student index mod instructor count).

    The assignment is unconditional: it does not look at availability.
    """
    if not instructors:
        return list(students)
    return [
        replace(student, instructor_id=instructors[index % len(instructors)].id)
        for index, student in enumerate(students)
    ]


def first_week_dates(start_date: date, weekdays: Sequence[int]) -> Dict[int, date]:
    """Map each weekday to its first date on or after ``start_date``."""
    return {
        weekday: start_date + timedelta(days=(weekday - start_date.weekday()) % 7)
        for weekday in weekdays
    }


def _find_slot(
    student: Student,
    catalog: Sequence[WeeklySlot],
    bookings: Sequence[Lesson],
    config: SchedulerConfig,
    week_dates: Dict[int, date]
) -> Optional[Lesson]:
    """
    Scan the shuffled catalog for the first slot this student can take.

    ``bookings`` holds one week-0 template lesson per booked weekly slot, so
    comparing dates within it is the same as comparing weekdays.

    Returns:
        Week-0 template lesson with its room assigned, or None
    """
    for slot in catalog:
        slot_date = week_dates[slot.weekday]
        candidate = Lesson(
            id=f"slot-{student.id}",
            student_id=student.id,
            instructor_id=student.instructor_id,
            room_id=0,
            date=slot_date,
            time=slot.time,
            end_time=add_minutes(slot.time, config.lesson_duration),
        )

        if config.grid.straddles_lunch(candidate.time, candidate.end_time):
            continue

        if any(overlapping_lessons(candidate, bookings, key="instructor_id")):
            continue

        if any(b.student_id == student.id and b.date == slot_date for b in bookings):
            continue

        taken = {b.room_id for b in overlapping_lessons(candidate, bookings)}
        free_rooms = [room for room in range(1, config.room_count + 1) if room not in taken]
        if not free_rooms:
            continue

        return candidate.with_changes(room_id=free_rooms[0])

    return None


def expand_occurrences(template: Lesson, start_date: date, weeks: int) -> List[Lesson]:
    """
    Expand a booked weekly slot into one dated lesson per week.

    For each week offset, the date within that week whose weekday matches the
    template's is used.
    """
    weekday = template.date.weekday()
    occurrences = []

    for week in range(weeks):
        for day_offset in range(7):
            lesson_date = start_date + timedelta(days=week * 7 + day_offset)
            if lesson_date.weekday() == weekday:
                occurrences.append(template.with_changes(
                    id=f"lesson-{template.student_id}-{lesson_date.isoformat()}-{template.time}",
                    date=lesson_date,
                ))
                break

    return occurrences


def allocate(
    students: Sequence[Student],
    instructors: Sequence[Instructor],
    config: Optional[SchedulerConfig] = None,
    rng: Optional[random.Random] = None,
    start_date: Optional[date] = None
) -> AllocationReport:
    """
    Build the initial weekly schedule and its dated expansion.

    Args:
        students: All students, any status, in allocation order
        instructors: Instructors; inactive ones are not assigned
        config: Scheduling constants (defaults to SchedulerConfig())
        rng: Random source for the catalog shuffle; pass a seeded
            ``random.Random`` for reproducible runs
        start_date: First day of the horizon (defaults to today)

    Returns:
        AllocationReport with the lessons, the students with their assigned
        instructors, and every student that received no slot

    Examples:
        >>> report = allocate(students, instructors, rng=random.Random(42))
        >>> report.status
        <OutcomeStatus.SUCCEEDED: 'succeeded'>
    """
    config = config or SchedulerConfig()
    rng = rng or random.Random()
    start_date = start_date or date.today()

    active_instructors = [i for i in instructors if i.is_active]
    assigned = assign_instructors(students, active_instructors)

    if not active_instructors:
        logger.error("No active instructors, no lessons can be allocated")
        skipped = tuple(
            SkippedItem(s.id, SkipReason.NO_INSTRUCTOR, "No active instructor available")
            for s in assigned
        )
        return AllocationReport(lessons=(), students=tuple(assigned), skipped=skipped)

    catalog = config.grid.weekly_slots()
    rng.shuffle(catalog)
    week_dates = first_week_dates(start_date, config.grid.weekdays)

    bookings: List[Lesson] = []
    lessons: List[Lesson] = []
    scheduled: List[str] = []
    skipped: List[SkippedItem] = []

    for student in assigned:
        label = student.name or student.id

        if not student.is_active:
            logger.info(f"Skipping inactive student {label}")
            skipped.append(SkippedItem(
                student.id, SkipReason.INACTIVE_STUDENT, "Student is not currently enrolled"
            ))
            continue

        template = _find_slot(student, catalog, bookings, config, week_dates)
        if template is None:
            logger.warning(f"Could not find a schedule slot for student {label}")
            skipped.append(SkippedItem(
                student.id, SkipReason.NO_SLOT, "No weekly slot satisfies the constraints"
            ))
            continue

        bookings.append(template)
        lessons.extend(expand_occurrences(template, start_date, config.allocation_weeks))
        scheduled.append(student.id)

    logger.info(
        f"Allocated {len(scheduled)}/{len(assigned)} students, "
        f"{len(lessons)} lessons over {config.allocation_weeks} weeks"
    )

    return AllocationReport(
        lessons=tuple(lessons),
        students=tuple(assigned),
        scheduled_student_ids=tuple(scheduled),
        skipped=tuple(skipped),
    )
