"""
Recurrence Expander.

Projects weekly occurrences of a placed lesson. Each occurrence is checked
against the lunch-break rule and against the lesson set as it stood before
the expansion began; sibling occurrences are never compared with each other.
Dropped occurrences are reported in the RecurrenceReport.
"""

import logging
from datetime import timedelta
from typing import List, Mapping, Optional, Sequence

from ..models.lesson import Lesson, LessonStatus
from ..models.report import RecurrenceReport, SkippedItem, SkipReason
from .conflicts import check_conflict
from .settings import SchedulerConfig


logger = logging.getLogger(__name__)


def expand_weekly(
    base: Lesson,
    weeks: int,
    lessons: Sequence[Lesson],
    config: Optional[SchedulerConfig] = None,
    instructor_names: Optional[Mapping[str, str]] = None,
    student_names: Optional[Mapping[str, str]] = None
) -> RecurrenceReport:
    """
    Project ``weeks`` additional weekly occurrences of ``base``.

    Args:
        base: Placed lesson to repeat
        weeks: Number of weeks, clamped to [1, config.max_repeat_weeks]
        lessons: Lesson set before this expansion
        config: Scheduling constants
        instructor_names: Optional id -> name lookup for conflict messages
        student_names: Optional id -> name lookup for conflict messages

    Returns:
        RecurrenceReport listing accepted and skipped occurrences

    Examples:
        >>> report = expand_weekly(lesson, 4, scheduler.lessons)
        >>> [o.date for o in report.accepted]
    """
    config = config or SchedulerConfig()
    weeks = config.clamp_weeks(weeks)
    snapshot = tuple(lessons)

    accepted: List[Lesson] = []
    skipped: List[SkippedItem] = []

    for week in range(1, weeks + 1):
        occurrence = base.with_changes(
            id=f"{base.id}-w{week}",
            date=base.date + timedelta(days=week * 7),
            status=LessonStatus.SCHEDULED,
        )

        if config.grid.straddles_lunch(occurrence.time, occurrence.end_time):
            skipped.append(SkippedItem(
                base.id,
                SkipReason.LUNCH_BREAK,
                f"Occurrence overlaps the lunch break ({config.grid.lunch_break})",
                occurrence_date=occurrence.date,
            ))
            continue

        conflict = check_conflict(
            occurrence,
            snapshot,
            instructor_names=instructor_names,
            student_names=student_names,
        )
        if conflict is not None:
            skipped.append(SkippedItem(
                base.id,
                SkipReason.CONFLICT,
                conflict.message,
                occurrence_date=occurrence.date,
                conflict=conflict,
            ))
            continue

        accepted.append(occurrence)

    if skipped:
        logger.info(
            f"Weekly repeat of {base.id}: {len(accepted)} added, "
            f"{len(skipped)} skipped"
        )

    return RecurrenceReport(
        base_lesson_id=base.id,
        requested_weeks=weeks,
        accepted=tuple(accepted),
        skipped=tuple(skipped),
    )
