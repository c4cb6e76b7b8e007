"""
Scheduler value object.

Holds one immutable snapshot of students, instructors and lessons together
with the scheduling constants. Every operation is a pure method: it
validates against the snapshot and returns a new Scheduler (wrapped in a
Result) without touching the original.

The Scheduler offers no locking. Two callers that validate against the
same stale snapshot can each pass validation and still collide when their
results are merged; callers that allow concurrent writers must serialize
commits themselves.
"""

import logging
import random
import uuid
from dataclasses import dataclass, field, replace
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ..models.conflict import ConflictReason
from ..models.lesson import Instructor, Lesson, LessonStatus, Student
from ..models.placement import PlacedLesson
from ..models.report import AllocationReport, RecurrenceReport
from ..models.result import RejectionCode, Result
from ..utils.logger import log_transaction
from ..utils.time_utils import add_minutes, is_valid_time, round_to_quarter, to_minutes
from .allocator import allocate
from .conflicts import check_conflict
from .layout import layout_day, layout_week
from .recurrence import expand_weekly
from .settings import SchedulerConfig


logger = logging.getLogger(__name__)

MINUTES_PER_DAY = 24 * 60


def new_lesson_id() -> str:
    """Generate a fresh lesson identifier."""
    return f"lesson-{uuid.uuid4().hex[:12]}"


@dataclass(frozen=True)
class Scheduler:
    """
    Immutable scheduling state.

    Attributes:
        students: All students
        instructors: All instructors
        lessons: All lessons, including trashed ones
        config: Scheduling constants

    Examples:
        >>> scheduler = Scheduler.create(students, instructors)
        >>> scheduler, report = scheduler.allocate(rng=random.Random(7))
        >>> result = scheduler.move_lesson(lesson_id, date(2026, 10, 21), "14:10")
        >>> if result.is_success:
        ...     scheduler = result.value
    """

    students: Tuple[Student, ...] = ()
    instructors: Tuple[Instructor, ...] = ()
    lessons: Tuple[Lesson, ...] = ()
    config: SchedulerConfig = field(default_factory=SchedulerConfig)

    @classmethod
    def create(
        cls,
        students: Iterable[Student] = (),
        instructors: Iterable[Instructor] = (),
        lessons: Iterable[Lesson] = (),
        config: Optional[SchedulerConfig] = None
    ) -> 'Scheduler':
        """Build a scheduler from any iterables."""
        return cls(
            students=tuple(students),
            instructors=tuple(instructors),
            lessons=tuple(lessons),
            config=config or SchedulerConfig(),
        )

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    @property
    def instructor_names(self) -> Dict[str, str]:
        return {i.id: i.name or i.id for i in self.instructors}

    @property
    def student_names(self) -> Dict[str, str]:
        return {s.id: s.name or s.id for s in self.students}

    def find_lesson(self, lesson_id: str) -> Optional[Lesson]:
        return next((existing for existing in self.lessons if existing.id == lesson_id), None)

    def find_student(self, student_id: str) -> Optional[Student]:
        return next((s for s in self.students if s.id == student_id), None)

    def active_lessons(self) -> List[Lesson]:
        return [existing for existing in self.lessons if existing.is_active]

    def trashed_lessons(self) -> List[Lesson]:
        return [existing for existing in self.lessons if not existing.is_active]

    def lessons_on(self, day: date) -> List[Lesson]:
        """Active lessons on one date, in collection order."""
        return [lesson for lesson in self.lessons if lesson.is_active and lesson.date == day]

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def check_conflict(
        self,
        candidate: Lesson,
        ignore_lesson_id: Optional[str] = None
    ) -> Optional[ConflictReason]:
        """Check a candidate placement against the current lesson set."""
        return check_conflict(
            candidate,
            self.lessons,
            ignore_lesson_id=ignore_lesson_id,
            instructor_names=self.instructor_names,
            student_names=self.student_names,
        )

    def _inactive_student(self, student_id: str) -> Optional[Student]:
        student = self.find_student(student_id)
        if student is not None and not student.is_active:
            return student
        return None

    def _reject_placement(
        self,
        lesson: Lesson,
        ignore_lesson_id: Optional[str],
        prefix: str
    ) -> Optional[Result]:
        """
        Run every placement rule for one lesson.

        Returns:
            A failure Result for the first violated rule, or None
        """
        if self._inactive_student(lesson.student_id) is not None:
            name = self.student_names.get(lesson.student_id, lesson.student_id)
            return Result.failure(
                f"Cannot schedule lessons for {name} because they are not enrolled.",
                code=RejectionCode.INACTIVE_STUDENT,
            )

        if not self.config.is_valid_room(lesson.room_id):
            return Result.failure(
                f"Room must be between 1 and {self.config.room_count}.",
                code=RejectionCode.INVALID_LESSON,
            )

        if not is_valid_time(lesson.time):
            return Result.failure(
                f"Invalid start time: {lesson.time}.",
                code=RejectionCode.INVALID_LESSON,
            )

        if not is_valid_time(lesson.end_time):
            return Result.failure(
                "Lesson would run past midnight.",
                code=RejectionCode.INVALID_LESSON,
            )

        if lesson.end_minutes <= lesson.start_minutes:
            return Result.failure(
                "End time must be after start time.",
                code=RejectionCode.INVALID_LESSON,
            )

        if self.config.grid.straddles_lunch(lesson.time, lesson.end_time):
            return Result.failure(
                "Cannot schedule a lesson overlapping the lunch break "
                f"({self.config.grid.lunch_break}).",
                code=RejectionCode.LUNCH_BREAK,
            )

        conflict = self.check_conflict(lesson, ignore_lesson_id)
        if conflict is not None:
            return Result.rejected_by(conflict, prefix)

        return None

    def _retarget(self, lesson: Lesson, new_date: date, new_time: Optional[str]) -> Optional[Lesson]:
        """
        Move a lesson to a new date and (quarter-rounded) time, keeping its duration.

        Returns:
            The shifted lesson, or None if it would run past midnight
        """
        target_time = round_to_quarter(new_time) if new_time else lesson.time
        if to_minutes(target_time) + lesson.duration > MINUTES_PER_DAY:
            return None
        return lesson.with_changes(
            date=new_date,
            time=target_time,
            end_time=add_minutes(target_time, lesson.duration),
        )

    def _with_lessons(self, lessons: Iterable[Lesson], **changes) -> 'Scheduler':
        return replace(self, lessons=tuple(lessons), **changes)

    def _replacing(self, lesson: Lesson) -> 'Scheduler':
        """New scheduler with the lesson of the same id swapped in place."""
        return self._with_lessons(
            lesson if existing.id == lesson.id else existing for existing in self.lessons
        )

    def _expand(self, base: Lesson, weeks: int, snapshot: Sequence[Lesson]) -> RecurrenceReport:
        report = expand_weekly(
            base,
            weeks,
            snapshot,
            config=self.config,
            instructor_names=self.instructor_names,
            student_names=self.student_names,
        )
        taken = {existing.id for existing in snapshot}
        accepted = []
        for occurrence in report.accepted:
            if occurrence.id in taken:
                occurrence = occurrence.with_changes(id=new_lesson_id())
            taken.add(occurrence.id)
            accepted.append(occurrence)
        return replace(report, accepted=tuple(accepted))

    # ------------------------------------------------------------------
    # Bulk allocation
    # ------------------------------------------------------------------

    def allocate(
        self,
        rng: Optional[random.Random] = None,
        start_date: Optional[date] = None
    ) -> Tuple['Scheduler', AllocationReport]:
        """
        Run the initial bulk allocation.

        The returned scheduler holds the allocated lessons in place of the
        current ones, and the students with their assigned instructors.
        """
        report = allocate(
            self.students,
            self.instructors,
            config=self.config,
            rng=rng,
            start_date=start_date,
        )
        return self._with_lessons(report.lessons, students=report.students), report

    # ------------------------------------------------------------------
    # Interactive mutations
    # ------------------------------------------------------------------

    def add_lesson(self, lesson: Lesson, repeat_weeks: int = 0) -> Result['Scheduler']:
        """
        Add a new lesson, optionally repeating it weekly.

        The base placement must pass every rule or nothing is added.
        Repeats are checked against the lesson set before the add; repeats
        that fail are skipped and listed in ``result.report``.

        Args:
            lesson: Lesson to add
            repeat_weeks: Additional weekly occurrences (0 for none,
                otherwise clamped to [1, max_repeat_weeks])

        Returns:
            Result with the new Scheduler, or the rejection
        """
        if self.find_lesson(lesson.id) is not None:
            result = Result.failure(
                f"Lesson {lesson.id} already exists.", code=RejectionCode.INVALID_LESSON
            )
            log_transaction("lesson.create", "error", result.message, lesson_id=lesson.id)
            return result

        lesson = lesson.with_changes(status=LessonStatus.SCHEDULED)
        rejection = self._reject_placement(lesson, None, "Could not add lesson: ")
        if rejection is not None:
            log_transaction("lesson.create", "error", rejection.message, lesson_id=lesson.id)
            return rejection

        report = None
        added = [lesson]
        if repeat_weeks > 0:
            report = self._expand(lesson, repeat_weeks, self.lessons)
            added.extend(report.accepted)

        repeats = len(added) - 1
        message = "Lesson added" + (f" (+{repeats} repeats)" if repeats else "")
        log_transaction("lesson.create", "success", message, lesson_id=lesson.id)
        return Result.success(self._with_lessons(self.lessons + tuple(added)), message, report)

    def move_lesson(
        self,
        lesson_id: str,
        new_date: date,
        new_time: Optional[str] = None
    ) -> Result['Scheduler']:
        """
        Move a lesson to another date and time.

        The target time is rounded to the nearest quarter hour and the
        lesson keeps its duration. The lesson itself is ignored when
        checking for conflicts.
        """
        return self._place_copy_or_move(lesson_id, new_date, new_time, is_copy=False)

    def copy_lesson(
        self,
        lesson_id: str,
        new_date: date,
        new_time: Optional[str] = None
    ) -> Result['Scheduler']:
        """Copy a lesson to another date and time under a new id."""
        return self._place_copy_or_move(lesson_id, new_date, new_time, is_copy=True)

    def _place_copy_or_move(
        self,
        lesson_id: str,
        new_date: date,
        new_time: Optional[str],
        is_copy: bool
    ) -> Result['Scheduler']:
        action = "lesson.copy" if is_copy else "lesson.move"
        verb = "copy" if is_copy else "move"

        original = self.find_lesson(lesson_id)
        if original is None or not original.is_active:
            result = Result.failure(
                f"Lesson {lesson_id} not found.", code=RejectionCode.NOT_FOUND
            )
            log_transaction(action, "error", result.message, lesson_id=lesson_id)
            return result

        target = self._retarget(original, new_date, new_time)
        if target is None:
            result = Result.failure(
                "Lesson would run past midnight.", code=RejectionCode.INVALID_LESSON
            )
            log_transaction(action, "error", result.message, lesson_id=lesson_id)
            return result

        if is_copy:
            target = target.with_changes(
                id=new_lesson_id(),
                notes=f"(Copied) {original.notes}".strip(),
            )

        rejection = self._reject_placement(
            target,
            None if is_copy else original.id,
            f"Could not {verb} lesson: ",
        )
        if rejection is not None:
            log_transaction(action, "error", rejection.message, lesson_id=lesson_id)
            return rejection

        if is_copy:
            log_transaction(
                action, "success", "Lesson copied", lesson_id=lesson_id, new_lesson_id=target.id
            )
            return Result.success(self._with_lessons(self.lessons + (target,)), "Lesson copied")

        log_transaction(action, "success", "Lesson moved", lesson_id=lesson_id)
        return Result.success(self._replacing(target), "Lesson moved")

    def update_lesson(self, lesson: Lesson, repeat_weeks: int = 0) -> Result['Scheduler']:
        """
        Replace an existing lesson with an edited version.

        If the instructor changed, the student is reassigned to the new
        instructor. Optional weekly repeats are projected from the edited
        lesson's date against the updated lesson set.
        """
        original = self.find_lesson(lesson.id)
        if original is None:
            result = Result.failure(
                f"Lesson {lesson.id} not found.", code=RejectionCode.NOT_FOUND
            )
            log_transaction("lesson.update", "error", result.message, lesson_id=lesson.id)
            return result

        updated = lesson.with_changes(status=LessonStatus.SCHEDULED)
        rejection = self._reject_placement(updated, original.id, "Could not update lesson: ")
        if rejection is not None:
            log_transaction("lesson.update", "error", rejection.message, lesson_id=lesson.id)
            return rejection

        lessons = tuple(updated if existing.id == updated.id else existing for existing in self.lessons)
        students = self.students
        if original.instructor_id != updated.instructor_id:
            students = tuple(
                replace(s, instructor_id=updated.instructor_id) if s.id == updated.student_id else s
                for s in self.students
            )

        report = None
        if repeat_weeks > 0:
            report = self._expand(updated, repeat_weeks, lessons)
            lessons = lessons + report.accepted

        log_transaction("lesson.update", "success", "Lesson updated", lesson_id=lesson.id)
        return Result.success(
            self._with_lessons(lessons, students=students), "Lesson updated", report
        )

    def repeat_weekly(self, lesson_id: str, weeks: int) -> Result['Scheduler']:
        """
        Add weekly occurrences of an existing lesson.

        Returns:
            Result whose ``report`` is the RecurrenceReport of the expansion
        """
        base = self.find_lesson(lesson_id)
        if base is None or not base.is_active:
            result = Result.failure(
                f"Lesson {lesson_id} not found.", code=RejectionCode.NOT_FOUND
            )
            log_transaction("lesson.repeat", "error", result.message, lesson_id=lesson_id)
            return result

        if self._inactive_student(base.student_id) is not None:
            result = Result.failure(
                "This student is not currently enrolled. Please activate the "
                "student to schedule new lessons.",
                code=RejectionCode.INACTIVE_STUDENT,
            )
            log_transaction("lesson.repeat", "error", result.message, lesson_id=lesson_id)
            return result

        report = self._expand(base, weeks, self.lessons)
        message = f"{len(report.accepted)} repeats added, {len(report.skipped)} skipped"
        log_transaction("lesson.repeat", "success", message, lesson_id=lesson_id)
        return Result.success(self._with_lessons(self.lessons + report.accepted), message, report)

    def trash_lesson(self, lesson_id: str) -> Result['Scheduler']:
        """Soft-delete a lesson (status = deleted)."""
        lesson = self.find_lesson(lesson_id)
        if lesson is None:
            result = Result.failure(f"Lesson {lesson_id} not found.", code=RejectionCode.NOT_FOUND)
            log_transaction("lesson.trash", "error", result.message, lesson_id=lesson_id)
            return result

        trashed = lesson.with_changes(status=LessonStatus.DELETED)
        log_transaction("lesson.trash", "success", "Lesson moved to trash", lesson_id=lesson_id)
        return Result.success(self._replacing(trashed), "Lesson moved to trash")

    def restore_lesson(self, lesson_id: str) -> Result['Scheduler']:
        """
        Restore a trashed lesson.

        The lesson is re-validated against the current active set; if its
        old slot has been taken in the meantime the restore is rejected.
        """
        lesson = self.find_lesson(lesson_id)
        if lesson is None:
            result = Result.failure(f"Lesson {lesson_id} not found.", code=RejectionCode.NOT_FOUND)
            log_transaction("lesson.restore", "error", result.message, lesson_id=lesson_id)
            return result

        if lesson.is_active:
            result = Result.failure(
                f"Lesson {lesson_id} is not in the trash.", code=RejectionCode.NOT_DELETED
            )
            log_transaction("lesson.restore", "error", result.message, lesson_id=lesson_id)
            return result

        restored = lesson.with_changes(status=LessonStatus.SCHEDULED)
        rejection = self._reject_placement(restored, lesson_id, "Could not restore lesson: ")
        if rejection is not None:
            log_transaction("lesson.restore", "error", rejection.message, lesson_id=lesson_id)
            return rejection

        log_transaction("lesson.restore", "success", "Lesson restored", lesson_id=lesson_id)
        return Result.success(self._replacing(restored), "Lesson restored")

    def delete_permanently(self, lesson_id: str) -> Result['Scheduler']:
        """Remove a lesson from the collection entirely."""
        if self.find_lesson(lesson_id) is None:
            result = Result.failure(f"Lesson {lesson_id} not found.", code=RejectionCode.NOT_FOUND)
            log_transaction("lesson.delete", "error", result.message, lesson_id=lesson_id)
            return result

        log_transaction("lesson.delete", "success", "Lesson permanently deleted", lesson_id=lesson_id)
        return Result.success(
            self._with_lessons(existing for existing in self.lessons if existing.id != lesson_id),
            "Lesson permanently deleted"
        )

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def layout_day(
        self,
        day: date,
        window_start: Optional[str] = None,
        window_end: Optional[str] = None
    ) -> List[PlacedLesson]:
        """Lane layout of one day; the window defaults to the grid's day window."""
        default_start, default_end = self.config.grid.day_window(self.config.lesson_duration)
        return layout_day(
            self.lessons_on(day),
            window_start or default_start,
            window_end or default_end,
        )

    def layout_week(self, week_start: date) -> Dict[date, List[PlacedLesson]]:
        """Lane layout of the seven days starting at ``week_start``."""
        window_start, window_end = self.config.grid.day_window(self.config.lesson_duration)
        dates = [week_start + timedelta(days=offset) for offset in range(7)]
        return layout_week(self.active_lessons(), dates, window_start, window_end)
