"""
Lesson, student and instructor data models.

This module provides the immutable records the scheduling core works on,
plus TypedDict shapes for their JSON form.
"""

from dataclasses import dataclass, replace
from datetime import date
from enum import Enum
from typing import Any, Dict, Optional, TypedDict

from ..utils.time_utils import add_minutes, to_minutes


DEFAULT_LESSON_DURATION = 60  # minutes


class LessonStatus(Enum):
    """Lesson lifecycle status."""
    SCHEDULED = "scheduled"
    DELETED = "deleted"


class EntityStatus(Enum):
    """Enrollment status of a student or instructor."""
    ACTIVE = "active"
    INACTIVE = "inactive"


class LessonData(TypedDict):
    """
    Lesson data structure as stored in JSON files.

    Examples:
        >>> lesson: LessonData = {
        ...     "id": "lesson-s1-2026-10-19-09:00",
        ...     "student_id": "s1",
        ...     "instructor_id": "i1",
        ...     "room_id": 1,
        ...     "date": "2026-10-19",
        ...     "time": "09:00",
        ...     "end_time": "10:00",
        ...     "notes": "",
        ...     "status": "scheduled"
        ... }
    """

    id: str
    student_id: str
    instructor_id: str
    room_id: int
    date: str
    time: str
    end_time: str
    notes: str
    status: str


@dataclass(frozen=True)
class Lesson:
    """
    One dated lesson occurrence.

    Attributes:
        id: Unique lesson identifier
        student_id: Student attending the lesson
        instructor_id: Instructor teaching the lesson
        room_id: Room number (1..room_count)
        date: Calendar day of the lesson
        time: Start time ("HH:MM")
        end_time: End time ("HH:MM"), defaults to start + 60 minutes
        notes: Free-text notes
        status: SCHEDULED or DELETED (in trash)
    """

    id: str
    student_id: str
    instructor_id: str
    room_id: int
    date: date
    time: str
    end_time: Optional[str] = None
    notes: str = ""
    status: LessonStatus = LessonStatus.SCHEDULED

    def __post_init__(self):
        if self.end_time is None:
            object.__setattr__(
                self, "end_time", add_minutes(self.time, DEFAULT_LESSON_DURATION)
            )

    @property
    def start_minutes(self) -> int:
        return to_minutes(self.time)

    @property
    def end_minutes(self) -> int:
        return to_minutes(self.end_time)

    @property
    def duration(self) -> int:
        """Lesson duration in minutes."""
        return self.end_minutes - self.start_minutes

    @property
    def is_active(self) -> bool:
        return self.status == LessonStatus.SCHEDULED

    def with_changes(self, **changes: Any) -> 'Lesson':
        """Return a copy of this lesson with the given fields replaced."""
        return replace(self, **changes)

    def to_dict(self) -> LessonData:
        """
        Convert to dictionary format.

        Returns:
            LessonData dictionary with the date in ISO format
        """
        return {
            "id": self.id,
            "student_id": self.student_id,
            "instructor_id": self.instructor_id,
            "room_id": self.room_id,
            "date": self.date.isoformat(),
            "time": self.time,
            "end_time": self.end_time,
            "notes": self.notes,
            "status": self.status.value,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'Lesson':
        """
        Create instance from dictionary.

        Args:
            d: Dictionary in LessonData shape (end_time, notes and status optional)

        Returns:
            Lesson instance
        """
        lesson_date = d["date"]
        if isinstance(lesson_date, str):
            lesson_date = date.fromisoformat(lesson_date)

        return cls(
            id=str(d["id"]),
            student_id=str(d["student_id"]),
            instructor_id=str(d["instructor_id"]),
            room_id=int(d["room_id"]),
            date=lesson_date,
            time=d["time"],
            end_time=d.get("end_time") or None,
            notes=d.get("notes") or "",
            status=LessonStatus(d.get("status", LessonStatus.SCHEDULED.value)),
        )


@dataclass(frozen=True)
class Student:
    """
    Enrolled student.

    Attributes:
        id: Unique student identifier
        name: Display name
        instructor_id: Assigned instructor (set by the allocator)
        status: ACTIVE or INACTIVE; inactive students get no new lessons
    """

    id: str
    name: str = ""
    instructor_id: Optional[str] = None
    status: EntityStatus = EntityStatus.ACTIVE

    @property
    def is_active(self) -> bool:
        return self.status == EntityStatus.ACTIVE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "instructor_id": self.instructor_id,
            "status": self.status.value,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'Student':
        return cls(
            id=str(d["id"]),
            name=d.get("name", ""),
            instructor_id=d.get("instructor_id"),
            status=EntityStatus(d.get("status", EntityStatus.ACTIVE.value)),
        )


@dataclass(frozen=True)
class Instructor:
    """Instructor who can be assigned students."""

    id: str
    name: str = ""
    status: EntityStatus = EntityStatus.ACTIVE

    @property
    def is_active(self) -> bool:
        return self.status == EntityStatus.ACTIVE

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "status": self.status.value}

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'Instructor':
        return cls(
            id=str(d["id"]),
            name=d.get("name", ""),
            status=EntityStatus(d.get("status", EntityStatus.ACTIVE.value)),
        )
