"""
Conflict reason reported by the conflict detector.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class ConflictKind(Enum):
    """Which exclusivity constraint a placement violates, in check priority order."""
    INSTRUCTOR_BUSY = "instructor_busy"
    ROOM_BUSY = "room_busy"
    STUDENT_DOUBLE_BOOKED = "student_double_booked"


@dataclass(frozen=True)
class ConflictReason:
    """
    First colliding constraint found for a candidate placement.

    Attributes:
        kind: Constraint that was violated
        message: User-facing explanation
        conflicting_lesson_id: Existing lesson the candidate collides with

    Examples:
        >>> reason = ConflictReason(
        ...     kind=ConflictKind.ROOM_BUSY,
        ...     message="Room 2 is already booked during this time.",
        ...     conflicting_lesson_id="lesson-42"
        ... )
    """

    kind: ConflictKind
    message: str
    conflicting_lesson_id: str

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "message": self.message,
            "conflicting_lesson_id": self.conflicting_lesson_id,
        }
