"""
Lesson data validator.

Validates lesson dictionaries loaded from schedule files before they are
turned into Lesson records.
"""

from typing import Any, Dict

from ..models.lesson import DEFAULT_LESSON_DURATION, LessonStatus
from ..utils.time_utils import add_minutes, is_valid_time, to_minutes
from .validators import ValidationResult, Validator


class LessonValidator(Validator):
    """
    Validator for lesson data.

    Validates:
    - Required fields
    - Date and time formats
    - Room range (1..room_count)
    - end_time after time, and a default end that stays within the day
    - Status vocabulary

    Examples:
        >>> validator = LessonValidator(room_count=4)
        >>> result = validator.validate({
        ...     "id": "lesson-1",
        ...     "student_id": "s1",
        ...     "instructor_id": "i1",
        ...     "room_id": 2,
        ...     "date": "2026-10-19",
        ...     "time": "09:00",
        ...     "end_time": "10:00",
        ...     "status": "scheduled"
        ... })
        >>> result.is_valid
        True
    """

    VALID_STATUSES = [status.value for status in LessonStatus]

    # Longer lessons are accepted with a warning
    MAX_DURATION = 180  # minutes

    REQUIRED_FIELDS = ["id", "student_id", "instructor_id", "room_id", "date", "time"]

    def __init__(self, room_count: int = 4):
        self.room_count = room_count

    def validate(self, data: Dict[str, Any]) -> ValidationResult:
        """
        Validate lesson data.

        Args:
            data: Lesson data dictionary

        Returns:
            ValidationResult with errors and warnings
        """
        result = ValidationResult(is_valid=True)

        for error in self.validate_required_fields(data, self.REQUIRED_FIELDS):
            result.add_error(error)

        if not result.is_valid:
            return result

        for name in ("id", "student_id", "instructor_id"):
            error = self.validate_string_length(str(data[name]), name, min_length=1, max_length=100)
            if error:
                result.add_error(error)

        room_id = data["room_id"]
        if isinstance(room_id, bool) or not isinstance(room_id, int):
            result.add_error(f"room_id must be an integer, got {type(room_id).__name__}")
        elif not 1 <= room_id <= self.room_count:
            result.add_error(f"Room must be between 1 and {self.room_count}, got {room_id}")

        error = self.validate_date_format(data["date"], "date")
        if error:
            result.add_error(error)

        time_error = self.validate_time_format(data["time"], "time")
        if time_error:
            result.add_error(time_error)

        end_time = data.get("end_time")
        end_error = None
        if end_time is not None:
            end_error = self.validate_time_format(end_time, "end_time")
            if end_error:
                result.add_error(end_error)

        if end_time is None and not time_error:
            default_end = add_minutes(data["time"], DEFAULT_LESSON_DURATION)
            if not is_valid_time(default_end):
                result.add_error(
                    f"Default end time runs past midnight: {data['time']}-{default_end}"
                )

        if end_time is not None and not time_error and not end_error:
            duration = to_minutes(end_time) - to_minutes(data["time"])
            if duration <= 0:
                result.add_error(
                    f"end_time must be after time: {data['time']}-{end_time}"
                )
            elif duration > self.MAX_DURATION:
                result.add_warning(
                    f"Duration unusually long: {duration} minutes "
                    f"(maximum recommended: {self.MAX_DURATION})"
                )

        status = data.get("status", LessonStatus.SCHEDULED.value)
        error = self.validate_choice(status, "status", self.VALID_STATUSES)
        if error:
            result.add_error(error)

        return result
