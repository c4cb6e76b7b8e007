"""
Student and instructor data validators.
"""

from typing import Any, Dict

from ..models.lesson import EntityStatus
from .validators import ValidationResult, Validator


class _RosterValidator(Validator):
    """Shared checks for roster entries (id, name, status)."""

    VALID_STATUSES = [status.value for status in EntityStatus]

    def validate(self, data: Dict[str, Any]) -> ValidationResult:
        result = ValidationResult(is_valid=True)

        for error in self.validate_required_fields(data, ["id"]):
            result.add_error(error)

        if not result.is_valid:
            return result

        error = self.validate_string_length(str(data["id"]), "id", min_length=1, max_length=100)
        if error:
            result.add_error(error)

        name = data.get("name")
        if name is None or name == "":
            result.add_warning(f"Entry {data['id']} has no name")
        else:
            error = self.validate_string_length(name, "name", max_length=200)
            if error:
                result.add_error(error)

        status = data.get("status", EntityStatus.ACTIVE.value)
        error = self.validate_choice(status, "status", self.VALID_STATUSES)
        if error:
            result.add_error(error)

        return result


class StudentValidator(_RosterValidator):
    """
    Validator for student data.

    Examples:
        >>> StudentValidator().validate({"id": "s1", "name": "Ana", "status": "active"}).is_valid
        True
    """


class InstructorValidator(_RosterValidator):
    """Validator for instructor data."""
