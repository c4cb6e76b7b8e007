"""
Input validation for lesson and roster data.
"""

from .lesson_validator import LessonValidator
from .roster_validator import InstructorValidator, StudentValidator
from .validators import ValidationResult, Validator

__all__ = [
    "InstructorValidator",
    "LessonValidator",
    "StudentValidator",
    "ValidationResult",
    "Validator",
]
